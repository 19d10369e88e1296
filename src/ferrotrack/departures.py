"""Departures board for a single station."""

from typing import List, Mapping

from .aggregator import split_train_key
from .models import Departure, StatusKind
from .normalizer import parse_status, status_text
from .topology import LineTopology

# Trains further out than this are flagged as delayed
DELAYED_AFTER_MINUTES = 30


def departure_category(kind: StatusKind, minutes_away: int) -> str:
    if kind is StatusKind.AT_PLATFORM:
        return "at_station"
    if kind is StatusKind.IMMINENT:
        return "approaching"
    if minutes_away > DELAYED_AFTER_MINUTES:
        return "delayed"
    return "scheduled"


def station_departures(snapshot: Mapping, station: str, topology: LineTopology) -> List[Departure]:
    """
    List the trains a station is reporting, soonest first.

    Args:
        snapshot: {station_name: {"DESTINATION-TRAINID": status, ...}, ...}
        station: Station name as it appears in the topology.
        topology: Line the snapshot belongs to.

    Returns:
        Departures sorted by minutes to arrival. Empty if the station is not
        in the snapshot.

    Raises:
        ValueError: If the station is not on the line.
    """
    topology.get_station_index(station)

    entries = snapshot.get(station)
    if not isinstance(entries, Mapping):
        return []

    departures: List[Departure] = []
    for key, payload in entries.items():
        parts = split_train_key(key)
        if parts is None:
            continue
        destination, train_id = parts

        status = parse_status(payload)
        text = status_text(payload)
        departures.append(
            Departure(
                train_id=train_id,
                destination=destination,
                status_text=text if isinstance(text, str) else None,
                minutes_away=status.minutes_away,
                category=departure_category(status.kind, status.minutes_away),
            )
        )

    departures.sort(key=lambda d: d.minutes_away)
    return departures
