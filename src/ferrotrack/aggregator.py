"""Grouping of per-station reports into per-train aggregates."""

import logging
from typing import Dict, Mapping, Optional, Tuple

from .models import Train, TrainReport
from .normalizer import parse_status
from .topology import LineTopology

logger = logging.getLogger(__name__)


def split_train_key(key: str) -> Optional[Tuple[str, str]]:
    """
    Split a "DESTINATION-TRAINID" key into (destination, train_id).

    Multi-word destinations arrive with underscores ("VILLA_ROSA") and are
    returned with spaces. Returns None when either part is missing.
    """
    if not isinstance(key, str):
        return None
    destination, _, train_id = key.partition("-")
    if not destination or not train_id:
        return None
    return destination.replace("_", " "), train_id


def aggregate_trains(snapshot: Mapping, topology: LineTopology) -> Dict[str, Train]:
    """
    Collect every report in a snapshot under the train it belongs to.

    Args:
        snapshot: {station_name: {"DESTINATION-TRAINID": status, ...}, ...}
        topology: Line the snapshot belongs to. Stations not on it are ignored.

    Returns:
        Dictionary of train_id -> Train, in first-seen order.
    """
    trains: Dict[str, Train] = {}

    for station_name, entries in snapshot.items():
        if station_name not in topology:
            logger.debug(f"Skipping unknown station {station_name!r}")
            continue
        if not isinstance(entries, Mapping):
            logger.warning(f"Ignoring malformed report block for station {station_name}")
            continue

        for key, payload in entries.items():
            parts = split_train_key(key)
            if parts is None:
                logger.debug(f"Skipping malformed train key {key!r} at {station_name}")
                continue
            destination, train_id = parts

            if train_id not in trains:
                trains[train_id] = Train(train_id=train_id, destination=destination)

            trains[train_id].reports.append(
                TrainReport(station=station_name, status=parse_status(payload))
            )

    return trains


def best_report(train: Train) -> Optional[TrainReport]:
    """Report with the fewest minutes to arrival; the first one seen wins ties."""
    if not train.reports:
        return None
    return min(train.reports, key=lambda report: report.minutes_away)
