"""Location resolution and projection onto the 0-100 track coordinate."""

from typing import Optional

from .models import (
    UNRENDERABLE,
    ApproachingTerminal,
    AtStation,
    Between,
    Direction,
    Train,
    TrainLocation,
    TrainReport,
)
from .topology import LineTopology

# Smallest elapsed time shown for a train whose report exceeds its segment time
JUST_DEPARTED_MINUTES = 0.05

MAX_APPROACH_MINUTES = 15.0
MAX_APPROACH_OFFSET_PCT = 3.0


def resolve_location(train: Train, report: TrainReport, topology: LineTopology) -> Optional[TrainLocation]:
    """
    Work out where a train is from its best report.

    Args:
        train: Train the report belongs to.
        report: The train's best report.
        topology: Line the train runs on.

    Returns:
        AtStation, Between or ApproachingTerminal; None when the reporting
        station is not on the line.
    """
    if report.minutes_away == 0:
        return AtStation(station=report.station)

    to_index = topology.index_of(report.station)
    if to_index is None:
        return None

    if topology.direction_for(train.destination) is Direction.TOWARD_ORIGIN:
        from_index = to_index + 1
    else:
        from_index = to_index - 1

    from_station = topology.station_at(from_index)
    if from_station is None:
        return ApproachingTerminal(terminal=report.station, minutes_away=report.minutes_away)

    segment_minutes = topology.travel_time(from_station, report.station)
    elapsed = segment_minutes - report.minutes_away
    if elapsed < 0:
        elapsed = JUST_DEPARTED_MINUTES

    fraction = min(max(elapsed / segment_minutes * 100, 0.0), 100.0)
    return Between(from_station=from_station, to_station=report.station, fraction=fraction)


def station_percent(station: str, topology: LineTopology) -> float:
    """Track coordinate of a station, UNRENDERABLE if it is not on the line."""
    index = topology.index_of(station)
    if index is None:
        return UNRENDERABLE
    return index / (topology.station_count - 1) * 100


def project_location(location: TrainLocation, topology: LineTopology) -> float:
    """Map a location onto the 0-100 track coordinate."""
    if isinstance(location, AtStation):
        return station_percent(location.station, topology)

    if isinstance(location, Between):
        from_pct = station_percent(location.from_station, topology)
        to_pct = station_percent(location.to_station, topology)
        if from_pct == UNRENDERABLE or to_pct == UNRENDERABLE:
            return UNRENDERABLE
        return from_pct + (to_pct - from_pct) * (location.fraction / 100)

    if isinstance(location, ApproachingTerminal):
        terminal_pct = station_percent(location.terminal, topology)
        if terminal_pct == UNRENDERABLE:
            return UNRENDERABLE

        # Nudge the train off the terminal, further the longer it has to go
        minutes = max(1.0, min(float(location.minutes_away), MAX_APPROACH_MINUTES))
        offset = minutes / MAX_APPROACH_MINUTES * MAX_APPROACH_OFFSET_PCT
        if topology.index_of(location.terminal) == 0:
            return terminal_pct + offset
        return terminal_pct - offset

    return UNRENDERABLE
