"""Hiding of trains that appear to have just left a terminal."""

import logging
from enum import Enum
from typing import Optional

from .models import Train, TrainReport
from .topology import LineTopology

logger = logging.getLogger(__name__)


class TerminalKind(Enum):
    """How a terminal relates to a train whose best report is there."""
    DESTINATION = "destination"  # The train terminates here
    BRANCH = "branch"  # Intermediate terminal for short-turn services
    LINE_END = "line_end"  # Physical end of the line


def classify_terminal(report: TrainReport, train: Train, topology: LineTopology) -> Optional[TerminalKind]:
    """Kind of terminal the report is at, or None if it is not at a terminal."""
    station_upper = report.station.upper()
    if station_upper not in topology.terminals:
        return None
    if station_upper in train.destination.upper():
        return TerminalKind.DESTINATION
    if topology.is_branch_terminal(report.station):
        return TerminalKind.BRANCH
    return TerminalKind.LINE_END


def _show(train: Train, report: TrainReport, topology: LineTopology) -> Optional[str]:
    return None


def _hide_line_end(train: Train, report: TrainReport, topology: LineTopology) -> Optional[str]:
    return f"best report is at line end {report.station} but destination is {train.destination}"


def _check_branch(train: Train, report: TrainReport, topology: LineTopology) -> Optional[str]:
    direction = topology.direction_for(train.destination)
    corroborating = topology.corroborating_station(report.station, direction)
    if corroborating is None:
        return None

    if train.has_report_at(corroborating):
        return None

    threshold = topology.travel_time(report.station, corroborating)
    if report.minutes_away > threshold:
        return (
            f"best report at {report.station} ({report.minutes_away} min), "
            f"no report from {corroborating} and time is > {threshold} min"
        )
    return None


_RULES = {
    TerminalKind.DESTINATION: _show,
    TerminalKind.BRANCH: _check_branch,
    TerminalKind.LINE_END: _hide_line_end,
}


def hide_reason(train: Train, report: TrainReport, topology: LineTopology) -> Optional[str]:
    """
    Why a train should be hidden this cycle, or None if it should be shown.

    Stations keep reporting trains that just departed a terminal with a stale
    arrival time. A train whose best report is at a terminal is only shown when
    it terminates there, or, at a branch terminal, when a report from the
    station before the terminal confirms it is inbound or its time is within
    that segment's travel time.
    """
    kind = classify_terminal(report, train, topology)
    if kind is None:
        return None
    return _RULES[kind](train, report, topology)


def should_hide(train: Train, report: TrainReport, topology: LineTopology) -> bool:
    """True when the train is a departing ghost that must not be displayed."""
    reason = hide_reason(train, report, topology)
    if reason:
        logger.info(f"Hiding train {train.train_id} to {train.destination}: {reason}")
        return True
    return False
