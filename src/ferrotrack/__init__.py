"""ferrotrack - Live train positions on the Ferrovias Belgrano Norte line."""

__version__ = "0.1.0"

from .models import (
    UNRENDERABLE,
    ApproachingTerminal,
    ArrivalStatus,
    AtStation,
    Between,
    DataSource,
    Departure,
    Direction,
    LineStatus,
    StatusKind,
    Train,
    TrainPosition,
    TrainReport,
)
from .topology import LineTopology
from .engine import locate_trains
from .feed_client import FerroviasClient, FeedError
from .line_tracker import FerroviasLineTracker

__all__ = [
    "FerroviasLineTracker",
    "FerroviasClient",
    "FeedError",
    "LineTopology",
    "locate_trains",
    "ArrivalStatus",
    "StatusKind",
    "Direction",
    "Train",
    "TrainReport",
    "AtStation",
    "Between",
    "ApproachingTerminal",
    "TrainPosition",
    "DataSource",
    "LineStatus",
    "Departure",
    "UNRENDERABLE",
]
