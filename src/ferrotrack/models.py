"""Data models for the Ferrovias line tracker."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union
from datetime import datetime

# Numeric scale used when comparing reports
AT_PLATFORM_MINUTES = 0
IMMINENT_MINUTES = 1
UNKNOWN_MINUTES = 999

# Projection result for trains that cannot be placed on the track
UNRENDERABLE = -999.0


class StatusKind(Enum):
    """Shape of a station-reported arrival status."""
    AT_PLATFORM = "at_platform"
    IMMINENT = "imminent"
    MINUTES = "minutes"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ArrivalStatus:
    """Normalized time-to-arrival reported by one station."""
    kind: StatusKind
    minutes: Optional[int] = None  # Only set for StatusKind.MINUTES

    @classmethod
    def at_platform(cls) -> "ArrivalStatus":
        return cls(StatusKind.AT_PLATFORM)

    @classmethod
    def imminent(cls) -> "ArrivalStatus":
        return cls(StatusKind.IMMINENT)

    @classmethod
    def in_minutes(cls, minutes: int) -> "ArrivalStatus":
        return cls(StatusKind.MINUTES, minutes)

    @classmethod
    def unknown(cls) -> "ArrivalStatus":
        return cls(StatusKind.UNKNOWN)

    @property
    def minutes_away(self) -> int:
        """Minutes until arrival on the 0 / 1 / n / 999 comparison scale."""
        if self.kind is StatusKind.AT_PLATFORM:
            return AT_PLATFORM_MINUTES
        if self.kind is StatusKind.IMMINENT:
            return IMMINENT_MINUTES
        if self.kind is StatusKind.MINUTES and self.minutes is not None:
            return self.minutes
        return UNKNOWN_MINUTES


class Direction(Enum):
    """Travel direction along the ordered station sequence."""
    TOWARD_ORIGIN = "toward_origin"  # Toward index 0 (Retiro)
    TOWARD_END = "toward_end"  # Toward the last station (Villa Rosa)


@dataclass(frozen=True)
class TrainReport:
    """One station's report for a train."""
    station: str
    status: ArrivalStatus

    @property
    def minutes_away(self) -> int:
        return self.status.minutes_away


@dataclass
class Train:
    """All reports seen for one train during a polling cycle."""
    train_id: str
    destination: str
    reports: List[TrainReport] = field(default_factory=list)

    def has_report_at(self, station: str) -> bool:
        return any(report.station == station for report in self.reports)


@dataclass(frozen=True)
class AtStation:
    """Train stopped at a platform."""
    station: str

    @property
    def description(self) -> str:
        return f"En Estación {self.station}"


@dataclass(frozen=True)
class Between:
    """Train travelling from one station to the next."""
    from_station: str
    to_station: str
    fraction: float  # Percent of the segment already covered, 0-100

    @property
    def description(self) -> str:
        return f"Entre {self.from_station} y {self.to_station}"


@dataclass(frozen=True)
class ApproachingTerminal:
    """Train inbound to a line end with no previous station to interpolate from."""
    terminal: str
    minutes_away: int

    @property
    def description(self) -> str:
        return f"Próximo a {self.terminal} ({self.minutes_away} min)"


TrainLocation = Union[AtStation, Between, ApproachingTerminal]


@dataclass(frozen=True)
class TrainPosition:
    """A located train and its normalized track coordinate."""
    train_id: str
    destination: str
    direction: Direction
    location: TrainLocation
    position: float  # 0-100, or UNRENDERABLE

    @property
    def is_renderable(self) -> bool:
        return self.position != UNRENDERABLE

    @property
    def description(self) -> str:
        return self.location.description


@dataclass(frozen=True)
class DataSource:
    """Where a snapshot came from."""
    is_live: bool
    message: str
    error: Optional[str] = None


@dataclass
class LineStatus:
    """Complete view of the line for one polling cycle."""
    trains: List[TrainPosition]
    data_source: DataSource
    last_updated: datetime


@dataclass(frozen=True)
class Departure:
    """A train listed on a station's departures board."""
    train_id: str
    destination: str
    status_text: Optional[str]  # Raw status as reported, e.g. "12 min"
    minutes_away: int
    category: str  # "at_station", "approaching", "delayed" or "scheduled"
