"""Static line topology: station order, segment travel times and terminals."""

import csv
import io
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from .models import Direction

logger = logging.getLogger(__name__)

# Used when a segment has no entry in the travel time table
DEFAULT_SEGMENT_MINUTES = 5

# Belgrano Norte, from the Retiro end to the Villa Rosa end
BELGRANO_NORTE_STATIONS = [
    "Retiro", "Saldias", "Ciudad Universitaria", "A. del Valle", "Padilla",
    "Florida", "Munro", "Carapachay", "Villa Adelina", "Boulogne Sur Mer",
    "A. Montes", "Don Torcuato", "A. Sordeaux", "Villa de Mayo",
    "Los Polvorines", "Pablo Nogues", "Grand Bourg", "Tierras Altas",
    "Tortuguitas", "M. Alberti", "Del Viso", "Cecilia Grierson", "Villa Rosa",
]

# Minutes between adjacent stations, keyed by segment_key()
BELGRANO_NORTE_TRAVEL_TIMES = {
    "Retiro-Saldias": 6,
    "Ciudad Universitaria-Saldias": 6,
    "A. del Valle-Ciudad Universitaria": 5,
    "A. del Valle-Padilla": 4,
    "Florida-Padilla": 3,
    "Florida-Munro": 3,
    "Carapachay-Munro": 3,
    "Carapachay-Villa Adelina": 3,
    "Boulogne Sur Mer-Villa Adelina": 4,
    "A. Montes-Boulogne Sur Mer": 7,
    "A. Montes-Don Torcuato": 4,
    "A. Sordeaux-Don Torcuato": 4,
    "A. Sordeaux-Villa de Mayo": 2,
    "Los Polvorines-Villa de Mayo": 3,
    "Los Polvorines-Pablo Nogues": 4,
    "Grand Bourg-Pablo Nogues": 4,
    "Grand Bourg-Tierras Altas": 4,
    "Tierras Altas-Tortuguitas": 4,
    "M. Alberti-Tortuguitas": 3,
    "Del Viso-M. Alberti": 4,
    "Cecilia Grierson-Del Viso": 4,
    "Cecilia Grierson-Villa Rosa": 6,
}

BELGRANO_NORTE_TERMINALS = ["RETIRO", "VILLA ROSA", "BOULOGNE SUR MER", "GRAND BOURG"]

# Branch terminals: the station a train passes just before reaching the
# terminal, per travel direction
BELGRANO_NORTE_BRANCH_CORROBORATION = {
    "BOULOGNE SUR MER": {
        Direction.TOWARD_ORIGIN: "A. Montes",
        Direction.TOWARD_END: "Villa Adelina",
    },
    "GRAND BOURG": {
        Direction.TOWARD_ORIGIN: "Tierras Altas",
        Direction.TOWARD_END: "Pablo Nogues",
    },
}


def segment_key(station_a: str, station_b: str) -> str:
    """Order-independent travel time table key for two stations."""
    return "-".join(sorted([station_a, station_b]))


class LineTopology:
    """
    Ordered stations of a linear line plus the tables the position engine needs.

    Station indices follow list order: index 0 is the origin end (Retiro on the
    Belgrano Norte), the last index is the opposite end.
    """

    def __init__(
        self,
        stations: Iterable[str],
        travel_times: Mapping[str, float],
        terminals: Iterable[str],
        branch_corroboration: Optional[Mapping[str, Mapping[Direction, str]]] = None,
    ):
        """
        Build and validate a topology.

        Args:
            stations: Station names in physical order.
            travel_times: Segment minutes keyed by segment_key().
            terminals: Names of terminal stations (any case).
            branch_corroboration: For branch terminals, the corroborating station
                per direction of travel.

        Raises:
            ValueError: If the tables are inconsistent.
        """
        self.stations: List[str] = list(stations)
        if len(self.stations) < 2:
            raise ValueError("A line needs at least two stations")

        self._index: Dict[str, int] = {}
        for index, name in enumerate(self.stations):
            if name in self._index:
                raise ValueError(f"Duplicate station '{name}'")
            self._index[name] = index

        known_upper = {name.upper() for name in self.stations}

        self.travel_times: Dict[str, float] = dict(travel_times)
        self.terminals = frozenset(name.upper() for name in terminals)
        for terminal in self.terminals:
            if terminal not in known_upper:
                raise ValueError(f"Terminal '{terminal}' is not a station on the line")

        self.branch_corroboration: Dict[str, Dict[Direction, str]] = {}
        for terminal, by_direction in (branch_corroboration or {}).items():
            terminal_upper = terminal.upper()
            if terminal_upper not in self.terminals:
                raise ValueError(f"Branch terminal '{terminal}' is not in the terminal set")
            for station in by_direction.values():
                if station not in self._index:
                    raise ValueError(f"Corroborating station '{station}' is not on the line")
            self.branch_corroboration[terminal_upper] = dict(by_direction)

    @classmethod
    def belgrano_norte(cls) -> "LineTopology":
        """Topology of the Belgrano Norte line (Retiro - Villa Rosa)."""
        return cls(
            BELGRANO_NORTE_STATIONS,
            BELGRANO_NORTE_TRAVEL_TIMES,
            BELGRANO_NORTE_TERMINALS,
            BELGRANO_NORTE_BRANCH_CORROBORATION,
        )

    @classmethod
    def from_files(
        cls,
        stations_path: str,
        travel_times_path: str,
        branches_path: Optional[str] = None,
    ) -> "LineTopology":
        """
        Load a topology from local CSV files.

        Args:
            stations_path: CSV with station_name, stop_sequence, is_terminal.
            travel_times_path: CSV with from_station, to_station, minutes.
            branches_path: Optional CSV with terminal, direction,
                corroborating_station (direction is toward_origin or toward_end).
        """
        logger.info("Loading line topology from local files")
        with open(stations_path, "r", encoding="utf-8") as f:
            stations, terminals = cls._parse_stations(f.read())
        with open(travel_times_path, "r", encoding="utf-8") as f:
            travel_times = cls._parse_travel_times(f.read())
        branches = None
        if branches_path:
            with open(branches_path, "r", encoding="utf-8") as f:
                branches = cls._parse_branches(f.read())

        topology = cls(stations, travel_times, terminals, branches)
        logger.info(
            f"Loaded {topology.station_count} stations, {len(topology.travel_times)} segments "
            f"and {len(topology.terminals)} terminals"
        )
        return topology

    @staticmethod
    def _parse_stations(csv_content: str):
        """Parse the stations CSV into (ordered names, terminal names)."""
        reader = csv.DictReader(io.StringIO(csv_content))
        rows = []
        terminals = []
        for row in reader:
            name = row["station_name"].strip()
            rows.append((int(row["stop_sequence"]), name))
            if row.get("is_terminal", "").strip().lower() in ("1", "true", "yes"):
                terminals.append(name)
        rows.sort(key=lambda r: r[0])
        return [name for _, name in rows], terminals

    @staticmethod
    def _parse_travel_times(csv_content: str) -> Dict[str, float]:
        reader = csv.DictReader(io.StringIO(csv_content))
        travel_times = {}
        for row in reader:
            key = segment_key(row["from_station"].strip(), row["to_station"].strip())
            travel_times[key] = float(row["minutes"])
        return travel_times

    @staticmethod
    def _parse_branches(csv_content: str) -> Dict[str, Dict[Direction, str]]:
        reader = csv.DictReader(io.StringIO(csv_content))
        branches: Dict[str, Dict[Direction, str]] = {}
        for row in reader:
            terminal = row["terminal"].strip().upper()
            direction = Direction(row["direction"].strip().lower())
            branches.setdefault(terminal, {})[direction] = row["corroborating_station"].strip()
        return branches

    @property
    def station_count(self) -> int:
        return len(self.stations)

    @property
    def origin(self) -> str:
        """Station at index 0."""
        return self.stations[0]

    def index_of(self, station: str) -> Optional[int]:
        """Index of a station, or None if it is not on the line."""
        return self._index.get(station)

    def station_at(self, index: int) -> Optional[str]:
        """Station at an index, or None when out of bounds."""
        if 0 <= index < len(self.stations):
            return self.stations[index]
        return None

    def get_station_index(self, station: str) -> int:
        """
        Index of a station.

        Raises:
            ValueError: If the station is not on the line.
        """
        if station not in self._index:
            raise ValueError(f"Station {station} not found")
        return self._index[station]

    def __contains__(self, station: str) -> bool:
        return station in self._index

    def is_terminal(self, station: str) -> bool:
        return station.upper() in self.terminals

    def is_branch_terminal(self, station: str) -> bool:
        return station.upper() in self.branch_corroboration

    def corroborating_station(self, terminal: str, direction: Direction) -> Optional[str]:
        """Station whose report confirms a train is inbound to a branch terminal."""
        return self.branch_corroboration.get(terminal.upper(), {}).get(direction)

    def travel_time(self, station_a: str, station_b: str) -> float:
        """Minutes between two stations, DEFAULT_SEGMENT_MINUTES when uncharted."""
        minutes = self.travel_times.get(segment_key(station_a, station_b))
        if not minutes:
            return DEFAULT_SEGMENT_MINUTES
        return minutes

    def direction_for(self, destination: str) -> Direction:
        """Direction of travel implied by a destination name."""
        if self.origin.upper() in destination.upper():
            return Direction.TOWARD_ORIGIN
        return Direction.TOWARD_END
