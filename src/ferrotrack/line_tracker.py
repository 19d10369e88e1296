"""Main Ferrovias line tracker class."""

import logging
from typing import Dict, List, Mapping, Optional
from datetime import datetime

from .departures import station_departures
from .engine import locate_trains
from .feed_client import FerroviasClient
from .models import Departure, LineStatus, TrainPosition
from .topology import LineTopology

logger = logging.getLogger(__name__)


class FerroviasLineTracker:
    """
    Tracks the estimated position of every train on a line.

    This class provides methods to:
    - Fetch the latest status snapshot (live or sample fallback)
    - Place each train on the 0-100 track coordinate
    - List the trains reported at a single station
    """

    def __init__(
        self,
        topology: Optional[LineTopology] = None,
        client: Optional[FerroviasClient] = None,
    ):
        """
        Initialize the tracker.

        Args:
            topology: Line to track. Defaults to the Belgrano Norte.
            client: Feed client. Defaults to one pointing at the live API.
        """
        self.topology = topology or LineTopology.belgrano_norte()
        self.client = client or FerroviasClient()
        self._last_snapshot: Optional[Dict] = None

    def process_snapshot(self, snapshot: Mapping) -> List[TrainPosition]:
        """
        Place the trains of a caller-supplied snapshot on the track.

        Args:
            snapshot: {station_name: {"DESTINATION-TRAINID": status, ...}, ...}

        Returns:
            Renderable TrainPosition objects.
        """
        return [
            position
            for position in locate_trains(snapshot, self.topology)
            if position.is_renderable
        ]

    def get_line_status(self) -> LineStatus:
        """
        Fetch the latest snapshot and locate every train in it.

        Returns:
            LineStatus with renderable trains, data source and timestamp.
        """
        snapshot, data_source = self.client.get_snapshot()
        self._last_snapshot = snapshot

        trains = self.process_snapshot(snapshot)
        logger.info(f"{data_source.message}: {len(trains)} trains on the line")

        return LineStatus(
            trains=trains,
            data_source=data_source,
            last_updated=datetime.now(),
        )

    def get_departures(self, station: str) -> List[Departure]:
        """
        Get the trains reported at a station, soonest first.

        Args:
            station: Station name (e.g., "Florida").

        Returns:
            List of Departure objects from the most recent snapshot.

        Raises:
            ValueError: If the station is not on the line.
        """
        if self._last_snapshot is None:
            self._last_snapshot, _ = self.client.get_snapshot()
        return station_departures(self._last_snapshot, station, self.topology)

    def cleanup(self) -> None:
        """Release resources and clear caches."""
        self._last_snapshot = None
        if self.client:
            self.client.clear_cache()
            self.client.close()
        logger.info("Cleaned up tracker resources")
