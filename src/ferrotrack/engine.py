"""Position inference for every train in a status snapshot."""

import logging
from typing import List, Mapping

from .aggregator import aggregate_trains, best_report
from .locator import project_location, resolve_location
from .models import TrainPosition
from .suppression import should_hide
from .topology import LineTopology

logger = logging.getLogger(__name__)


def locate_trains(snapshot: Mapping, topology: LineTopology) -> List[TrainPosition]:
    """
    Estimate the track position of every train reported in a snapshot.

    The result depends only on the arguments; no state is kept between calls.

    Args:
        snapshot: {station_name: {"DESTINATION-TRAINID": status, ...}, ...}
        topology: Line the snapshot belongs to.

    Returns:
        One TrainPosition per displayable train. Trains whose location could
        not be projected are included with position UNRENDERABLE.
    """
    trains = aggregate_trains(snapshot, topology)
    positions: List[TrainPosition] = []

    for train in trains.values():
        report = best_report(train)
        if report is None:
            continue

        if should_hide(train, report, topology):
            continue

        location = resolve_location(train, report, topology)
        if location is None:
            logger.debug(f"No location for train {train.train_id} at {report.station}")
            continue

        positions.append(
            TrainPosition(
                train_id=train.train_id,
                destination=train.destination,
                direction=topology.direction_for(train.destination),
                location=location,
                position=project_location(location, topology),
            )
        )

    logger.debug(f"Located {len(positions)} of {len(trains)} trains")
    return positions
