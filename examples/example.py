"""Example usage of FerroviasLineTracker."""

import logging
import sys
import time
from pathlib import Path

# Add src to path so we can import ferrotrack
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ferrotrack.line_tracker import FerroviasLineTracker

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 30
TRACK_WIDTH = 60


def draw_track(position: float) -> str:
    """Plain-text marker for a position on the line."""
    cell = int(round(position / 100 * (TRACK_WIDTH - 1)))
    return "-" * cell + "#" + "-" * (TRACK_WIDTH - 1 - cell)


def print_line_status(tracker: FerroviasLineTracker):
    """Fetch and display every train on the line."""
    status = tracker.get_line_status()

    print(f"\n{'='*70}")
    print(f"{status.data_source.message}  (updated {status.last_updated.strftime('%H:%M:%S')})")
    if status.data_source.error:
        print(f"Details: {status.data_source.error}")
    print(f"{tracker.topology.stations[0]:<{TRACK_WIDTH // 2}}{tracker.topology.stations[-1]:>{TRACK_WIDTH // 2}}")
    print(f"{'='*70}")

    for train in sorted(status.trains, key=lambda t: t.position):
        print(f"{draw_track(train.position)}  Tren {train.train_id} a {train.destination}")
        print(f"{'':{TRACK_WIDTH}}  {train.description}")


def print_departures(tracker: FerroviasLineTracker, station: str):
    """Display the trains reported at one station."""
    try:
        departures = tracker.get_departures(station)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"\nDepartures at {station}:")
    if not departures:
        print("  No trains reported")
    for departure in departures:
        print(f"  {departure.train_id:>6} a {departure.destination:<20} {departure.status_text} [{departure.category}]")


if __name__ == "__main__":
    tracker = FerroviasLineTracker()

    if len(sys.argv) > 1:
        # Command line mode: show departures for the given station
        print_departures(tracker, " ".join(sys.argv[1:]))
        sys.exit(0)

    try:
        while True:
            print_line_status(tracker)
            time.sleep(POLL_INTERVAL_SECONDS)
    except KeyboardInterrupt:
        print("\nGoodbye!")
    finally:
        tracker.cleanup()
