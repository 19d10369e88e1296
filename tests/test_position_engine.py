"""Tests for the train position engine."""

import unittest
import sys
from pathlib import Path

# Add src to path so we can import ferrotrack
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ferrotrack.aggregator import aggregate_trains, best_report, split_train_key
from ferrotrack.engine import locate_trains
from ferrotrack.locator import project_location, resolve_location, station_percent
from ferrotrack.models import (
    UNRENDERABLE,
    ApproachingTerminal,
    ArrivalStatus,
    AtStation,
    Between,
    Direction,
    StatusKind,
    Train,
    TrainReport,
)
from ferrotrack.normalizer import parse_status
from ferrotrack.sample_data import SAMPLE_SNAPSHOT
from ferrotrack.suppression import TerminalKind, classify_terminal, hide_reason, should_hide
from ferrotrack.topology import LineTopology


def make_train(train_id, destination, reports):
    """Build a Train from (station, status string) pairs."""
    return Train(
        train_id=train_id,
        destination=destination,
        reports=[TrainReport(station=s, status=parse_status(t)) for s, t in reports],
    )


def located(snapshot, topology):
    return {p.train_id: p for p in locate_trains(snapshot, topology)}


class TestParseStatus(unittest.TestCase):
    """Test normalization of station status strings."""

    def test_at_platform_any_case(self):
        for text in ["En Estacion", "en estacion", "EN ESTACION"]:
            status = parse_status(text)
            self.assertEqual(status.kind, StatusKind.AT_PLATFORM)
            self.assertEqual(status.minutes_away, 0)

    def test_proximo_is_one_minute(self):
        status = parse_status("Proximo")
        self.assertEqual(status.kind, StatusKind.IMMINENT)
        self.assertEqual(status.minutes_away, 1)

    def test_minutes_from_first_digits(self):
        self.assertEqual(parse_status("23 min").minutes_away, 23)
        self.assertEqual(parse_status("Llega en 12 minutos (5 paradas)").minutes_away, 12)
        self.assertEqual(parse_status("23 min"), ArrivalStatus.in_minutes(23))

    def test_unreadable_is_unknown(self):
        for payload in ["", None, "asdf", 42, {"time": "5 min"}]:
            status = parse_status(payload)
            self.assertEqual(status.kind, StatusKind.UNKNOWN)
            self.assertEqual(status.minutes_away, 999)

    def test_list_payload_uses_first_element(self):
        self.assertEqual(parse_status(["Proximo"]).minutes_away, 1)
        self.assertEqual(parse_status(["7 min", "12 min"]).minutes_away, 7)
        self.assertEqual(parse_status([]).minutes_away, 999)

    def test_exact_match_only(self):
        """Whitespace around the keyword is not stripped; no digits means unknown."""
        self.assertEqual(parse_status(" Proximo ").minutes_away, 999)


class TestAggregator(unittest.TestCase):
    """Test grouping of station reports by train."""

    def setUp(self):
        self.topology = LineTopology.belgrano_norte()

    def test_split_train_key(self):
        self.assertEqual(split_train_key("VILLA_ROSA-3081"), ("VILLA ROSA", "3081"))
        self.assertEqual(split_train_key("BOULOGNE_SUR_MER-12"), ("BOULOGNE SUR MER", "12"))
        self.assertEqual(split_train_key("RETIRO-30-86"), ("RETIRO", "30-86"))
        self.assertIsNone(split_train_key("RETIRO"))
        self.assertIsNone(split_train_key("-3086"))
        self.assertIsNone(split_train_key("RETIRO-"))

    def test_reports_collected_across_stations(self):
        snapshot = {
            "Padilla": {"RETIRO-3086": ["7 min"]},
            "Florida": {"RETIRO-3086": ["2 min"], "VILLA_ROSA-3083": ["En Estacion"]},
        }
        trains = aggregate_trains(snapshot, self.topology)

        self.assertEqual(set(trains), {"3086", "3083"})
        self.assertEqual(len(trains["3086"].reports), 2)
        self.assertEqual(trains["3083"].destination, "VILLA ROSA")
        self.assertEqual({r.station for r in trains["3086"].reports}, {"Padilla", "Florida"})

    def test_unknown_stations_and_malformed_keys_skipped(self):
        snapshot = {
            "Constitucion": {"RETIRO-1": ["3 min"]},
            "Florida": {"NOHYPHEN": ["3 min"], "-2": ["3 min"], "RETIRO-3": ["3 min"]},
            "Munro": ["not", "a", "mapping"],
        }
        trains = aggregate_trains(snapshot, self.topology)

        self.assertEqual(list(trains), ["3"])

    def test_best_report_is_minimum(self):
        train = make_train("1", "RETIRO", [("Padilla", "7 min"), ("Florida", "Proximo"), ("Munro", "asdf")])
        self.assertEqual(best_report(train).station, "Florida")

    def test_best_report_tie_keeps_first_seen(self):
        train = make_train("1", "RETIRO", [("Padilla", "5 min"), ("Florida", "5 min")])
        self.assertEqual(best_report(train).station, "Padilla")

    def test_best_report_without_reports(self):
        self.assertIsNone(best_report(Train(train_id="1", destination="RETIRO")))


class TestTerminalSuppression(unittest.TestCase):
    """Test hiding of trains that just left a terminal."""

    def setUp(self):
        self.topology = LineTopology.belgrano_norte()

    def hidden(self, train):
        return should_hide(train, best_report(train), self.topology)

    def test_not_at_terminal(self):
        train = make_train("1", "RETIRO", [("Florida", "12 min")])
        self.assertIsNone(classify_terminal(best_report(train), train, self.topology))
        self.assertFalse(self.hidden(train))

    def test_classify_terminal(self):
        cases = [
            ("BOULOGNE SUR MER", "Boulogne Sur Mer", TerminalKind.DESTINATION),
            ("RETIRO", "Boulogne Sur Mer", TerminalKind.BRANCH),
            ("VILLA ROSA", "Grand Bourg", TerminalKind.BRANCH),
            ("VILLA ROSA", "Retiro", TerminalKind.LINE_END),
            ("RETIRO", "Villa Rosa", TerminalKind.LINE_END),
        ]
        for destination, station, expected in cases:
            train = make_train("1", destination, [(station, "3 min")])
            self.assertEqual(classify_terminal(train.reports[0], train, self.topology), expected)

    def test_departing_boulogne_to_retiro_hidden(self):
        """Only report is at Boulogne, over the A. Montes segment time, no A. Montes report."""
        train = make_train("1", "RETIRO", [("Boulogne Sur Mer", "10 min")])
        self.assertTrue(self.hidden(train))
        self.assertIn("A. Montes", hide_reason(train, train.reports[0], self.topology))

    def test_boulogne_to_retiro_corroborated_by_a_montes(self):
        train = make_train("1", "RETIRO", [("Boulogne Sur Mer", "10 min"), ("A. Montes", "15 min")])
        self.assertFalse(self.hidden(train))

    def test_boulogne_to_retiro_within_threshold(self):
        train = make_train("1", "RETIRO", [("Boulogne Sur Mer", "7 min")])
        self.assertFalse(self.hidden(train))

    def test_boulogne_to_villa_rosa(self):
        train = make_train("1", "VILLA ROSA", [("Boulogne Sur Mer", "5 min")])
        self.assertTrue(self.hidden(train))

        train = make_train("1", "VILLA ROSA", [("Boulogne Sur Mer", "4 min")])
        self.assertFalse(self.hidden(train))

        train = make_train("1", "VILLA ROSA", [("Boulogne Sur Mer", "5 min"), ("Villa Adelina", "9 min")])
        self.assertFalse(self.hidden(train))

    def test_grand_bourg_to_retiro(self):
        train = make_train("1", "RETIRO", [("Grand Bourg", "10 min")])
        self.assertTrue(self.hidden(train))

        train = make_train("1", "RETIRO", [("Grand Bourg", "10 min"), ("Tierras Altas", "14 min")])
        self.assertFalse(self.hidden(train))

    def test_grand_bourg_to_villa_rosa(self):
        train = make_train("1", "VILLA ROSA", [("Grand Bourg", "9 min")])
        self.assertTrue(self.hidden(train))

        train = make_train("1", "VILLA ROSA", [("Grand Bourg", "3 min")])
        self.assertFalse(self.hidden(train))

        train = make_train("1", "VILLA ROSA", [("Grand Bourg", "9 min"), ("Pablo Nogues", "13 min")])
        self.assertFalse(self.hidden(train))

    def test_arriving_at_own_destination_shown(self):
        train = make_train("1", "BOULOGNE SUR MER", [("Boulogne Sur Mer", "20 min")])
        self.assertFalse(self.hidden(train))

        train = make_train("2", "VILLA ROSA", [("Villa Rosa", "Proximo")])
        self.assertFalse(self.hidden(train))

    def test_line_end_other_destination_hidden(self):
        train = make_train("1", "VILLA ROSA", [("Retiro", "En Estacion")])
        self.assertTrue(self.hidden(train))

        train = make_train("2", "RETIRO", [("Villa Rosa", "Proximo")])
        self.assertTrue(self.hidden(train))


class TestResolveLocation(unittest.TestCase):
    """Test classification of a train's location."""

    def setUp(self):
        self.topology = LineTopology.belgrano_norte()

    def resolve(self, destination, station, status):
        train = make_train("1", destination, [(station, status)])
        return resolve_location(train, train.reports[0], self.topology)

    def test_at_platform(self):
        self.assertEqual(self.resolve("RETIRO", "Munro", "En Estacion"), AtStation("Munro"))

    def test_between_away_from_retiro(self):
        location = self.resolve("Villa Rosa", "Padilla", "3 min")
        self.assertEqual(location.from_station, "A. del Valle")
        self.assertEqual(location.to_station, "Padilla")
        self.assertAlmostEqual(location.fraction, 25.0)

    def test_between_toward_retiro(self):
        location = self.resolve("RETIRO", "Munro", "2 min")
        self.assertEqual(location.from_station, "Carapachay")
        self.assertEqual(location.to_station, "Munro")
        self.assertAlmostEqual(location.fraction, 100 / 3)

    def test_report_longer_than_segment_just_departed(self):
        location = self.resolve("VILLA ROSA", "Florida", "15 min")
        self.assertEqual(location.from_station, "Padilla")
        self.assertAlmostEqual(location.fraction, 0.05 / 3 * 100)

    def test_unknown_time_stays_near_origin_station(self):
        location = self.resolve("RETIRO", "Padilla", "sin datos")
        self.assertIsInstance(location, Between)
        self.assertGreater(location.fraction, 0)
        self.assertLess(location.fraction, 2)

    def test_unknown_station(self):
        self.assertIsNone(self.resolve("RETIRO", "Constitucion", "3 min"))

    def test_approaching_line_end(self):
        topology = LineTopology(["North", "Middle", "South"], {"Middle-North": 4}, [])
        train = make_train("1", "SOUTH", [("North", "5 min")])
        location = resolve_location(train, train.reports[0], topology)
        self.assertEqual(location, ApproachingTerminal(terminal="North", minutes_away=5))

        train = make_train("2", "NORTH", [("South", "20 min")])
        location = resolve_location(train, train.reports[0], topology)
        self.assertEqual(location, ApproachingTerminal(terminal="South", minutes_away=20))

    def test_uncharted_segment_uses_default(self):
        topology = LineTopology(["North", "Middle", "South"], {}, [])
        train = make_train("1", "SOUTH", [("Middle", "4 min")])
        location = resolve_location(train, train.reports[0], topology)
        self.assertAlmostEqual(location.fraction, 20.0)

    def test_descriptions(self):
        self.assertEqual(AtStation("Munro").description, "En Estación Munro")
        self.assertEqual(Between("Padilla", "Florida", 10).description, "Entre Padilla y Florida")
        self.assertEqual(ApproachingTerminal("Retiro", 4).description, "Próximo a Retiro (4 min)")


class TestProjectLocation(unittest.TestCase):
    """Test projection onto the 0-100 track coordinate."""

    def setUp(self):
        self.topology = LineTopology.belgrano_norte()

    def test_line_ends(self):
        self.assertEqual(project_location(AtStation("Retiro"), self.topology), 0)
        self.assertEqual(project_location(AtStation("Villa Rosa"), self.topology), 100)

    def test_station_positions_monotonic(self):
        positions = [project_location(AtStation(s), self.topology) for s in self.topology.stations]
        self.assertEqual(positions, sorted(positions))
        self.assertEqual(len(set(positions)), len(positions))

    def test_between_midpoint_either_order(self):
        munro = project_location(AtStation("Munro"), self.topology)
        padilla = project_location(AtStation("Padilla"), self.topology)
        midpoint = (munro + padilla) / 2

        self.assertAlmostEqual(project_location(Between("Munro", "Padilla", 50), self.topology), midpoint)
        self.assertAlmostEqual(project_location(Between("Padilla", "Munro", 50), self.topology), midpoint)

    def test_between_interpolates_from_origin_station(self):
        position = project_location(Between("A. del Valle", "Padilla", 25), self.topology)
        self.assertAlmostEqual(position, 3.25 / 22 * 100)

        position = project_location(Between("Carapachay", "Munro", 100 / 3), self.topology)
        self.assertAlmostEqual(position, (7 - 1 / 3) / 22 * 100)

    def test_approaching_terminal_offset(self):
        self.assertAlmostEqual(project_location(ApproachingTerminal("Retiro", 5), self.topology), 1.0)
        self.assertAlmostEqual(project_location(ApproachingTerminal("Villa Rosa", 5), self.topology), 99.0)

    def test_approaching_terminal_offset_capped(self):
        self.assertAlmostEqual(project_location(ApproachingTerminal("Retiro", 999), self.topology), 3.0)
        self.assertAlmostEqual(project_location(ApproachingTerminal("Villa Rosa", 0), self.topology), 99.8)

    def test_unknown_station_unrenderable(self):
        self.assertEqual(station_percent("Constitucion", self.topology), UNRENDERABLE)
        self.assertEqual(project_location(AtStation("Constitucion"), self.topology), UNRENDERABLE)
        self.assertEqual(project_location(Between("Constitucion", "Retiro", 50), self.topology), UNRENDERABLE)
        self.assertEqual(project_location(ApproachingTerminal("Constitucion", 3), self.topology), UNRENDERABLE)


class TestLocateTrains(unittest.TestCase):
    """Test the full pipeline on complete snapshots."""

    def setUp(self):
        self.topology = LineTopology.belgrano_norte()

    def test_departing_boulogne_hidden_until_corroborated(self):
        snapshot = {"Boulogne Sur Mer": {"RETIRO-100": ["10 min"]}}
        self.assertEqual(locate_trains(snapshot, self.topology), [])

        snapshot["A. Montes"] = {"RETIRO-100": ["15 min"]}
        positions = locate_trains(snapshot, self.topology)
        self.assertEqual([p.train_id for p in positions], ["100"])
        self.assertEqual(positions[0].location.from_station, "A. Montes")

    def test_between_stations(self):
        snapshot = {"Padilla": {"VILLA_ROSA-200": "3 min"}}
        position = located(snapshot, self.topology)["200"]

        self.assertEqual(position.destination, "VILLA ROSA")
        self.assertEqual(position.direction, Direction.TOWARD_END)
        self.assertEqual(position.location, Between("A. del Valle", "Padilla", 25.0))
        self.assertAlmostEqual(position.position, 3.25 / 22 * 100)
        self.assertTrue(position.is_renderable)

    def test_departing_retiro_hidden(self):
        snapshot = {"Retiro": {"VILLA ROSA-300": ["En Estacion"]}}
        self.assertEqual(locate_trains(snapshot, self.topology), [])

    def test_sample_snapshot(self):
        positions = located(SAMPLE_SNAPSHOT, self.topology)

        self.assertEqual(
            set(positions),
            {"3083", "3086", "3088", "3089", "3D81", "3090", "3091", "3093", "3094", "3097"},
        )
        self.assertEqual(positions["3083"].location, AtStation("Florida"))
        self.assertEqual(positions["3086"].location, AtStation("Saldias"))
        self.assertEqual(positions["3088"].location, AtStation("Boulogne Sur Mer"))
        self.assertEqual(positions["3090"].location, AtStation("Pablo Nogues"))
        self.assertEqual(positions["3D81"].location.from_station, "Padilla")
        for position in positions.values():
            self.assertTrue(0 <= position.position <= 100)

    def test_same_snapshot_same_result(self):
        first = locate_trains(SAMPLE_SNAPSHOT, self.topology)
        second = locate_trains(SAMPLE_SNAPSHOT, self.topology)
        self.assertEqual(first, second)

    def test_empty_snapshot(self):
        self.assertEqual(locate_trains({}, self.topology), [])


if __name__ == "__main__":
    unittest.main()
