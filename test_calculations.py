import math
import unittest
from core.models import Circuit, LengthMode, VoltageDropLevel
from standards.dc_logic import DCLogic
from standards.dc_tables import RESISTIVITY_COPPER_20C, STANDARD_SECTIONS, SECTION_AMPACITY, COMMON_FUSE_RATINGS, FUSE_RATINGS

class TestTables(unittest.TestCase):
    def test_sections_and_ampacity_ascending(self):
        ampacities = [SECTION_AMPACITY[s] for s in STANDARD_SECTIONS]
        for a, b in zip(STANDARD_SECTIONS, STANDARD_SECTIONS[1:]):
            self.assertLess(a, b)
        for a, b in zip(ampacities, ampacities[1:]):
            self.assertLess(a, b)

    def test_common_fuses_subset(self):
        self.assertTrue(set(COMMON_FUSE_RATINGS) <= set(FUSE_RATINGS))
        self.assertEqual(COMMON_FUSE_RATINGS, sorted(COMMON_FUSE_RATINGS))

class TestSolveForSection(unittest.TestCase):
    def test_van_12v_10a_5m(self):
        # 12V, 10A, 5m one way -> 10m total
        # 6 mm2: R = 0.023*10/6 = 0.0383 Ohm -> 0.383 V -> 3.19% (too much)
        # 10 mm2: R = 0.023 Ohm -> 0.23 V -> 1.92%
        circuit = Circuit(voltage=12, current=10, length=5, length_mode=LengthMode.ONE_WAY)
        res = DCLogic.solve_for_section(circuit)

        self.assertEqual(res.section, 10)
        self.assertAlmostEqual(res.voltage_drop, 0.23, places=9)
        self.assertAlmostEqual(res.voltage_drop_percent, 1.916666, places=5)
        self.assertTrue(res.ampacity_ok)
        self.assertTrue(res.voltage_drop_ok)
        self.assertTrue(res.recommended)
        self.assertEqual(res.level, VoltageDropLevel.WARNING)
        # 2.3 / 0.36
        self.assertAlmostEqual(res.minimum_section, 6.388888, places=5)

        six = [c for c in res.candidates if c.section == 6][0]
        self.assertTrue(six.ampacity_ok)
        self.assertFalse(six.voltage_drop_ok)
        self.assertAlmostEqual(six.voltage_drop_percent, 3.194444, places=5)

    def test_round_trip_length_not_doubled(self):
        # Same as above with 10m round trip
        one_way = DCLogic.solve_for_section(Circuit(voltage=12, current=10, length=5))
        round_trip = DCLogic.solve_for_section(Circuit(voltage=12, current=10, length=10, length_mode=LengthMode.ROUND_TRIP))
        self.assertEqual(one_way.section, round_trip.section)
        self.assertAlmostEqual(one_way.voltage_drop, round_trip.voltage_drop)

    def test_ampacity_drives_selection_on_short_run(self):
        # 20A on 0.5m: voltage drop is tiny, 4 mm2 (21A) is the first that carries it
        res = DCLogic.solve_for_section(Circuit(voltage=24, current=20, length=0.5))
        self.assertEqual(res.section, 4)
        self.assertEqual(res.level, VoltageDropLevel.OK)

    def test_voltage_drop_formula_for_every_section(self):
        current, voltage, total = 15.0, 12.0, 8.0
        res = DCLogic.solve_for_section(Circuit(voltage=voltage, current=current, length=total, length_mode=LengthMode.ROUND_TRIP))
        self.assertEqual(len(res.candidates), len(STANDARD_SECTIONS))
        for row in res.candidates:
            expected = (current * RESISTIVITY_COPPER_20C * total / row.section) / voltage * 100
            self.assertAlmostEqual(row.voltage_drop_percent, expected, places=10)

    def test_no_standard_section(self):
        # 250A exceeds every ampacity in the table
        res = DCLogic.solve_for_section(Circuit(voltage=12, current=250, length=2))
        self.assertIsNone(res.section)
        self.assertFalse(res.recommended)
        self.assertIsNone(res.voltage_drop)
        self.assertEqual(len(res.candidates), len(STANDARD_SECTIONS))
        self.assertEqual(len(res.warnings), 1)

    def test_long_run_warning(self):
        # 1A over 25m at 48V fits on 1 mm2 but the run is long
        res = DCLogic.solve_for_section(Circuit(voltage=48, current=1, length=25))
        self.assertEqual(res.section, 1)
        self.assertEqual(len(res.warnings), 1)
        self.assertIn("Long run", res.warnings[0])

    def test_zero_current_takes_smallest_section(self):
        res = DCLogic.solve_for_section(Circuit(voltage=12, current=0, length=5))
        self.assertEqual(res.section, 0.75)
        self.assertEqual(res.voltage_drop, 0)

class TestSolveForCurrent(unittest.TestCase):
    def test_limited_by_voltage_drop(self):
        # 10 mm2, 10m total: R = 0.023 Ohm -> 0.36 V / 0.023 = 15.65 A (< 36 A)
        res = DCLogic.solve_for_current(Circuit(voltage=12, length=5, section=10))
        self.assertAlmostEqual(res.max_current, 0.36 / 0.023, places=9)
        self.assertEqual(res.max_current_by_ampacity, 36)
        self.assertEqual(res.limited_by, "voltage_drop")

    def test_limited_by_ampacity(self):
        # Short run: 0.5 m total on 2.5 mm2 at 24V -> VD limit far above 16A
        res = DCLogic.solve_for_current(Circuit(voltage=24, length=0.5, length_mode=LengthMode.ROUND_TRIP, section=2.5))
        self.assertEqual(res.max_current, 16)
        self.assertEqual(res.limited_by, "ampacity")

    def test_longer_run_lowers_current(self):
        previous = None
        for length in [2, 5, 10, 20]:
            res = DCLogic.solve_for_current(Circuit(voltage=12, length=length, section=10))
            if previous is not None:
                self.assertLess(res.max_current, previous)
            previous = res.max_current

    def test_undefined_without_length_or_section(self):
        self.assertIsNone(DCLogic.solve_for_current(Circuit(voltage=12, section=10)).max_current)
        self.assertIsNone(DCLogic.solve_for_current(Circuit(voltage=12, length=5)).max_current)
        self.assertIsNone(DCLogic.solve_for_current(Circuit(voltage=12, length=0, section=10)).max_current)

class TestSolveForLength(unittest.TestCase):
    def test_one_way_is_half_total(self):
        # (0.36 / 10) * 10 / 0.023 = 15.65 m total
        res = DCLogic.solve_for_length(Circuit(voltage=12, current=10, section=10))
        self.assertAlmostEqual(res.max_total_length, 0.36 / 0.023, places=9)
        self.assertAlmostEqual(res.max_length, res.max_total_length / 2)
        self.assertTrue(res.ampacity_ok)

        rt = DCLogic.solve_for_length(Circuit(voltage=12, current=10, section=10, length_mode=LengthMode.ROUND_TRIP))
        self.assertAlmostEqual(rt.max_length, rt.max_total_length)

    def test_current_above_ampacity_gives_zero(self):
        # 1.5 mm2 carries 10A max
        res = DCLogic.solve_for_length(Circuit(voltage=12, current=12, section=1.5))
        self.assertEqual(res.max_length, 0)
        self.assertEqual(res.max_total_length, 0)
        self.assertFalse(res.ampacity_ok)

    def test_higher_current_shorter_length(self):
        previous = None
        for current in [1, 5, 10, 20, 30]:
            res = DCLogic.solve_for_length(Circuit(voltage=12, current=current, section=10))
            if previous is not None:
                self.assertLess(res.max_length, previous)
            previous = res.max_length

    def test_zero_current_is_unbounded(self):
        res = DCLogic.solve_for_length(Circuit(voltage=12, current=0, section=2.5))
        self.assertTrue(math.isinf(res.max_length))

class TestRoundTrip(unittest.TestCase):
    def test_recommended_section_satisfies_its_inputs(self):
        for voltage, current, length in [(12, 10, 5), (12, 25, 3), (24, 40, 8), (48, 5, 30), (12, 2, 12)]:
            res = DCLogic.solve_for_section(Circuit(voltage=voltage, current=current, length=length))
            self.assertIsNotNone(res.section)
            c_res = DCLogic.solve_for_current(Circuit(voltage=voltage, length=length, section=res.section))
            l_res = DCLogic.solve_for_length(Circuit(voltage=voltage, current=current, section=res.section))
            self.assertGreaterEqual(c_res.max_current, current)
            self.assertGreaterEqual(l_res.max_length, length)

    def test_current_exactly_on_drop_limit(self):
        # Current = V*3%/R(S) puts the drop right on 3%
        # ex: 12V, 1 mm2, 2.7m one way -> 0.36 / (0.023*5.4) = 2.8986 A
        checked = 0
        for voltage in [12, 24, 48, 12.6, 13.8]:
            for section in STANDARD_SECTIONS:
                for length in [0.3, 0.5, 1, 1.7, 2.7, 3, 4.1, 5, 7.3, 10, 12.5, 20]:
                    current = DCLogic.max_current_by_drop(section, voltage, length * 2)
                    res = DCLogic.solve_for_section(Circuit(voltage=voltage, current=current, length=length))
                    if res.section is None:
                        continue
                    c_res = DCLogic.solve_for_current(Circuit(voltage=voltage, length=length, section=res.section))
                    l_res = DCLogic.solve_for_length(Circuit(voltage=voltage, current=current, section=res.section))
                    self.assertGreaterEqual(c_res.max_current, current)
                    self.assertGreaterEqual(l_res.max_length, length)
                    checked += 1
        self.assertGreater(checked, 0)

    def test_round_trip_on_drop_limit(self):
        current = DCLogic.max_current_by_drop(1, 12, 5.4)
        res = DCLogic.solve_for_section(Circuit(voltage=12, current=current, length=5.4, length_mode=LengthMode.ROUND_TRIP))
        l_res = DCLogic.solve_for_length(Circuit(voltage=12, current=current, section=res.section, length_mode=LengthMode.ROUND_TRIP))
        self.assertGreaterEqual(l_res.max_length, 5.4)

if __name__ == '__main__':
    unittest.main()
