import unittest
from datetime import date, datetime

from hydroplan.enums.app_enum import ActivityLevelEnum, GoalTypeEnum, IntensityEnum
from hydroplan.utils.hydration_calculator import (
    calculate_amount_of_intakes,
    calculate_deviation_ml,
    calculate_target_ml,
    calculate_water_bonus_ml,
    normalize_to_start_of_day,
    round_to_hundred,
)


class TargetTestCase(unittest.TestCase):
    def test_medium_maintain_70kg(self):
        target = calculate_target_ml(70, ActivityLevelEnum.medium, GoalTypeEnum.maintain)
        self.assertEqual(target, 2700)
        self.assertEqual(calculate_amount_of_intakes(target), 11)

    def test_accepts_raw_enum_values(self):
        self.assertEqual(calculate_target_ml(70, "medium", "maintain"), 2700)

    def test_missing_factors_default_to_one(self):
        # 2450 rounds half up
        self.assertEqual(calculate_target_ml(70), 2500)

    def test_high_activity_lose_weight(self):
        self.assertEqual(calculate_target_ml(80, ActivityLevelEnum.high, GoalTypeEnum.lose_weight), 3500)

    def test_no_weight_means_no_target(self):
        self.assertIsNone(calculate_target_ml(None, ActivityLevelEnum.high))
        self.assertIsNone(calculate_target_ml(0))
        self.assertIsNone(calculate_amount_of_intakes(None))
        self.assertIsNone(calculate_amount_of_intakes(0))


class WaterBonusTestCase(unittest.TestCase):
    def test_bonus_per_intensity(self):
        self.assertEqual(calculate_water_bonus_ml(30, IntensityEnum.low), 120)
        self.assertEqual(calculate_water_bonus_ml(30, IntensityEnum.medium), 210)
        self.assertEqual(calculate_water_bonus_ml(60, "high"), 600)

    def test_missing_inputs(self):
        self.assertIsNone(calculate_water_bonus_ml(None, IntensityEnum.high))
        self.assertIsNone(calculate_water_bonus_ml(45, None))


class DeviationTestCase(unittest.TestCase):
    plan_date = date(2026, 3, 10)

    def test_half_day_behind(self):
        now = datetime(2026, 3, 10, 12, 0)
        self.assertEqual(calculate_deviation_ml(2000, self.plan_date, 400, now), -600)

    def test_ahead_of_pace(self):
        now = datetime(2026, 3, 10, 12, 0)
        self.assertEqual(calculate_deviation_ml(2000, self.plan_date, 1900, now), 900)

    def test_expected_is_capped_after_full_day(self):
        now = datetime(2026, 3, 12, 9, 0)
        self.assertEqual(calculate_deviation_ml(2000, self.plan_date, 1500, now), -500)

    def test_future_plan_expects_nothing(self):
        now = datetime(2026, 3, 9, 18, 0)
        self.assertEqual(calculate_deviation_ml(2000, self.plan_date, 250, now), 300)

    def test_no_target(self):
        self.assertIsNone(calculate_deviation_ml(None, self.plan_date, 500, datetime(2026, 3, 10)))

    def test_plan_key_is_calendar_day(self):
        self.assertEqual(normalize_to_start_of_day(datetime(2026, 3, 10, 23, 59)), self.plan_date)
        self.assertEqual(normalize_to_start_of_day(self.plan_date), self.plan_date)

    def test_round_to_hundred_halves_go_up(self):
        self.assertEqual(round_to_hundred(150), 200)
        self.assertEqual(round_to_hundred(149), 100)
        self.assertEqual(round_to_hundred(-1350), -1300)
