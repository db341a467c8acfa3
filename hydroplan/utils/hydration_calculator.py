import math
from datetime import date, datetime, time, timedelta

from hydroplan.enums.app_enum import ActivityLevelEnum, GoalTypeEnum, IntensityEnum

# -------------------- TARGET -------------------- #
ML_PER_KG = 35
PORTION_ML = 250

ACTIVITY_FACTOR = {
    ActivityLevelEnum.low: 1.0,
    ActivityLevelEnum.medium: 1.1,
    ActivityLevelEnum.high: 1.2,
}

GOAL_FACTOR = {
    GoalTypeEnum.lose_weight: 1.05,
    GoalTypeEnum.maintain: 1.0,
    GoalTypeEnum.gain_muscle: 1.1,
}

# ml of extra water per minute of activity
INTENSITY_FACTOR = {
    IntensityEnum.low: 4,
    IntensityEnum.medium: 7,
    IntensityEnum.high: 10,
}


def _coerce(enum_cls, value):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def round_to_hundred(value: float) -> int:
    """Round to the nearest 100 ml, halves go up."""
    return round_half_up(value / 100) * 100


def activity_factor(activity_level) -> float:
    return ACTIVITY_FACTOR.get(_coerce(ActivityLevelEnum, activity_level), 1.0)


def goal_factor(goal_type) -> float:
    return GOAL_FACTOR.get(_coerce(GoalTypeEnum, goal_type), 1.0)


def calculate_target_ml(weight_kg, activity_level=None, goal_type=None):
    """
    Daily water target: 35 ml per kg, scaled by activity and goal,
    rounded to the nearest 100 ml. None when the weight is unknown.
    """
    if not weight_kg:
        return None

    target = weight_kg * ML_PER_KG * activity_factor(activity_level) * goal_factor(goal_type)
    return round_to_hundred(target)


def calculate_amount_of_intakes(target_ml):
    if not target_ml:
        return None
    return round_half_up(target_ml / PORTION_ML)


# -------------------- ACTIVITY -------------------- #
def intensity_factor(intensity) -> int:
    return INTENSITY_FACTOR.get(_coerce(IntensityEnum, intensity), 0)


def calculate_water_bonus_ml(duration_min, intensity):
    if not duration_min or not intensity:
        return None
    return duration_min * intensity_factor(intensity)


# -------------------- DEVIATION -------------------- #
def normalize_to_start_of_day(value) -> date:
    """Plan key for a date/datetime: the UTC calendar day it falls on."""
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(plan_date) -> datetime:
    return datetime.combine(normalize_to_start_of_day(plan_date), time.min)


def calculate_deviation_ml(target_ml, plan_date, total_intake_ml, now: datetime):
    """
    Signed gap between what was drunk and the linear pace expected at `now`.

    The plan expects target/24 ml per elapsed hour from midnight UTC, capped
    at the full target after 24h. A plan dated in the future expects nothing
    yet. Result is rounded to the nearest 100 ml.
    """
    if not target_ml:
        return None

    total_intake_ml = total_intake_ml or 0
    elapsed_hours = (now - start_of_day(plan_date)) / timedelta(hours=1)

    if elapsed_hours < 0:
        return round_to_hundred(total_intake_ml)

    expected_ml = target_ml / 24 * min(elapsed_hours, 24)
    return round_to_hundred(total_intake_ml - expected_ml)
