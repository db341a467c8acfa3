# hydroplan/services/statistics_service.py
from collections import OrderedDict

from sqlalchemy import func

from hydroplan.errors import ValidationError
from hydroplan.extensions import db
from hydroplan.models import Activity, DailyPlan, Intake, UserProfile
from hydroplan.utils.hydration_calculator import round_half_up

GROUP_BY_OPTIONS = ("day", "user", "activity_level")


def round_to_cents(value: float) -> float:
    return round_half_up(value * 100) / 100


def _percentage(intake: float, target: float) -> float:
    return (intake / target) * 100 if target > 0 else 0


def _summarize(groups: "OrderedDict") -> list:
    result = []
    for key, data in groups.items():
        result.append({
            "key": key,
            "average_target": data["target"] / data["count"],
            "average_intake": data["intake"] / data["count"],
            "completion_percentage": _percentage(data["intake"], data["target"]),
            "count": data["count"],
        })
    return result


def _group_plans(plans: list, key_of) -> list:
    groups = OrderedDict()
    for plan in plans:
        key = key_of(plan)
        data = groups.setdefault(key, {"target": 0, "intake": 0, "count": 0})
        data["target"] += plan.target_ml or 0
        data["intake"] += plan.total_intake_ml or 0
        data["count"] += 1
    return _summarize(groups)


class StatisticsService:

    @staticmethod
    def get_water_consumption_stats(user_id=None, from_date=None, to_date=None, group_by=None):
        """
        Averages over the plans that have a target:
        - average target and intake per plan
        - average portion size
        - completion percentage of the summed target
        Optionally broken down by day, user or activity level.
        """
        if group_by is not None and group_by not in GROUP_BY_OPTIONS:
            allowed = ", ".join(GROUP_BY_OPTIONS)
            raise ValidationError(f"group_by must be one of: {allowed}")

        query = DailyPlan.query.filter(DailyPlan.target_ml.isnot(None))
        if user_id is not None:
            query = query.filter(DailyPlan.user_id == user_id)
        if from_date is not None:
            query = query.filter(DailyPlan.plan_date >= from_date)
        if to_date is not None:
            query = query.filter(DailyPlan.plan_date <= to_date)

        plans = query.order_by(DailyPlan.plan_date.asc(), DailyPlan.id.asc()).all()
        if not plans:
            return {
                "average_target": 0,
                "average_intake": 0,
                "average_intake_per_portion": 0,
                "completion_percentage": 0,
                "breakdown": [],
            }

        total_target = sum(plan.target_ml or 0 for plan in plans)
        total_intake = sum(plan.total_intake_ml or 0 for plan in plans)

        average_portion = (
            db.session.query(func.avg(Intake.volume_ml))
            .filter(Intake.daily_plan_id.in_([plan.id for plan in plans]))
            .scalar()
        )

        breakdown = []
        if group_by == "day":
            breakdown = _group_plans(plans, lambda plan: plan.plan_date.isoformat())
        elif group_by == "user":
            breakdown = _group_plans(plans, lambda plan: plan.user_id)
        elif group_by == "activity_level":
            levels = {
                profile.user_id: profile.activity_level.value if profile.activity_level else "unknown"
                for profile in UserProfile.query.filter(
                    UserProfile.user_id.in_(sorted({plan.user_id for plan in plans}))
                )
            }
            breakdown = _group_plans(plans, lambda plan: levels.get(plan.user_id, "unknown"))

        return {
            "average_target": round_half_up(total_target / len(plans)),
            "average_intake": round_half_up(total_intake / len(plans)),
            "average_intake_per_portion": round_half_up(average_portion or 0),
            "completion_percentage": round_to_cents(_percentage(total_intake, total_target)),
            "breakdown": breakdown,
        }

    @staticmethod
    def get_activity_stats(user_id=None, from_date=None, to_date=None):
        """
        Activity counts per user, the most logged activity types and the
        average water bonus, over activities whose plan falls in the window.
        """
        query = Activity.query.join(DailyPlan, Activity.daily_plan_id == DailyPlan.id)
        if user_id is not None:
            query = query.filter(DailyPlan.user_id == user_id)
        if from_date is not None:
            query = query.filter(DailyPlan.plan_date >= from_date)
        if to_date is not None:
            query = query.filter(DailyPlan.plan_date <= to_date)

        rows = (
            query.with_entities(DailyPlan.user_id, Activity.activity_type, Activity.water_bonus_ml)
            .order_by(Activity.id.asc())
            .all()
        )
        if not rows:
            return {
                "average_activities_per_user": 0,
                "popular_activity_types": [],
                "average_water_bonus": 0,
            }

        type_counts = OrderedDict()
        for _, activity_type, _ in rows:
            key = activity_type.value if activity_type else "unknown"
            type_counts[key] = type_counts.get(key, 0) + 1

        popular = sorted(
            (
                {"activity_type": key, "count": count, "percentage": count / len(rows) * 100}
                for key, count in type_counts.items()
            ),
            key=lambda entry: entry["count"],
            reverse=True,
        )

        users = {user for user, _, _ in rows}
        bonuses = [bonus for _, _, bonus in rows if bonus is not None]
        average_bonus = sum(bonuses) / len(bonuses) if bonuses else 0

        return {
            "average_activities_per_user": round_to_cents(len(rows) / len(users)),
            "popular_activity_types": popular,
            "average_water_bonus": round_half_up(average_bonus),
        }
