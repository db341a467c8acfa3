# hydroplan/services/daily_plan_service.py
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from hydroplan.errors import ConflictError, NotFoundError, ValidationError
from hydroplan.extensions import db
from hydroplan.models import Activity, DailyPlan, Intake, User, UserProfile
from hydroplan.utils.hydration_calculator import (
    calculate_amount_of_intakes,
    calculate_deviation_ml,
    calculate_target_ml,
    normalize_to_start_of_day,
)
from hydroplan.utils.time_utils import utcnow
from hydroplan.utils.validators import parse_date, parse_int, parse_number

logger = logging.getLogger(__name__)


def resolve_profile(user_id: int):
    """Profile of the user, or None when it was never filled in."""
    return UserProfile.query.filter_by(user_id=user_id).first()


def today_utc():
    return utcnow().date()


def _ensure_user_exists(user_id: int):
    if db.session.get(User, user_id) is None:
        raise NotFoundError("User", user_id)


def _parse_plan_fields(payload: dict) -> dict:
    """
    Validates the subset of plan fields present in the payload.
    Absent keys stay absent so updates stay partial.
    """
    fields = {}
    if "user_id" in payload:
        fields["user_id"] = parse_int(payload, "user_id", required=True)
    if "date" in payload:
        fields["plan_date"] = parse_date(payload, "date")
    if "target_ml" in payload:
        target = parse_number(payload, "target_ml", min_value=0)
        fields["target_ml"] = int(target) if target is not None else None
    for field in ("total_intake_ml", "deviation_ml", "amount_of_intakes"):
        if field in payload:
            fields[field] = parse_int(payload, field)
    return fields


def sum_intakes_ml(daily_plan_id: int) -> int:
    total = (
        db.session.query(func.coalesce(func.sum(Intake.volume_ml), 0))
        .filter(Intake.daily_plan_id == daily_plan_id)
        .scalar()
    )
    return int(total or 0)


def sum_water_bonus_ml(daily_plan_id: int) -> int:
    total = (
        db.session.query(func.coalesce(func.sum(Activity.water_bonus_ml), 0))
        .filter(Activity.daily_plan_id == daily_plan_id)
        .scalar()
    )
    return int(total or 0)


class DailyPlanService:

    @staticmethod
    def get_daily_plan(plan_id: int) -> DailyPlan:
        plan = db.session.get(DailyPlan, plan_id)
        if not plan:
            raise NotFoundError("DailyPlan", plan_id)
        return plan

    @staticmethod
    def list_daily_plans(user_id: int | None = None, plan_date=None):
        query = DailyPlan.query
        if user_id is not None:
            query = query.filter_by(user_id=user_id)
        if plan_date is not None:
            query = query.filter_by(plan_date=normalize_to_start_of_day(plan_date))
        return query.order_by(DailyPlan.plan_date.asc(), DailyPlan.id.asc()).all()

    @staticmethod
    def create_daily_plan(payload: dict, reject_past: bool = False) -> DailyPlan:
        """
        Creates a plan for a user and day.
        - The date defaults to today and is keyed by its UTC day
        - Totals default to zero
        - With a target, the deviation is reconciled right away
        """
        if "user_id" not in payload:
            raise ValidationError("user_id is required")
        fields = _parse_plan_fields(payload)
        _ensure_user_exists(fields["user_id"])

        plan_date = fields.get("plan_date") or today_utc()
        if reject_past and plan_date < today_utc():
            raise ValidationError("date must be today or in the future")

        plan = DailyPlan(
            user_id=fields["user_id"],
            plan_date=plan_date,
            target_ml=fields.get("target_ml"),
            total_intake_ml=fields.get("total_intake_ml") or 0,
            deviation_ml=fields.get("deviation_ml"),
            amount_of_intakes=fields.get("amount_of_intakes"),
        )
        db.session.add(plan)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError(
                f"DailyPlan for user {fields['user_id']} on {plan_date.isoformat()} already exists"
            )

        logger.info("[DailyPlanService] Created DailyPlan %s for user %s on %s", plan.id, plan.user_id, plan.plan_date)

        if plan.target_ml:
            deviation = calculate_deviation_ml(plan.target_ml, plan.plan_date, plan.total_intake_ml, utcnow())
            if deviation is not None and deviation != plan.deviation_ml:
                return DailyPlanService.update_daily_plan(plan.id, {"deviation_ml": deviation})

        return plan

    @staticmethod
    def update_daily_plan(plan_id: int, payload: dict) -> DailyPlan:
        plan = DailyPlanService.get_daily_plan(plan_id)
        fields = _parse_plan_fields(payload)

        if "user_id" in fields:
            _ensure_user_exists(fields["user_id"])

        for key, value in fields.items():
            if key == "plan_date" and value is None:
                continue
            setattr(plan, key, value)

        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("Another DailyPlan already exists for that user and date")
        return plan

    @staticmethod
    def delete_daily_plan(plan_id: int):
        plan = DailyPlanService.get_daily_plan(plan_id)
        db.session.delete(plan)
        db.session.commit()
        logger.info("[DailyPlanService] Deleted DailyPlan %s", plan_id)

    @staticmethod
    def recalculate_from_intakes(plan_id: int) -> DailyPlan:
        """
        Re-sums every intake of the plan and recomputes the deviation.
        Always a full recompute, the stored totals are only a cache.
        """
        plan = DailyPlanService.get_daily_plan(plan_id)

        total_intake_ml = sum_intakes_ml(plan.id)
        plan.total_intake_ml = total_intake_ml
        plan.deviation_ml = calculate_deviation_ml(plan.target_ml, plan.plan_date, total_intake_ml, utcnow())

        db.session.commit()
        logger.info(
            "[DailyPlanService] Recalculated DailyPlan %s: total_intake_ml=%s deviation_ml=%s",
            plan.id, plan.total_intake_ml, plan.deviation_ml
        )
        return plan

    @staticmethod
    def recalculate_from_activities(plan_id: int) -> DailyPlan:
        """
        Rebuilds the target from the activity water bonus, then refreshes the
        intake totals against it.

        With a profile the target is the profile base target plus the bonus.
        Without one the bonus is added to whatever target is stored.
        """
        plan = DailyPlanService.get_daily_plan(plan_id)
        total_bonus_ml = sum_water_bonus_ml(plan.id)

        profile = resolve_profile(plan.user_id)
        if profile is None:
            new_target = (plan.target_ml or 0) + total_bonus_ml
        else:
            base_target = calculate_target_ml(profile.weight_kg, profile.activity_level, profile.goal_type)
            new_target = (base_target or 0) + total_bonus_ml

        plan.target_ml = new_target if new_target > 0 else None

        return DailyPlanService.recalculate_from_intakes(plan.id)

    @staticmethod
    def find_or_create_today(user_id: int, profile) -> DailyPlan:
        """
        Returns today's plan for the user, creating it from the profile when
        missing. `profile` needs weight_kg, activity_level and goal_type.

        The (user_id, plan_date) unique constraint decides concurrent creates:
        the loser of the race falls back to the plan that won.
        """
        today = today_utc()
        target = calculate_target_ml(
            getattr(profile, "weight_kg", None),
            getattr(profile, "activity_level", None),
            getattr(profile, "goal_type", None),
        )
        amount_of_intakes = calculate_amount_of_intakes(target)

        plan = DailyPlan.query.filter_by(user_id=user_id, plan_date=today).first()

        if plan is None:
            try:
                return DailyPlanService.create_daily_plan({
                    "user_id": user_id,
                    "date": today,
                    "target_ml": target,
                    "total_intake_ml": 0,
                    "deviation_ml": 0 if target else None,
                    "amount_of_intakes": amount_of_intakes,
                })
            except ConflictError:
                logger.warning(
                    "[DailyPlanService] DailyPlan for user %s on %s created concurrently, reusing it",
                    user_id, today
                )
                plan = DailyPlan.query.filter_by(user_id=user_id, plan_date=today).first()
                if plan is None:
                    raise

        plan.amount_of_intakes = amount_of_intakes
        return DailyPlanService.recalculate_from_activities(plan.id)


def create_daily_plans_for_all_users():
    """
    Creates today's plan for every user with a profile.
    Runs from the midnight scheduler job.
    """
    today = today_utc()
    profiles = UserProfile.query.all()
    created_count = 0

    for profile in profiles:
        exists = DailyPlan.query.filter_by(user_id=profile.user_id, plan_date=today).first()
        DailyPlanService.find_or_create_today(profile.user_id, profile)
        if not exists:
            created_count += 1

    logger.info("[DailyPlanService] Created %s DailyPlan(s) for %s", created_count, today)
    return created_count
