# hydroplan/services/intake_service.py
import logging

from hydroplan.errors import NotFoundError, ValidationError
from hydroplan.extensions import db
from hydroplan.models import DailyPlan, Intake
from hydroplan.services.daily_plan_service import DailyPlanService
from hydroplan.services.recommendation_service import RecommendationService
from hydroplan.utils.time_utils import utcnow
from hydroplan.utils.validators import parse_datetime, parse_int, parse_number

logger = logging.getLogger(__name__)


def _ensure_plan_exists(daily_plan_id: int):
    if db.session.get(DailyPlan, daily_plan_id) is None:
        raise NotFoundError("DailyPlan", daily_plan_id)


def _parse_volume(payload: dict):
    volume = parse_number(payload, "volume_ml", min_value=0)
    return int(volume) if volume is not None else None


def run_intake_recommendations(intake_id: int):
    """
    Advisory cascade of a committed intake. A failure here is logged and
    never undoes the intake itself.
    """
    try:
        return RecommendationService.create_recommendations_for_intake(intake_id)
    except Exception:
        db.session.rollback()
        logger.exception("[IntakeService] Recommendations failed for intake %s", intake_id)
        return []


class IntakeService:

    @staticmethod
    def list_intakes(daily_plan_id: int | None = None, time_from=None, time_to=None):
        time_from = parse_datetime({"from": time_from}, "from")
        time_to = parse_datetime({"to": time_to}, "to")

        query = Intake.query
        if daily_plan_id is not None:
            query = query.filter_by(daily_plan_id=daily_plan_id)
        if time_from is not None:
            query = query.filter(Intake.intake_time >= time_from)
        if time_to is not None:
            query = query.filter(Intake.intake_time <= time_to)
        return query.order_by(Intake.intake_time.asc(), Intake.id.asc()).all()

    @staticmethod
    def get_intake(intake_id: int) -> Intake:
        intake = db.session.get(Intake, intake_id)
        if not intake:
            raise NotFoundError("Intake", intake_id)
        return intake

    @staticmethod
    def create_intake(payload: dict) -> Intake:
        daily_plan_id = parse_int(payload, "daily_plan_id", required=True)
        volume_ml = _parse_volume(payload)
        intake_time = parse_datetime(payload, "intake_time")
        _ensure_plan_exists(daily_plan_id)

        intake = Intake(
            daily_plan_id=daily_plan_id,
            volume_ml=volume_ml or 0,
            intake_time=intake_time or utcnow(),
        )
        db.session.add(intake)
        db.session.commit()
        logger.info("[IntakeService] Logged %s ml on DailyPlan %s", intake.volume_ml, daily_plan_id)

        DailyPlanService.recalculate_from_intakes(daily_plan_id)
        run_intake_recommendations(intake.id)

        return intake

    @staticmethod
    def update_intake(intake_id: int, payload: dict) -> Intake:
        intake = IntakeService.get_intake(intake_id)
        previous_plan_id = intake.daily_plan_id

        changes = {}
        if "volume_ml" in payload:
            changes["volume_ml"] = _parse_volume(payload)
            if changes["volume_ml"] is None:
                raise ValidationError("volume_ml must be a number")
        if "intake_time" in payload:
            changes["intake_time"] = parse_datetime(payload, "intake_time")
            if changes["intake_time"] is None:
                raise ValidationError("intake_time must be an ISO-8601 datetime")
        if "daily_plan_id" in payload:
            changes["daily_plan_id"] = parse_int(payload, "daily_plan_id", required=True)
            _ensure_plan_exists(changes["daily_plan_id"])

        for key, value in changes.items():
            setattr(intake, key, value)

        db.session.commit()

        DailyPlanService.recalculate_from_intakes(previous_plan_id)
        if intake.daily_plan_id != previous_plan_id:
            DailyPlanService.recalculate_from_intakes(intake.daily_plan_id)

        return intake

    @staticmethod
    def delete_intake(intake_id: int):
        intake = IntakeService.get_intake(intake_id)
        daily_plan_id = intake.daily_plan_id

        db.session.delete(intake)
        db.session.commit()

        DailyPlanService.recalculate_from_intakes(daily_plan_id)
