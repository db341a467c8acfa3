# hydroplan/services/activity_service.py
import logging

from hydroplan.enums.app_enum import ActivityTypeEnum, IntensityEnum
from hydroplan.errors import NotFoundError
from hydroplan.extensions import db
from hydroplan.models import Activity, DailyPlan
from hydroplan.services.daily_plan_service import DailyPlanService
from hydroplan.services.recommendation_service import RecommendationService
from hydroplan.utils.hydration_calculator import calculate_water_bonus_ml
from hydroplan.utils.validators import ensure_time_order, parse_datetime, parse_enum, parse_int

logger = logging.getLogger(__name__)


def _ensure_plan_exists(daily_plan_id: int):
    if db.session.get(DailyPlan, daily_plan_id) is None:
        raise NotFoundError("DailyPlan", daily_plan_id)


def _parse_activity_fields(payload: dict) -> dict:
    fields = {}
    if "activity_type" in payload:
        fields["activity_type"] = parse_enum(payload, "activity_type", ActivityTypeEnum)
    if "intensity" in payload:
        fields["intensity"] = parse_enum(payload, "intensity", IntensityEnum)
    if "start_time" in payload:
        fields["start_time"] = parse_datetime(payload, "start_time")
    if "end_time" in payload:
        fields["end_time"] = parse_datetime(payload, "end_time")
    if "duration_min" in payload:
        fields["duration_min"] = parse_int(payload, "duration_min", positive=True)
    return fields


def run_activity_recommendations(activity_id: int):
    try:
        return RecommendationService.create_recommendations_for_activity(activity_id)
    except Exception:
        db.session.rollback()
        logger.exception("[ActivityService] Recommendations failed for activity %s", activity_id)
        return []


class ActivityService:

    @staticmethod
    def list_activities(daily_plan_id: int | None = None):
        query = Activity.query
        if daily_plan_id is not None:
            query = query.filter_by(daily_plan_id=daily_plan_id)
        return query.order_by(Activity.id.asc()).all()

    @staticmethod
    def get_activity(activity_id: int) -> Activity:
        activity = db.session.get(Activity, activity_id)
        if not activity:
            raise NotFoundError("Activity", activity_id)
        return activity

    @staticmethod
    def create_activity(payload: dict) -> Activity:
        daily_plan_id = parse_int(payload, "daily_plan_id", required=True)
        fields = _parse_activity_fields(payload)
        ensure_time_order(fields.get("start_time"), fields.get("end_time"))
        _ensure_plan_exists(daily_plan_id)

        activity = Activity(daily_plan_id=daily_plan_id, **fields)
        activity.water_bonus_ml = calculate_water_bonus_ml(activity.duration_min, activity.intensity)

        db.session.add(activity)
        db.session.commit()
        logger.info(
            "[ActivityService] Logged activity %s on DailyPlan %s, water_bonus_ml=%s",
            activity.id, daily_plan_id, activity.water_bonus_ml
        )

        DailyPlanService.recalculate_from_activities(daily_plan_id)
        run_activity_recommendations(activity.id)

        return activity

    @staticmethod
    def update_activity(activity_id: int, payload: dict) -> Activity:
        activity = ActivityService.get_activity(activity_id)
        previous_plan_id = activity.daily_plan_id

        new_plan_id = None
        if "daily_plan_id" in payload:
            new_plan_id = parse_int(payload, "daily_plan_id", required=True)
            _ensure_plan_exists(new_plan_id)

        fields = _parse_activity_fields(payload)
        ensure_time_order(
            fields.get("start_time", activity.start_time),
            fields.get("end_time", activity.end_time),
        )

        if new_plan_id is not None:
            activity.daily_plan_id = new_plan_id
        for key, value in fields.items():
            setattr(activity, key, value)
        activity.water_bonus_ml = calculate_water_bonus_ml(activity.duration_min, activity.intensity)

        db.session.commit()

        DailyPlanService.recalculate_from_activities(previous_plan_id)
        if activity.daily_plan_id != previous_plan_id:
            DailyPlanService.recalculate_from_activities(activity.daily_plan_id)

        return activity

    @staticmethod
    def delete_activity(activity_id: int):
        activity = ActivityService.get_activity(activity_id)
        daily_plan_id = activity.daily_plan_id

        db.session.delete(activity)
        db.session.commit()

        DailyPlanService.recalculate_from_activities(daily_plan_id)
