# hydroplan/services/recommendation_service.py
import logging
from datetime import timedelta

from hydroplan.enums.app_enum import RecommendationTypeEnum, SeverityEnum
from hydroplan.errors import NotFoundError, ValidationError
from hydroplan.extensions import db
from hydroplan.models import Activity, Intake, Recommendation
from hydroplan.services.notification_service import NotificationService
from hydroplan.utils.validators import parse_enum, parse_int

logger = logging.getLogger(__name__)

# -------------------- RULE THRESHOLDS (ml / minutes) -------------------- #
LATE_BEHIND_BELOW_ML = -400
STRONG_BEHIND_BELOW_ML = -800
LARGE_PORTION_ABOVE_ML = 400
GOOD_PACE_RANGE_ML = (-100, 100)
EXCELLENT_PACE_RANGE_ML = (0, 200)
RARE_INTAKE_GAP = timedelta(minutes=120)
ACTIVITY_BONUS_ABOVE_ML = 300

RECOMMENDATION_CONFIGS = {
    RecommendationTypeEnum.LATE_BEHIND: {
        "message": "You are falling behind your schedule. Try drinking a small portion of water now.",
        "severity": SeverityEnum.medium,
    },
    RecommendationTypeEnum.STRONG_BEHIND: {
        "message": "You are far behind your schedule. Drink more water right away.",
        "severity": SeverityEnum.high,
    },
    RecommendationTypeEnum.TOO_LARGE_PORTION: {
        "message": "Your portions are too large. Smaller, more frequent sips are absorbed better.",
        "severity": SeverityEnum.medium,
    },
    RecommendationTypeEnum.ACTIVITY_EXTRA_WATER: {
        "message": "After physical activity, drink some extra water to recover.",
        "severity": SeverityEnum.medium,
    },
    RecommendationTypeEnum.GOOD_PACE: {
        "message": "You are keeping to your schedule well! Keep it up.",
        "severity": SeverityEnum.low,
    },
    RecommendationTypeEnum.EXCELLENT_PACE: {
        "message": "Excellent! You are ahead of your schedule.",
        "severity": SeverityEnum.low,
    },
    RecommendationTypeEnum.TOO_RARE_INTAKES: {
        "message": "You drink water too rarely. Drink more often, in small portions.",
        "severity": SeverityEnum.medium,
    },
}


def has_existing_recommendation(intake_id: int, recommend_type: RecommendationTypeEnum) -> bool:
    """De-duplication is scoped to a single intake, not to the whole plan."""
    return (
        Recommendation.query
        .filter_by(intake_id=intake_id, recommend_type=recommend_type.value)
        .first()
        is not None
    )


def build_recommendation(intake_id: int, recommend_type: RecommendationTypeEnum) -> Recommendation:
    config = RECOMMENDATION_CONFIGS[recommend_type]
    return Recommendation(
        intake_id=intake_id,
        recommend_type=recommend_type.value,
        message=config["message"],
        severity=config["severity"].value,
    )


def find_previous_intake(intake: Intake):
    return (
        Intake.query
        .filter(Intake.daily_plan_id == intake.daily_plan_id)
        .filter(Intake.intake_time < intake.intake_time)
        .order_by(Intake.intake_time.desc())
        .first()
    )


def find_latest_intake(daily_plan_id: int):
    return (
        Intake.query
        .filter_by(daily_plan_id=daily_plan_id)
        .order_by(Intake.intake_time.desc(), Intake.id.desc())
        .first()
    )


def _ensure_intake_exists(intake_id: int):
    if db.session.get(Intake, intake_id) is None:
        raise NotFoundError("Intake", intake_id)


def _fired_intake_rules(intake: Intake, deviation_ml) -> list:
    fired = []

    if deviation_ml is not None:
        if deviation_ml < LATE_BEHIND_BELOW_ML:
            fired.append((RecommendationTypeEnum.LATE_BEHIND, True))
        if deviation_ml < STRONG_BEHIND_BELOW_ML:
            fired.append((RecommendationTypeEnum.STRONG_BEHIND, True))

    if intake.volume_ml and intake.volume_ml > LARGE_PORTION_ABOVE_ML:
        fired.append((RecommendationTypeEnum.TOO_LARGE_PORTION, False))

    if deviation_ml is not None:
        low, high = GOOD_PACE_RANGE_ML
        if low <= deviation_ml <= high:
            fired.append((RecommendationTypeEnum.GOOD_PACE, True))
        low, high = EXCELLENT_PACE_RANGE_ML
        if low < deviation_ml < high:
            fired.append((RecommendationTypeEnum.EXCELLENT_PACE, True))

    if intake.intake_time is not None:
        previous = find_previous_intake(intake)
        if previous is not None and intake.intake_time - previous.intake_time > RARE_INTAKE_GAP:
            fired.append((RecommendationTypeEnum.TOO_RARE_INTAKES, False))

    return fired


class RecommendationService:

    @staticmethod
    def create_recommendations_for_intake(intake_id: int) -> list:
        """
        Evaluates every intake rule against the plan as it stands after the
        intake recalculation, and creates one recommendation per fired rule.
        Each created recommendation is handed to the notification dispatcher.
        """
        intake = db.session.get(Intake, intake_id)
        if intake is None or intake.daily_plan is None:
            return []

        plan = intake.daily_plan
        recommendations = []
        for recommend_type, deduplicated in _fired_intake_rules(intake, plan.deviation_ml):
            if deduplicated and has_existing_recommendation(intake.id, recommend_type):
                continue
            recommendations.append(build_recommendation(intake.id, recommend_type))

        if not recommendations:
            return []

        db.session.add_all(recommendations)
        db.session.commit()
        logger.info(
            "[RecommendationService] Intake %s (deviation_ml=%s) fired %s",
            intake.id, plan.deviation_ml, [r.recommend_type for r in recommendations]
        )

        for recommendation in recommendations:
            NotificationService.create_notification_for_recommendation(recommendation)

        return recommendations

    @staticmethod
    def create_recommendations_for_activity(activity_id: int) -> list:
        """
        Suggests extra water after a demanding activity. The recommendation
        goes on the latest intake of the plan, at most once per intake.
        """
        activity = db.session.get(Activity, activity_id)
        if activity is None or activity.daily_plan is None:
            return []
        if not activity.water_bonus_ml or activity.water_bonus_ml <= ACTIVITY_BONUS_ABOVE_ML:
            return []

        last_intake = find_latest_intake(activity.daily_plan_id)
        if last_intake is None:
            return []

        if has_existing_recommendation(last_intake.id, RecommendationTypeEnum.ACTIVITY_EXTRA_WATER):
            return []

        recommendation = build_recommendation(last_intake.id, RecommendationTypeEnum.ACTIVITY_EXTRA_WATER)
        db.session.add(recommendation)
        db.session.commit()
        logger.info(
            "[RecommendationService] Activity %s (water_bonus_ml=%s) fired ACTIVITY_EXTRA_WATER on intake %s",
            activity.id, activity.water_bonus_ml, last_intake.id
        )

        NotificationService.create_notification_for_recommendation(recommendation)
        return [recommendation]

    @staticmethod
    def list_recommendations(intake_id: int | None = None, severity: str | None = None, recommend_type: str | None = None):
        query = Recommendation.query
        if intake_id is not None:
            query = query.filter_by(intake_id=intake_id)
        if severity:
            query = query.filter_by(severity=severity)
        if recommend_type:
            query = query.filter_by(recommend_type=recommend_type)
        return query.order_by(Recommendation.id.asc()).all()

    @staticmethod
    def get_recommendation(recommendation_id: int) -> Recommendation:
        recommendation = db.session.get(Recommendation, recommendation_id)
        if not recommendation:
            raise NotFoundError("Recommendation", recommendation_id)
        return recommendation

    @staticmethod
    def create_recommendation(payload: dict) -> Recommendation:
        intake_id = parse_int(payload, "intake_id", required=True)
        _ensure_intake_exists(intake_id)
        severity = parse_enum(payload, "severity", SeverityEnum)

        recommendation = Recommendation(
            intake_id=intake_id,
            recommend_type=payload.get("recommend_type"),
            message=payload.get("message"),
            severity=severity.value if severity else None,
        )
        db.session.add(recommendation)
        db.session.commit()
        return recommendation

    @staticmethod
    def update_recommendation(recommendation_id: int, payload: dict) -> Recommendation:
        recommendation = RecommendationService.get_recommendation(recommendation_id)

        changes = {}
        for field in ("recommend_type", "message"):
            if field in payload:
                value = payload[field]
                if value is not None and not isinstance(value, str):
                    raise ValidationError(f"{field} must be a string")
                changes[field] = value
        if "severity" in payload:
            severity = parse_enum(payload, "severity", SeverityEnum)
            changes["severity"] = severity.value if severity else None
        if "intake_id" in payload:
            changes["intake_id"] = parse_int(payload, "intake_id", required=True)
            _ensure_intake_exists(changes["intake_id"])

        for key, value in changes.items():
            setattr(recommendation, key, value)

        db.session.commit()
        return recommendation

    @staticmethod
    def delete_recommendation(recommendation_id: int):
        recommendation = RecommendationService.get_recommendation(recommendation_id)
        db.session.delete(recommendation)
        db.session.commit()
