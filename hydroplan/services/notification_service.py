# hydroplan/services/notification_service.py
import logging

from hydroplan.enums.app_enum import NotificationTypeEnum, RecommendationTypeEnum, SeverityEnum
from hydroplan.errors import NotFoundError
from hydroplan.extensions import db
from hydroplan.models import Notification, Recommendation
from hydroplan.utils.time_utils import utcnow
from hydroplan.utils.validators import parse_datetime, parse_int

logger = logging.getLogger(__name__)

PUSH_CHANNEL = "push"
SENT_STATUS = "sent"
DEFAULT_TITLE = "Hydration recommendation"

NOTIFICATION_TYPE_BY_SEVERITY = {
    SeverityEnum.medium.value: NotificationTypeEnum.warning,
    SeverityEnum.high.value: NotificationTypeEnum.urgent,
}

TITLE_BY_TYPE = {
    RecommendationTypeEnum.LATE_BEHIND.value: "Falling behind schedule",
    RecommendationTypeEnum.STRONG_BEHIND.value: "Far behind schedule",
    RecommendationTypeEnum.TOO_LARGE_PORTION.value: "Portion too large",
    RecommendationTypeEnum.ACTIVITY_EXTRA_WATER.value: "After physical activity",
    RecommendationTypeEnum.TOO_RARE_INTAKES.value: "Drinking too rarely",
}

EDITABLE_TEXT_FIELDS = ("notification_type", "title", "body", "channel", "status")


class NotificationService:

    @staticmethod
    def create_notification_for_recommendation(recommendation: Recommendation):
        """
        Synthesizes the push notification of a recommendation.
        Low severity recommendations are not notified and return None.
        """
        notification_type = NOTIFICATION_TYPE_BY_SEVERITY.get(recommendation.severity)
        if notification_type is None:
            return None

        notification = Notification(
            recommendation_id=recommendation.id,
            notification_type=notification_type.value,
            title=TITLE_BY_TYPE.get(recommendation.recommend_type, DEFAULT_TITLE),
            body=recommendation.message or "",
            channel=PUSH_CHANNEL,
            status=SENT_STATUS,
            sent_at=utcnow(),
        )
        db.session.add(notification)
        db.session.commit()

        logger.info(
            "[NotificationService] %s notification %s for recommendation %s (%s)",
            notification.notification_type, notification.id, recommendation.id, recommendation.recommend_type
        )
        return notification

    @staticmethod
    def list_notifications(recommendation_id: int | None = None, status: str | None = None, channel: str | None = None):
        query = Notification.query
        if recommendation_id is not None:
            query = query.filter_by(recommendation_id=recommendation_id)
        if status:
            query = query.filter_by(status=status)
        if channel:
            query = query.filter_by(channel=channel)
        return query.order_by(Notification.id.asc()).all()

    @staticmethod
    def get_notification(notification_id: int) -> Notification:
        notification = db.session.get(Notification, notification_id)
        if not notification:
            raise NotFoundError("Notification", notification_id)
        return notification

    @staticmethod
    def update_notification(notification_id: int, payload: dict) -> Notification:
        notification = NotificationService.get_notification(notification_id)

        changes = {field: payload[field] for field in EDITABLE_TEXT_FIELDS if field in payload}
        if "sent_at" in payload:
            changes["sent_at"] = parse_datetime(payload, "sent_at")
        if "recommendation_id" in payload:
            changes["recommendation_id"] = parse_int(payload, "recommendation_id", required=True)
            if db.session.get(Recommendation, changes["recommendation_id"]) is None:
                raise NotFoundError("Recommendation", changes["recommendation_id"])

        for key, value in changes.items():
            setattr(notification, key, value)

        db.session.commit()
        return notification

    @staticmethod
    def delete_notification(notification_id: int):
        notification = NotificationService.get_notification(notification_id)
        db.session.delete(notification)
        db.session.commit()
