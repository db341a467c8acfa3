from datetime import datetime

from hydroplan.extensions import db
from hydroplan.models import Intake, Notification, Recommendation
from hydroplan.services.notification_service import DEFAULT_TITLE, NotificationService
from tests.base import HydroplanTestCase


class NotificationDispatchTestCase(HydroplanTestCase):
    def setUp(self):
        super().setUp()
        plan = self.make_plan(self.make_user())
        self.intake = Intake(daily_plan_id=plan.id, volume_ml=250, intake_time=datetime(2026, 3, 10, 9, 0))
        db.session.add(self.intake)
        db.session.commit()

    def recommendation(self, recommend_type, severity, message="Drink water"):
        recommendation = Recommendation(
            intake_id=self.intake.id,
            recommend_type=recommend_type,
            message=message,
            severity=severity,
        )
        db.session.add(recommendation)
        db.session.commit()
        return recommendation

    def test_low_severity_is_skipped(self):
        recommendation = self.recommendation("GOOD_PACE", "low")

        self.assertIsNone(NotificationService.create_notification_for_recommendation(recommendation))
        self.assertEqual(Notification.query.count(), 0)

    def test_medium_is_warning(self):
        recommendation = self.recommendation("TOO_LARGE_PORTION", "medium", "Smaller sips")

        notification = NotificationService.create_notification_for_recommendation(recommendation)

        self.assertEqual(notification.notification_type, "warning")
        self.assertEqual(notification.title, "Portion too large")
        self.assertEqual(notification.body, "Smaller sips")
        self.assertIsNotNone(notification.sent_at)

    def test_high_is_urgent(self):
        recommendation = self.recommendation("STRONG_BEHIND", "high")
        notification = NotificationService.create_notification_for_recommendation(recommendation)
        self.assertEqual(notification.notification_type, "urgent")

    def test_unknown_type_gets_default_title(self):
        recommendation = self.recommendation("CUSTOM", "high", message=None)

        notification = NotificationService.create_notification_for_recommendation(recommendation)

        self.assertEqual(notification.title, DEFAULT_TITLE)
        self.assertEqual(notification.body, "")

    def test_unknown_severity_is_skipped(self):
        recommendation = self.recommendation("LATE_BEHIND", None)
        self.assertIsNone(NotificationService.create_notification_for_recommendation(recommendation))

    def test_update_and_filter(self):
        recommendation = self.recommendation("LATE_BEHIND", "medium")
        notification = NotificationService.create_notification_for_recommendation(recommendation)

        NotificationService.update_notification(notification.id, {"status": "read"})

        self.assertEqual(NotificationService.list_notifications(status="read"), [notification])
        self.assertEqual(NotificationService.list_notifications(status="sent"), [])
