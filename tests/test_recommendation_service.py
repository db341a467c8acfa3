from datetime import datetime
from unittest.mock import patch

from hydroplan.enums.app_enum import RecommendationTypeEnum
from hydroplan.extensions import db
from hydroplan.models import Intake, Notification, Recommendation
from hydroplan.services.activity_service import ActivityService
from hydroplan.services.intake_service import IntakeService
from hydroplan.services.recommendation_service import RecommendationService
from tests.base import HydroplanTestCase


def types_of(recommendations):
    return sorted(r.recommend_type for r in recommendations)


class IntakeRulesTestCase(HydroplanTestCase):
    def setUp(self):
        super().setUp()
        self.user = self.make_user()
        self.plan = self.make_plan(self.user, target_ml=2000)

    def log_intake(self, volume_ml, at="2026-03-10T11:30:00"):
        return IntakeService.create_intake({
            "daily_plan_id": self.plan.id,
            "volume_ml": volume_ml,
            "intake_time": at,
        })

    def recommendations_for(self, intake):
        return Recommendation.query.filter_by(intake_id=intake.id).all()

    def test_late_behind_only(self):
        intake = self.log_intake(400)

        self.assertEqual(self.plan.deviation_ml, -600)
        self.assertEqual(types_of(self.recommendations_for(intake)), ["LATE_BEHIND"])

    def test_strong_behind_also_fires_late_behind(self):
        self.plan.target_ml = 2400
        db.session.commit()

        intake = self.log_intake(100)

        self.assertEqual(self.plan.deviation_ml, -1100)
        self.assertEqual(types_of(self.recommendations_for(intake)), ["LATE_BEHIND", "STRONG_BEHIND"])

    def test_far_ahead_fires_no_pace_rule(self):
        db.session.add(Intake(daily_plan_id=self.plan.id, volume_ml=1500, intake_time=datetime(2026, 3, 10, 11, 0)))
        db.session.commit()

        intake = self.log_intake(400)

        self.assertEqual(self.plan.deviation_ml, 900)
        self.assertEqual(self.recommendations_for(intake), [])

    def test_good_and_excellent_pace(self):
        db.session.add(Intake(daily_plan_id=self.plan.id, volume_ml=950, intake_time=datetime(2026, 3, 10, 11, 0)))
        db.session.commit()

        intake = self.log_intake(100)

        self.assertEqual(self.plan.deviation_ml, 100)
        self.assertEqual(types_of(self.recommendations_for(intake)), ["EXCELLENT_PACE", "GOOD_PACE"])
        # low severity is never notified
        self.assertEqual(Notification.query.count(), 0)

    def test_large_portion_fires_regardless_of_deviation(self):
        intake = self.log_intake(500)

        self.assertIn("TOO_LARGE_PORTION", types_of(self.recommendations_for(intake)))

    def test_large_portion_without_target(self):
        self.plan.target_ml = None
        db.session.commit()

        intake = self.log_intake(500)

        self.assertIsNone(self.plan.deviation_ml)
        self.assertEqual(types_of(self.recommendations_for(intake)), ["TOO_LARGE_PORTION"])

    def test_rare_intakes(self):
        self.log_intake(200, at="2026-03-10T08:00:00")
        intake = self.log_intake(200, at="2026-03-10T11:30:00")

        self.assertIn("TOO_RARE_INTAKES", types_of(self.recommendations_for(intake)))

    def test_two_hour_gap_is_not_rare(self):
        self.log_intake(200, at="2026-03-10T09:30:00")
        intake = self.log_intake(200, at="2026-03-10T11:30:00")

        self.assertNotIn("TOO_RARE_INTAKES", types_of(self.recommendations_for(intake)))

    def test_deduplicated_per_intake(self):
        intake = self.log_intake(400)

        again = RecommendationService.create_recommendations_for_intake(intake.id)

        self.assertEqual(again, [])
        self.assertEqual(len(self.recommendations_for(intake)), 1)

    def test_notifications_follow_severity(self):
        self.plan.target_ml = 2400
        db.session.commit()
        self.log_intake(100)

        notifications = {n.notification_type: n for n in Notification.query.all()}

        self.assertEqual(sorted(notifications), ["urgent", "warning"])
        self.assertEqual(notifications["urgent"].title, "Far behind schedule")
        self.assertEqual(notifications["warning"].title, "Falling behind schedule")
        self.assertEqual(notifications["urgent"].channel, "push")
        self.assertEqual(notifications["urgent"].status, "sent")

    def test_rule_failure_keeps_intake(self):
        target = "hydroplan.services.intake_service.RecommendationService.create_recommendations_for_intake"
        with patch(target, side_effect=RuntimeError("boom")):
            with self.assertLogs("hydroplan.services.intake_service", level="ERROR"):
                intake = self.log_intake(400)

        self.assertIsNotNone(db.session.get(Intake, intake.id))
        self.assertEqual(self.plan.total_intake_ml, 400)
        self.assertEqual(Recommendation.query.count(), 0)


class ActivityRulesTestCase(HydroplanTestCase):
    def setUp(self):
        super().setUp()
        self.user = self.make_user()
        self.plan = self.make_plan(self.user, target_ml=2000)

    def log_activity(self, duration_min, intensity):
        return ActivityService.create_activity({
            "daily_plan_id": self.plan.id,
            "activity_type": "running",
            "intensity": intensity,
            "start_time": "2026-03-10T10:00:00Z",
            "end_time": "2026-03-10T11:00:00Z",
            "duration_min": duration_min,
        })

    def extra_water(self):
        return Recommendation.query.filter_by(
            recommend_type=RecommendationTypeEnum.ACTIVITY_EXTRA_WATER.value
        ).all()

    def test_extra_water_once_on_latest_intake(self):
        db.session.add_all([
            Intake(daily_plan_id=self.plan.id, volume_ml=200, intake_time=datetime(2026, 3, 10, 8, 0)),
            Intake(daily_plan_id=self.plan.id, volume_ml=200, intake_time=datetime(2026, 3, 10, 11, 15)),
        ])
        db.session.commit()
        latest = Intake.query.order_by(Intake.intake_time.desc()).first()

        activity = self.log_activity(60, "high")
        self.log_activity(60, "high")

        self.assertEqual(activity.water_bonus_ml, 600)
        recommendations = self.extra_water()
        self.assertEqual(len(recommendations), 1)
        self.assertEqual(recommendations[0].intake_id, latest.id)
        self.assertEqual(Notification.query.filter_by(recommendation_id=recommendations[0].id).count(), 1)

    def test_small_bonus_does_not_fire(self):
        db.session.add(Intake(daily_plan_id=self.plan.id, volume_ml=200, intake_time=datetime(2026, 3, 10, 8, 0)))
        db.session.commit()

        self.log_activity(30, "medium")

        self.assertEqual(self.extra_water(), [])

    def test_no_intake_no_recommendation(self):
        self.log_activity(60, "high")
        self.assertEqual(self.extra_water(), [])
