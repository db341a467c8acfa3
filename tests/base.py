import unittest
from datetime import date, datetime
from unittest.mock import patch

from hydroplan import create_app
from hydroplan.config import Config
from hydroplan.enums.app_enum import ActivityLevelEnum, GoalTypeEnum
from hydroplan.extensions import db
from hydroplan.models import DailyPlan, User, UserProfile

# Noon UTC, 12h into the plan day
NOW = datetime(2026, 3, 10, 12, 0)
TODAY = date(2026, 3, 10)


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    DAILY_PLAN_SCHEDULER_ENABLED = False
    LOG_LEVEL = "WARNING"


class HydroplanTestCase(unittest.TestCase):
    """Fresh in-memory database per test, clock frozen at NOW."""

    now = NOW

    def setUp(self):
        self.app = create_app(TestConfig)
        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()

        self.clock = patch("hydroplan.services.daily_plan_service.utcnow", return_value=self.now)
        self.clock.start()

    def tearDown(self):
        self.clock.stop()
        db.session.remove()
        db.drop_all()
        self.ctx.pop()

    def make_user(self, email="user@example.com") -> User:
        user = User(email=email, full_name="Test User")
        db.session.add(user)
        db.session.commit()
        return user

    def make_profile(self, user, weight_kg=70, activity_level="medium", goal_type="maintain") -> UserProfile:
        profile = UserProfile(
            user_id=user.id,
            weight_kg=weight_kg,
            activity_level=ActivityLevelEnum(activity_level) if activity_level else None,
            goal_type=GoalTypeEnum(goal_type) if goal_type else None,
        )
        db.session.add(profile)
        db.session.commit()
        return profile

    def make_plan(self, user, target_ml=2000, plan_date=TODAY) -> DailyPlan:
        plan = DailyPlan(user_id=user.id, plan_date=plan_date, target_ml=target_ml, total_intake_ml=0)
        db.session.add(plan)
        db.session.commit()
        return plan
