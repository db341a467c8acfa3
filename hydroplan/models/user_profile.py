from hydroplan.extensions import db

from sqlalchemy import Enum as SAEnum

from hydroplan.enums.app_enum import ActivityLevelEnum, GoalTypeEnum
from hydroplan.utils.time_utils import utcnow


class UserProfile(db.Model):
    __tablename__ = "user_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, unique=True, index=True)
    weight_kg = db.Column(db.Float)
    date_of_birth = db.Column(db.Date)

    activity_level = db.Column(SAEnum(ActivityLevelEnum), nullable=True)
    goal_type = db.Column(SAEnum(GoalTypeEnum), nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)
