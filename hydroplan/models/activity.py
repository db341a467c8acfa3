from sqlalchemy import Enum as SAEnum

from hydroplan.extensions import db
from hydroplan.enums.app_enum import ActivityTypeEnum, IntensityEnum

class Activity(db.Model):
    __tablename__ = "activities"

    id = db.Column(db.Integer, primary_key=True)

    daily_plan_id = db.Column(
        db.Integer,
        db.ForeignKey("daily_plans.id"),
        nullable=False,
        index=True
    )

    activity_type = db.Column(SAEnum(ActivityTypeEnum))
    intensity = db.Column(SAEnum(IntensityEnum))
    start_time = db.Column(db.DateTime)
    end_time = db.Column(db.DateTime)
    duration_min = db.Column(db.Integer)
    # duration_min * intensity factor, null when either is missing
    water_bonus_ml = db.Column(db.Integer)
