from hydroplan.extensions import db
from hydroplan.utils.time_utils import utcnow

class Intake(db.Model):
    __tablename__ = "intakes"

    id = db.Column(db.Integer, primary_key=True)

    daily_plan_id = db.Column(
        db.Integer,
        db.ForeignKey("daily_plans.id"),
        nullable=False,
        index=True
    )

    volume_ml = db.Column(db.Integer, nullable=False, default=0)
    intake_time = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    recommendations = db.relationship(
        "Recommendation",
        backref="intake",
        lazy=True,
        cascade="all, delete-orphan",
    )
