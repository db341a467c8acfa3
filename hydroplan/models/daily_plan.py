from hydroplan.extensions import db
from hydroplan.utils.time_utils import utcnow

class DailyPlan(db.Model):
    __tablename__ = "daily_plans"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    # UTC day the plan covers, its start-of-day is midnight UTC
    plan_date = db.Column(db.Date, nullable=False)
    target_ml = db.Column(db.Integer)
    total_intake_ml = db.Column(db.Integer, nullable=False, default=0)
    deviation_ml = db.Column(db.Integer)
    amount_of_intakes = db.Column(db.Integer)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    intakes = db.relationship(
        "Intake",
        backref="daily_plan",
        lazy=True,
        cascade="all, delete-orphan",
    )
    activities = db.relationship(
        "Activity",
        backref="daily_plan",
        lazy=True,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.UniqueConstraint("user_id", "plan_date", name="uk_daily_plan_user_date"),
    )
