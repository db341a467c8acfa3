from hydroplan.extensions import db
from hydroplan.utils.time_utils import utcnow

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    full_name = db.Column(db.String(255))

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    profile = db.relationship("UserProfile", backref="user", uselist=False, lazy=True)
    daily_plans = db.relationship("DailyPlan", backref="user", lazy=True)
