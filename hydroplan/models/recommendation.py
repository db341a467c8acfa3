from hydroplan.extensions import db
from hydroplan.utils.time_utils import utcnow

class Recommendation(db.Model):
    __tablename__ = "recommendations"

    id = db.Column(db.Integer, primary_key=True)

    intake_id = db.Column(
        db.Integer,
        db.ForeignKey("intakes.id"),
        nullable=False,
        index=True
    )

    recommend_type = db.Column(db.String(40), index=True)
    message = db.Column(db.Text)
    # low | medium | high
    severity = db.Column(db.String(10))

    created_at = db.Column(db.DateTime, default=utcnow)

    notifications = db.relationship(
        "Notification",
        backref="recommendation",
        lazy=True,
        cascade="all, delete-orphan",
    )
