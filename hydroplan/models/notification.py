from hydroplan.extensions import db

class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)

    recommendation_id = db.Column(
        db.Integer,
        db.ForeignKey("recommendations.id"),
        nullable=False,
        index=True
    )

    # warning | urgent
    notification_type = db.Column(db.String(20))
    title = db.Column(db.String(255))
    body = db.Column(db.Text)
    channel = db.Column(db.String(20))
    status = db.Column(db.String(20))
    sent_at = db.Column(db.DateTime)
