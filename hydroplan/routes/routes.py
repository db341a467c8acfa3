from flask import jsonify
from sqlalchemy import text

from ..extensions import db


def register_routes(app):

    @app.route('/')
    def home():
        return jsonify({"service": "hydroplan", "api": "/api/v1"})

    @app.route('/health', methods=['GET'])
    def health():
        """
        Liveness + database reachability
        """
        try:
            db.session.execute(text("SELECT 1"))
            database = "ok"
        except Exception as e:
            db.session.rollback()
            app.logger.error(f"[health] database check failed: {e}")
            database = "unavailable"

        status = 200 if database == "ok" else 503
        return jsonify({"status": "ok" if status == 200 else "degraded", "database": database}), status
