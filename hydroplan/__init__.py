import logging

from flask import Flask
from apscheduler.schedulers.background import BackgroundScheduler
from .config import Config
from .routes import register_routes
from .extensions import db, migrate

logger = logging.getLogger(__name__)


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    logging.getLogger("hydroplan").setLevel(level)


def start_scheduler(app):
    from hydroplan.services.daily_plan_service import create_daily_plans_for_all_users

    def run_daily_plan_job():
        with app.app_context():
            try:
                create_daily_plans_for_all_users()
            except Exception:
                db.session.rollback()
                logger.exception("[Scheduler] Daily plan job failed")

    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        func=run_daily_plan_job,
        trigger="cron",
        hour=app.config["DAILY_PLAN_CRON_HOUR"],
        minute=app.config["DAILY_PLAN_CRON_MINUTE"],
        id="create_daily_plans",
        replace_existing=True
    )
    scheduler.start()
    logger.info(
        "[Scheduler] Daily plan job scheduled at %02d:%02d UTC",
        app.config["DAILY_PLAN_CRON_HOUR"], app.config["DAILY_PLAN_CRON_MINUTE"]
    )
    return scheduler


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    register_routes(app)

    with app.app_context():
        from hydroplan.models import (
            user,
            user_profile,
            daily_plan,
            intake,
            activity,
            recommendation,
            notification
        )
        db.create_all()

    from hydroplan.controller.error_handlers import register_error_handlers
    register_error_handlers(app)

    from hydroplan.controller.user_profile_controller import user_profile_bp
    app.register_blueprint(user_profile_bp)

    from hydroplan.controller.daily_plan_controller import daily_plan_bp
    app.register_blueprint(daily_plan_bp)

    from hydroplan.controller.intake_controller import intake_bp
    app.register_blueprint(intake_bp)

    from hydroplan.controller.activity_controller import activity_bp
    app.register_blueprint(activity_bp)

    from hydroplan.controller.recommendation_controller import recommendation_bp
    app.register_blueprint(recommendation_bp)

    from hydroplan.controller.notification_controller import notification_bp
    app.register_blueprint(notification_bp)

    from hydroplan.controller.statistics_controller import statistics_bp
    app.register_blueprint(statistics_bp)

    if app.config.get("DAILY_PLAN_SCHEDULER_ENABLED"):
        app.extensions["daily_plan_scheduler"] = start_scheduler(app)

    return app
