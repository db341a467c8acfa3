import logging

from sqlalchemy.exc import IntegrityError

from hydroplan.enums.app_enum import ActivityLevelEnum, GoalTypeEnum
from hydroplan.errors import ConflictError, NotFoundError
from hydroplan.extensions import db
from hydroplan.models import User, UserProfile
from hydroplan.services.daily_plan_service import DailyPlanService
from hydroplan.utils.validators import parse_date, parse_enum, parse_int, parse_number

logger = logging.getLogger(__name__)

MIN_WEIGHT_KG = 20
MAX_WEIGHT_KG = 300

# Fields the daily target depends on
TARGET_FIELDS = ("weight_kg", "activity_level", "goal_type")


def _ensure_user_exists(user_id: int):
    if db.session.get(User, user_id) is None:
        raise NotFoundError("User", user_id)


def _parse_profile_fields(payload: dict) -> dict:
    fields = {}
    if "weight_kg" in payload:
        fields["weight_kg"] = parse_number(payload, "weight_kg", MIN_WEIGHT_KG, MAX_WEIGHT_KG)
    if "activity_level" in payload:
        fields["activity_level"] = parse_enum(payload, "activity_level", ActivityLevelEnum)
    if "goal_type" in payload:
        fields["goal_type"] = parse_enum(payload, "goal_type", GoalTypeEnum)
    if "date_of_birth" in payload:
        fields["date_of_birth"] = parse_date(payload, "date_of_birth")
    return fields


class UserProfileService:

    @staticmethod
    def get_user_profile(profile_id: int) -> UserProfile:
        profile = db.session.get(UserProfile, profile_id)
        if not profile:
            raise NotFoundError("UserProfile", profile_id)
        return profile

    @staticmethod
    def create_user_profile(payload: dict) -> UserProfile:
        user_id = parse_int(payload, "user_id", required=True)
        fields = _parse_profile_fields(payload)
        _ensure_user_exists(user_id)

        if UserProfile.query.filter_by(user_id=user_id).first():
            raise ConflictError(f"Profile for user {user_id} already exists")

        profile = UserProfile(user_id=user_id, **fields)
        db.session.add(profile)
        db.session.commit()
        logger.info("[UserProfileService] Created profile %s for user %s", profile.id, user_id)

        DailyPlanService.find_or_create_today(user_id, profile)
        return profile

    @staticmethod
    def update_user_profile(profile_id: int, payload: dict) -> UserProfile:
        """
        Partial update. Touching weight, activity level or goal refreshes
        today's plan of the profile's original owner.
        """
        profile = UserProfileService.get_user_profile(profile_id)
        owner_id = profile.user_id

        fields = _parse_profile_fields(payload)
        if "user_id" in payload:
            user_id = parse_int(payload, "user_id", required=True)
            _ensure_user_exists(user_id)
            profile.user_id = user_id

        for key, value in fields.items():
            setattr(profile, key, value)

        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("Profile for that user already exists")

        if any(field in fields for field in TARGET_FIELDS):
            DailyPlanService.find_or_create_today(owner_id, profile)

        return profile

    @staticmethod
    def delete_user_profile(profile_id: int):
        profile = UserProfileService.get_user_profile(profile_id)
        db.session.delete(profile)
        db.session.commit()
