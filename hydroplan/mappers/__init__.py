from .response_mapper import (
    activity_to_dict,
    daily_plan_to_dict,
    intake_to_dict,
    notification_to_dict,
    profile_to_dict,
    recommendation_to_dict,
)
