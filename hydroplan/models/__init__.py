from .user import User
from .user_profile import UserProfile
from .daily_plan import DailyPlan
from .intake import Intake
from .activity import Activity
from .recommendation import Recommendation
from .notification import Notification

__all__ = [
    "User",
    "UserProfile",
    "DailyPlan",
    "Intake",
    "Activity",
    "Recommendation",
    "Notification",
]
