from .daily_plan_service import DailyPlanService, create_daily_plans_for_all_users
from .notification_service import NotificationService
from .recommendation_service import RecommendationService
from .intake_service import IntakeService
from .activity_service import ActivityService
from .user_profile_service import UserProfileService
from .statistics_service import StatisticsService
