from enum import Enum

class ActivityLevelEnum(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

class GoalTypeEnum(str, Enum):
    lose_weight = "lose_weight"
    maintain = "maintain"
    gain_muscle = "gain_muscle"

class IntensityEnum(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

class ActivityTypeEnum(str, Enum):
    running = "running"
    cycling = "cycling"
    swimming = "swimming"
    walking = "walking"
    gym = "gym"
    yoga = "yoga"
    dancing = "dancing"
    hiking = "hiking"
    tennis = "tennis"
    basketball = "basketball"
    football = "football"
    other = "other"

class SeverityEnum(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"

class RecommendationTypeEnum(str, Enum):
    LATE_BEHIND = "LATE_BEHIND"
    STRONG_BEHIND = "STRONG_BEHIND"
    TOO_LARGE_PORTION = "TOO_LARGE_PORTION"
    ACTIVITY_EXTRA_WATER = "ACTIVITY_EXTRA_WATER"
    GOOD_PACE = "GOOD_PACE"
    EXCELLENT_PACE = "EXCELLENT_PACE"
    TOO_RARE_INTAKES = "TOO_RARE_INTAKES"

class NotificationTypeEnum(str, Enum):
    warning = "warning"
    urgent = "urgent"
