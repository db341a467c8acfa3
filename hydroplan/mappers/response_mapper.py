def _iso(value):
    return value.isoformat() if value is not None else None


def _enum_value(value):
    return getattr(value, "value", value)


def profile_to_dict(profile):
    return {
        "id": profile.id,
        "user_id": profile.user_id,
        "weight_kg": profile.weight_kg,
        "activity_level": _enum_value(profile.activity_level),
        "goal_type": _enum_value(profile.goal_type),
        "date_of_birth": _iso(profile.date_of_birth),
        "created_at": _iso(profile.created_at),
        "updated_at": _iso(profile.updated_at),
    }


def daily_plan_to_dict(plan):
    return {
        "id": plan.id,
        "user_id": plan.user_id,
        "date": _iso(plan.plan_date),
        "target_ml": plan.target_ml,
        "total_intake_ml": plan.total_intake_ml,
        "deviation_ml": plan.deviation_ml,
        "amount_of_intakes": plan.amount_of_intakes,
    }


def intake_to_dict(intake):
    return {
        "id": intake.id,
        "daily_plan_id": intake.daily_plan_id,
        "volume_ml": intake.volume_ml,
        "intake_time": _iso(intake.intake_time),
    }


def activity_to_dict(activity):
    return {
        "id": activity.id,
        "daily_plan_id": activity.daily_plan_id,
        "activity_type": _enum_value(activity.activity_type),
        "intensity": _enum_value(activity.intensity),
        "start_time": _iso(activity.start_time),
        "end_time": _iso(activity.end_time),
        "duration_min": activity.duration_min,
        "water_bonus_ml": activity.water_bonus_ml,
    }


def recommendation_to_dict(recommendation):
    return {
        "id": recommendation.id,
        "intake_id": recommendation.intake_id,
        "recommend_type": recommendation.recommend_type,
        "message": recommendation.message,
        "severity": recommendation.severity,
        "created_at": _iso(recommendation.created_at),
    }


def notification_to_dict(notification):
    return {
        "id": notification.id,
        "recommendation_id": notification.recommendation_id,
        "notification_type": notification.notification_type,
        "title": notification.title,
        "body": notification.body,
        "channel": notification.channel,
        "status": notification.status,
        "sent_at": _iso(notification.sent_at),
    }
