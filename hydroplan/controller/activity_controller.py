from flask import Blueprint, jsonify

from hydroplan.controller.request_utils import get_json_payload, query_int
from hydroplan.mappers.response_mapper import activity_to_dict
from hydroplan.services.activity_service import ActivityService

activity_bp = Blueprint("activity", __name__, url_prefix="/api/v1/activities")


@activity_bp.route("", methods=["GET"])
def list_activities():
    activities = ActivityService.list_activities(daily_plan_id=query_int("daily_plan_id"))
    return jsonify([activity_to_dict(activity) for activity in activities])


@activity_bp.route("", methods=["POST"])
def create_activity():
    data = get_json_payload()
    activity = ActivityService.create_activity(data)
    return jsonify(activity_to_dict(activity)), 201


@activity_bp.route("/<int:activity_id>", methods=["GET"])
def get_activity(activity_id):
    return jsonify(activity_to_dict(ActivityService.get_activity(activity_id)))


@activity_bp.route("/<int:activity_id>", methods=["PATCH"])
def update_activity(activity_id):
    data = get_json_payload()
    return jsonify(activity_to_dict(ActivityService.update_activity(activity_id, data)))


@activity_bp.route("/<int:activity_id>", methods=["DELETE"])
def delete_activity(activity_id):
    ActivityService.delete_activity(activity_id)
    return "", 204
