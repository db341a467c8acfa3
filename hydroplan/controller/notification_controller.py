from flask import Blueprint, request, jsonify

from hydroplan.controller.request_utils import get_json_payload, query_int
from hydroplan.mappers.response_mapper import notification_to_dict
from hydroplan.services.notification_service import NotificationService

notification_bp = Blueprint("notification", __name__, url_prefix="/api/v1/notifications")


@notification_bp.route("", methods=["GET"])
def list_notifications():
    notifications = NotificationService.list_notifications(
        recommendation_id=query_int("recommendation_id"),
        status=request.args.get("status"),
        channel=request.args.get("channel"),
    )
    return jsonify([notification_to_dict(n) for n in notifications])


@notification_bp.route("/<int:notification_id>", methods=["GET"])
def get_notification(notification_id):
    return jsonify(notification_to_dict(NotificationService.get_notification(notification_id)))


@notification_bp.route("/<int:notification_id>", methods=["PATCH"])
def update_notification(notification_id):
    data = get_json_payload()
    return jsonify(notification_to_dict(NotificationService.update_notification(notification_id, data)))


@notification_bp.route("/<int:notification_id>", methods=["DELETE"])
def delete_notification(notification_id):
    NotificationService.delete_notification(notification_id)
    return "", 204
