from flask import Blueprint, jsonify

from hydroplan.controller.request_utils import get_json_payload
from hydroplan.mappers.response_mapper import profile_to_dict
from hydroplan.services.user_profile_service import UserProfileService

user_profile_bp = Blueprint("user_profile", __name__, url_prefix="/api/v1/profiles")


@user_profile_bp.route("", methods=["POST"])
def create_user_profile():
    data = get_json_payload()
    profile = UserProfileService.create_user_profile(data)
    return jsonify(profile_to_dict(profile)), 201


@user_profile_bp.route("/<int:profile_id>", methods=["GET"])
def get_user_profile(profile_id):
    return jsonify(profile_to_dict(UserProfileService.get_user_profile(profile_id)))


@user_profile_bp.route("/<int:profile_id>", methods=["PATCH"])
def update_user_profile(profile_id):
    data = get_json_payload()
    return jsonify(profile_to_dict(UserProfileService.update_user_profile(profile_id, data)))


@user_profile_bp.route("/<int:profile_id>", methods=["DELETE"])
def delete_user_profile(profile_id):
    UserProfileService.delete_user_profile(profile_id)
    return "", 204
