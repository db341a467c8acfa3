from flask import Blueprint, request, jsonify

from hydroplan.controller.request_utils import get_json_payload, query_int
from hydroplan.mappers.response_mapper import recommendation_to_dict
from hydroplan.services.recommendation_service import RecommendationService

recommendation_bp = Blueprint("recommendation", __name__, url_prefix="/api/v1/recommendations")


@recommendation_bp.route("", methods=["GET"])
def list_recommendations():
    recommendations = RecommendationService.list_recommendations(
        intake_id=query_int("intake_id"),
        severity=request.args.get("severity"),
        recommend_type=request.args.get("recommend_type"),
    )
    return jsonify([recommendation_to_dict(r) for r in recommendations])


@recommendation_bp.route("", methods=["POST"])
def create_recommendation():
    data = get_json_payload()
    recommendation = RecommendationService.create_recommendation(data)
    return jsonify(recommendation_to_dict(recommendation)), 201


@recommendation_bp.route("/<int:recommendation_id>", methods=["GET"])
def get_recommendation(recommendation_id):
    return jsonify(recommendation_to_dict(RecommendationService.get_recommendation(recommendation_id)))


@recommendation_bp.route("/<int:recommendation_id>", methods=["PATCH"])
def update_recommendation(recommendation_id):
    data = get_json_payload()
    recommendation = RecommendationService.update_recommendation(recommendation_id, data)
    return jsonify(recommendation_to_dict(recommendation))


@recommendation_bp.route("/<int:recommendation_id>", methods=["DELETE"])
def delete_recommendation(recommendation_id):
    RecommendationService.delete_recommendation(recommendation_id)
    return "", 204
