from flask import Blueprint, request, jsonify

from hydroplan.controller.request_utils import get_json_payload, query_int
from hydroplan.mappers.response_mapper import intake_to_dict
from hydroplan.services.intake_service import IntakeService

intake_bp = Blueprint("intake", __name__, url_prefix="/api/v1/intakes")


@intake_bp.route("", methods=["GET"])
def list_intakes():
    intakes = IntakeService.list_intakes(
        daily_plan_id=query_int("daily_plan_id"),
        time_from=request.args.get("from"),
        time_to=request.args.get("to"),
    )
    return jsonify([intake_to_dict(intake) for intake in intakes])


@intake_bp.route("", methods=["POST"])
def create_intake():
    data = get_json_payload()
    intake = IntakeService.create_intake(data)
    return jsonify(intake_to_dict(intake)), 201


@intake_bp.route("/<int:intake_id>", methods=["GET"])
def get_intake(intake_id):
    return jsonify(intake_to_dict(IntakeService.get_intake(intake_id)))


@intake_bp.route("/<int:intake_id>", methods=["PATCH"])
def update_intake(intake_id):
    data = get_json_payload()
    return jsonify(intake_to_dict(IntakeService.update_intake(intake_id, data)))


@intake_bp.route("/<int:intake_id>", methods=["DELETE"])
def delete_intake(intake_id):
    IntakeService.delete_intake(intake_id)
    return "", 204
