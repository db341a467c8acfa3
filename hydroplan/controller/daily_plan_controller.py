from flask import Blueprint, request, jsonify

from hydroplan.controller.request_utils import get_json_payload, query_int
from hydroplan.mappers.response_mapper import daily_plan_to_dict
from hydroplan.services.daily_plan_service import DailyPlanService
from hydroplan.utils.validators import parse_date

daily_plan_bp = Blueprint("daily_plan", __name__, url_prefix="/api/v1/daily-plans")


@daily_plan_bp.route("", methods=["GET"])
def list_daily_plans():
    plan_date = parse_date({"date": request.args.get("date")}, "date")
    plans = DailyPlanService.list_daily_plans(user_id=query_int("user_id"), plan_date=plan_date)
    return jsonify([daily_plan_to_dict(plan) for plan in plans])


@daily_plan_bp.route("", methods=["POST"])
def create_daily_plan():
    data = get_json_payload()
    plan = DailyPlanService.create_daily_plan(data, reject_past=True)
    return jsonify(daily_plan_to_dict(plan)), 201


@daily_plan_bp.route("/<int:plan_id>", methods=["GET"])
def get_daily_plan(plan_id):
    return jsonify(daily_plan_to_dict(DailyPlanService.get_daily_plan(plan_id)))


@daily_plan_bp.route("/<int:plan_id>", methods=["PATCH"])
def update_daily_plan(plan_id):
    data = get_json_payload()
    plan = DailyPlanService.update_daily_plan(plan_id, data)
    return jsonify(daily_plan_to_dict(plan))


@daily_plan_bp.route("/<int:plan_id>", methods=["DELETE"])
def delete_daily_plan(plan_id):
    DailyPlanService.delete_daily_plan(plan_id)
    return "", 204


@daily_plan_bp.route("/<int:plan_id>/recalculate", methods=["POST"])
def recalculate_daily_plan(plan_id):
    plan = DailyPlanService.recalculate_from_activities(plan_id)
    return jsonify(daily_plan_to_dict(plan))
