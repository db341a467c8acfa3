from flask import Blueprint, request, jsonify

from hydroplan.controller.request_utils import query_int
from hydroplan.services.statistics_service import StatisticsService
from hydroplan.utils.validators import parse_date

statistics_bp = Blueprint("statistics", __name__, url_prefix="/api/v1/statistics")


@statistics_bp.route("/water", methods=["GET"])
def water_statistics():
    stats = StatisticsService.get_water_consumption_stats(
        user_id=query_int("user_id"),
        from_date=parse_date({"from_date": request.args.get("from_date")}, "from_date"),
        to_date=parse_date({"to_date": request.args.get("to_date")}, "to_date"),
        group_by=request.args.get("group_by"),
    )
    return jsonify(stats)


@statistics_bp.route("/activities", methods=["GET"])
def activity_statistics():
    stats = StatisticsService.get_activity_stats(
        user_id=query_int("user_id"),
        from_date=parse_date({"from_date": request.args.get("from_date")}, "from_date"),
        to_date=parse_date({"to_date": request.args.get("to_date")}, "to_date"),
    )
    return jsonify(stats)
