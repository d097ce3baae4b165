"""
API Routes for the Price Forecast Service

Provides REST API endpoints for:
- Health and refresh status
- Triggering a sheet refresh
- Class and district statistics, price history
- Per-class forecasts and ad-hoc forecasts
"""

from flask import Blueprint, current_app, jsonify, request

from tashkentforecast.core.constants import DEFAULT_MARKET_ACTIVITY
from tashkentforecast.exceptions import ValidationError
from tashkentforecast.logging_config import get_logger
from tashkentforecast.service import AnalysisService, RefreshState

logger = get_logger(__name__)

# Create blueprint
api = Blueprint("api", __name__, url_prefix="/api")


def get_service() -> AnalysisService:
    """Service attached to the running app."""
    return current_app.config["ANALYSIS_SERVICE"]


def _not_ready(service: AnalysisService):
    snapshot = service.snapshot()
    return jsonify({
        "status": "error",
        "error": snapshot["error"] or f"Analysis not available (state: {snapshot['state']})",
        "state": snapshot["state"],
    }), 503


# Health & Status Endpoints
@api.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    service = get_service()
    return jsonify({
        "status": "healthy",
        "state": service.state.value,
    })


@api.route("/status", methods=["GET"])
def status():
    """Get the state of the latest refresh."""
    return jsonify({
        "status": "success",
        "refresh": get_service().snapshot(),
    })


@api.route("/refresh", methods=["POST"])
def refresh():
    """Fetch the sheet and rebuild the analysis."""
    service = get_service()
    state = service.refresh()
    snapshot = service.snapshot()

    if state == RefreshState.FAILED:
        return jsonify({
            "status": "error",
            "error": snapshot["error"],
            "refresh": snapshot,
        }), 502

    return jsonify({
        "status": "success",
        "refresh": snapshot,
    })


# Analysis Endpoints
@api.route("/analysis", methods=["GET"])
def get_analysis():
    """Get class and district statistics, complexes and price history."""
    service = get_service()
    analysis = service.analysis
    if analysis is None:
        return _not_ready(service)

    return jsonify({
        "status": "success",
        "analysis": analysis.to_dict(),
    })


@api.route("/forecasts", methods=["GET"])
def get_forecasts():
    """Get the forecast table of every housing class."""
    service = get_service()
    analysis = service.analysis
    if analysis is None:
        return _not_ready(service)

    return jsonify({
        "status": "success",
        "market_activity": service.market_activity,
        "forecasts": {k: v.to_dict() for k, v in analysis.forecasts.items()},
    })


@api.route("/forecast", methods=["POST"])
def forecast():
    """Forecast an arbitrary price."""
    data = request.get_json(silent=True)

    if not data or not isinstance(data, dict):
        return jsonify({
            "status": "error",
            "error": "Request body must be a JSON object",
        }), 400

    if "base_price" not in data:
        return jsonify({
            "status": "error",
            "error": "Missing required field: base_price",
        }), 400

    try:
        points = get_service().model.forecast(
            data["base_price"],
            data.get("category"),
            data.get("trend", 0.0),
            data.get("market_activity", DEFAULT_MARKET_ACTIVITY),
        )
    except ValidationError as e:
        return jsonify({
            "status": "error",
            "error": f"Invalid input: {e.message}",
            "field": e.field,
        }), 400

    return jsonify({
        "status": "success",
        "forecast": [point.to_dict() for point in points],
    })


def register_routes(app):
    """Register API routes with Flask app."""
    app.register_blueprint(api)
    logger.info("API routes registered")
