"""HTTP routes for the Flask API."""

from typing import Any

from flask import Blueprint, jsonify, request

from backend.core.calculation import CalculationService

api_bp = Blueprint("api", __name__)

calculation_service = CalculationService()


@api_bp.post("/calculate")
def calculate() -> Any:
    """Compound-interest endpoint; the raw body is validated by the service."""
    body, status = calculation_service.respond(request.get_data())
    return jsonify(body), status
