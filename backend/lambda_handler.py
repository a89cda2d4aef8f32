"""AWS Lambda entry point for API Gateway proxy integrations."""

from __future__ import annotations

import base64
import binascii
import json
from http import HTTPStatus
from typing import Any, Dict

import structlog

from backend.app.config import get_settings
from backend.app.observability import configure_logging
from backend.core.calculation import PROCESSING_FAILURE_MESSAGE, CalculationService
from backend.schemas.calculation import ErrorResponse

RESPONSE_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_settings = get_settings()
configure_logging(_settings.log_level, format_json=_settings.log_format == "json")

logger = structlog.get_logger(__name__)
calculation_service = CalculationService()


def _proxy_response(body: Dict[str, Any], status: HTTPStatus) -> Dict[str, Any]:
    return {
        "statusCode": int(status),
        "headers": dict(RESPONSE_HEADERS),
        "body": json.dumps(body),
    }


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Relay the proxy event body to the calculator and wrap its outcome."""
    raw = event.get("body")
    if raw and event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw, validate=True)
        except binascii.Error:
            logger.exception("calculation_failed")
            error = ErrorResponse(error=PROCESSING_FAILURE_MESSAGE)
            return _proxy_response(error.model_dump(), HTTPStatus.INTERNAL_SERVER_ERROR)

    return _proxy_response(*calculation_service.respond(raw))
