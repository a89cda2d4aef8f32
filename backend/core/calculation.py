"""Compound-interest validation and calculation logic."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any, Dict, Tuple, Union

import structlog
from pydantic import ValidationError
from pydantic_core import from_json

from backend.schemas.calculation import (
    CalculationRequest,
    CalculationResponse,
    ErrorResponse,
)

logger = structlog.get_logger(__name__)

ALLOWED_FREQUENCIES = frozenset({1, 2, 4, 12, 365})
PROCESSING_FAILURE_MESSAGE = "Calculation failed"

# Floats at or above this magnitude carry no fractional cents.
MAX_ROUNDABLE = 2**52 / 100


class FailureKind(str, Enum):
    MISSING_BODY = "missing_body"
    MISSING_FIELDS = "missing_fields"
    INVALID_PRINCIPAL = "invalid_principal"
    INVALID_RATE = "invalid_rate"
    INVALID_YEARS = "invalid_years"
    INVALID_FREQUENCY = "invalid_frequency"


FAILURE_MESSAGES: Dict[FailureKind, str] = {
    FailureKind.MISSING_BODY: "Missing request body",
    FailureKind.MISSING_FIELDS: "Missing required fields",
    FailureKind.INVALID_PRINCIPAL: "Principal must be positive",
    FailureKind.INVALID_RATE: "Interest rate must be between 0 and 100",
    FailureKind.INVALID_YEARS: "Years must be positive",
    FailureKind.INVALID_FREQUENCY: "Frequency must be 1, 2, 4, 12, or 365",
}


@dataclass(frozen=True)
class ValidationFailure:
    """Caller-correctable rejection of a calculation request."""

    kind: FailureKind

    @property
    def message(self) -> str:
        return FAILURE_MESSAGES[self.kind]


class PayloadFormatError(ValueError):
    """Raised when the payload is not well-formed JSON, or is JSON ``null``."""


CalculationResult = Union[CalculationResponse, ValidationFailure]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_cents(value: float) -> float:
    """Round to two decimals, halves away from zero."""
    if abs(value) >= MAX_ROUNDABLE:
        return value
    scaled = abs(value) * 100
    cents = math.floor(scaled)
    if scaled - cents >= 0.5:
        cents += 1
    return math.copysign(cents, value) / 100


def compound_amount(principal: float, rate: float, years: float, frequency: int) -> float:
    """A = P(1 + r/n)^(n*t) with ``rate`` given in percent."""
    rate_decimal = rate / 100
    return principal * (1 + rate_decimal / frequency) ** (frequency * years)


class CalculationService:
    """Validates a raw payload and computes the compound-interest result.

    The service is stateless; one instance can serve any number of calls.
    """

    def decode(self, raw: Any) -> CalculationRequest:
        """Decode JSON text, bytes or a mapping into a request record.

        A JSON array or scalar carries none of the named fields and decodes
        to an empty record.
        """
        if isinstance(raw, Mapping):
            return CalculationRequest.model_validate(dict(raw))
        if not isinstance(raw, (str, bytes, bytearray)):
            raise PayloadFormatError(f"unsupported payload type {type(raw).__name__}")

        try:
            document = from_json(raw)
        except ValueError as exc:
            raise PayloadFormatError("payload is not well-formed JSON") from exc
        if document is None:
            raise PayloadFormatError("payload is JSON null")
        if not isinstance(document, dict):
            return CalculationRequest()

        try:
            return CalculationRequest.model_validate(document)
        except ValidationError as exc:
            raise PayloadFormatError("payload could not be decoded") from exc

    def validate(self, request: CalculationRequest) -> ValidationFailure | None:
        """Return the first failing check, or ``None`` when the request is valid."""
        if request.missing_fields():
            return ValidationFailure(FailureKind.MISSING_FIELDS)
        if not (_is_number(request.principal) and request.principal > 0):
            return ValidationFailure(FailureKind.INVALID_PRINCIPAL)
        if not (_is_number(request.rate) and 0 <= request.rate <= 100):
            return ValidationFailure(FailureKind.INVALID_RATE)
        if not (_is_number(request.years) and request.years > 0):
            return ValidationFailure(FailureKind.INVALID_YEARS)
        if not (_is_number(request.frequency) and request.frequency in ALLOWED_FREQUENCIES):
            return ValidationFailure(FailureKind.INVALID_FREQUENCY)
        return None

    def evaluate(self, raw: Any) -> CalculationResult:
        """Validate ``raw`` and compute the compounded amount.

        Validation failures are returned. Malformed JSON or JSON ``null``
        raises :class:`PayloadFormatError`; an amount too large for a float
        raises :class:`OverflowError`.
        """
        if raw is None or (isinstance(raw, (str, bytes, bytearray)) and not raw):
            return ValidationFailure(FailureKind.MISSING_BODY)

        request = self.decode(raw)
        failure = self.validate(request)
        if failure is not None:
            return failure

        amount = compound_amount(
            request.principal, request.rate, request.years, request.frequency
        )
        return CalculationResponse(
            result=round_cents(amount),
            principal=request.principal,
            rate=request.rate,
            years=request.years,
            frequency=request.frequency,
        )

    def respond(self, raw: Any) -> Tuple[Dict[str, Any], HTTPStatus]:
        """Evaluate ``raw`` and map the outcome to a JSON body and status."""
        try:
            outcome = self.evaluate(raw)
        except Exception:
            logger.exception("calculation_failed")
            body = ErrorResponse(error=PROCESSING_FAILURE_MESSAGE)
            return body.model_dump(), HTTPStatus.INTERNAL_SERVER_ERROR

        if isinstance(outcome, ValidationFailure):
            logger.info("calculation_rejected", reason=outcome.kind.value)
            return ErrorResponse(error=outcome.message).model_dump(), HTTPStatus.BAD_REQUEST

        logger.info("calculation_completed", result=outcome.result)
        return outcome.model_dump(), HTTPStatus.OK


__all__ = [
    "ALLOWED_FREQUENCIES",
    "FAILURE_MESSAGES",
    "PROCESSING_FAILURE_MESSAGE",
    "CalculationResult",
    "CalculationService",
    "FailureKind",
    "PayloadFormatError",
    "ValidationFailure",
    "compound_amount",
    "round_cents",
]
