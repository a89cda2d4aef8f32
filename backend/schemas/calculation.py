"""Data contracts for compound-interest calculations."""

from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_FIELDS = ("principal", "rate", "years", "frequency")

Number = Union[int, float]


class CalculationRequest(BaseModel):
    """Decoded request body; any field may be absent or of the wrong shape."""

    model_config = ConfigDict(frozen=True)

    principal: Any = Field(None, description="Initial amount invested or borrowed.")
    rate: Any = Field(None, description="Annual interest rate in percent (0-100).")
    years: Any = Field(None, description="Term in years.")
    frequency: Any = Field(
        None,
        description="Compounding periods per year: 1, 2, 4, 12 or 365.",
    )

    def missing_fields(self) -> List[str]:
        """Names of the required fields the caller did not send."""
        return [name for name in REQUIRED_FIELDS if name not in self.model_fields_set]


class CalculationResponse(BaseModel):
    """Compounded amount together with the inputs it was computed from."""

    model_config = ConfigDict(frozen=True)

    result: float
    principal: Number
    rate: Number
    years: Number
    frequency: Number


class ErrorResponse(BaseModel):
    error: str
