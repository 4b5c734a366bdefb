"""
Unit normalization for set weights and workout energy.

Weights are stored in kilograms. Conversion happens once, when a weight is
recorded, never at read time.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


# Conversion constants
LB_TO_KG = 0.453592
KCAL_TO_KJ = 4.184

KILOGRAMS = "kg"


def to_kilograms(weight: float, unit: Optional[str] = KILOGRAMS) -> float:
    """
    Convert a recorded weight to kilograms.

    Only kilograms and pounds are supported. A missing unit means kilograms;
    any other unit string ("lbs", "lb", "not specified" from a transcription)
    is treated as pounds.

    Examples:
        >>> to_kilograms(100, "kg")
        100
        >>> round(to_kilograms(100, "lbs"), 4)
        45.3592
    """
    if unit is None or unit.strip().lower() == KILOGRAMS:
        return weight
    return weight * LB_TO_KG


class Energy(BaseModel):
    """Energy burned during a workout, as transcribed from a log."""

    amount: float = Field(..., ge=0, description="Energy amount")
    unit: Literal["kj", "kcal"] = Field(default="kj", description="kj or kcal")

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit(cls, v: object) -> str:
        """Map free-form unit text onto kj/kcal."""
        text = str(v or "").strip().lower()
        if text in ("kcal", "cal", "cals", "calories", "kilocalories"):
            return "kcal"
        return "kj"

    def to_kilojoules(self) -> float:
        """Return the amount in kilojoules."""
        if self.unit == "kcal":
            return self.amount * KCAL_TO_KJ
        return self.amount

    model_config = {"frozen": True}
