"""Typed readings decoded from SwitchBot service data."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class _ReadingBase(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    battery_percent: float = Field(..., ge=0, description="Battery level in percent")


class MeterReading(_ReadingBase):
    """Thermo-hygrometer (Meter / Meter Plus) reading.

    Parameters
    ----------
    temperature_celsius : float
        Temperature with 0.1 °C resolution.  May be negative.
    humidity_percent : float
        Relative humidity in percent.
    battery_percent : float
        Battery level in percent.
    """

    kind: Literal["meter"] = "meter"
    temperature_celsius: float
    humidity_percent: float = Field(..., ge=0)


class CurtainReading(_ReadingBase):
    """Curtain motor reading.

    Parameters
    ----------
    position_percent : float
        Curtain position in percent (0 = open, 100 = closed).
    brightness_level : float
        Ambient light level from the built-in sensor (0-15).
    battery_percent : float
        Battery level in percent.
    """

    kind: Literal["curtain"] = "curtain"
    position_percent: float = Field(..., ge=0)
    brightness_level: float = Field(..., ge=0, le=15)


Reading = Annotated[MeterReading | CurtainReading, Field(discriminator="kind")]
"""Closed union of every reading variant the decoder can produce."""
