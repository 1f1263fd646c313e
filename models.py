"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SolarEventName(str, Enum):
    """Solar events reported by the ``/sun`` endpoint."""

    astronomical_dawn = "astronomical_dawn"
    nautical_dawn = "nautical_dawn"
    civil_dawn = "civil_dawn"
    sunrise = "sunrise"
    solar_noon = "solar_noon"
    sunset = "sunset"
    civil_dusk = "civil_dusk"
    nautical_dusk = "nautical_dusk"
    astronomical_dusk = "astronomical_dusk"


class SunQueryParams(BaseModel):
    """Validated query parameters for the ``/sun`` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    date_local: date = Field(
        ..., alias="date", description="Civil date in the given time zone (YYYY-MM-DD)"
    )
    timezone: str = Field("UTC", description="IANA time zone name")


class MoonQueryParams(BaseModel):
    """Validated query parameters for the ``/moon/phases`` endpoint."""

    year: int = Field(..., description="Calendar year")
    phase: Optional[int] = Field(
        None,
        ge=0,
        le=3,
        description="0 new moon, 1 first quarter, 2 full moon, 3 last quarter; all when omitted",
    )
    timezone: str = Field("UTC", description="IANA time zone name")


class SolarEvent(BaseModel):
    """One solar event of the requested date."""

    status: str = Field(..., description="'ok', 'SUN_HIGH' or 'SUN_LOW'")
    time: Optional[str] = Field(None, description="Event time (ISO-8601, local zone)")


class SunResponse(BaseModel):
    """Successful solar events response payload."""

    ok: bool = True
    date_local: date = Field(..., description="Requested civil date")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")
    timezone: str = Field(..., description="IANA time zone of the returned times")
    events: Dict[SolarEventName, SolarEvent]


class MoonPhaseEntry(BaseModel):
    time: str = Field(..., description="Phase time (ISO-8601, local zone)")
    phase: int = Field(..., description="Phase index")
    name: str = Field(..., description="Phase name")


class MoonPhasesResponse(BaseModel):
    """Successful moon phases response payload."""

    ok: bool = True
    year: int
    timezone: str
    phases: List[MoonPhaseEntry]


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    settings: Dict[str, object]


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
