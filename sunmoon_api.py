"""FastAPI application exposing the sun and moon almanac."""

from __future__ import annotations

import json
import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import datetime, time as clock_time
from typing import Callable, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import sunmoon
from models import (
    ErrorResponse,
    HealthResponse,
    MoonPhaseEntry,
    MoonPhasesResponse,
    MoonQueryParams,
    SolarEvent,
    SolarEventName,
    SunQueryParams,
    SunResponse,
)
from sunmoon.almanac import SunEvent
from sunmoon.config import Settings
from sunmoon.moon_phases import zone_for

logging.basicConfig(level=logging.INFO, format="%(message)s")
LOGGER = logging.getLogger("sunmoon-api")

APP_DESCRIPTION = (
    "Sunrise, sunset, twilight and moon phase times after Meeus' Astronomical Algorithms"
)

SOLAR_EVENTS: Dict[SolarEventName, Callable[..., SunEvent]] = {
    SolarEventName.astronomical_dawn: sunmoon.astronomical_dawn,
    SolarEventName.nautical_dawn: sunmoon.nautical_dawn,
    SolarEventName.civil_dawn: sunmoon.civil_dawn,
    SolarEventName.sunrise: sunmoon.sunrise,
    SolarEventName.sunset: sunmoon.sunset,
    SolarEventName.civil_dusk: sunmoon.civil_dusk,
    SolarEventName.nautical_dusk: sunmoon.nautical_dusk,
    SolarEventName.astronomical_dusk: sunmoon.astronomical_dusk,
}

# The HTTP surface reports no-event days as status codes, never as fixed times.
API_SETTINGS: Settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - exercised in integration tests
    global API_SETTINGS
    API_SETTINGS = Settings.from_env().model_copy(
        update={"return_time_for_no_event_case": False}
    )
    LOGGER.info(
        json.dumps({"event": "startup", "settings": API_SETTINGS.model_dump()})
    )
    yield


app = FastAPI(
    title="Sunmoon API",
    description=APP_DESCRIPTION,
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.environ.get("SUNMOON_CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_event(result: SunEvent) -> SolarEvent:
    if isinstance(result, sunmoon.NoEventCode):
        return SolarEvent(status=result.value, time=None)
    if isinstance(result, sunmoon.NoEventTime):
        return SolarEvent(status=result.code.value, time=result.time.isoformat())
    return SolarEvent(status="ok", time=result.isoformat())


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, settings=API_SETTINGS.model_dump())


@app.get(
    "/sun",
    response_model=SunResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def sun_endpoint(params: SunQueryParams = Depends()) -> SunResponse:
    start_time = time.perf_counter()
    try:
        zone = zone_for(params.timezone)
        # local noon carries the UTC offset that applies to most of the day
        when = datetime.combine(params.date_local, clock_time(12, 0), tzinfo=zone)
        events: Dict[SolarEventName, SolarEvent] = {}
        for name, compute in SOLAR_EVENTS.items():
            events[name] = _format_event(
                compute(when, params.lat, params.lon, options=API_SETTINGS)
            )
        events[SolarEventName.solar_noon] = _format_event(
            sunmoon.solar_noon(when, params.lon, options=API_SETTINGS)
        )
    except (ValueError, sunmoon.SolverError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    duration_ms = (time.perf_counter() - start_time) * 1000.0
    response = SunResponse(
        date_local=params.date_local,
        latitude=params.lat,
        longitude=params.lon,
        timezone=params.timezone,
        events={name: events[name] for name in SolarEventName},
    )

    LOGGER.info(
        json.dumps(
            {
                "event": "sun",
                "lat": params.lat,
                "lon": params.lon,
                "date": params.date_local.isoformat(),
                "timezone": params.timezone,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response


@app.get(
    "/moon/phases",
    response_model=MoonPhasesResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def moon_phases_endpoint(params: MoonQueryParams = Depends()) -> MoonPhasesResponse:
    start_time = time.perf_counter()
    try:
        phases = _moon_phases(params.year, params.phase, params.timezone)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(
        json.dumps(
            {
                "event": "moon_phases",
                "year": params.year,
                "phase": params.phase,
                "timezone": params.timezone,
                "count": len(phases),
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return MoonPhasesResponse(year=params.year, timezone=params.timezone, phases=phases)


def _moon_phases(year: int, phase: Optional[int], timezone: str) -> List[MoonPhaseEntry]:
    if phase is None:
        events = sunmoon.year_all_moon_phases(year, timezone, options=API_SETTINGS)
    else:
        events = [
            sunmoon.PhaseEvent(time=moon_time, phase=sunmoon.MoonPhase(phase))
            for moon_time in sunmoon.year_moon_phases(
                year, phase, timezone, options=API_SETTINGS
            )
        ]
    return [
        MoonPhaseEntry(
            time=event.time.isoformat(),
            phase=int(event.phase),
            name=event.phase.name.lower(),
        )
        for event in events
    ]
