"""Options shared by the almanac computations.

Every public computation accepts an explicit :class:`Settings` value. When it
is omitted the process-wide default is used; that default is changed with
:func:`settings`. Updates and reads of the default are serialised by a lock,
but a computation that reads the default while another thread updates it may
observe either value. Callers that need stable options across threads should
pass a :class:`Settings` instance explicitly.
"""

from __future__ import annotations

import json
import logging
import os
from threading import Lock
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "Settings",
    "DEFAULT_DATE_FORMAT_KEYS",
    "settings",
    "get_settings",
    "reset_settings",
    "resolve",
]

LOGGER = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT_KEYS: Dict[str, str] = {
    "SUN_HIGH": "‡",
    "SUN_LOW": "†",
}

_TRUE_STRINGS = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Immutable almanac options."""

    model_config = ConfigDict(frozen=True)

    round_to_nearest_minute: bool = Field(
        False, description="Round every computed instant to the nearest minute"
    )
    return_time_for_no_event_case: bool = Field(
        False,
        description="Return a fixed clock time instead of a no-event code",
    )
    date_format_keys: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_DATE_FORMAT_KEYS),
        description="Marker appended by format_time for each no-event code",
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``SUNMOON_*`` environment variables."""

        env = os.environ if environ is None else environ
        values = {}
        for field, variable in (
            ("round_to_nearest_minute", "SUNMOON_ROUND_TO_NEAREST_MINUTE"),
            ("return_time_for_no_event_case", "SUNMOON_RETURN_TIME_FOR_NO_EVENT_CASE"),
        ):
            raw = env.get(variable)
            if raw is not None:
                values[field] = raw.strip().lower() in _TRUE_STRINGS
        return cls(**values)


_CURRENT = Settings()
_LOCK = Lock()


def settings(
    *,
    round_to_nearest_minute: Optional[bool] = None,
    return_time_for_no_event_case: Optional[bool] = None,
    date_format_keys: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Update the process-wide default settings.

    Options passed as ``None`` keep their current value, so calling this
    without arguments changes nothing. ``date_format_keys`` replaces the whole
    marker table. Returns the new default.
    """

    global _CURRENT

    changes: Dict[str, object] = {}
    if round_to_nearest_minute is not None:
        changes["round_to_nearest_minute"] = bool(round_to_nearest_minute)
    if return_time_for_no_event_case is not None:
        changes["return_time_for_no_event_case"] = bool(return_time_for_no_event_case)
    if date_format_keys is not None:
        changes["date_format_keys"] = dict(date_format_keys)

    with _LOCK:
        if changes:
            _CURRENT = _CURRENT.model_copy(update=changes)
            LOGGER.info(
                json.dumps(
                    {
                        "event": "settings_updated",
                        "changed": sorted(changes),
                    }
                )
            )
        return _CURRENT


def get_settings() -> Settings:
    with _LOCK:
        return _CURRENT


def reset_settings() -> Settings:
    """Restore the process-wide default settings."""

    global _CURRENT

    with _LOCK:
        _CURRENT = Settings()
        return _CURRENT


def resolve(options: Optional[Settings]) -> Settings:
    """Return *options*, or the process-wide default when it is ``None``."""

    if options is not None:
        return options
    return get_settings()
