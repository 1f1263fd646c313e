"""Value types exchanged at the almanac boundary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum

__all__ = ["NoEventCode", "RiseSet", "MoonPhase", "NoEventTime", "PhaseEvent"]


class NoEventCode(str, Enum):
    """Reason why a solar event does not happen on a given day."""

    SUN_HIGH = "SUN_HIGH"
    SUN_LOW = "SUN_LOW"

    def __str__(self) -> str:
        return self.value


class RiseSet(str, Enum):
    """Which horizon crossing the rise/set solver looks for."""

    RISE = "RISE"
    SET = "SET"


class MoonPhase(IntEnum):
    """Principal moon phases, numbered as quarter offsets from new moon."""

    NEW_MOON = 0
    FIRST_QUARTER = 1
    FULL_MOON = 2
    LAST_QUARTER = 3


@dataclass(frozen=True)
class NoEventTime:
    """Substitute clock time returned for a day without the requested event.

    ``code`` records why the event is missing so the formatting layer can
    mark the time accordingly.
    """

    time: datetime
    code: NoEventCode


@dataclass(frozen=True)
class PhaseEvent:
    """A moon phase instant tagged with its phase."""

    time: datetime
    phase: MoonPhase
