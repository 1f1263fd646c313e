from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from sunmoon.config import reset_settings


@pytest.fixture(autouse=True)
def default_settings() -> Iterator[None]:
    reset_settings()
    yield
    reset_settings()
