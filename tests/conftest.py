"""Shared fixtures and path setup for the test suite."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_src_on_path() -> None:
    """Add the project's ``src`` directory to ``sys.path`` when missing."""

    project_root = Path(__file__).resolve().parents[1]
    src_path_str = str(project_root / "src")
    if src_path_str not in sys.path:
        sys.path.insert(0, src_path_str)


_ensure_src_on_path()


SAMPLE_CALENDAR_TEXT = (
    "LTA Tournament Calendar 2025 Sussex  8 & U EVENTS   "
    "SUS - 25 - 0123 Spring Junior Mixed Singles Grade 4 Sat 06 Sep Hove Park "
    "CD: 01/09/2025 10:00 WD: 03/09/2025 10:00 coach@example.com "
    "SUS-25-0456 Autumn Open Male Doubles 3 Sun 12 Oct Preston Park BN1 6SD "
    "CD: 05/10/2025 10:00 WD: 07/10/2025 10:00 organiser @ club.org.uk"
)


@pytest.fixture
def sample_calendar_text() -> str:
    """Return a flattened two-entry calendar extract."""

    return SAMPLE_CALENDAR_TEXT
