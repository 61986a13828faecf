"""Application configuration helpers."""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping

from lta_calendar.domain.services.tournament_extractor import ExtractionProfile


@dataclass(frozen=True)
class Settings:
    """Holds configuration values for the application."""

    data_dir: Path = Path("data")
    tournaments_filename: str = "tournaments.json"
    app_name: str = "LTA Parser API"
    app_version: str = "0.1.0"
    api_version: str = "v1"
    frontend_url: str | None = None
    local_origin_regex: str = r"http://localhost:\d+|https://[A-Za-z0-9.-]+\.vercel\.app"
    max_upload_size_mb: int = 50
    max_text_length: int = 5_000_000
    log_level: str = "INFO"
    organisation_prefix: str = "SUS"
    default_venue: str = "Sussex Club"
    default_postcode: str = "BN1"
    year_by_code_token: Mapping[str, int] = field(
        default_factory=lambda: {"25": 2025, "26": 2026}
    )
    default_year: int = 2026

    @property
    def tournaments_path(self) -> Path:
        """Return the full path for storing tournament data."""

        return self.data_dir / self.tournaments_filename

    @property
    def api_prefix(self) -> str:
        """Return the URL prefix used for versioned API routes."""

        return f"/api/{self.api_version}"

    @property
    def max_upload_size_bytes(self) -> int:
        """Return the maximum allowed upload size in bytes."""

        return self.max_upload_size_mb * 1024 * 1024

    @property
    def cors_origin_regex(self) -> str:
        """Return the pattern of browser origins allowed to call the API.

        Any origin starting with the configured front-end URL is accepted.
        """

        patterns = [self.local_origin_regex]
        if self.frontend_url:
            patterns.append(f"{re.escape(self.frontend_url)}.*")
        return "|".join(f"(?:{pattern})" for pattern in patterns)

    def extraction_profile(self) -> ExtractionProfile:
        """Return the extraction profile for the configured organisation."""

        return ExtractionProfile(
            organisation_prefix=self.organisation_prefix,
            default_venue=self.default_venue,
            default_postcode=self.default_postcode,
            year_by_code_token=dict(self.year_by_code_token),
            default_year=self.default_year,
        )


def get_settings() -> Settings:
    """Provide application settings, applying environment overrides."""

    settings = Settings()

    data_dir = os.getenv("DATA_DIR")
    if data_dir:
        settings = replace(settings, data_dir=Path(data_dir).expanduser())

    organisation_prefix = os.getenv("ORGANISATION_PREFIX")
    if organisation_prefix:
        settings = replace(settings, organisation_prefix=organisation_prefix.strip().upper())

    frontend_url = os.getenv("FRONTEND_URL")
    if frontend_url:
        settings = replace(settings, frontend_url=frontend_url.rstrip("/"))

    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        settings = replace(settings, log_level=log_level.upper())

    return settings
