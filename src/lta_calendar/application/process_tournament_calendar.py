"""Use cases for processing and retrieving tournament calendars."""
from __future__ import annotations

from typing import List, Protocol

from loguru import logger

from lta_calendar.domain.models.document import ParsedDocument
from lta_calendar.domain.models.tournament import Tournament, UploadSummary
from lta_calendar.domain.repositories.tournament_repository import TournamentRepository


class DocumentParser(Protocol):
    """Represents a service capable of parsing PDF bytes into a ParsedDocument."""

    def parse(self, document_bytes: bytes) -> ParsedDocument:
        """Convert raw document bytes into a parsed document structure."""


class TournamentCalendarParser(Protocol):
    """Represent a service capable of parsing tournament calendar PDFs."""

    def parse(self, document_bytes: bytes) -> List[Tournament]:
        """Convert the supplied PDF bytes into tournament records."""


class ProcessTournamentCalendarUseCase:
    """Handle parsing and persistence of uploaded tournament calendars."""

    def __init__(
        self, parser: TournamentCalendarParser, repository: TournamentRepository
    ) -> None:
        """Initialize the use case with its collaborators."""

        self._parser = parser
        self._repository = repository

    def execute(self, document_bytes: bytes) -> UploadSummary:
        """Parse the PDF bytes, store new tournaments and report the outcome."""

        tournaments = self._parser.parse(document_bytes)
        summary = self._repository.insert_many(tournaments)
        logger.info(
            "Added {} new tournaments, skipped {} existing",
            summary.added,
            summary.skipped,
        )
        return UploadSummary(
            parsed=len(tournaments),
            added=summary.added,
            skipped=summary.skipped,
            tournaments=self._repository.list_all(),
        )


class RetrieveTournamentsUseCase:
    """Retrieve every stored tournament."""

    def __init__(self, repository: TournamentRepository) -> None:
        """Initialize the use case with the repository dependency."""

        self._repository = repository

    def execute(self) -> List[Tournament]:
        """Return the stored tournaments ordered by date."""

        return self._repository.list_all()


class CountTournamentsUseCase:
    """Report how many tournaments are stored."""

    def __init__(self, repository: TournamentRepository) -> None:
        self._repository = repository

    def execute(self) -> int:
        return self._repository.count()


class DeleteTournamentUseCase:
    """Delete a stored tournament identified by its composite key."""

    def __init__(self, repository: TournamentRepository) -> None:
        """Initialize the use case with the repository dependency."""

        self._repository = repository

    def execute(self, tournament_id: str) -> bool:
        """Return ``True`` when the requested tournament existed and was removed."""

        return self._repository.delete(tournament_id)


class DeleteAllTournamentsUseCase:
    """Delete every stored tournament."""

    def __init__(self, repository: TournamentRepository) -> None:
        """Initialize the use case with the repository dependency."""

        self._repository = repository

    def execute(self) -> int:
        """Return the number of tournaments that were removed."""

        deleted = self._repository.delete_all()
        logger.info("Deleted {} tournaments", deleted)
        return deleted
