"""Abstract repository contract for tournament records."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List

from lta_calendar.domain.models.tournament import InsertSummary, Tournament


class TournamentStorageError(Exception):
    """Signal that the stored tournaments cannot be read back."""


class TournamentRepository(ABC):
    """Define persistence operations available for tournaments."""

    @abstractmethod
    def insert_many(self, tournaments: Iterable[Tournament]) -> InsertSummary:
        """Store ``tournaments`` ignoring those whose ``id`` is already known."""

    @abstractmethod
    def list_all(self) -> List[Tournament]:
        """Return every stored tournament ordered by date."""

    @abstractmethod
    def get(self, tournament_id: str) -> Tournament | None:
        """Return the tournament identified by ``tournament_id`` if present."""

    @abstractmethod
    def delete(self, tournament_id: str) -> bool:
        """Remove the tournament identified by ``tournament_id`` returning ``True`` when deleted."""

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every tournament returning how many were stored."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored tournaments."""
