"""Repository storing tournament records in a JSON file."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List

from lta_calendar.domain.models.tournament import InsertSummary, Tournament
from lta_calendar.domain.repositories.tournament_repository import (
    TournamentRepository,
    TournamentStorageError,
)


class JsonTournamentRepository(TournamentRepository):
    """Persist tournaments on disk as a JSON list keyed by their composite id."""

    def __init__(self, file_path: Path) -> None:
        """Initialize the repository with the path where data will be stored."""

        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    def insert_many(self, tournaments: Iterable[Tournament]) -> InsertSummary:
        """Append unseen tournaments, keeping the first record stored for an id."""

        stored = self._load()
        added = 0
        skipped = 0
        for tournament in tournaments:
            if tournament.id in stored:
                skipped += 1
                continue
            stored[tournament.id] = tournament
            added += 1

        if added:
            self._save(stored)
        return InsertSummary(added=added, skipped=skipped)

    def list_all(self) -> List[Tournament]:
        """Return the stored tournaments sorted by their date label."""

        return sorted(self._load().values(), key=lambda tournament: tournament.date)

    def get(self, tournament_id: str) -> Tournament | None:
        """Return the tournament identified by ``tournament_id`` if present."""

        return self._load().get(tournament_id)

    def delete(self, tournament_id: str) -> bool:
        """Remove the tournament identified by ``tournament_id`` when present."""

        stored = self._load()
        if stored.pop(tournament_id, None) is None:
            return False
        self._save(stored)
        return True

    def delete_all(self) -> int:
        """Remove the data file returning how many tournaments it held."""

        deleted = len(self._load())
        if self._file_path.exists():
            self._file_path.unlink()
        return deleted

    def count(self) -> int:
        """Return the number of stored tournaments."""

        return len(self._load())

    def _load(self) -> Dict[str, Tournament]:
        """Read the stored tournaments keyed by id, in insertion order."""

        if not self._file_path.exists():
            return {}

        try:
            with self._file_path.open("r", encoding="utf-8") as input_file:
                data = json.load(input_file)
        except json.JSONDecodeError as error:
            raise TournamentStorageError(
                f"The tournament store {self._file_path} is not valid JSON."
            ) from error

        stored: Dict[str, Tournament] = {}
        raw_items = data.get("tournaments", []) if isinstance(data, dict) else []
        for item in raw_items:
            if not isinstance(item, dict):
                continue
            try:
                tournament = Tournament.from_dict(item)
            except ValueError:
                continue
            stored.setdefault(tournament.id, tournament)
        return stored

    def _save(self, stored: Dict[str, Tournament]) -> None:
        """Serialize and persist ``stored`` tournaments."""

        payload = {"tournaments": [tournament.to_dict() for tournament in stored.values()]}
        with self._file_path.open("w", encoding="utf-8") as output_file:
            json.dump(payload, output_file, ensure_ascii=False, indent=2)
