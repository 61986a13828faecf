"""Domain models describing tournaments extracted from LTA calendar documents."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def build_tournament_id(code: str, gender: str, event_type: str, category: str) -> str:
    """Return the composite key identifying a tournament event.

    The key only depends on its four inputs, so two entries sharing code,
    gender, event type and category collapse into one stored tournament.
    """

    return "_".join(f"{code}-{gender}-{event_type}-{category}".split())


@dataclass(frozen=True)
class Tournament:
    """Represent a single tournament event listed in a calendar."""

    id: str
    code: str
    title: str
    gender: str = "Mixed"
    event_type: str = "Singles"
    grade: str = "Grade 4"
    venue: str = ""
    postcode: str = ""
    date: str = "TBD"
    month: str = ""
    category: str = "Junior"
    organiser_email: str = ""
    deadline_cd: str = "N/A"
    deadline_wd: str = "N/A"

    def to_dict(self) -> dict[str, str]:
        """Return a JSON-serializable representation of the tournament."""

        return {
            "id": self.id,
            "code": self.code,
            "title": self.title,
            "gender": self.gender,
            "eventType": self.event_type,
            "grade": self.grade,
            "venue": self.venue,
            "postcode": self.postcode,
            "date": self.date,
            "month": self.month,
            "category": self.category,
            "organiserEmail": self.organiser_email,
            "deadlineCD": self.deadline_cd,
            "deadlineWD": self.deadline_wd,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Tournament:
        """Create a tournament instance from its serialized representation."""

        if not isinstance(data, Mapping):
            raise ValueError("Tournament data must be a mapping.")

        identifier = data.get("id")
        code = data.get("code")
        if not identifier or not code:
            raise ValueError("A serialized tournament requires both 'id' and 'code'.")

        def _text(key: str, default: str) -> str:
            value = data.get(key)
            return str(value) if value is not None else default

        return cls(
            id=str(identifier),
            code=str(code),
            title=_text("title", ""),
            gender=_text("gender", "Mixed"),
            event_type=_text("eventType", "Singles"),
            grade=_text("grade", "Grade 4"),
            venue=_text("venue", ""),
            postcode=_text("postcode", ""),
            date=_text("date", "TBD"),
            month=_text("month", ""),
            category=_text("category", "Junior"),
            organiser_email=_text("organiserEmail", ""),
            deadline_cd=_text("deadlineCD", "N/A"),
            deadline_wd=_text("deadlineWD", "N/A"),
        )


@dataclass(frozen=True)
class InsertSummary:
    """Outcome of storing a batch of tournaments with duplicates ignored."""

    added: int = 0
    skipped: int = 0


@dataclass(frozen=True)
class UploadSummary:
    """Report describing the processing of an uploaded calendar document."""

    parsed: int
    added: int
    skipped: int
    tournaments: list[Tournament] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Return the number of tournaments stored after the upload."""

        return len(self.tournaments)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the upload report."""

        return {
            "success": True,
            "parsed": self.parsed,
            "added": self.added,
            "skipped": self.skipped,
            "total": self.total,
            "tournaments": [tournament.to_dict() for tournament in self.tournaments],
        }
