"""Domain models for text extracted from uploaded documents."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class DocumentPage:
    """Represents the text lines of a single page of an uploaded document."""

    number: int
    content: List[str] = field(default_factory=list)

    def to_text(self) -> str:
        """Return the page lines joined in reading order."""

        return " ".join(self.content)


@dataclass(frozen=True)
class ParsedDocument:
    """Represents the textual content of an uploaded document."""

    pages: List[DocumentPage] = field(default_factory=list)

    def to_text(self) -> str:
        """Return the whole document as one string, one line per page."""

        return "".join(f"{page.to_text()}\n" for page in self.pages)
