"""Parser turning LTA tournament calendar PDFs into tournament records."""
from __future__ import annotations

from typing import List

from loguru import logger

from lta_calendar.application.process_tournament_calendar import (
    DocumentParser,
    TournamentCalendarParser,
)
from lta_calendar.domain.models.tournament import Tournament
from lta_calendar.domain.services.tournament_extractor import TournamentExtractorService
from lta_calendar.infrastructure.parsers.pdf_document_parser import PdfDocumentParser


DEFAULT_MAX_TEXT_LENGTH = 5_000_000


class TournamentCalendarPdfParser(TournamentCalendarParser):
    """Decode tournament entries from uploaded calendar PDF documents."""

    def __init__(
        self,
        document_parser: DocumentParser | None = None,
        extractor: TournamentExtractorService | None = None,
        max_text_length: int = DEFAULT_MAX_TEXT_LENGTH,
    ) -> None:
        """Initialize the parser with its optional collaborators."""

        self._document_parser = document_parser or PdfDocumentParser()
        self._extractor = extractor or TournamentExtractorService()
        self._max_text_length = max_text_length

    def parse(self, document_bytes: bytes) -> List[Tournament]:
        """Parse the PDF bytes and return the tournaments in document order."""

        text = self._document_parser.parse(document_bytes).to_text()
        logger.info("Extracted {} characters from PDF", len(text))

        if len(text) > self._max_text_length:
            raise ValueError("The calendar text exceeds the allowed length.")
        if not text.strip():
            raise ValueError("The PDF file does not contain any text.")

        tournaments = self._extractor.extract(text)
        logger.info("Parsed {} tournaments from PDF", len(tournaments))
        return tournaments
