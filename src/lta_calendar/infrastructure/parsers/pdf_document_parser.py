"""Document parser that extracts the text of calendar PDF files."""
from __future__ import annotations

import io
from typing import List

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from lta_calendar.domain.models.document import DocumentPage, ParsedDocument


class PdfDocumentParser:
    """Read PDF bytes into a ``ParsedDocument`` keeping the page reading order."""

    def parse(self, document_bytes: bytes) -> ParsedDocument:
        """Extract the non-empty text lines of every page in ``document_bytes``."""

        if not document_bytes:
            raise ValueError("The PDF file is empty.")

        try:
            reader = PdfReader(io.BytesIO(document_bytes))
            raw_pages = list(reader.pages)
        except PdfReadError as error:
            raise ValueError("The provided PDF file could not be read.") from error
        except Exception as error:  # pragma: no cover - PyPDF2 raises assorted errors on corrupt input
            raise ValueError("Unexpected error while reading the PDF file.") from error

        pages: List[DocumentPage] = []
        for number, page in enumerate(raw_pages, start=1):
            try:
                text = page.extract_text() or ""
            except PdfReadError as error:
                raise ValueError(f"Page {number} of the PDF file is unreadable.") from error
            lines = [" ".join(line.split()) for line in text.splitlines()]
            pages.append(DocumentPage(number=number, content=[line for line in lines if line]))
        return ParsedDocument(pages=pages)
