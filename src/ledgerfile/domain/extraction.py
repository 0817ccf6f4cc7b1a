"""Document text extraction."""

import logging
from typing import Protocol

import pdfplumber

from ledgerfile.domain.errors import DomainError

logger = logging.getLogger(__name__)


class ExtractionError(DomainError):
    """Text could not be extracted from a document."""


class TextExtractor(Protocol):
    """Anything that turns a document on disk into plain text."""

    def extract(self, file_path: str) -> str:
        """Return the document text.

        Raises:
            ExtractionError: If the document is unreadable, corrupt or of an
                unsupported type
        """
        ...


class PdfTextExtractor:
    """Text extractor for PDF documents backed by pdfplumber."""

    def extract(self, file_path: str) -> str:
        """Extract the text of every page, joined by newlines.

        Pages without a text layer contribute an empty line.
        """
        try:
            with pdfplumber.open(file_path) as pdf:
                text = "\n".join(page.extract_text() or "" for page in pdf.pages)
        except Exception as e:
            raise ExtractionError(f"Could not extract text: {e}") from e
        logger.debug("Extracted %d characters from %s", len(text), file_path)
        return text
