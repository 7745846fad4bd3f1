"""
Module: extractor.utils.pdf

Purpose:
    Default text source for the pipeline. Turns a document path into
    decoded text: PDFs through PyMuPDF, anything else as UTF-8 text
    (already-converted corpora are often stored as .txt).

Key Functions:
    - read_document_text(): Path -> text, raising TextExtractionError

Key Types:
    - TextSource: Callable[[Path], str], the injectable collaborator

Dependencies:
    - fitz (PyMuPDF): PDF text extraction

Used By:
    - extractor.pipeline: Default text source for extract_one()
    - batch.orchestrator: Default text source for every file
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import fitz

from ..errors import TextExtractionError

logger = logging.getLogger(__name__)

# Type alias for the text extraction collaborator: path -> decoded text
TextSource = Callable[[Path], str]


def read_document_text(path: Path) -> str:
    """
    Extract plain text from an exam or answer-key document.

    PDF pages are read in order with ``page.get_text("text")`` and joined
    with newlines. Other files are read as UTF-8 with undecodable bytes
    replaced.

    Args:
        path: Document path.

    Returns:
        Decoded text (possibly empty).

    Raises:
        TextExtractionError: If the document cannot be opened or decoded.

    Example:
        >>> text = read_document_text(Path("2020_PV_impresso_D1_CD1.pdf"))
        >>> "QUESTÃO" in text
        True
    """
    if path.suffix.lower() != ".pdf":
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise TextExtractionError(f"Failed to read {path.name}: {e}", path) from e

    try:
        with fitz.open(path) as doc:
            pages = [page.get_text("text") or "" for page in doc]
    except (RuntimeError, ValueError, OSError) as e:
        # fitz.FileDataError subclasses RuntimeError; missing files raise OSError
        raise TextExtractionError(f"Failed to extract text from {path.name}: {e}", path) from e

    logger.debug(f"Read {len(pages)} pages from {path.name}")
    return "\n".join(pages)
