"""
Document Ingestion

Flattens quiz documents (Word, PDF, plain text) into newline-separated
paragraph text for the question parser.
"""

import logging
import re
from pathlib import Path

import docx
import fitz  # PyMuPDF

from quizform.errors import UnsupportedDocumentError

log = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".md"}


def extract_text(path: str) -> str:
    """
    Extract plain text from a quiz document.

    Args:
        path: Path to a .docx, .pdf, .txt or .md file

    Returns:
        Document text, one paragraph per line
    """
    suffix = Path(path).suffix.lower()
    if suffix == ".docx":
        text = _extract_docx_text(path)
    elif suffix == ".pdf":
        text = _extract_pdf_text(path)
    elif suffix in TEXT_SUFFIXES:
        text = Path(path).read_text(encoding="utf-8")
    else:
        raise UnsupportedDocumentError(f"Unsupported document type: {suffix or path}")

    log.info("Extracted %d characters from %s", len(text), path)
    return text


def _extract_docx_text(path: str) -> str:
    """Join paragraph texts, keeping empty paragraphs as blank lines."""
    document = docx.Document(path)
    return "\n".join(paragraph.text.strip() for paragraph in document.paragraphs)


def _extract_pdf_text(path: str) -> str:
    with fitz.open(path) as doc:
        return "\n".join(_extract_page_text(page) for page in doc)


def _extract_page_text(page: fitz.Page) -> str:
    """Extract page text, reading two-column layouts left column first."""
    blocks = [b for b in page.get_text("blocks") if str(b[4]).strip()]
    if not blocks:
        return page.get_text("text")

    mid_x = page.rect.width / 2
    left = [b for b in blocks if b[0] < mid_x]
    right = [b for b in blocks if b[0] >= mid_x]

    def reading_order(block: tuple) -> tuple:
        return (block[1], block[0])

    two_columns = bool(left and right) and (
        min(b[0] for b in right) - max(b[2] for b in left) > page.rect.width * 0.05
    )
    if two_columns:
        ordered = sorted(left, key=reading_order) + sorted(right, key=reading_order)
    else:
        ordered = sorted(blocks, key=reading_order)

    return "\n".join(re.sub(r"[ \t]+", " ", str(b[4]).strip()) for b in ordered)
