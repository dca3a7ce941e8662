"""
Plain-text extraction for uploaded PDF/TXT/MD files.
"""

from __future__ import annotations

import logging

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def is_pdf(name: str, content_type: str | None = None) -> bool:
    return content_type == PDF_CONTENT_TYPE or (name or "").lower().endswith(".pdf")


def pdf_to_text(data: bytes, name: str = "document.pdf") -> str:
    """
    Concatenate page texts. Returns "" for PDFs that cannot be opened (likely scanned or damaged).
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception:
        logger.exception("Failed to open PDF", extra={"document": name})
        return ""

    pages = []
    with doc:
        for page in doc:
            pages.append(page.get_text())
    text = "\n".join(pages)
    if not text.strip():
        logger.warning("PDF produced no text", extra={"document": name, "pages": len(pages)})
    return text


def file_to_text(name: str, data: bytes, content_type: str | None = None) -> str:
    if is_pdf(name, content_type):
        return pdf_to_text(data, name=name)
    return data.decode("utf-8", errors="replace")


__all__ = ["file_to_text", "is_pdf", "pdf_to_text"]
