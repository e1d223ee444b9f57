"""
Upload decoding: picks a decoder from the filename / content type and returns
a RawDocument. Any failure is raised as DecodeError before extraction starts.
"""

import logging
from typing import Optional

from resume_import.core.docx_extractor import decode_docx
from resume_import.core.errors import DecodeError, UnsupportedFormatError
from resume_import.core.pdf_extractor import decode_pdf
from resume_import.core.schemas import RawDocument

logger = logging.getLogger(__name__)

DOCX_CONTENT_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
PDF_CONTENT_TYPES = {"application/pdf"}
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}


def decode_text(raw: bytes) -> RawDocument:
    text = raw.decode("utf-8", errors="replace")
    if not text.strip():
        raise DecodeError("Text file is empty.")
    return RawDocument.from_pages([text])


def decode_upload(raw: bytes, filename: Optional[str] = None, content_type: Optional[str] = None) -> RawDocument:
    name = (filename or "").lower()
    ctype = (content_type or "").lower().split(";")[0].strip()

    if name.endswith(".docx") or ctype in DOCX_CONTENT_TYPES:
        return decode_docx(raw)
    if name.endswith(".pdf") or ctype in PDF_CONTENT_TYPES:
        return decode_pdf(raw)
    if name.endswith((".txt", ".md")) or ctype in TEXT_CONTENT_TYPES:
        return decode_text(raw)

    logger.warning("Unsupported upload %r (content type %r)", filename, content_type)
    raise UnsupportedFormatError(content_type)
