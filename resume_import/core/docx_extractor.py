import logging
from io import BytesIO
from typing import List
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError

from resume_import.core.errors import DecodeError
from resume_import.core.schemas import RawDocument

logger = logging.getLogger(__name__)


def extract_docx_paragraphs(docx_bytes: bytes) -> List[str]:
    """
    Deterministically extract paragraph text from a DOCX, in order.

    Empty paragraphs are kept as empty strings: they are the blank lines that
    separate entries. Non-empty table cells are appended after the body.
    """
    try:
        doc = Document(BytesIO(docx_bytes))
    except (BadZipFile, PackageNotFoundError, KeyError, ValueError) as exc:
        raise DecodeError(f"DOCX could not be read: {exc}") from exc

    out: List[str] = [(p.text or "").strip() for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                t = (cell.text or "").strip()
                if t and t not in out:
                    out.append(t)
    logger.debug("Read %d paragraph(s) and %d table(s) from DOCX", len(doc.paragraphs), len(doc.tables))
    return out


def decode_docx(docx_bytes: bytes) -> RawDocument:
    """DOCX has no reliable page boundaries; the whole body is one page."""
    text = "\n".join(extract_docx_paragraphs(docx_bytes)).strip()
    if not text:
        raise DecodeError("DOCX contains no text.")
    return RawDocument.from_pages([text])
