from io import BytesIO
from typing import List
import logging

import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException

from resume_import.core.errors import DecodeError
from resume_import.core.schemas import RawDocument

logger = logging.getLogger(__name__)


def extract_pdf_pages(pdf_bytes: bytes, *, x_tolerance: float = 3, y_tolerance: float = 3) -> List[str]:
    """
    Extract the text layer of each page, in page order.

    Pages without a text layer come back as empty strings so the page count
    stays accurate. OCR is not attempted.
    """
    pages: List[str] = []
    try:
        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text(x_tolerance=x_tolerance, y_tolerance=y_tolerance) or "")
    except PDFPasswordIncorrect as exc:
        raise DecodeError("PDF is encrypted") from exc
    except PdfminerException as exc:
        # pdfplumber wraps pdfminer failures; the original error is the first arg
        cause = exc.args[0] if exc.args else exc
        if isinstance(cause, PDFPasswordIncorrect):
            raise DecodeError("PDF is encrypted") from exc
        raise DecodeError(f"PDF could not be read: {cause}") from exc
    except (PSException, ValueError, KeyError) as exc:
        raise DecodeError(f"PDF could not be read: {exc}") from exc
    return pages


def decode_pdf(pdf_bytes: bytes) -> RawDocument:
    pages = extract_pdf_pages(pdf_bytes)
    if not any(p.strip() for p in pages):
        raise DecodeError("PDF appears to have no extractable text. OCR is not supported.")
    logger.debug("Decoded PDF with %d page(s)", len(pages))
    return RawDocument.from_pages(pages)
