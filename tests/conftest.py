from io import BytesIO

import pytest
from fastapi.testclient import TestClient

from resume_import.api.deps import get_import_service
from resume_import.core.import_service import ResumeImportService
from resume_import.main import app


SAMPLE_RESUME = (
    "John Smith\n"
    "john.smith@example.com\n"
    "\n"
    "Experience\n"
    "Senior Engineer at Acme Corp 2019-present\n"
    "\n"
    "Education\n"
    "Bachelor of Science in Computer Science, State University, 2015\n"
    "\n"
    "Skills\n"
    "Python, Go, SQL"
)


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def service():
    """Fresh store + audit log per test, wired into the app."""
    svc = ResumeImportService()
    app.dependency_overrides[get_import_service] = lambda: svc
    yield svc
    app.dependency_overrides.clear()


@pytest.fixture
def client(service):
    return TestClient(app)


def _build_pdf(*pages) -> bytes:
    """
    Minimal PDF with one Helvetica text line per page.

    A page given as None gets an empty content stream, i.e. no text layer.
    """
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    kids = []
    for text in pages:
        content = b"" if text is None else f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
        objects.append(b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream")
        content_ref = len(objects)
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {content_ref} 0 R >>"
            ).encode("ascii")
        )
        kids.append(f"{len(objects)} 0 R")
    objects[1] = f"<< /Type /Pages /Kids [{' '.join(kids)}] /Count {len(kids)} >>".encode("ascii")

    out = BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(b"%d 0 obj\n" % number + body + b"\nendobj\n")
    xref_at = out.tell()
    out.write(b"xref\n0 %d\n" % (len(objects) + 1))
    out.write(b"0000000000 65535 f \n")
    for offset in offsets:
        out.write(b"%010d 00000 n \n" % offset)
    out.write(b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at))
    return out.getvalue()


@pytest.fixture
def make_pdf():
    return _build_pdf
