import io
from typing import Any

import docx
import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from decree30.correction.models import StructuredDocument
from decree30.correction.validator import validate_and_build


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 720, "QUYET DINH ve viec ban hanh quy che")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """A small Word document with a letterhead table and two paragraphs."""
    document = docx.Document()
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "ỦY BAN NHÂN DÂN"
    table.rows[0].cells[1].text = "CỘNG HÒA XÃ HỘI CHỦ NGHĨA VIỆT NAM"
    document.add_paragraph("Quyết định về việc ban hành quy chế.")
    document.add_paragraph("Quyết định này có hiệu lục kể từ ngày ký.")
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def valid_response() -> dict[str, Any]:
    """A decoded AI reply that satisfies the declared response schema."""
    return {
        "formattedDocument": "QUYẾT ĐỊNH\nĐoạn 1.\nĐoạn 2.",
        "structuredDocument": {
            "header": {
                "agencyName": "ỦY BAN NHÂN DÂN\nTỈNH LÀO CAI",
                "agencyNumber": "Số: 12/QĐ-UBND",
                "nationalName": "CỘNG HÒA XÃ HỘI CHỦ NGHĨA VIỆT NAM",
                "motto": "Độc lập - Tự do - Hạnh phúc",
                "date": "Lào Cai, ngày 10 tháng 01 năm 2024",
            },
            "body": {"title": "QUYẾT ĐỊNH", "paragraphs": ["Đoạn 1.", "Đoạn 2."]},
            "footer": {
                "recipients": ["Sở A", "Sở B"],
                "signerTitle": "CHỦ TỊCH",
                "signerName": "Nguyễn Văn A",
            },
        },
        "summary": "tóm tắt X",
        "corrections": [
            {
                "section": "Nội dung",
                "originalText": "hiệu lục",
                "correctedText": "hiệu lực",
                "reason": "Sai chính tả",
            },
        ],
    }


@pytest.fixture()
def structured_document(valid_response: dict[str, Any]) -> StructuredDocument:
    """The valid_response reply as a validated StructuredDocument."""
    return validate_and_build(valid_response).structured_document
