import io
from unittest.mock import patch

import docx
import pytest
from docx.document import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, Twips

from decree30.correction.models import Body, Footer, Header, StructuredDocument
from decree30.rendering.docx_renderer import EXPORT_FAILED, EXPORT_FILENAME, render_docx
from decree30.rendering.exceptions import ExportError


def _open(data: bytes) -> DocxDocument:
    return docx.Document(io.BytesIO(data))


def _cell_texts(document: DocxDocument, table: int, column: int) -> list[str]:
    cell = document.tables[table].rows[0].cells[column]
    return [p.text for p in cell.paragraphs]


def _blank_document(footer: Footer = Footer()) -> StructuredDocument:
    return StructuredDocument(
        header=Header(),
        body=Body(title="QUYẾT ĐỊNH", paragraphs=("Đoạn 1.", "Đoạn 2.")),
        footer=footer,
    )


class TestPageSetup:
    def test_margins(self, structured_document: StructuredDocument) -> None:
        section = _open(render_docx(structured_document)).sections[0]
        assert section.top_margin == Twips(1134)
        assert section.bottom_margin == Twips(1134)
        assert section.left_margin == Twips(1701)
        assert section.right_margin == Twips(850)

    def test_default_font(self, structured_document: StructuredDocument) -> None:
        style = _open(render_docx(structured_document)).styles["Normal"]
        assert style.font.name == "Times New Roman"
        assert style.font.size == Pt(14)

    def test_core_properties(self, structured_document: StructuredDocument) -> None:
        core = _open(render_docx(structured_document)).core_properties
        assert core.title == "QUYẾT ĐỊNH"
        assert core.author == "ỦY BAN NHÂN DÂN TỈNH LÀO CAI"

    def test_filename_is_fixed(self) -> None:
        assert EXPORT_FILENAME == "Van_ban_chuan_nghi_dinh_30.docx"


class TestHeaderTable:
    def test_given_values(self, structured_document: StructuredDocument) -> None:
        document = _open(render_docx(structured_document))
        assert _cell_texts(document, 0, 0) == [
            "ỦY BAN NHÂN DÂN\nTỈNH LÀO CAI",
            "Số: 12/QĐ-UBND",
        ]
        assert _cell_texts(document, 0, 1) == [
            "CỘNG HÒA XÃ HỘI CHỦ NGHĨA VIỆT NAM",
            "Độc lập - Tự do - Hạnh phúc",
            "________________________",
            "Lào Cai, ngày 10 tháng 01 năm 2024",
        ]

    def test_blank_header_uses_defaults(self) -> None:
        document = _open(render_docx(_blank_document()))
        assert _cell_texts(document, 0, 0) == ["TÊN CƠ QUAN", "Số: ..."]
        assert _cell_texts(document, 0, 1) == [
            "CỘNG HÒA XÃ HỘI CHỦ NGHĨA VIỆT NAM",
            "Độc lập - Tự do - Hạnh phúc",
            "________________________",
            "..., ngày ... tháng ... năm ...",
        ]

    def test_date_is_italic(self, structured_document: StructuredDocument) -> None:
        document = _open(render_docx(structured_document))
        date = document.tables[0].rows[0].cells[1].paragraphs[3]
        assert date.runs[0].italic is True

    def test_table_has_no_borders(self, structured_document: StructuredDocument) -> None:
        document = _open(render_docx(structured_document))
        xml = document.tables[0]._tbl.xml
        assert "w:tblBorders" in xml
        assert 'w:val="single"' not in xml


class TestBody:
    def test_title_is_bold_and_centered(self, structured_document: StructuredDocument) -> None:
        document = _open(render_docx(structured_document))
        title = next(p for p in document.paragraphs if p.text == "QUYẾT ĐỊNH")
        assert title.alignment == WD_ALIGN_PARAGRAPH.CENTER
        assert title.runs[0].bold is True

    def test_paragraphs_in_order(self, structured_document: StructuredDocument) -> None:
        document = _open(render_docx(structured_document))
        texts = [p.text for p in document.paragraphs if p.text.startswith("Đoạn")]
        assert texts == ["Đoạn 1.", "Đoạn 2."]

    def test_paragraphs_are_justified_and_indented(
        self, structured_document: StructuredDocument
    ) -> None:
        document = _open(render_docx(structured_document))
        for paragraph in document.paragraphs:
            if paragraph.text.startswith("Đoạn"):
                assert paragraph.alignment == WD_ALIGN_PARAGRAPH.JUSTIFY
                assert paragraph.paragraph_format.first_line_indent == Twips(567)


class TestFooterTable:
    def test_recipients_block(self, structured_document: StructuredDocument) -> None:
        document = _open(render_docx(structured_document))
        assert _cell_texts(document, 1, 0) == ["Nơi nhận:", "- Sở A", "- Sở B"]

    def test_recipients_label_is_bold_italic(
        self, structured_document: StructuredDocument
    ) -> None:
        document = _open(render_docx(structured_document))
        label = document.tables[1].rows[0].cells[0].paragraphs[0].runs[0]
        assert label.bold is True
        assert label.italic is True
        assert label.font.size == Pt(12)

    @pytest.mark.parametrize("recipients", [None, ()])
    def test_no_recipients_block_when_absent(self, recipients: tuple[str, ...] | None) -> None:
        document = _open(render_docx(_blank_document(Footer(recipients=recipients))))
        texts = _cell_texts(document, 1, 0)
        assert "Nơi nhận:" not in texts
        assert not any(t.startswith("- ") for t in texts)

    def test_signature_block(self, structured_document: StructuredDocument) -> None:
        document = _open(render_docx(structured_document))
        assert _cell_texts(document, 1, 1) == ["CHỦ TỊCH", "Nguyễn Văn A"]
        signer = document.tables[1].rows[0].cells[1].paragraphs[1]
        assert signer.paragraph_format.space_before == Twips(1200)

    def test_blank_signer_title_uses_default(self) -> None:
        document = _open(render_docx(_blank_document()))
        assert _cell_texts(document, 1, 1)[0] == "THỦ TRƯỞNG CƠ QUAN"


class TestDeterminism:
    def test_identical_bytes(self, structured_document: StructuredDocument) -> None:
        assert render_docx(structured_document) == render_docx(structured_document)


class TestFailure:
    def test_build_failure_raises_export_error(
        self, structured_document: StructuredDocument
    ) -> None:
        with patch(
            "decree30.rendering.docx_renderer._build", side_effect=RuntimeError("boom")
        ):
            with pytest.raises(ExportError, match=EXPORT_FAILED):
                render_docx(structured_document)
