"""Word (.docx) projection of a StructuredDocument in the Decree 30 layout."""

from __future__ import annotations

import io
import zipfile
from datetime import datetime
from typing import TYPE_CHECKING

from docx import Document
from docx.enum.table import WD_CELL_VERTICAL_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Length, Pt, Twips

from decree30.correction.models import StructuredDocument
from decree30.logging.logger import Log
from decree30.rendering.exceptions import ExportError
from decree30.rendering.layout import (
    DECORATIVE_RULE,
    RECIPIENTS_LABEL,
    DocumentLayout,
    resolve_layout,
)

if TYPE_CHECKING:
    from docx.document import Document as DocxDocument
    from docx.table import Table, _Cell
    from docx.text.paragraph import Paragraph

EXPORT_FILENAME = "Van_ban_chuan_nghi_dinh_30.docx"
EXPORT_FAILED = "Không thể tạo file tải xuống. Vui lòng thử lại."

FONT_NAME = "Times New Roman"
SIZE_NORMAL = Pt(14)
SIZE_SMALL = Pt(13)
SIZE_RECIPIENTS_LABEL = Pt(12)
SIZE_RECIPIENT = Pt(11)
SIZE_RULE = Pt(5)

MARGIN_TOP = Twips(1134)
MARGIN_BOTTOM = Twips(1134)
MARGIN_LEFT = Twips(1701)
MARGIN_RIGHT = Twips(850)

FIRST_LINE_INDENT = Twips(567)
BODY_LINE_SPACING = 276 / 240
SIGNATURE_GAP = Twips(1200)

# Identical documents must serialize to identical bytes.
_FIXED_TIMESTAMP = datetime(2020, 3, 5)
_ZIP_TIMESTAMP = (1980, 1, 1, 0, 0, 0)


def render_docx(document: StructuredDocument) -> bytes:
    """Build the export document and return the serialized .docx bytes.

    Raises:
        ExportError: if any step of building or saving fails. Nothing is
            returned in that case, so callers never see a partial file.
    """
    try:
        layout = resolve_layout(document)
        doc = _build(layout)
        buffer = io.BytesIO()
        doc.save(buffer)
        data = _stable_zip(buffer.getvalue())
    except Exception as exc:
        Log.error(f"DOCX export failed: {exc}")
        raise ExportError(EXPORT_FAILED) from exc
    Log.info(f"Built DOCX export: {len(data)} bytes")
    return data


def _build(layout: DocumentLayout) -> DocxDocument:
    doc = Document()
    _apply_page_setup(doc, layout)

    _add_header_table(doc, layout)

    title = doc.add_paragraph()
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    title.paragraph_format.space_before = Pt(20)
    title.paragraph_format.space_after = Pt(12)
    _add_run(title, layout.title, size=SIZE_NORMAL, bold=True)

    for text in layout.paragraphs:
        paragraph = doc.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
        fmt = paragraph.paragraph_format
        fmt.first_line_indent = FIRST_LINE_INDENT
        fmt.line_spacing = BODY_LINE_SPACING
        fmt.space_after = Pt(6)
        _add_run(paragraph, text, size=SIZE_NORMAL)

    spacer = doc.add_paragraph()
    spacer.paragraph_format.space_before = Pt(20)

    _add_footer_table(doc, layout)
    return doc


def _apply_page_setup(doc: DocxDocument, layout: DocumentLayout) -> None:
    section = doc.sections[0]
    section.top_margin = MARGIN_TOP
    section.bottom_margin = MARGIN_BOTTOM
    section.left_margin = MARGIN_LEFT
    section.right_margin = MARGIN_RIGHT

    style = doc.styles["Normal"]
    style.font.name = FONT_NAME
    style.font.size = SIZE_NORMAL
    style.element.rPr.rFonts.set(qn("w:eastAsia"), FONT_NAME)
    style.paragraph_format.space_before = Pt(0)
    style.paragraph_format.space_after = Pt(0)

    core = doc.core_properties
    # core properties are limited to 255 characters
    core.title = layout.title.replace("\n", " ")[:255]
    core.author = layout.agency_name.replace("\n", " ")[:255]
    core.created = _FIXED_TIMESTAMP
    core.modified = _FIXED_TIMESTAMP


def _add_header_table(doc: DocxDocument, layout: DocumentLayout) -> None:
    table = _add_borderless_table(doc)
    left, right = table.rows[0].cells

    p = _next_paragraph(left)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _add_run(p, layout.agency_name, size=SIZE_SMALL, bold=True)

    p = _next_paragraph(left)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    p.paragraph_format.space_after = Pt(5)
    _add_run(p, layout.agency_number, size=SIZE_SMALL)

    p = _next_paragraph(right)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _add_run(p, layout.national_name, size=SIZE_SMALL, bold=True)

    p = _next_paragraph(right)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _add_run(p, layout.motto, size=SIZE_NORMAL, bold=True)

    p = _next_paragraph(right)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _add_run(p, DECORATIVE_RULE, size=SIZE_RULE, bold=True)

    p = _next_paragraph(right)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    p.paragraph_format.space_before = Pt(5)
    _add_run(p, layout.date, size=SIZE_SMALL, italic=True)


def _add_footer_table(doc: DocxDocument, layout: DocumentLayout) -> None:
    table = _add_borderless_table(doc)
    left, right = table.rows[0].cells

    if layout.recipients is not None:
        p = _next_paragraph(left)
        _add_run(p, RECIPIENTS_LABEL, size=SIZE_RECIPIENTS_LABEL, bold=True, italic=True)
        for line in layout.recipient_lines:
            p = _next_paragraph(left)
            p.alignment = WD_ALIGN_PARAGRAPH.LEFT
            _add_run(p, line, size=SIZE_RECIPIENT)

    p = _next_paragraph(right)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    _add_run(p, layout.signer_title, size=SIZE_NORMAL, bold=True)

    p = _next_paragraph(right)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    p.paragraph_format.space_before = SIGNATURE_GAP
    _add_run(p, layout.signer_name, size=SIZE_NORMAL, bold=True)


def _add_borderless_table(doc: DocxDocument) -> Table:
    """One row, two 50% columns, no borders, top-aligned cells."""
    table = doc.add_table(rows=1, cols=2)
    tbl_pr = table._tbl.tblPr

    tbl_w = tbl_pr.find(qn("w:tblW"))
    if tbl_w is None:
        tbl_w = OxmlElement("w:tblW")
        tbl_pr.append(tbl_w)
    tbl_w.set(qn("w:type"), "pct")
    tbl_w.set(qn("w:w"), "5000")

    borders = OxmlElement("w:tblBorders")
    for edge in ("top", "left", "bottom", "right", "insideH", "insideV"):
        element = OxmlElement(f"w:{edge}")
        element.set(qn("w:val"), "nil")
        borders.append(element)
    tbl_w.addnext(borders)

    for cell in table.rows[0].cells:
        tc_w = cell._tc.get_or_add_tcPr().get_or_add_tcW()
        tc_w.set(qn("w:type"), "pct")
        tc_w.set(qn("w:w"), "2500")
        cell.vertical_alignment = WD_CELL_VERTICAL_ALIGNMENT.TOP
    return table


def _next_paragraph(cell: _Cell) -> Paragraph:
    """Reuse the blank paragraph a new cell starts with, then append."""
    paragraphs = cell.paragraphs
    if len(paragraphs) == 1 and not paragraphs[0].runs:
        return paragraphs[0]
    return cell.add_paragraph()


def _add_run(
    paragraph: Paragraph,
    text: str,
    *,
    size: Length,
    bold: bool = False,
    italic: bool = False,
) -> None:
    run = paragraph.add_run(text)
    run.font.name = FONT_NAME
    run.font.size = size
    run.bold = bold
    run.italic = italic


def _stable_zip(data: bytes) -> bytes:
    """Re-pack the .docx archive with fixed entry timestamps."""
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(data)) as source, zipfile.ZipFile(
        out, "w", zipfile.ZIP_DEFLATED
    ) as target:
        for info in source.infolist():
            entry = zipfile.ZipInfo(info.filename, date_time=_ZIP_TIMESTAMP)
            entry.compress_type = zipfile.ZIP_DEFLATED
            target.writestr(entry, source.read(info.filename))
    return out.getvalue()


__all__ = ["EXPORT_FILENAME", "render_docx"]
