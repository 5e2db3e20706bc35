"""Turns a user-selected file into the payload sent to the AI provider."""

import base64
import io

import docx
from docx.oxml.table import CT_Tc
from docx.table import Table

from decree30.ingestion.exceptions import LegacyFormatError, UnreadableDocumentError
from decree30.ingestion.models import SourceFile, UploadedFilePayload
from decree30.logging.logger import Log
from decree30.pdf.base import BasePdfExtractor
from decree30.pdf.exceptions import PdfExtractionError

PLAIN_TEXT_MIME_TYPE = "text/plain"
PDF_MIME_TYPE = "application/pdf"


def extract_docx_text(docx_bytes: bytes) -> str:
    """Return the raw text of a .docx file, one line per paragraph.

    Table cells are visited in document order so letterhead tables
    (agency name / national name) are not lost. A merged cell is read once,
    although python-docx returns it for every grid position it spans.
    """
    document = docx.Document(io.BytesIO(docx_bytes))
    lines: list[str] = []
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            visited: list[CT_Tc] = []
            for row in block.rows:
                for cell in row.cells:
                    if any(cell._tc is tc for tc in visited):
                        continue
                    visited.append(cell._tc)
                    lines.extend(p.text for p in cell.paragraphs)
        else:
            lines.append(block.text)
    return "\n".join(lines).strip()


def encode_text(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class FileLoader:
    """Reads a ``SourceFile`` and packages it as an ``UploadedFilePayload``.

    - ``.doc`` is rejected before any byte is read.
    - ``.docx`` is reduced to its raw text and sent as ``text/plain``.
    - PDFs are reduced to text when a PDF extractor is configured; scans
      without a text layer are passed through unchanged.
    - Everything else is passed through base64-encoded with its mime type.
    """

    def __init__(self, pdf_extractor: BasePdfExtractor | None = None) -> None:
        self._pdf_extractor = pdf_extractor

    def load(self, source: SourceFile) -> UploadedFilePayload:
        """Build the payload for ``source``.

        Raises:
            LegacyFormatError: for ``.doc`` files.
            UnreadableDocumentError: if the content cannot be read.
        """
        extension = source.extension
        if extension == "doc":
            raise LegacyFormatError(
                "Vui lòng chuyển đổi file .doc sang .docx trước khi tải lên."
            )

        raw_bytes = self._read(source)
        Log.info(f"Read {len(raw_bytes)} bytes from {source.name}")

        if extension == "docx":
            return self._text_payload(source, self._docx_text(raw_bytes))
        if self._pdf_extractor is not None and self._is_pdf(source):
            text = self._pdf_text(raw_bytes)
            if text:
                return self._text_payload(source, text)
            Log.warning(f"{source.name} has no text layer, sending the PDF as is")
        return UploadedFilePayload(
            name=source.name,
            mime_type=source.mime_type,
            size_bytes=source.size_bytes,
            base64_content=base64.b64encode(raw_bytes).decode("ascii"),
        )

    @staticmethod
    def _read(source: SourceFile) -> bytes:
        try:
            return source.read()
        except OSError as exc:
            raise UnreadableDocumentError(
                f"Không thể đọc tệp {source.name}: {exc}"
            ) from exc

    @staticmethod
    def _docx_text(raw_bytes: bytes) -> str:
        try:
            text = extract_docx_text(raw_bytes)
        except Exception as exc:
            Log.error(f"DOCX extraction failed: {exc}")
            raise UnreadableDocumentError(
                "Không thể đọc nội dung file Word (.docx)."
            ) from exc
        Log.info(f"Extracted {len(text)} chars from DOCX")
        return text

    def _pdf_text(self, raw_bytes: bytes) -> str:
        assert self._pdf_extractor is not None
        try:
            text = self._pdf_extractor.extract(raw_bytes)
        except PdfExtractionError as exc:
            Log.error(f"PDF extraction failed: {exc}")
            raise UnreadableDocumentError("Không thể đọc nội dung file PDF.") from exc
        Log.info(f"Extracted {len(text)} chars from PDF")
        return text

    @staticmethod
    def _is_pdf(source: SourceFile) -> bool:
        return source.mime_type == PDF_MIME_TYPE or source.extension == "pdf"

    @staticmethod
    def _text_payload(source: SourceFile, text: str) -> UploadedFilePayload:
        return UploadedFilePayload(
            name=source.name,
            mime_type=PLAIN_TEXT_MIME_TYPE,
            size_bytes=source.size_bytes,
            base64_content=encode_text(text),
        )
