import io

import pdfplumber

from decree30.pdf.base import BasePdfExtractor
from decree30.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Text layer via pdfplumber, lines ordered top to bottom."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not open the PDF: {exc}") from exc
        return self.join_pages(pages)
