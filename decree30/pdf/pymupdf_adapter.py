import pymupdf

from decree30.pdf.base import BasePdfExtractor
from decree30.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Text layer via PyMuPDF.

    ``sort=True`` orders blocks by position, which keeps the two-column
    letterhead (agency left, national name right) readable.
    """

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text("text", sort=True) for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"PyMuPDF could not open the PDF: {exc}") from exc
        return self.join_pages(pages)
