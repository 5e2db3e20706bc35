from abc import ABC, abstractmethod

PAGE_SEPARATOR = "\n\n"


class BasePdfExtractor(ABC):
    """Contract for PDF text-layer extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Return the text layer of a PDF in reading order.

        Pages are joined with ``PAGE_SEPARATOR`` so a page break reads as a
        paragraph break. A PDF without a text layer (a scan) yields ``""``.

        Raises:
            PdfExtractionError: if the bytes cannot be opened as a PDF.
        """

    @staticmethod
    def join_pages(pages: list[str]) -> str:
        return PAGE_SEPARATOR.join(p.strip() for p in pages if p.strip())
