from decree30.config.settings import Settings
from decree30.pdf.base import BasePdfExtractor
from decree30.pdf.pdfplumber_adapter import PdfPlumberAdapter
from decree30.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF extractor selected by ``pdf_engine``.

    The ``inline`` engine means PDFs are sent to the AI provider as files,
    so no extractor is created.
    """

    INLINE = "inline"

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor | None:
        engine = settings.pdf_engine.lower()
        if engine == cls.INLINE:
            return None
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. "
                f"Choose from: {[cls.INLINE, *cls.ADAPTERS]}"
            )
        return adapter_cls()
