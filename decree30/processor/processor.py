from collections.abc import Callable

from decree30.config.settings import Settings
from decree30.correction.base import BaseCorrector
from decree30.correction.factory import CorrectorFactory
from decree30.correction.models import CorrectionResult
from decree30.ingestion.file_loader import FileLoader
from decree30.ingestion.models import SourceFile
from decree30.logging.logger import Log
from decree30.pdf.factory import PdfExtractorFactory


class Processor:
    """Runs one submission: ingest -> correct.

    The corrector is created per call so the credential is looked up when the
    call is made, and a missing key is reported before any network traffic.
    """

    def __init__(
        self,
        file_loader: FileLoader,
        corrector_factory: Callable[[], BaseCorrector],
    ) -> None:
        self._file_loader = file_loader
        self._corrector_factory = corrector_factory

    def process(self, source: SourceFile) -> CorrectionResult:
        """Correct one uploaded file.

        Raises:
            IngestionError: if the file cannot be read or is a legacy format.
            CorrectionError: on missing credential, provider or schema failure.
        """
        Log.info(f"Processing {source.name} ({source.size_bytes} bytes)")

        # Step 1: Ingest
        payload = self._file_loader.load(source)

        # Step 2: Correct
        corrector = self._corrector_factory()
        result = corrector.correct(payload)

        Log.info(
            f"Processed {source.name}: {len(result.corrections)} corrections"
        )
        return result


def build_processor(settings: Settings) -> Processor:
    """Build a Processor wired from application settings."""
    file_loader = FileLoader(pdf_extractor=PdfExtractorFactory.create(settings))
    return Processor(
        file_loader=file_loader,
        corrector_factory=lambda: CorrectorFactory.create(
            settings, api_key=settings.api_key
        ),
    )
