from abc import ABC, abstractmethod

from decree30.correction.models import CorrectionResult
from decree30.ingestion.models import UploadedFilePayload


class BaseCorrector(ABC):
    """Contract for all correction adapters."""

    @abstractmethod
    def correct(self, document: UploadedFilePayload) -> CorrectionResult:
        """Correct a document against the Decree 30 template.

        Args:
            document: Payload produced by the ingestion step.

        Returns:
            CorrectionResult with the structured document, ledger and summary.

        Raises:
            CorrectionError: on any failure.
        """
