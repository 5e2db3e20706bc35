from abc import ABC, abstractmethod

from decree30.ingestion.models import UploadedFilePayload


class BaseCorrectionClient(ABC):
    """Contract for provider-specific AI clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        document: UploadedFilePayload,
        json_schema: dict[str, object],
    ) -> str:
        """Send the document and the instruction prompt, return the raw reply text."""
