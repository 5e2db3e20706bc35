class IngestionError(Exception):
    """Raised when an uploaded file cannot be turned into a payload."""


class LegacyFormatError(IngestionError):
    """Raised for legacy binary Word files (.doc) that must be converted first."""


class UnreadableDocumentError(IngestionError):
    """Raised when the content of an uploaded file cannot be read."""
