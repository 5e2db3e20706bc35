COMMUNICATION_ERROR_PREFIX = "Đã xảy ra lỗi khi giao tiếp với AI"


class CorrectionError(Exception):
    """Raised when the correction call fails."""


class MissingCredentialError(CorrectionError):
    """Raised before any network call when no API key is configured."""


class CorrectionNetworkError(CorrectionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class SchemaError(CorrectionError):
    """Raised when the AI response does not match the declared response schema."""


def communication_error_message(detail: object) -> str:
    """User-facing message wrapping an underlying provider failure."""
    return f"{COMMUNICATION_ERROR_PREFIX}: {detail}"
