"""Validates the decoded AI response against the declared response schema."""

from typing import Any

from decree30.correction.exceptions import SchemaError
from decree30.correction.models import (
    Body,
    CorrectionRecord,
    CorrectionResult,
    Footer,
    Header,
    StructuredDocument,
)

MISSING_STRUCTURED_DATA = "Phản hồi từ AI thiếu dữ liệu cấu trúc."

_RECORD_FIELDS = (
    ("section", "section"),
    ("originalText", "original_text"),
    ("correctedText", "corrected_text"),
    ("reason", "reason"),
)


def validate_and_build(data: dict[str, Any]) -> CorrectionResult:
    """Validate the decoded response and build a CorrectionResult.

    Only structure is checked; free-text content is accepted as is.

    Raises:
        SchemaError: on any validation failure.
    """
    if not data.get("formattedDocument") or not data.get("structuredDocument"):
        raise SchemaError(MISSING_STRUCTURED_DATA)
    formatted_document = data["formattedDocument"]
    if not isinstance(formatted_document, str):
        raise SchemaError("'formattedDocument' must be a string")

    return CorrectionResult(
        formatted_document=formatted_document,
        structured_document=_build_document(data["structuredDocument"]),
        corrections=_build_corrections(data.get("corrections")),
        summary=_build_summary(data.get("summary")),
    )


def _build_document(raw: Any) -> StructuredDocument:
    if not isinstance(raw, dict):
        raise SchemaError("'structuredDocument' must be an object")
    return StructuredDocument(
        header=_build_header(_require_object(raw, "header")),
        body=_build_body(_require_object(raw, "body")),
        footer=_build_footer(_require_object(raw, "footer")),
    )


def _require_object(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key)
    if not isinstance(value, dict):
        raise SchemaError(f"'structuredDocument.{key}' must be an object")
    return value


def _build_header(raw: dict[str, Any]) -> Header:
    for key in ("nationalName", "motto"):
        if key not in raw:
            raise SchemaError(f"Missing required field: header.{key}")
    return Header(
        agency_name=_optional_str(raw, "agencyName", "header"),
        agency_number=_optional_str(raw, "agencyNumber", "header"),
        national_name=_optional_str(raw, "nationalName", "header"),
        motto=_optional_str(raw, "motto", "header"),
        date=_optional_str(raw, "date", "header"),
    )


def _build_body(raw: dict[str, Any]) -> Body:
    title = raw.get("title")
    if not isinstance(title, str):
        raise SchemaError("'body.title' must be a string")
    paragraphs = raw.get("paragraphs")
    if not isinstance(paragraphs, list):
        raise SchemaError("'body.paragraphs' must be a list")
    return Body(title=title, paragraphs=_string_tuple(paragraphs, "body.paragraphs"))


def _build_footer(raw: dict[str, Any]) -> Footer:
    recipients = raw.get("recipients")
    if recipients is not None:
        if not isinstance(recipients, list):
            raise SchemaError("'footer.recipients' must be a list or null")
        recipients = _string_tuple(recipients, "footer.recipients")
    return Footer(
        recipients=recipients,
        signer_title=_optional_str(raw, "signerTitle", "footer"),
        signer_name=_optional_str(raw, "signerName", "footer"),
    )


def _build_corrections(raw: Any) -> tuple[CorrectionRecord, ...]:
    if not isinstance(raw, list):
        raise SchemaError("'corrections' must be a list")
    records: list[CorrectionRecord] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise SchemaError(f"Correction at index {index} must be an object")
        values: dict[str, str] = {}
        for key, attr in _RECORD_FIELDS:
            value = item.get(key)
            if not isinstance(value, str):
                raise SchemaError(
                    f"Correction at index {index}: '{key}' must be a string"
                )
            values[attr] = value
        records.append(CorrectionRecord(**values))
    return tuple(records)


def _build_summary(raw: Any) -> str:
    if not isinstance(raw, str):
        raise SchemaError("'summary' must be a string")
    return raw


def _optional_str(raw: dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaError(f"'{where}.{key}' must be a string or null")
    return value


def _string_tuple(items: list[Any], where: str) -> tuple[str, ...]:
    for index, item in enumerate(items):
        if not isinstance(item, str):
            raise SchemaError(f"'{where}[{index}]' must be a string")
    return tuple(items)
