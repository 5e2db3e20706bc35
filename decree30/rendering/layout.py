"""Layout fields shared by every projection of a StructuredDocument.

Both the export document and the on-screen preview read their text from
``resolve_layout`` so default substitution, ordering and the recipients rule
exist in exactly one place.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from decree30.correction.models import StructuredDocument

RECIPIENTS_LABEL = "Nơi nhận:"
RECIPIENT_PREFIX = "- "
DECORATIVE_RULE = "________________________"

FIELD_DEFAULTS: Mapping[str, str] = MappingProxyType({
    "agency_name": "TÊN CƠ QUAN",
    "agency_number": "Số: ...",
    "national_name": "CỘNG HÒA XÃ HỘI CHỦ NGHĨA VIỆT NAM",
    "motto": "Độc lập - Tự do - Hạnh phúc",
    "date": "..., ngày ... tháng ... năm ...",
    "signer_title": "THỦ TRƯỞNG CƠ QUAN",
    "signer_name": "",
})


@dataclass(frozen=True)
class DocumentLayout:
    """Display-ready values, defaults already applied."""

    agency_name: str
    agency_number: str
    national_name: str
    motto: str
    date: str
    title: str
    paragraphs: tuple[str, ...]
    recipients: tuple[str, ...] | None
    signer_title: str
    signer_name: str

    @property
    def recipient_lines(self) -> tuple[str, ...]:
        """Bulleted recipient lines, empty when the block is omitted."""
        if self.recipients is None:
            return ()
        return tuple(f"{RECIPIENT_PREFIX}{r}" for r in self.recipients)


def with_default(field_name: str, value: str | None) -> str:
    """Return ``value`` unless it is blank, else the field's default."""
    if value is None or not value.strip():
        return FIELD_DEFAULTS[field_name]
    return value


def resolve_layout(document: StructuredDocument) -> DocumentLayout:
    header, body, footer = document.header, document.body, document.footer
    return DocumentLayout(
        agency_name=with_default("agency_name", header.agency_name),
        agency_number=with_default("agency_number", header.agency_number),
        national_name=with_default("national_name", header.national_name),
        motto=with_default("motto", header.motto),
        date=with_default("date", header.date),
        title=body.title,
        paragraphs=tuple(body.paragraphs),
        # an empty list is treated like a missing one
        recipients=tuple(footer.recipients) if footer.recipients else None,
        signer_title=with_default("signer_title", footer.signer_title),
        signer_name=with_default("signer_name", footer.signer_name),
    )
