from dataclasses import dataclass, field


@dataclass(frozen=True)
class Header:
    """Letterhead fields. Blank values are defaulted by the renderer."""

    agency_name: str = ""
    agency_number: str = ""
    national_name: str = ""
    motto: str = ""
    date: str = ""


@dataclass(frozen=True)
class Body:
    """Document title and its paragraphs in source order."""

    title: str
    paragraphs: tuple[str, ...] = ()


@dataclass(frozen=True)
class Footer:
    """Recipients block and signature block.

    ``recipients`` is None when the AI response carried no recipients list.
    """

    recipients: tuple[str, ...] | None = None
    signer_title: str = ""
    signer_name: str = ""


@dataclass(frozen=True)
class StructuredDocument:
    """Corrected administrative document split into header, body and footer."""

    header: Header
    body: Body
    footer: Footer = field(default_factory=Footer)


@dataclass(frozen=True)
class CorrectionRecord:
    """One entry of the correction ledger."""

    section: str
    original_text: str
    corrected_text: str
    reason: str


@dataclass(frozen=True)
class CorrectionResult:
    """Output of one successful correction call."""

    formatted_document: str
    structured_document: StructuredDocument
    corrections: tuple[CorrectionRecord, ...] = ()
    summary: str = ""
