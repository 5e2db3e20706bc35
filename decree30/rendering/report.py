from collections.abc import Sequence

from decree30.correction.models import CorrectionRecord

REPORT_TITLE = "BÁO CÁO RÀ SOÁT VĂN BẢN (NGHỊ ĐỊNH 30)"
REPORT_RULE = "-" * 40
REPORT_SIGNATURE = "(Tạo bởi Trợ lý Soạn thảo Văn bản)"
REPORT_FILENAME = "Bao_cao_ra_soat.txt"


def format_correction(index: int, record: CorrectionRecord) -> str:
    """Two-line ledger entry, ``index`` is 1-based."""
    return (
        f'{index}. {record.section}: "{record.original_text}" -> "{record.corrected_text}"\n'
        f"   Lý do: {record.reason}"
    )


def render_report(summary: str, corrections: Sequence[CorrectionRecord]) -> str:
    """Plain-text review report for the clipboard or a .txt download."""
    entries = "\n".join(
        format_correction(i, record) for i, record in enumerate(corrections, start=1)
    )
    return "\n".join([
        REPORT_TITLE,
        REPORT_RULE,
        "TÓM TẮT:",
        summary,
        "",
        "CHI TIẾT CÁC LỖI ĐÃ SỬA:",
        entries,
        REPORT_RULE,
        REPORT_SIGNATURE,
    ])
