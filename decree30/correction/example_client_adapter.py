"""Offline correction client adapter.

Returns a fixed, schema-valid reply without any network call. Used by the
``example`` provider for local development and tests, and as a template for
new provider adapters (implement BaseCorrectionClient and register the
provider in CorrectorFactory).
"""

import json
from typing import ClassVar

from decree30.correction.client_base import BaseCorrectionClient
from decree30.ingestion.models import UploadedFilePayload


class ExampleClientAdapter(BaseCorrectionClient):
    """Adapter that always returns DEFAULT_RESPONSE."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "formattedDocument": "QUYẾT ĐỊNH\nVề việc ban hành quy chế làm việc",
        "structuredDocument": {
            "header": {
                "agencyName": "ỦY BAN NHÂN DÂN\nTỈNH LÀO CAI",
                "agencyNumber": "Số: 12/QĐ-UBND",
                "nationalName": "CỘNG HÒA XÃ HỘI CHỦ NGHĨA VIỆT NAM",
                "motto": "Độc lập - Tự do - Hạnh phúc",
                "date": "Lào Cai, ngày 10 tháng 01 năm 2024",
            },
            "body": {
                "title": "QUYẾT ĐỊNH\nVề việc ban hành quy chế làm việc",
                "paragraphs": [
                    "Ban hành kèm theo Quyết định này Quy chế làm việc của cơ quan.",
                    "Quyết định này có hiệu lực kể từ ngày ký.",
                ],
            },
            "footer": {
                "recipients": ["Như Điều 2", "Lưu: VT"],
                "signerTitle": "CHỦ TỊCH",
                "signerName": "Nguyễn Văn A",
            },
        },
        "summary": "Đã sửa 1 lỗi chính tả.",
        "corrections": [
            {
                "section": "Nội dung",
                "originalText": "hiệu lục",
                "correctedText": "hiệu lực",
                "reason": "Sai chính tả",
            },
        ],
    }

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        document: UploadedFilePayload,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, prompt, document, json_schema
        return json.dumps(self.DEFAULT_RESPONSE, ensure_ascii=False)
