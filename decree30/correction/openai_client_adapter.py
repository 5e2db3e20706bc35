import base64

import httpx
import openai

from decree30.correction.client_base import BaseCorrectionClient
from decree30.correction.exceptions import (
    CorrectionError,
    CorrectionNetworkError,
    communication_error_message,
)
from decree30.ingestion.models import UploadedFilePayload


def document_content_part(document: UploadedFilePayload) -> dict[str, object]:
    """Build the chat content part carrying the uploaded document.

    Text payloads are decoded and sent inline, images as ``image_url`` and
    everything else (PDF) as a ``file`` part with a base64 data URL.
    """
    if document.mime_type.startswith("text/"):
        text = base64.b64decode(document.base64_content).decode("utf-8", errors="replace")
        return {"type": "text", "text": text}
    data_url = f"data:{document.mime_type};base64,{document.base64_content}"
    if document.mime_type.startswith("image/"):
        return {"type": "image_url", "image_url": {"url": data_url}}
    return {
        "type": "file",
        "file": {"filename": document.name, "file_data": data_url},
    }


class OpenAIClientAdapter(BaseCorrectionClient):
    """AI client adapter built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
        document: UploadedFilePayload,
        json_schema: dict[str, object],
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "decree30_correction",
                        "schema": json_schema,
                    },
                },
                messages=[
                    {
                        "role": "user",
                        "content": [
                            document_content_part(document),
                            {"type": "text", "text": prompt},
                        ],
                    },
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise CorrectionNetworkError(
                communication_error_message(f"network error: {exc}")
            ) from exc
        except openai.APIError as exc:
            raise CorrectionNetworkError(communication_error_message(exc)) from exc

        if not response.choices:
            raise CorrectionError(communication_error_message("AI returned no choices"))
        content = response.choices[0].message.content
        if content is None:
            raise CorrectionError(communication_error_message("AI returned empty response"))
        return content
