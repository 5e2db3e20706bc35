"""AI-powered Decree 30 document corrector."""

import json
from pathlib import Path

from decree30.correction.base import BaseCorrector
from decree30.correction.client_base import BaseCorrectionClient
from decree30.correction.exceptions import CorrectionError, communication_error_message
from decree30.correction.models import CorrectionResult
from decree30.correction.prompt_loader import load_json_schema, load_prompt_template
from decree30.correction.validator import validate_and_build
from decree30.ingestion.models import UploadedFilePayload
from decree30.logging.logger import Log


class Corrector(BaseCorrector):
    """Sends one document to an AI provider and validates the structured reply."""

    def __init__(
        self,
        *,
        client: BaseCorrectionClient,
        model: str,
        temperature: float = 0.2,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    def correct(self, document: UploadedFilePayload) -> CorrectionResult:
        """Run one correction call for ``document``."""
        prompt = self._build_prompt()
        Log.debug(f"Correction prompt:\n{prompt}")
        Log.info(
            f"Sending {document.name} ({document.mime_type}, "
            f"{document.size_bytes} bytes) to model {self._model}"
        )

        raw_response = self._call_ai(prompt, document)
        Log.debug(f"AI raw response:\n{raw_response}")

        parsed = self._parse_json(raw_response)
        result = validate_and_build(parsed)

        Log.info(
            f"Correction complete: {len(result.structured_document.body.paragraphs)} "
            f"paragraphs, {len(result.corrections)} corrections"
        )
        return result

    def _build_prompt(self) -> str:
        return self._prompt_template.format(json_schema=self._json_schema)

    def _call_ai(self, prompt: str, document: UploadedFilePayload) -> str:
        return self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            prompt=prompt,
            document=document,
            json_schema=self._json_schema_dict,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise CorrectionError(
                communication_error_message(f"Invalid JSON response: {exc}")
            ) from exc

        if not isinstance(parsed, dict):
            raise CorrectionError(
                communication_error_message("JSON response must be an object")
            )
        return parsed
