"""Tests for the Corrector (AI-powered Decree 30 correction)."""

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from decree30.correction.exceptions import CorrectionError, SchemaError
from decree30.correction.corrector import Corrector
from decree30.ingestion.models import UploadedFilePayload


def _payload() -> UploadedFilePayload:
    return UploadedFilePayload(
        name="qd.pdf",
        mime_type="application/pdf",
        size_bytes=4,
        base64_content="JVBERg==",
    )


def _make_corrector(client: MagicMock, temperature: float = 0.2) -> Corrector:
    return Corrector(client=client, model="test-model", temperature=temperature)


def _client_returning(content: str) -> MagicMock:
    client = MagicMock()
    client.create_completion.return_value = content
    return client


class TestCorrectSuccess:
    def test_returns_result(self, valid_response: dict[str, Any]) -> None:
        client = _client_returning(json.dumps(valid_response))
        result = _make_corrector(client).correct(_payload())
        assert result.structured_document.body.title == "QUYẾT ĐỊNH"
        assert len(result.corrections) == 1

    def test_sends_document_payload(self, valid_response: dict[str, Any]) -> None:
        client = _client_returning(json.dumps(valid_response))
        payload = _payload()
        _make_corrector(client).correct(payload)
        assert client.create_completion.call_args.kwargs["document"] is payload

    def test_prompt_embeds_schema(self, valid_response: dict[str, Any]) -> None:
        client = _client_returning(json.dumps(valid_response))
        _make_corrector(client).correct(_payload())
        prompt = client.create_completion.call_args.kwargs["prompt"]
        assert "Nghị định 30/2020/NĐ-CP" in prompt
        assert '"structuredDocument"' in prompt
        assert "{json_schema}" not in prompt

    def test_passes_schema_dict(self, valid_response: dict[str, Any]) -> None:
        client = _client_returning(json.dumps(valid_response))
        _make_corrector(client).correct(_payload())
        schema = client.create_completion.call_args.kwargs["json_schema"]
        assert "structuredDocument" in schema["properties"]

    def test_calls_ai_with_model(self, valid_response: dict[str, Any]) -> None:
        client = _client_returning(json.dumps(valid_response))
        _make_corrector(client).correct(_payload())
        assert client.create_completion.call_args.kwargs["model"] == "test-model"

    def test_passes_configured_temperature(self, valid_response: dict[str, Any]) -> None:
        client = _client_returning(json.dumps(valid_response))
        _make_corrector(client, temperature=0.1).correct(_payload())
        assert client.create_completion.call_args.kwargs["temperature"] == 0.1


class TestJsonParsing:
    def test_strips_markdown_code_fences(self, valid_response: dict[str, Any]) -> None:
        content = "```json\n" + json.dumps(valid_response) + "\n```"
        result = _make_corrector(_client_returning(content)).correct(_payload())
        assert result.summary == "tóm tắt X"

    def test_invalid_json_is_communication_error(self) -> None:
        corrector = _make_corrector(_client_returning("not valid json"))
        with pytest.raises(CorrectionError, match="giao tiếp với AI: Invalid JSON"):
            corrector.correct(_payload())

    def test_json_array_raises_error(self) -> None:
        corrector = _make_corrector(_client_returning("[]"))
        with pytest.raises(CorrectionError, match="must be an object"):
            corrector.correct(_payload())

    def test_missing_structured_document_raises_schema_error(
        self, valid_response: dict[str, Any]
    ) -> None:
        del valid_response["structuredDocument"]
        corrector = _make_corrector(_client_returning(json.dumps(valid_response)))
        with pytest.raises(SchemaError, match="thiếu dữ liệu cấu trúc"):
            corrector.correct(_payload())


class TestClientErrors:
    def test_propagates_client_errors(self) -> None:
        client = MagicMock()
        client.create_completion.side_effect = CorrectionError("boom")
        with pytest.raises(CorrectionError, match="boom"):
            _make_corrector(client).correct(_payload())
