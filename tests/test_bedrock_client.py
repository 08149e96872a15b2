"""Bedrock istemcisi unit testleri."""

import json
from io import BytesIO
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from profit_dashboard.services.bedrock_client import (
    AIResponseFormatError,
    AIServiceError,
    BedrockClient,
    parse_json_response,
)


def _response(text: str) -> dict:
    body = {"output": {"message": {"content": [{"text": text}]}}}
    return {"body": BytesIO(json.dumps(body).encode("utf-8"))}


def _create_client(runtime: MagicMock = None) -> BedrockClient:
    return BedrockClient(model_id="test-model", bedrock_runtime_client=runtime or MagicMock())


class TestInvoke:
    """Model çağrısı."""

    def test_returns_text(self):
        runtime = MagicMock()
        runtime.invoke_model.return_value = _response("Merhaba")
        assert _create_client(runtime).invoke("selam") == "Merhaba"

    def test_request_body(self):
        runtime = MagicMock()
        runtime.invoke_model.return_value = _response("ok")
        _create_client(runtime).invoke("prompt text", max_tokens=123, temperature=0.1)

        kwargs = runtime.invoke_model.call_args.kwargs
        assert kwargs["modelId"] == "test-model"
        body = json.loads(kwargs["body"])
        assert body["messages"][0]["content"][0]["text"] == "prompt text"
        assert body["inferenceConfig"] == {"max_new_tokens": 123, "temperature": 0.1}

    def test_client_error_wrapped(self):
        runtime = MagicMock()
        runtime.invoke_model.side_effect = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "slow down"}}, "InvokeModel"
        )
        with pytest.raises(AIServiceError, match="AI servisiyle"):
            _create_client(runtime).invoke("x")

    def test_unreadable_body(self):
        """Çözümlenemeyen yanıt gövdesi AIServiceError olarak iletilir."""
        runtime = MagicMock()
        runtime.invoke_model.return_value = {"body": BytesIO(b"<html>gateway error</html>")}
        with pytest.raises(AIServiceError, match="okunamayan"):
            _create_client(runtime).invoke("x")

    def test_empty_content(self):
        runtime = MagicMock()
        body = {"output": {"message": {"content": []}}}
        runtime.invoke_model.return_value = {"body": BytesIO(json.dumps(body).encode("utf-8"))}
        with pytest.raises(AIResponseFormatError, match="boş"):
            _create_client(runtime).invoke("x")

    def test_missing_output(self):
        runtime = MagicMock()
        runtime.invoke_model.return_value = {"body": BytesIO(b"[]")}
        with pytest.raises(AIServiceError):
            _create_client(runtime).invoke("x")

    def test_invoke_json(self):
        runtime = MagicMock()
        runtime.invoke_model.return_value = _response('```json\n{"a": 1}\n```')
        assert _create_client(runtime).invoke_json("x") == {"a": 1}


class TestStream:
    """Akış modunda çağrı."""

    def test_yields_text_chunks(self):
        def event(text):
            payload = {"contentBlockDelta": {"delta": {"text": text}}}
            return {"chunk": {"bytes": json.dumps(payload).encode("utf-8")}}

        runtime = MagicMock()
        runtime.invoke_model_with_response_stream.return_value = {
            "body": [event("Bu "), {"chunk": {"bytes": b'{"messageStop": {}}'}}, event("hafta"), {}]
        }
        assert list(_create_client(runtime).stream("x")) == ["Bu ", "hafta"]

    def test_unreadable_chunk(self):
        runtime = MagicMock()
        runtime.invoke_model_with_response_stream.return_value = {"body": [{"chunk": {"bytes": b"{broken"}}]}
        with pytest.raises(AIServiceError):
            list(_create_client(runtime).stream("x"))

    def test_stream_error_wrapped(self):
        runtime = MagicMock()
        runtime.invoke_model_with_response_stream.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "no"}}, "InvokeModelWithResponseStream"
        )
        with pytest.raises(AIServiceError):
            list(_create_client(runtime).stream("x"))


class TestParseJson:
    """Model yanıtındaki JSON'un çözümlenmesi."""

    def test_plain(self):
        assert parse_json_response('{"checklist": []}') == {"checklist": []}

    def test_fenced(self):
        assert parse_json_response('```json\n{"x": [1, 2]}\n```') == {"x": [1, 2]}
        assert parse_json_response('```\n{"x": 1}\n```') == {"x": 1}

    def test_invalid(self):
        with pytest.raises(AIResponseFormatError):
            parse_json_response("Sorry, I cannot help with that.")

    def test_format_error_is_service_error(self):
        assert issubclass(AIResponseFormatError, AIServiceError)
