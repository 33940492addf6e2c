"""Tests for core.inference_client module."""

import httpx
import pytest

from core.config import AppConfig
from core.inference_client import (
    DemoInferenceClient,
    InferenceClient,
    InferenceError,
    create_inference_client,
    parse_analysis_payload,
)
from core.utils import InferenceErrorReason

URL = "http://inference.test/predict/leaf-disease"


def _client(handler) -> InferenceClient:
    return InferenceClient(url=URL, timeout=5.0, transport=httpx.MockTransport(handler))


class TestAnalyze:
    def test_success(self, sample_asset, service_payload):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = request.read()
            return httpx.Response(200, json=service_payload)

        result = _client(handler).analyze(sample_asset)

        assert seen["method"] == "POST"
        assert seen["url"] == URL
        assert b'name="image"' in seen["body"]
        assert sample_asset.data in seen["body"]
        assert result.disease == "Apple_Black_rot"
        assert result.confidence == 0.92
        assert result.display_name == "Apple Black rot"
        assert result.confidence_percent == "92%"
        assert result.symptoms == "Circular lesions on leaves."

    def test_timeout(self, sample_asset):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(InferenceError) as exc_info:
            _client(handler).analyze(sample_asset)
        assert exc_info.value.reason == InferenceErrorReason.TIMEOUT

    def test_connection_error(self, sample_asset):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(InferenceError) as exc_info:
            _client(handler).analyze(sample_asset)
        assert exc_info.value.reason == InferenceErrorReason.TRANSPORT

    @pytest.mark.parametrize("status", [400, 413, 500, 503])
    def test_error_status(self, sample_asset, status):
        with pytest.raises(InferenceError) as exc_info:
            _client(lambda request: httpx.Response(status, json={"error": "nope"})).analyze(sample_asset)
        assert exc_info.value.reason == InferenceErrorReason.SERVER_REJECTED

    def test_invalid_json(self, sample_asset):
        with pytest.raises(InferenceError) as exc_info:
            _client(lambda request: httpx.Response(200, content=b"<html>")).analyze(sample_asset)
        assert exc_info.value.reason == InferenceErrorReason.SERVER_REJECTED

    def test_error_message_is_localized(self, sample_asset):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(InferenceError) as exc_info:
            _client(handler).analyze(sample_asset)
        assert exc_info.value.message != "inference.error_timeout"
        assert "time" in exc_info.value.message.lower()


class TestParsePayload:
    def test_missing_information_block(self):
        result = parse_analysis_payload({"disease": "Tomato_healthy", "confidence": 1})
        assert result.confidence == 1.0
        assert result.description == ""
        assert result.recommendations == ""

    @pytest.mark.parametrize("payload", [
        [],
        {"confidence": 0.5},
        {"disease": "", "confidence": 0.5},
        {"disease": "X", "confidence": "high"},
        {"disease": "X", "confidence": True},
        {"disease": "X", "confidence": 1.5},
        {"disease": "X", "confidence": -0.1},
        {"disease": "X", "confidence": 0.5, "information": "text"},
    ])
    def test_malformed(self, payload):
        with pytest.raises(InferenceError) as exc_info:
            parse_analysis_payload(payload)
        assert exc_info.value.reason == InferenceErrorReason.SERVER_REJECTED


class TestDemoClient:
    def test_fixed_diagnosis(self, sample_asset):
        result = DemoInferenceClient(delay_s=0).analyze(sample_asset)
        assert result.disease == "Apple_Black_rot"
        assert result.confidence_percent == "92%"
        assert result.treatment


class TestFactory:
    def test_demo_when_no_url(self):
        assert isinstance(create_inference_client(AppConfig()), DemoInferenceClient)

    def test_real_client_when_configured(self):
        client = create_inference_client(AppConfig(inference_url=URL))
        assert isinstance(client, InferenceClient)
