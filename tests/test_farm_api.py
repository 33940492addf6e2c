"""Tests for core.farm_api module."""

import json

import httpx
import pytest

from core.config import AppConfig
from core.farm_api import (
    AnalysisRecord,
    FarmApiClient,
    FarmApiError,
    create_farm_api_client,
)

PROFILE = "http://farm.test/api/auth"
PREDICT = "http://farm.test/api"


def _client(handler, token="secret") -> FarmApiClient:
    return FarmApiClient(PROFILE, PREDICT, token=token, transport=httpx.MockTransport(handler))


class TestListAnalyses:
    def test_records_in_order(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=[
                {"_id": "a1", "irrigation_needed": False, "fertilization_needed": True},
                {"_id": "a2", "irrigation_needed": True},
            ])

        records = _client(handler).list_analyses()

        assert seen["url"] == PROFILE + "/profile/analysis"
        assert seen["auth"] == "Bearer secret"
        assert [r.id for r in records] == ["a1", "a2"]
        assert records[0].fertilization_needed is True
        assert records[1].fertilization_needed is False

    def test_no_token_no_header(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=[])

        assert _client(handler, token="").list_analyses() == []
        assert seen["auth"] is None

    def test_non_list_payload(self):
        with pytest.raises(FarmApiError):
            _client(lambda request: httpx.Response(200, json={"records": []})).list_analyses()

    def test_unauthorized(self):
        with pytest.raises(FarmApiError):
            _client(lambda request: httpx.Response(401, json={"message": "no"})).list_analyses()

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(FarmApiError):
            _client(handler).list_analyses()


class TestAnalysisRecord:
    def test_plain_id_accepted(self):
        assert AnalysisRecord.from_json({"id": 7}).id == "7"

    def test_missing_id(self):
        with pytest.raises(FarmApiError):
            AnalysisRecord.from_json({"irrigation_needed": True})


class TestUpdateAnalysis:
    def test_put_clears_flag(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True})

        _client(handler).update_analysis("a2", "irrigation_needed")

        assert seen["method"] == "PUT"
        assert seen["url"] == PROFILE + "/profile/analysis/a2"
        assert seen["body"] == {"irrigation_needed": False}

    def test_empty_response_body(self):
        _client(lambda request: httpx.Response(204)).update_analysis("a2", "fertilization_needed")

    def test_unknown_flag(self):
        with pytest.raises(ValueError):
            _client(lambda request: httpx.Response(200)).update_analysis("a2", "harvest_needed")


class TestPredictions:
    def test_yield(self):
        def handler(request):
            assert str(request.url) == PREDICT + "/predict-yield"
            return httpx.Response(200, json={"data": {
                "predictedYield": 4.2, "unit": "tons/hectare", "confidence": 0.8,
                "factors": ["rainfall", "soil"],
            }})

        prediction = _client(handler).predict_yield({"crop": "wheat"})
        assert prediction.predicted_yield == 4.2
        assert prediction.unit == "tons/hectare"
        assert prediction.factors == ["rainfall", "soil"]

    def test_market(self):
        def handler(request):
            assert str(request.url) == PREDICT + "/predict-market"
            return httpx.Response(200, json={"data": {
                "predictedPrice": 2150, "currency": "INR", "perUnit": "quintal",
                "trend": "rising", "suggestedAction": "Hold for two weeks",
            }})

        prediction = _client(handler).predict_market()
        assert prediction.predicted_price == 2150.0
        assert prediction.trend == "rising"

    def test_missing_data_block(self):
        with pytest.raises(FarmApiError):
            _client(lambda request: httpx.Response(200, json={"ok": True})).predict_yield()

    def test_malformed_data(self):
        with pytest.raises(FarmApiError):
            _client(lambda request: httpx.Response(200, json={"data": {"unit": "t"}})).predict_yield()


class TestFactory:
    def test_uses_config(self):
        seen = {}
        config = AppConfig(profile_api_url="http://x.test/auth/", api_token="tok")
        client = create_farm_api_client(config)
        client._transport = httpx.MockTransport(
            lambda request: seen.update(url=str(request.url)) or httpx.Response(200, json=[])
        )
        client.list_analyses()
        assert seen["url"] == "http://x.test/auth/profile/analysis"
