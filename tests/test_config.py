"""Tests for core.config module."""

import pytest

from core.config import AppConfig, load_config, save_config

ENV_VARS = (
    "FARMLENS_INFERENCE_URL",
    "FARMLENS_PROFILE_API_URL",
    "FARMLENS_PREDICTION_API_URL",
    "FARMLENS_API_TOKEN",
    "FARMLENS_REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_defaults(self, qsettings):
        config = load_config(qsettings)
        assert config == AppConfig()
        assert config.demo_mode is True
        assert config.request_timeout_s == 30.0

    def test_settings_override_defaults(self, qsettings):
        qsettings.setValue("services/inference_url", "http://infer.test/predict")
        qsettings.setValue("services/request_timeout", "12.5")
        config = load_config(qsettings)
        assert config.inference_url == "http://infer.test/predict"
        assert config.demo_mode is False
        assert config.request_timeout_s == 12.5

    def test_env_overrides_settings(self, qsettings, monkeypatch):
        qsettings.setValue("services/profile_api_url", "http://settings.test")
        monkeypatch.setenv("FARMLENS_PROFILE_API_URL", "http://env.test")
        monkeypatch.setenv("FARMLENS_API_TOKEN", "  tok  ")
        config = load_config(qsettings)
        assert config.profile_api_url == "http://env.test"
        assert config.api_token == "tok"

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_bad_timeout_falls_back(self, qsettings, monkeypatch, raw):
        monkeypatch.setenv("FARMLENS_REQUEST_TIMEOUT", raw)
        assert load_config(qsettings).request_timeout_s == 30.0


class TestSaveConfig:
    def test_roundtrip_through_settings(self, qsettings):
        config = AppConfig(
            inference_url="http://infer.test",
            profile_api_url="http://farm.test/auth",
            prediction_api_url="http://farm.test/api",
            api_token="tok",
            request_timeout_s=10.0,
        )
        save_config(config, qsettings)
        assert load_config(qsettings) == config
