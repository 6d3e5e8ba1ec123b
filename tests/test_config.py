import pytest
from pydantic import ValidationError

from core.config import Settings
from core.presets import DEFAULT_GATEWAY_URL, DEFAULT_MODEL


def test_defaults_from_empty_env():
    s = Settings.from_env({})
    assert s.api_key is None
    assert s.gateway_url == DEFAULT_GATEWAY_URL
    assert s.model == DEFAULT_MODEL


def test_primary_key_wins_over_fallback():
    s = Settings.from_env({"PROPERTYIQ_API_KEY": "a", "LOVABLE_API_KEY": "b"})
    assert s.api_key == "a"
    assert Settings.from_env({"PROPERTYIQ_API_KEY": "", "LOVABLE_API_KEY": "b"}).api_key == "b"


def test_overrides_and_timeout_coercion():
    s = Settings.from_env(
        {
            "PROPERTYIQ_GATEWAY_URL": "http://localhost:9000/chat",
            "PROPERTYIQ_MODEL": "local/model",
            "PROPERTYIQ_TIMEOUT": "12.5",
        }
    )
    assert s.gateway_url == "http://localhost:9000/chat"
    assert s.model == "local/model"
    assert s.timeout == 12.5


def test_invalid_timeout_rejected():
    with pytest.raises(ValidationError):
        Settings.from_env({"PROPERTYIQ_TIMEOUT": "0"})


def test_api_key_hidden_from_repr():
    assert "secret" not in repr(Settings(api_key="secret"))
