import pytest

from taskjson.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    for name in ("HOST", "PORT", "MAX_INPUT_CHARS", "API_KEY"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert settings.max_input_chars == 200_000
    assert settings.api_key is None


def test_bind_address_from_environment(monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9001")
    settings = get_settings()
    assert settings.host == "0.0.0.0"
    assert settings.port == 9001


def test_settings_are_cached():
    assert get_settings() is get_settings()
