import pytest

from twillio_mock.config import Settings
from twillio_mock.logging_utils import uvicorn_log_level


@pytest.mark.parametrize(
    "env_value, expected",
    [("info", "INFO"), ("WARN", "WARNING"), ("fatal", "CRITICAL"), (" debug ", "DEBUG")],
)
def test_log_level_is_normalized(monkeypatch, env_value, expected):
    monkeypatch.setenv("LOG_LEVEL", env_value)

    assert Settings().LOG_LEVEL == expected


def test_unknown_log_level_rejected(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    with pytest.raises(ValueError, match="Unknown LOG_LEVEL"):
        Settings()


@pytest.mark.parametrize(
    "level, expected",
    [("WARNING", "warning"), ("CRITICAL", "critical"), ("DEBUG", "debug"), ("NOTSET", "info")],
)
def test_uvicorn_log_level(level, expected):
    assert uvicorn_log_level(level) == expected


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "4040")
    monkeypatch.setenv("ENABLE_CORS", "false")
    monkeypatch.setenv("TWILIO_ACCOUNT_SID", "ACenv")

    settings = Settings()

    assert settings.PORT == 4040
    assert settings.ENABLE_CORS is False
    assert settings.ACCOUNT_SID == "ACenv"
