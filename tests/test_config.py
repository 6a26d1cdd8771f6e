import pytest
from pydantic import ValidationError

from scoresaber.core.config import Settings


def test_defaults_match_service_limits() -> None:
    settings = Settings(_env_file=None)

    assert settings.base_url == "https://scoresaber.com/api/"
    assert settings.rate_limit_window_requests == 400
    assert settings.rate_limit_window_seconds == 61
    assert settings.rate_limit_reserve == 10
    assert settings.rate_limit_reset_header == "x-ratelimit-reset"
    assert settings.retry_max_retries == 3


def test_reads_prefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("SCORESABER_RATE_LIMIT_RESERVE", "25")
    monkeypatch.setenv("SCORESABER_LOG_FORMAT", "JSON")

    settings = Settings(_env_file=None)
    assert settings.rate_limit_reserve == 25
    assert settings.log_format == "json"


def test_ignores_unprefixed_environment(monkeypatch) -> None:
    monkeypatch.setenv("RATE_LIMIT_RESERVE", "25")

    settings = Settings(_env_file=None)
    assert settings.rate_limit_reserve == 10


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://scoresaber.com/api/", "https://scoresaber.com/api/"),
        ("https://scoresaber.com/api", "https://scoresaber.com/api/"),
        ("  http://localhost:8080/api  ", "http://localhost:8080/api/"),
    ],
)
def test_base_url_gets_trailing_slash(monkeypatch, raw: str, expected: str) -> None:
    monkeypatch.setenv("SCORESABER_BASE_URL", raw)

    settings = Settings(_env_file=None)
    assert settings.base_url == expected


@pytest.mark.parametrize(
    ("env", "value"),
    [
        ("SCORESABER_RATE_LIMIT_WINDOW_REQUESTS", "0"),
        ("SCORESABER_RATE_LIMIT_RESERVE", "-1"),
        ("SCORESABER_RATE_LIMIT_RESERVE", "400"),
        ("SCORESABER_HTTPX_READ_TIMEOUT", "0"),
        ("SCORESABER_LOG_FORMAT", "xml"),
        ("SCORESABER_BASE_URL", " "),
    ],
)
def test_rejects_invalid_values(monkeypatch, env: str, value: str) -> None:
    monkeypatch.setenv(env, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
