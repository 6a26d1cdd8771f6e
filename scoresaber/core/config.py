from typing import Any

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    All settings can be configured via ``SCORESABER_*`` environment variables
    or a .env file.
    """

    # ScoreSaber API root, relative endpoint paths are appended to it
    base_url: str = "https://scoresaber.com/api/"

    # Rate limit window published by the service
    rate_limit_window_requests: int = 400
    rate_limit_window_seconds: int = 61  # 61 not 60, the first window is a guess
    rate_limit_reserve: int = 10  # Requests held back from the window budget
    rate_limit_reset_header: str = "x-ratelimit-reset"
    rate_limit_reset_grace: float = 0.5  # Refill this long after a reported reset
    rate_limit_wait_margin: float = 1.0  # Clock skew margin when waiting for a reset

    # Transport-level retry
    retry_max_retries: int = 3
    retry_base_delay: float = 0.5
    retry_max_delay: float = 10.0

    # HTTP Client connection pool settings
    httpx_connect_timeout: float = 10.0  # Time to establish connection
    httpx_read_timeout: float = 30.0  # Time to read response data
    httpx_write_timeout: float = 10.0  # Time to send request data
    httpx_pool_timeout: float = 5.0  # Time to acquire connection from pool
    httpx_keepalive_expiry: float = 30.0
    httpx_max_connections: int = 100
    httpx_max_keepalive_connections: int = 20

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "text"  # text | structured | json

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """Ensure the base URL ends with a slash so paths can be appended."""
        v = v.strip()
        if not v:
            raise ValueError("base_url must not be empty")
        return v if v.endswith("/") else v + "/"

    @field_validator(
        "rate_limit_window_requests",
        "rate_limit_window_seconds",
        "httpx_max_connections",
        "httpx_max_keepalive_connections",
    )
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate window and pool sizes are positive."""
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @field_validator("rate_limit_reserve", "retry_max_retries")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must not be negative")
        return v

    @field_validator(
        "httpx_connect_timeout",
        "httpx_read_timeout",
        "httpx_write_timeout",
        "httpx_pool_timeout",
    )
    @classmethod
    def validate_timeout_positive(cls, v: float) -> float:
        """Validate timeout values are positive."""
        if v <= 0:
            raise ValueError("Timeout values must be positive")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: Any) -> str:
        v = str(v).strip().lower()
        if v not in ("text", "structured", "json"):
            raise ValueError("log_format must be one of: text, structured, json")
        return v

    @model_validator(mode="after")
    def validate_reserve_below_window(self) -> "Settings":
        """The reserve must leave part of the window usable."""
        if self.rate_limit_reserve >= self.rate_limit_window_requests:
            raise ValueError(
                "rate_limit_reserve must be smaller than rate_limit_window_requests"
            )
        return self

    model_config = SettingsConfigDict(
        env_prefix="SCORESABER_", env_file=".env", extra="ignore"
    )


# Global settings instance
settings = Settings()
