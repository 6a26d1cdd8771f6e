"""Tests for the transport retry with exponential backoff."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from scoresaber.api.retry import RetryPolicy, with_retry


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://scoresaber.com/api/players?page=1")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=request, response=response)


class TestRetryPolicy:
    """Test RetryPolicy configuration."""

    def test_default_values(self):
        policy = RetryPolicy()

        assert policy.max_retries == 3
        assert policy.base_delay == 0.5
        assert policy.max_delay == 10.0
        assert policy.exponential_base == 2.0

    def test_from_settings(self):
        with patch("scoresaber.api.retry.settings") as mock_settings:
            mock_settings.retry_max_retries = 5
            mock_settings.retry_base_delay = 0.1
            mock_settings.retry_max_delay = 2.0

            policy = RetryPolicy.from_settings()

        assert policy.max_retries == 5
        assert policy.base_delay == 0.1
        assert policy.max_delay == 2.0

    def test_calculate_delay_capped_at_max(self):
        policy = RetryPolicy(base_delay=1.0, max_delay=5.0, exponential_base=2.0)

        assert policy.calculate_delay(0) == 1.0
        assert policy.calculate_delay(1) == 2.0
        assert policy.calculate_delay(2) == 4.0
        # 8.0 capped at 5.0
        assert policy.calculate_delay(3) == 5.0

    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (httpx.ConnectError("refused"), True),
            (httpx.ReadTimeout("slow"), True),
            (httpx.RemoteProtocolError("eof"), True),
            (_status_error(500), True),
            (_status_error(503), True),
            (_status_error(404), False),
            (_status_error(429), False),
            (ValueError("nope"), False),
        ],
    )
    def test_is_retryable(self, exc, expected):
        assert RetryPolicy().is_retryable(exc) is expected


class TestWithRetryDecorator:
    """Test with_retry decorator functionality."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self):
        mock_func = AsyncMock(return_value="ok")

        @with_retry()
        async def get():
            return await mock_func()

        assert await get() == "ok"
        assert mock_func.call_count == 1

    @pytest.mark.asyncio
    async def test_retries_network_error_then_succeeds(self):
        mock_func = AsyncMock(side_effect=[httpx.ConnectError("refused"), "ok"])

        @with_retry(RetryPolicy(base_delay=0))
        async def get():
            return await mock_func()

        assert await get() == "ok"
        assert mock_func.call_count == 2

    @pytest.mark.asyncio
    async def test_three_retries_then_raises(self):
        mock_func = AsyncMock(side_effect=_status_error(502))

        @with_retry(RetryPolicy(max_retries=3, base_delay=0))
        async def get():
            return await mock_func()

        with pytest.raises(httpx.HTTPStatusError):
            await get()

        # Initial attempt + 3 retries
        assert mock_func.call_count == 4

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self):
        mock_func = AsyncMock(side_effect=_status_error(404))

        @with_retry(RetryPolicy(max_retries=3, base_delay=0))
        async def get():
            return await mock_func()

        with pytest.raises(httpx.HTTPStatusError):
            await get()

        assert mock_func.call_count == 1

    @pytest.mark.asyncio
    async def test_exponential_backoff_delay(self):
        sleep_calls = []

        async def mock_sleep(duration):
            sleep_calls.append(duration)

        mock_func = AsyncMock(side_effect=[
            httpx.ReadError("Error 1"),
            httpx.ReadError("Error 2"),
            httpx.ReadError("Error 3"),
            "ok",
        ])

        with patch("asyncio.sleep", mock_sleep):
            @with_retry(RetryPolicy(base_delay=0.5, exponential_base=2.0, max_delay=10.0))
            async def get():
                return await mock_func()

            await get()

        assert sleep_calls == [0.5, 1.0, 2.0]

    def test_preserves_function_metadata(self):
        @with_retry()
        async def fetch_page():
            """Fetch a page."""

        assert fetch_page.__name__ == "fetch_page"
        assert fetch_page.__doc__ == "Fetch a page."
