"""Rate-limit gate shared by every outbound request.

ScoreSaber allows a fixed number of requests per window and reports the
end of the current window in a response header. The gate keeps a local
count of the requests left, holds new requests back once only the reserve
is left, and refills the count when the reported window ends.

All state lives on one event loop. The budget check and the decrement of
a single dispatch happen without a suspension point in between, but
concurrent dispatches may all pass the check before any of them
completes, so a burst of fan-out requests can dip into the reserve.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

import httpx

from scoresaber.api.retry import RetryPolicy, with_retry
from scoresaber.core.config import settings
from scoresaber.core.http_client import create_http_client
from scoresaber.core.logging import get_log_context, get_logger
from scoresaber.exceptions import MissingRateLimitHeader, TransportError

logger = get_logger(__name__)

# Lower bound for one admission sleep once reset_at is already in the past
MIN_WAIT_SECONDS = 0.1


class RateLimitGate:
    """Paces requests against the ScoreSaber rate limit window.

    The gate owns the HTTP client it sends through unless one is injected.
    Use it as an async context manager, or call :meth:`aclose` when done.

    Args:
        base_url: API root the relative paths are appended to
        http_client: Optional HTTP client; the gate will not close it
        window_limit: Requests allowed per window
        window_seconds: Length assumed for the first window
        reserve: Requests held back before waiting for the next window
        reset_header: Response header carrying the window reset time
        retry_policy: Transport retry policy
        clock: Returns the current Unix time in seconds
        sleep: Coroutine function used to wait for the window to reset
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        window_limit: Optional[int] = None,
        window_seconds: Optional[int] = None,
        reserve: Optional[int] = None,
        reset_header: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        base_url = settings.base_url if base_url is None else base_url
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.window_limit = (
            settings.rate_limit_window_requests if window_limit is None else window_limit
        )
        self.window_seconds = (
            settings.rate_limit_window_seconds if window_seconds is None else window_seconds
        )
        self.reserve = settings.rate_limit_reserve if reserve is None else reserve
        self.reset_header = reset_header or settings.rate_limit_reset_header
        self.reset_grace = settings.rate_limit_reset_grace
        self.wait_margin = settings.rate_limit_wait_margin

        self._clock = clock
        self._sleep = sleep
        self._owns_client = http_client is None
        self._http_client = http_client if http_client is not None else create_http_client()
        self._get = with_retry(retry_policy or RetryPolicy.from_settings())(self._get_once)

        self._remaining = self.window_limit
        self._reset_at = 0
        self._window_open = False
        self._refill_handle: Optional[asyncio.TimerHandle] = None

    @property
    def remaining(self) -> int:
        """Requests left in the current window."""
        return self._remaining

    @property
    def reset_at(self) -> Optional[int]:
        """Unix time the current window ends, None before the first dispatch."""
        return self._reset_at if self._window_open else None

    @property
    def window_open(self) -> bool:
        return self._window_open

    async def dispatch(self, relative_path: str) -> Any:
        """Send a GET for ``relative_path`` once the budget allows it.

        Args:
            relative_path: Endpoint path including its query string

        Returns:
            The decoded JSON body, unvalidated

        Raises:
            TransportError: If the request fails after transport retries
            MissingRateLimitHeader: If the response has no usable reset header
        """
        self._open_window()
        await self._wait_for_budget()

        # No await between the budget check above and this decrement
        self._remaining -= 1
        url = self.base_url + relative_path
        logger.debug(
            f"Dispatching GET {relative_path}",
            extra=get_log_context(path=relative_path, remaining=self._remaining),
        )

        started = time.perf_counter()
        try:
            response = await self._get(url)
        except httpx.HTTPStatusError as e:
            raise TransportError(url, e.response.status_code, str(e)) from e
        except httpx.HTTPError as e:
            raise TransportError(url, detail=f"{type(e).__name__}: {e}") from e

        logger.debug(
            f"GET {relative_path} -> {response.status_code}",
            extra=get_log_context(
                path=relative_path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            ),
        )

        self._reconcile_reset(url, response)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                url, response.status_code, "response body is not valid JSON"
            ) from e

    async def aclose(self) -> None:
        """Cancel the pending refill and close the owned HTTP client."""
        if self._refill_handle is not None:
            self._refill_handle.cancel()
            self._refill_handle = None
        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "RateLimitGate":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    def _open_window(self) -> None:
        """Start the first window on first use, assuming a full budget."""
        if self._window_open:
            return
        self._window_open = True
        self._reset_at = int(self._clock()) + self.window_seconds
        self._schedule_refill(self._reset_at)

    async def _wait_for_budget(self) -> None:
        while self._remaining <= self.reserve:
            wait = max(self._reset_at + self.wait_margin - self._clock(), MIN_WAIT_SECONDS)
            logger.info(
                f"Rate limit reserve reached, waiting {wait:.1f}s for the window to reset",
                extra=get_log_context(remaining=self._remaining, reset_at=self._reset_at),
            )
            await self._sleep(wait)

    async def _get_once(self, url: str) -> httpx.Response:
        response = await self._http_client.get(url)
        response.raise_for_status()
        return response

    def _reconcile_reset(self, url: str, response: httpx.Response) -> None:
        """Adopt a later reset time reported by the service."""
        raw = response.headers.get(self.reset_header)
        try:
            reported = int(float(raw))
        except (TypeError, ValueError, OverflowError):
            raise MissingRateLimitHeader(url, self.reset_header) from None

        # Responses can arrive out of order, never move the window back
        if reported > self._reset_at:
            logger.debug(
                f"Rate limit window now resets at {reported}",
                extra=get_log_context(reset_at=reported, remaining=self._remaining),
            )
            self._reset_at = reported
            self._schedule_refill(reported + self.reset_grace)

    def _schedule_refill(self, at: float) -> None:
        """Arm the refill timer for ``at``, replacing any pending one."""
        if self._refill_handle is not None:
            self._refill_handle.cancel()
        delay = max(at - self._clock(), 0)
        self._refill_handle = asyncio.get_running_loop().call_later(delay, self._refill)

    def _refill(self) -> None:
        self._refill_handle = None
        self._remaining = self.window_limit
        logger.debug(
            f"Rate limit window refilled to {self.window_limit}",
            extra=get_log_context(remaining=self._remaining, reset_at=self._reset_at),
        )


_gate: Optional[RateLimitGate] = None


def get_rate_limit_gate() -> RateLimitGate:
    """Get the process-wide RateLimitGate (singleton pattern).

    Every client built without an explicit gate shares this one, so they
    draw from a single request budget.
    """
    global _gate
    if _gate is None:
        _gate = RateLimitGate()
    return _gate


async def reset_rate_limit_gate() -> None:
    """Close and drop the process-wide gate.

    This is useful for testing or when configuration changes.
    """
    global _gate
    if _gate is not None:
        await _gate.aclose()
    _gate = None
