"""Async client for the ScoreSaber REST API.

Each method builds a relative path, sends it through the rate-limit gate
and casts the decoded body to its record type. Payloads are not
validated.
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional, TypeVar, cast
from urllib.parse import quote

from scoresaber.api.gate import RateLimitGate, get_rate_limit_gate
from scoresaber.api.models import (
    BasicPlayer,
    FullPlayer,
    LeaderboardInfo,
    LeaderboardInfoCollection,
    Player,
    PlayerCollection,
    PlayerScore,
    PlayerScoreCollection,
    RankRequestListing,
    ScoreCollection,
)
from scoresaber.api.paging import SCORES_PER_PAGE, page_count, rank_to_page, require_positive
from scoresaber.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ScoreSaberClient:
    """ScoreSaber API client.

    Clients built without a gate share the process-wide one from
    :func:`get_rate_limit_gate`, so they draw from a single request budget.

    Example:
        >>> client = ScoreSaberClient()
        >>> player = await client.fetch_player_by_rank(1)
    """

    def __init__(self, gate: Optional[RateLimitGate] = None):
        self._gate = gate if gate is not None else get_rate_limit_gate()

    @property
    def gate(self) -> RateLimitGate:
        return self._gate

    async def fetch_player_by_rank(self, rank: int, region: Optional[str] = None) -> Player:
        """Fetch the player holding a global (or country) rank.

        Args:
            rank: 1-based rank
            region: Optional country code filter, e.g. "gb"
        """
        page, offset = rank_to_page(rank)
        collection = cast(PlayerCollection, await self._gate.dispatch(_players_path(page, region)))
        return collection["players"][offset]

    async def fetch_players_under_rank(
        self, rank: int, region: Optional[str] = None
    ) -> List[Player]:
        """Fetch every page of players up to and including ``rank``'s page.

        Pages are fetched one at a time and returned in rank order.
        """
        total_pages, _ = rank_to_page(rank)
        players: List[Player] = []
        for page in range(1, total_pages + 1):
            collection = cast(
                PlayerCollection, await self._gate.dispatch(_players_path(page, region))
            )
            players.extend(collection["players"])
        return players

    async def fetch_basic_player(self, player_id: str) -> BasicPlayer:
        data = await self._gate.dispatch(f"player/{_segment(player_id)}/basic")
        return cast(BasicPlayer, data)

    async def fetch_full_player(self, player_id: str) -> FullPlayer:
        data = await self._gate.dispatch(f"player/{_segment(player_id)}/full")
        return cast(FullPlayer, data)

    async def fetch_scores_page(self, player_id: str, page: int) -> PlayerScoreCollection:
        """Fetch one page of a player's scores, most recent first."""
        require_positive("page", page)
        data = await self._gate.dispatch(
            f"player/{_segment(player_id)}/scores"
            f"?limit={SCORES_PER_PAGE}&sort=recent&page={page}"
        )
        return cast(PlayerScoreCollection, data)

    async def fetch_latest_ranked_maps(self) -> LeaderboardInfoCollection:
        data = await self._gate.dispatch("leaderboards?ranked=true&category=1&sort=0")
        return cast(LeaderboardInfoCollection, data)

    async def fetch_leaderboards(
        self, star_min: float, star_max: float, page: int
    ) -> LeaderboardInfoCollection:
        """Fetch one page of ranked leaderboards within a star range."""
        require_positive("page", page)
        data = await self._gate.dispatch(
            f"leaderboards?ranked=true&minStar={star_min}&maxStar={star_max}&page={page}"
        )
        return cast(LeaderboardInfoCollection, data)

    async def fetch_leaderboard_scores(self, leaderboard_id: int, page: int = 1) -> ScoreCollection:
        require_positive("page", page)
        data = await self._gate.dispatch(
            f"leaderboard/by-id/{_segment(leaderboard_id)}/scores?page={page}"
        )
        return cast(ScoreCollection, data)

    async def fetch_leaderboard_info(self, leaderboard_id: int) -> LeaderboardInfo:
        data = await self._gate.dispatch(f"leaderboard/by-id/{_segment(leaderboard_id)}/info")
        return cast(LeaderboardInfo, data)

    async def fetch_ranked_between_stars(
        self, star_min: float, star_max: float
    ) -> List[LeaderboardInfo]:
        """Fetch every ranked leaderboard within a star range.

        The first page is fetched alone to learn the page count, the rest
        concurrently. Leaderboards are returned in completion order.
        """
        return await _gather_pages(
            lambda page: self.fetch_leaderboards(star_min, star_max, page),
            lambda collection: collection["leaderboards"],
        )

    async def fetch_ranking_queue(self) -> List[RankRequestListing]:
        """Fetch the ranking queue, top requests first."""
        top = cast(List[RankRequestListing], await self._gate.dispatch("ranking/requests/top"))
        below_top = cast(
            List[RankRequestListing], await self._gate.dispatch("ranking/requests/belowTop")
        )
        return [*top, *below_top]

    async def fetch_all_scores(self, player_id: str) -> List[PlayerScore]:
        """Fetch all of a player's scores.

        Same paging strategy as :meth:`fetch_ranked_between_stars`, so the
        scores are not in recency order.
        """
        return await _gather_pages(
            lambda page: self.fetch_scores_page(player_id, page),
            lambda collection: collection["playerScores"],
        )


def _players_path(page: int, region: Optional[str]) -> str:
    path = f"players?page={page}"
    if region:
        path += f"&countries={quote(region, safe=',')}"
    return path


def _segment(value: Any) -> str:
    """Encode a value for use as a single path segment."""
    return quote(str(value), safe="")


async def _gather_pages(
    fetch_page: Callable[[int], Awaitable[T]],
    items_of: Callable[[T], List[Any]],
) -> List[Any]:
    """Fetch page 1, then every remaining page concurrently.

    Items are appended as each page completes. The first failing page
    cancels the others and its error propagates.
    """
    first = await fetch_page(1)
    items = list(items_of(first))
    metadata = first["metadata"]  # type: ignore[index]
    total_pages = page_count(metadata["total"], metadata["itemsPerPage"])
    if total_pages <= 1:
        return items

    logger.debug(f"Fetching {total_pages - 1} more pages concurrently")
    tasks = [asyncio.create_task(fetch_page(page)) for page in range(2, total_pages + 1)]
    try:
        for next_page in asyncio.as_completed(tasks):
            items.extend(items_of(await next_page))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return items
