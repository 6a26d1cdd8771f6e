"""ScoreSaber API package.

This package provides:
- The shared rate-limit gate (RateLimitGate, get_rate_limit_gate)
- The endpoint client (ScoreSaberClient)
- Transport retry (RetryPolicy, with_retry)
- Record types for the API payloads
"""

from scoresaber.api.client import ScoreSaberClient
from scoresaber.api.gate import RateLimitGate, get_rate_limit_gate, reset_rate_limit_gate
from scoresaber.api.models import (
    Badge,
    BasicPlayer,
    Difficulty,
    FullPlayer,
    LeaderboardInfo,
    LeaderboardInfoCollection,
    LeaderboardPlayer,
    Metadata,
    Player,
    PlayerCollection,
    PlayerScore,
    PlayerScoreCollection,
    RankRequestListing,
    Score,
    ScoreCollection,
    ScoreStats,
    VoteGroup,
)
from scoresaber.api.paging import PLAYERS_PER_PAGE, SCORES_PER_PAGE, page_count, rank_to_page
from scoresaber.api.retry import RetryPolicy, with_retry

__all__ = [
    # Client
    "ScoreSaberClient",
    # Gate
    "RateLimitGate",
    "get_rate_limit_gate",
    "reset_rate_limit_gate",
    # Paging
    "PLAYERS_PER_PAGE",
    "SCORES_PER_PAGE",
    "page_count",
    "rank_to_page",
    # Retry
    "RetryPolicy",
    "with_retry",
    # Records
    "Badge",
    "BasicPlayer",
    "Difficulty",
    "FullPlayer",
    "LeaderboardInfo",
    "LeaderboardInfoCollection",
    "LeaderboardPlayer",
    "Metadata",
    "Player",
    "PlayerCollection",
    "PlayerScore",
    "PlayerScoreCollection",
    "RankRequestListing",
    "Score",
    "ScoreCollection",
    "ScoreStats",
    "VoteGroup",
]
