"""Async client for the ScoreSaber leaderboard API."""

from scoresaber.api import (
    BasicPlayer,
    FullPlayer,
    LeaderboardInfo,
    LeaderboardInfoCollection,
    Player,
    PlayerCollection,
    PlayerScore,
    PlayerScoreCollection,
    RankRequestListing,
    RateLimitGate,
    RetryPolicy,
    Score,
    ScoreCollection,
    ScoreSaberClient,
    get_rate_limit_gate,
    reset_rate_limit_gate,
)
from scoresaber.core import Settings, get_logger, settings, setup_logging
from scoresaber.exceptions import MissingRateLimitHeader, ScoreSaberError, TransportError

__version__ = "0.1.0"

__all__ = [
    "ScoreSaberClient",
    "RateLimitGate",
    "RetryPolicy",
    "get_rate_limit_gate",
    "reset_rate_limit_gate",
    # Records
    "BasicPlayer",
    "FullPlayer",
    "LeaderboardInfo",
    "LeaderboardInfoCollection",
    "Player",
    "PlayerCollection",
    "PlayerScore",
    "PlayerScoreCollection",
    "RankRequestListing",
    "Score",
    "ScoreCollection",
    # Errors
    "ScoreSaberError",
    "TransportError",
    "MissingRateLimitHeader",
    # Core
    "Settings",
    "settings",
    "get_logger",
    "setup_logging",
]
