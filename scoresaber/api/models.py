"""Record shapes returned by the ScoreSaber API.

These mirror the service's JSON payloads. They are plain ``TypedDict``s:
responses are cast to them, never validated, so keys the service omits
are simply absent.
"""

from __future__ import annotations

from typing import List, Optional, TypedDict


class Metadata(TypedDict):
    """Paging information attached to every collection."""

    total: int
    page: int
    itemsPerPage: int


class Badge(TypedDict, total=False):
    description: str
    image: str


class ScoreStats(TypedDict, total=False):
    totalScore: int
    totalRankedScore: int
    averageRankedAccuracy: float
    totalPlayCount: int
    rankedPlayCount: int
    replaysWatched: int


class BasicPlayer(TypedDict, total=False):
    id: str
    name: str
    profilePicture: str
    bio: Optional[str]
    country: str
    pp: float
    rank: int
    countryRank: int
    role: Optional[str]
    histories: str
    permissions: int
    banned: bool
    inactive: bool
    firstSeen: str


class Player(BasicPlayer, total=False):
    """A player as listed in the global or country rankings."""

    badges: Optional[List[Badge]]
    scoreStats: Optional[ScoreStats]


class FullPlayer(BasicPlayer, total=False):
    badges: List[Badge]
    scoreStats: ScoreStats


class PlayerCollection(TypedDict):
    players: List[Player]
    metadata: Metadata


class LeaderboardPlayer(TypedDict, total=False):
    id: str
    name: str
    profilePicture: str
    country: str
    permissions: int
    role: Optional[str]


class Score(TypedDict, total=False):
    id: int
    leaderboardPlayerInfo: Optional[LeaderboardPlayer]
    rank: int
    baseScore: int
    modifiedScore: int
    pp: float
    weight: float
    modifiers: str
    multiplier: float
    badCuts: int
    missedNotes: int
    maxCombo: int
    fullCombo: bool
    hmd: int
    hasReplay: bool
    timeSet: str
    deviceHmd: Optional[str]
    deviceControllerLeft: Optional[str]
    deviceControllerRight: Optional[str]


class ScoreCollection(TypedDict):
    scores: List[Score]
    metadata: Metadata


class Difficulty(TypedDict, total=False):
    leaderboardId: int
    difficulty: int
    gameMode: str
    difficultyRaw: str


class LeaderboardInfo(TypedDict, total=False):
    id: int
    songHash: str
    songName: str
    songSubName: str
    songAuthorName: str
    levelAuthorName: str
    difficulty: Difficulty
    maxScore: int
    createdDate: str
    rankedDate: Optional[str]
    qualifiedDate: Optional[str]
    lovedDate: Optional[str]
    ranked: bool
    qualified: bool
    loved: bool
    maxPP: float
    stars: float
    positiveModifiers: bool
    plays: int
    dailyPlays: int
    coverImage: str
    playerScore: Optional[Score]
    difficulties: Optional[List[Difficulty]]


class LeaderboardInfoCollection(TypedDict):
    leaderboards: List[LeaderboardInfo]
    metadata: Metadata


class PlayerScore(TypedDict):
    score: Score
    leaderboard: LeaderboardInfo


class PlayerScoreCollection(TypedDict):
    playerScores: List[PlayerScore]
    metadata: Metadata


class VoteGroup(TypedDict, total=False):
    upvotes: int
    downvotes: int
    neutral: int
    myVote: Optional[bool]


class RankRequestListing(TypedDict, total=False):
    """An entry in the ranking queue."""

    requestId: int
    weight: int
    leaderboardInfo: LeaderboardInfo
    created_at: str
    totalRankVotes: VoteGroup
    totalQATVotes: VoteGroup
    difficultyCount: int
