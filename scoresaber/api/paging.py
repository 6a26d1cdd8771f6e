"""Page arithmetic for the paginated listings."""

import math
from typing import Tuple

# Items per page, fixed by the service
PLAYERS_PER_PAGE = 50
SCORES_PER_PAGE = 100


def require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


def rank_to_page(rank: int, per_page: int = PLAYERS_PER_PAGE) -> Tuple[int, int]:
    """Map a 1-based rank to its 1-based page and 0-based offset in that page.

    >>> rank_to_page(1)
    (1, 0)
    >>> rank_to_page(50)
    (1, 49)
    >>> rank_to_page(51)
    (2, 0)
    """
    require_positive("rank", rank)
    return math.ceil(rank / per_page), (rank - 1) % per_page


def page_count(total: int, per_page: int) -> int:
    """Number of pages needed to hold ``total`` items."""
    if per_page < 1:
        raise ValueError(f"per_page must be at least 1, got {per_page!r}")
    return max(math.ceil(total / per_page), 0)
