"""Tests for rank and page arithmetic."""

import pytest

from scoresaber.api.paging import PLAYERS_PER_PAGE, page_count, rank_to_page


@pytest.mark.parametrize(
    ("rank", "page", "offset"),
    [
        (1, 1, 0),
        (2, 1, 1),
        (50, 1, 49),
        (51, 2, 0),
        (100, 2, 49),
        (101, 3, 0),
        (1234, 25, 33),
    ],
)
def test_rank_to_page(rank: int, page: int, offset: int) -> None:
    assert rank_to_page(rank) == (page, offset)


def test_every_rank_maps_into_its_page() -> None:
    for rank in range(1, 5 * PLAYERS_PER_PAGE + 1):
        page, offset = rank_to_page(rank)
        assert (page - 1) * PLAYERS_PER_PAGE + offset + 1 == rank
        assert 0 <= offset < PLAYERS_PER_PAGE


@pytest.mark.parametrize("rank", [0, -1, 1.5, True, "3"])
def test_rank_to_page_rejects_invalid_rank(rank) -> None:
    with pytest.raises(ValueError, match="rank"):
        rank_to_page(rank)


@pytest.mark.parametrize(
    ("total", "per_page", "expected"),
    [
        (0, 14, 0),
        (1, 14, 1),
        (14, 14, 1),
        (15, 14, 2),
        (250, 100, 3),
    ],
)
def test_page_count(total: int, per_page: int, expected: int) -> None:
    assert page_count(total, per_page) == expected


def test_page_count_rejects_empty_pages() -> None:
    with pytest.raises(ValueError, match="per_page"):
        page_count(10, 0)
