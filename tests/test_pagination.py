from __future__ import annotations

import pytest

from console.pagination import ELLIPSIS, link_sequence, paginate, total_pages_for

E = ELLIPSIS


@pytest.mark.parametrize(
    "current, total, expected",
    [
        (1, 1, [1]),
        (2, 5, [1, 2, 3, 4, 5]),
        (1, 10, [1, 2, 3, 4, E, 10]),
        (3, 10, [1, 2, 3, 4, E, 10]),
        (4, 10, [1, E, 3, 4, 5, E, 10]),
        (7, 10, [1, E, 6, 7, 8, E, 10]),
        (8, 10, [1, E, 7, 8, 9, 10]),
        (10, 10, [1, E, 7, 8, 9, 10]),
        (4, 6, [1, E, 3, 4, 5, 6]),
    ],
)
def test_link_sequence(current, total, expected) -> None:
    assert link_sequence(current, total) == expected


def test_link_sequence_always_keeps_first_and_last_page() -> None:
    for total in range(6, 15):
        for current in range(1, total + 1):
            links = link_sequence(current, total)
            assert links[0] == 1
            assert links[-1] == total
            assert links.count(E) <= 2


def test_total_pages_never_below_one() -> None:
    assert total_pages_for(0, 5) == 1
    assert total_pages_for(5, 5) == 1
    assert total_pages_for(6, 5) == 2
    with pytest.raises(ValueError):
        total_pages_for(3, 0)


def test_pages_concatenate_back_to_the_source() -> None:
    items = list(range(23))
    first = paginate(items, 5, 1)
    rebuilt = []
    for page in range(1, first.total_pages + 1):
        rebuilt.extend(paginate(items, 5, page).page_items)
    assert first.total_pages == 5
    assert rebuilt == items


def test_page_past_the_end_is_empty_not_an_error() -> None:
    page = paginate(["a", "b"], 5, 3)
    assert page.page_items == []
    assert page.total_pages == 1


def test_empty_input_yields_single_empty_page() -> None:
    page = paginate([], 5, 1)
    assert page.page_items == []
    assert page.total_pages == 1
