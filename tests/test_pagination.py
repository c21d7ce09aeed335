from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from blogfolio.content import Post
from blogfolio.pagination import iter_pages, page_count, page_path, paginate, sort_by_date_descending


def _post(slug: str, day: date) -> Post:
    return Post(
        slug=slug,
        title=slug.title(),
        date=datetime(day.year, day.month, day.day, tzinfo=timezone.utc),
        content="",
        filename=str(Path(f"{slug}.md").resolve()),
    )


def test_sort_orders_newest_first() -> None:
    posts = [_post("old", date(2022, 1, 1)), _post("new", date(2024, 1, 1)), _post("mid", date(2023, 1, 1))]
    assert [post.slug for post in sort_by_date_descending(posts)] == ["new", "mid", "old"]


def test_sort_keeps_input_order_for_equal_dates() -> None:
    same = date(2023, 5, 5)
    posts = [
        _post("first", same),
        _post("newest", date(2024, 1, 1)),
        _post("second", same),
        _post("third", same),
    ]
    assert [post.slug for post in sort_by_date_descending(posts)] == ["newest", "first", "second", "third"]

    reordered = [posts[3], posts[0], posts[2], posts[1]]
    assert [post.slug for post in sort_by_date_descending(reordered)] == ["newest", "third", "first", "second"]


@pytest.mark.parametrize(
    ("total", "size", "expected"),
    [(0, 1, 0), (0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 5, 5), (26, 5, 6)],
)
def test_page_count(total: int, size: int, expected: int) -> None:
    assert page_count(total, size) == expected


def test_page_count_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        page_count(5, 0)


def test_paginate_slices_requested_page() -> None:
    posts = [_post(f"post-{i}", date(2024, 1, 1)) for i in range(5)]
    page = paginate(posts, page_size=2, page_number=2)

    assert [post.slug for post in page.items] == ["post-2", "post-3"]
    assert page.page == 2
    assert page.page_count == 3
    assert page.total_items == 5
    assert page.newer_page == 1
    assert page.older_page == 3


def test_last_page_is_clipped() -> None:
    posts = [_post(f"post-{i}", date(2024, 1, 1)) for i in range(5)]
    page = paginate(posts, page_size=2, page_number=3)

    assert [post.slug for post in page.items] == ["post-4"]
    assert not page.has_older
    assert page.has_newer


def test_page_beyond_range_is_empty() -> None:
    posts = [_post("only", date(2024, 1, 1))]
    page = paginate(posts, page_size=10, page_number=4)

    assert page.items == ()
    assert page.page_count == 1
    assert not page.has_older
    assert not page.has_newer


def test_empty_collection_has_no_pages() -> None:
    page = paginate([], page_size=10, page_number=1)
    assert page.items == ()
    assert page.page_count == 0
    assert list(iter_pages([], 10)) == []


def test_page_number_must_be_positive() -> None:
    with pytest.raises(ValueError):
        paginate([], page_size=10, page_number=0)


@pytest.mark.parametrize("size", [1, 2, 3, 4, 7, 10, 11])
def test_pages_reconstruct_collection(size: int) -> None:
    posts = [_post(f"post-{i}", date(2024, 1, 1 + i)) for i in range(10)]
    pages = list(iter_pages(posts, size))

    rebuilt = [post for page in pages for post in page.items]
    assert rebuilt == posts
    assert len(pages) == page_count(len(posts), size)
    assert [page.page for page in pages] == list(range(1, len(pages) + 1))


def test_page_path_matches_blog_routes() -> None:
    assert page_path(1) == "/blog"
    assert page_path(2) == "/blog/page/2"
    assert page_path(3, base="/videos/") == "/videos/page/3"
    assert page_path(2, base="/") == "/page/2"
