# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for reading posts."""

import pytest
from fastapi import status

POSTS_URL = "/api/v1/posts"


@pytest.fixture()
def feed(test_user, make_user, make_spot, make_list, make_review, make_share) -> dict:
    """Two reviews by Ana and one community post by another user, oldest first."""
    spot = make_spot()
    other = make_user()
    first = make_review(test_user, spot, rating=5, description="First visit").post_id
    second = make_review(test_user, spot, rating=3, description="Second visit").post_id
    shared = make_share(other, make_list([spot]), title="Lisbon").post_id
    return {"first": first, "second": second, "shared": shared, "other_user": other.user_id}


def _ids(response) -> list[int]:
    return [post["post_id"] for post in response.json()["posts"]]


def test_list_posts_newest_first(client, feed) -> None:
    response = client.get(POSTS_URL)

    assert response.status_code == status.HTTP_200_OK
    assert _ids(response) == [feed["shared"], feed["second"], feed["first"]]
    assert response.json()["pagination"] == {"total": 3, "page": 1, "limit": 20, "has_more": False}
    assert [post["type"] for post in response.json()["posts"]] == ["community", "review", "review"]


def test_list_posts_pagination(client, feed) -> None:
    first_page = client.get(POSTS_URL, params={"limit": 2})
    second_page = client.get(POSTS_URL, params={"limit": 2, "page": 2})

    assert _ids(first_page) == [feed["shared"], feed["second"]]
    assert first_page.json()["pagination"]["has_more"] is True
    assert _ids(second_page) == [feed["first"]]
    assert second_page.json()["pagination"] == {"total": 3, "page": 2, "limit": 2, "has_more": False}


def test_list_posts_filters(client, feed) -> None:
    reviews = client.get(POSTS_URL, params={"type": "review"})
    by_other = client.get(POSTS_URL, params={"user_id": feed["other_user"]})

    assert _ids(reviews) == [feed["second"], feed["first"]]
    assert _ids(by_other) == [feed["shared"]]


def test_soft_deleted_posts_are_hidden_by_default(client, feed) -> None:
    client.delete(f"{POSTS_URL}/{feed['second']}", params={"softDelete": "true"})

    visible = client.get(POSTS_URL)
    everything = client.get(POSTS_URL, params={"include_deleted": "true"})

    assert _ids(visible) == [feed["shared"], feed["first"]]
    assert visible.json()["pagination"]["total"] == 2
    assert _ids(everything) == [feed["shared"], feed["second"], feed["first"]]


@pytest.mark.parametrize(
    "params, error",
    [
        ({"type": "story"}, "unknown_post_type"),
        ({"page": 0}, "invalid_argument"),
        ({"limit": 101}, "invalid_argument"),
        ({"limit": 0}, "invalid_argument"),
        ({"user_id": "abc"}, "invalid_argument"),
    ],
)
def test_list_posts_rejects_bad_queries(client, params, error) -> None:
    response = client.get(POSTS_URL, params=params)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == error


def test_listing_is_cached_until_invalidated(client, feed, test_user, make_spot, make_review, posts_cache) -> None:
    """Writes that bypass the service stay invisible until the cache is cleared."""
    assert client.get(POSTS_URL).json()["pagination"]["total"] == 3
    make_review(test_user, make_spot())

    assert client.get(POSTS_URL).json()["pagination"]["total"] == 3

    posts_cache.invalidate()
    assert client.get(POSTS_URL).json()["pagination"]["total"] == 4


def test_listing_cache_is_cleared_by_api_writes(client, feed) -> None:
    assert client.get(POSTS_URL).json()["pagination"]["total"] == 3

    client.delete(f"{POSTS_URL}/{feed['first']}")

    assert client.get(POSTS_URL).json()["pagination"]["total"] == 2


def test_get_community_post(client, feed) -> None:
    response = client.get(f"{POSTS_URL}/{feed['shared']}")

    assert response.status_code == status.HTTP_200_OK
    post = response.json()["post"]
    assert post["type"] == "community"
    assert post["title"] == "Lisbon"
    assert post["list_info"]["list_name"] == "Weekend in Lisbon"
    assert "rating" not in post


def test_get_post_with_invalid_id(client) -> None:
    response = client.get(f"{POSTS_URL}/abc")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Post ID must be a positive integer"
