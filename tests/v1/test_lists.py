# mypy: ignore-errors
# tests/v1/test_lists.py
"""Tests for list creation, contents and deletion."""

from datetime import datetime

import pytest
from fastapi import status
from sqlalchemy import func, select

from trip_nick.models import CommunityPost, ListSpot, Post, PostImage, Spot, SpotList

LISTS_URL = "/api/v1/lists"


def _count(db_session, model) -> int:
    return db_session.scalar(select(func.count()).select_from(model))


def test_create_list_defaults_to_public(client) -> None:
    response = client.post(LISTS_URL, json={"list_name": "  Azulejos  "})

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["message"] == "List created successfully"
    assert body["data"] == {"list_id": body["list_id"], "list_name": "Azulejos", "is_public": True}


def test_create_private_list(client) -> None:
    response = client.post(LISTS_URL, json={"list_name": "Secret spots", "is_public": False})

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["data"]["is_public"] is False


@pytest.mark.parametrize(
    "name, detail",
    [("   ", "List name cannot be empty"), ("L" * 46, "List name must be 45 characters or less")],
)
def test_create_list_validates_name(client, db_session, name, detail) -> None:
    response = client.post(LISTS_URL, json={"list_name": name})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == detail
    assert _count(db_session, SpotList) == 0


@pytest.fixture()
def stocked_list(make_spot, make_list, make_image) -> int:
    image = make_image(blob_url="https://blobs.example.com/belem.jpg")
    belem = make_spot(spot_name="Belem Tower", city="Lisboa", category="Monument")
    ribeira = make_spot(spot_name="Ribeira", city="Porto", category="Neighbourhood")
    arco = make_spot(spot_name="Arco da Rua Augusta", city="Lisboa", category="Monument")
    spot_list = make_list(
        [belem, ribeira, arco],
        list_name="Portugal highlights",
        added=[datetime(2025, 3, 1), datetime(2025, 3, 3), datetime(2025, 3, 2)],
        thumbnails={belem.spot_id: image.image_id},
    )
    return spot_list.list_id


def test_list_contents_default_order(client, stocked_list) -> None:
    """Spots come back most recently added first, with list statistics."""
    response = client.get(f"{LISTS_URL}/{stocked_list}/spots")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["list_info"]["list_name"] == "Portugal highlights"
    assert [spot["spot_name"] for spot in body["spots"]] == ["Ribeira", "Arco da Rua Augusta", "Belem Tower"]
    assert body["order_by"] == "added_date"
    assert body["order"] == "desc"
    stats = body["statistics"]
    assert stats["total_spots"] == 3
    assert stats["spots_with_thumbnails"] == 1
    assert stats["first_added"].startswith("2025-03-01")
    assert stats["last_added"].startswith("2025-03-03")
    belem = body["spots"][2]
    assert belem["thumbnail_url"] == "https://blobs.example.com/belem.jpg"


@pytest.mark.parametrize(
    "order_by, order, expected",
    [
        ("spot_name", "asc", ["Arco da Rua Augusta", "Belem Tower", "Ribeira"]),
        ("city", "desc", ["Ribeira", "Belem Tower", "Arco da Rua Augusta"]),
        ("added_date", "asc", ["Belem Tower", "Arco da Rua Augusta", "Ribeira"]),
    ],
)
def test_list_contents_ordering(client, stocked_list, order_by, order, expected) -> None:
    response = client.get(
        f"{LISTS_URL}/{stocked_list}/spots", params={"order_by": order_by, "order": order}
    )

    assert [spot["spot_name"] for spot in response.json()["spots"]] == expected


def test_list_contents_rejects_unknown_ordering(client, stocked_list) -> None:
    response = client.get(f"{LISTS_URL}/{stocked_list}/spots", params={"order_by": "rating"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_empty_list_contents(client, make_list) -> None:
    spot_list = make_list()

    body = client.get(f"{LISTS_URL}/{spot_list.list_id}/spots").json()

    assert body["spots"] == []
    assert body["statistics"] == {
        "total_spots": 0,
        "spots_with_thumbnails": 0,
        "first_added": None,
        "last_added": None,
    }


def test_list_contents_missing_list(client) -> None:
    response = client.get(f"{LISTS_URL}/404/spots")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "List with ID 404 does not exist"


@pytest.fixture()
def shared_list(test_user, make_spot, make_list, make_share, make_image) -> int:
    spot_list = make_list([make_spot(), make_spot()], list_name="Shared picks")
    make_share(test_user, spot_list, title="Community picks", images=[make_image()])
    make_share(test_user, spot_list, post_type="list", title="My picks")
    return spot_list.list_id


def test_delete_list_dry_run(client, db_session, shared_list) -> None:
    response = client.delete(f"{LISTS_URL}/{shared_list}", params={"dryRun": "true"})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["dry_run"] is True
    assessment = body["would_delete"]
    assert assessment["list_info"]["spots_in_list"] == 2
    assert assessment["list_info"]["posts_referencing_list"] == 2
    assert assessment["deletion_impact"] == {
        "list_spot_associations_to_delete": 2,
        "community_posts_to_delete": 1,
        "list_posts_to_delete": 1,
        "total_posts_to_delete": 2,
    }
    assert "2 posts will be permanently deleted" in assessment["warnings"]
    assert "Public posts will be deleted, affecting community visibility" in assessment["warnings"]
    assert _count(db_session, SpotList) == 1
    assert _count(db_session, Post) == 2


def test_delete_referenced_list_needs_force(client, db_session, shared_list) -> None:
    response = client.delete(f"{LISTS_URL}/{shared_list}")

    assert response.status_code == status.HTTP_409_CONFLICT
    body = response.json()
    assert body["detail"] == "Cannot delete list: 2 posts reference this list"
    assert body["suggestion"] == f"DELETE /api/v1/lists/{shared_list}?force=true to force deletion"
    assert body["impact"]["deletion_impact"]["total_posts_to_delete"] == 2
    assert _count(db_session, SpotList) == 1


def test_forced_delete_removes_list_and_posts(client, db_session, shared_list, posts_cache) -> None:
    response = client.delete(f"{LISTS_URL}/{shared_list}", params={"force": "true"})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["message"] == 'List "Shared picks" deleted successfully'
    assert body["data"]["deletion_results"] == {
        "list_spot_associations_deleted": 2,
        "community_posts_deleted": 1,
        "list_posts_deleted": 1,
        "post_images_deleted": 1,
        "base_posts_deleted": 2,
        "list_deleted": True,
    }
    assert body["data"]["impact_summary"]["operation_forced"] is True
    assert body["data"]["impact_summary"]["posts_deleted"] == 2
    for model in (SpotList, ListSpot, Post, CommunityPost, PostImage):
        assert _count(db_session, model) == 0
    assert _count(db_session, Spot) == 2
    assert posts_cache.last_invalidated is not None


def test_delete_unreferenced_list(client, db_session, make_spot, make_list, posts_cache) -> None:
    spot_list = make_list([make_spot()], list_name="Lonely", is_public=False)

    response = client.delete(f"{LISTS_URL}/{spot_list.list_id}")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["data"]["deleted_list"]["was_public"] is False
    assert body["data"]["impact_summary"]["total_records_deleted"] == 2
    assert _count(db_session, SpotList) == 0
    assert posts_cache.last_invalidated is None


def test_delete_missing_list(client) -> None:
    response = client.delete(f"{LISTS_URL}/31337")

    assert response.status_code == status.HTTP_404_NOT_FOUND
