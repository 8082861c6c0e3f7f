# mypy: ignore-errors
# tests/v1/test_users.py
"""Tests for user profile and image metadata endpoints."""

import pytest
from fastapi import status

USERS_URL = "/api/v1/users"
IMAGES_URL = "/api/v1/images"

USER_BODY = {
    "display_name": "Rui Costa",
    "username": "rui.costa",
    "user_email": "Rui@Example.com",
    "biography": "Chasing miradouros",
}


def test_create_user(client) -> None:
    response = client.post(USERS_URL, json=USER_BODY)

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["username"] == "rui.costa"
    assert body["user_email"] == "rui@example.com"
    assert body["profile_image_id"] is None
    assert "creation_date" in body


def test_get_user(client) -> None:
    created = client.post(USERS_URL, json=USER_BODY).json()

    response = client.get(f"{USERS_URL}/{created['user_id']}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["display_name"] == "Rui Costa"


def test_get_missing_user(client) -> None:
    response = client.get(f"{USERS_URL}/77")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "User with ID 77 not found"


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"user_email": "other@example.com"}, "username"),
        ({"username": "someone_else"}, "user_email"),
    ],
)
def test_duplicate_user_conflicts(client, overrides, field) -> None:
    client.post(USERS_URL, json=USER_BODY)

    response = client.post(USERS_URL, json={**USER_BODY, **overrides})

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["field"] == field


@pytest.mark.parametrize(
    "overrides",
    [
        {"username": "ab"},
        {"username": "no spaces"},
        {"username": "u" * 22},
        {"user_email": "not-an-email"},
        {"display_name": ""},
        {"biography": "b" * 451},
        {"profile_image_id": 0},
        {"profile_image_id": 2**40},
        {"profile_image_id": "3"},
    ],
)
def test_create_user_validation(client, overrides) -> None:
    response = client.post(USERS_URL, json={**USER_BODY, **overrides})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "invalid_argument"


def test_create_user_with_missing_profile_image(client) -> None:
    response = client.post(USERS_URL, json={**USER_BODY, "profile_image_id": 9})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Image with ID 9 does not exist"


def test_register_and_fetch_image(client) -> None:
    response = client.post(
        IMAGES_URL,
        json={
            "image_name": "tram28.jpg",
            "blob_url": "https://blobs.example.com/tram28.jpg",
            "content_type": "image/jpeg",
            "file_size": 183_204,
        },
    )

    assert response.status_code == status.HTTP_201_CREATED
    image_id = response.json()["image_id"]

    fetched = client.get(f"{IMAGES_URL}/{image_id}")
    assert fetched.status_code == status.HTTP_200_OK
    assert fetched.json()["blob_url"] == "https://blobs.example.com/tram28.jpg"


def test_image_validation(client) -> None:
    response = client.post(IMAGES_URL, json={"file_size": -1})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_get_missing_image(client) -> None:
    response = client.get(f"{IMAGES_URL}/5")

    assert response.status_code == status.HTTP_404_NOT_FOUND
