# mypy: ignore-errors
# tests/test_errors.py
"""Tests for domain errors and their HTTP rendering."""

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from trip_nick.services.errors import (
    ConflictError,
    InternalError,
    InvalidArgumentError,
    MAX_ID,
    NotFoundError,
    UnknownPostTypeError,
    describe_validation_errors,
    parse_positive_id,
)
from trip_nick.services.transaction import unit_of_work


@pytest.mark.parametrize("raw, expected", [(42, 42), ("42", 42), (" 7 ", 7), ("0001", 1)])
def test_parse_positive_id_accepts_positive_integers(raw, expected) -> None:
    assert parse_positive_id(raw, "Post") == expected


@pytest.mark.parametrize(
    "raw", ["abc", "0", "-3", 0, -1, "", None, 1.5, "4.0", True, "\u00b2", "\u0661\u0662", "\uff17"]
)
def test_parse_positive_id_rejects_everything_else(raw) -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        parse_positive_id(raw, "Post")
    assert exc_info.value.message == "Post ID must be a positive integer"


@pytest.mark.parametrize("raw", [2**31, "2147483648", "9" * 23, "9" * 5000])
def test_parse_positive_id_rejects_values_beyond_integer_column(raw) -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        parse_positive_id(raw, "Spot")
    assert exc_info.value.message == "Spot ID must be at most 2147483647"


def test_parse_positive_id_accepts_largest_id() -> None:
    assert parse_positive_id(str(MAX_ID), "Post") == MAX_ID


def test_error_kinds_and_status_codes() -> None:
    """Each error kind maps to one HTTP status."""
    assert (InvalidArgumentError.kind, InvalidArgumentError.status_code) == ("invalid_argument", 400)
    assert (UnknownPostTypeError.kind, UnknownPostTypeError.status_code) == ("unknown_post_type", 400)
    assert (NotFoundError.kind, NotFoundError.status_code) == ("not_found", 404)
    assert (ConflictError.kind, ConflictError.status_code) == ("conflict", 409)
    assert (InternalError.kind, InternalError.status_code) == ("internal_error", 500)
    assert issubclass(UnknownPostTypeError, InvalidArgumentError)


def test_payload_includes_extra_fields() -> None:
    error = ConflictError("Spot already listed", existing_association={"list_id": 1})
    assert error.to_payload() == {
        "success": False,
        "error": "conflict",
        "detail": "Spot already listed",
        "existing_association": {"list_id": 1},
    }


def test_describe_validation_errors_skips_body_prefix() -> None:
    message = describe_validation_errors(
        [
            {"loc": ("body", "spot_id"), "msg": "Field required"},
            {"loc": ("query", "page"), "msg": "Input should be a valid integer"},
        ]
    )
    assert message == "spot_id: Field required; query.page: Input should be a valid integer"
    assert describe_validation_errors([]) == "Invalid request"


def test_unit_of_work_wraps_database_errors(db_session) -> None:
    """Database failures become a generic internal error after rollback."""
    with pytest.raises(InternalError) as exc_info:
        with unit_of_work(db_session, "delete post"):
            raise OperationalError("DELETE FROM post", {}, Exception("disk I/O error"))

    assert exc_info.value.message == "Failed to delete post. Please try again."
    assert "details" not in exc_info.value.extra


def test_unit_of_work_exposes_details_in_debug(db_session, monkeypatch) -> None:
    monkeypatch.setattr("trip_nick.services.transaction.settings.debug", True)
    with pytest.raises(InternalError) as exc_info:
        with unit_of_work(db_session, "create post"):
            raise OperationalError("INSERT INTO post", {}, Exception("disk I/O error"))

    assert "disk I/O error" in exc_info.value.extra["details"]


def test_unit_of_work_propagates_domain_errors(db_session) -> None:
    with pytest.raises(NotFoundError):
        with unit_of_work(db_session, "fetch post"):
            raise NotFoundError("Post with ID 9 not found")


def test_request_validation_errors_render_as_invalid_argument(client) -> None:
    """Malformed bodies answer 400 with the common error shape."""
    response = client.post("/api/v1/lists/3/spots", json={"list_thumbnail_id": 1})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "invalid_argument"
    assert "spot_id" in body["detail"]


def test_not_found_renders_common_shape(client) -> None:
    response = client.get("/api/v1/posts/999999")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {
        "success": False,
        "error": "not_found",
        "detail": "Post with ID 999999 not found",
        "post_id": 999999,
    }
