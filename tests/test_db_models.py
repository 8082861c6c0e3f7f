# mypy: ignore-errors
# tests/test_db_models.py
"""Tests for table constraints and model helpers."""

import pytest
from sqlalchemy.exc import IntegrityError

from trip_nick.models import Post, PostImage, ReviewPost


def test_post_images_allow_one_thumbnail_per_post(db_session, test_user, make_spot, make_image, make_review) -> None:
    """A second thumbnail for the same post violates the partial unique index."""
    first, second = make_image(), make_image()
    post = make_review(test_user, make_spot(), images=[first], thumbnail=first)

    db_session.add(
        PostImage(post_id=post.post_id, image_id=second.image_id, image_order=2, is_thumbnail=True)
    )
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_post_images_allow_many_non_thumbnails(db_session, test_user, make_spot, make_image, make_review) -> None:
    images = [make_image() for _ in range(3)]
    post = make_review(test_user, make_spot(), images=images)

    assert [link.image_order for link in post.images] == [1, 2, 3]
    assert not any(link.is_thumbnail for link in post.images)


def test_review_rating_must_be_between_one_and_five(db_session, test_user, make_spot) -> None:
    spot = make_spot()
    post = Post(description="Too good", user_id=test_user.user_id, type="review")
    db_session.add(post)
    db_session.flush()
    db_session.add(ReviewPost(post_id=post.post_id, spot_id=spot.spot_id, rating=6))

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_post_type_is_restricted(db_session, test_user) -> None:
    db_session.add(Post(description="?", user_id=test_user.user_id, type="story"))

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_review_without_rating_is_allowed(db_session, test_user, make_spot, make_review) -> None:
    post = make_review(test_user, make_spot(), rating=None)
    assert post.review_post.rating is None


@pytest.mark.parametrize(
    "description, expected",
    [
        ("Nice view [DELETED]", True),
        (" [DELETED]", True),
        ("Nice view", False),
        ("[DELETED] at the start", False),
        (None, False),
    ],
)
def test_post_is_soft_deleted(description, expected) -> None:
    assert Post(description=description, user_id=1, type="review").is_soft_deleted is expected


def test_spot_location(make_spot) -> None:
    spot = make_spot(city="Porto", country="Portugal")
    assert spot.location == "Porto, Portugal"
