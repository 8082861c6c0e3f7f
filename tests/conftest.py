# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator, Sequence
from datetime import datetime
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from trip_nick.db.session import Base
from trip_nick.db.session import get_db as app_get_session
from trip_nick.main import app as fastapi_app
from trip_nick.models import (
    CommunityPost,
    Image,
    ListPost,
    ListSpot,
    Post,
    PostImage,
    ReviewPost,
    Spot,
    SpotList,
    User,
)
from trip_nick.services.cache import PostListingCache

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)
_SPOT_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite needs to leave transaction control to SQLAlchemy for SAVEPOINTs.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:  # pragma: no cover - driver hook
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    # Service-level commit/rollback only touch SAVEPOINTs inside the test transaction.
    session = Session(
        bind=connection,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def posts_cache(app: FastAPI) -> Iterator[PostListingCache]:
    """Give every test an empty post listing cache."""
    cache = PostListingCache(ttl_seconds=60.0)
    previous = app.state.posts_cache
    app.state.posts_cache = cache
    try:
        yield cache
    finally:
        app.state.posts_cache = previous


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with unique handles."""

    def _make(**overrides) -> User:
        n = next(_USER_COUNTER)
        fields = {
            "display_name": f"Traveler {n}",
            "username": f"traveler{n}",
            "user_email": f"traveler{n}@example.com",
        }
        fields.update(overrides)
        user = User(**fields)
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    return make_user(display_name="Ana Souza", username="ana")


@pytest.fixture()
def make_image(db_session: Session) -> Callable[..., Image]:
    def _make(**overrides) -> Image:
        fields = {
            "image_name": "photo.jpg",
            "blob_url": "https://blobs.example.com/photo.jpg",
            "content_type": "image/jpeg",
            "file_size": 2048,
        }
        fields.update(overrides)
        image = Image(**fields)
        db_session.add(image)
        db_session.commit()
        return image

    return _make


@pytest.fixture()
def make_spot(db_session: Session) -> Callable[..., Spot]:
    """Return a factory that persists spots; pass ``spot_id`` to pin the key."""

    def _make(**overrides) -> Spot:
        n = next(_SPOT_COUNTER)
        fields = {
            "spot_name": f"Miradouro {n}",
            "country": "Portugal",
            "city": "Lisboa",
            "category": "Viewpoint",
            "description": "Sunset over the river",
        }
        fields.update(overrides)
        spot = Spot(**fields)
        db_session.add(spot)
        db_session.commit()
        return spot

    return _make


@pytest.fixture()
def make_list(db_session: Session) -> Callable[..., SpotList]:
    def _make(
        spots: Sequence[Spot] = (),
        *,
        list_name: str = "Weekend in Lisbon",
        is_public: bool = True,
        list_id: int | None = None,
        added: Sequence[datetime] | None = None,
        thumbnails: dict[int, int] | None = None,
    ) -> SpotList:
        spot_list = SpotList(list_name=list_name, is_public=is_public)
        if list_id is not None:
            spot_list.list_id = list_id
        db_session.add(spot_list)
        db_session.flush()
        for index, spot in enumerate(spots):
            entry = ListSpot(
                list_id=spot_list.list_id,
                spot_id=spot.spot_id,
                list_thumbnail_id=(thumbnails or {}).get(spot.spot_id),
            )
            if added is not None:
                entry.created_date = added[index]
            db_session.add(entry)
        db_session.commit()
        return spot_list

    return _make


@pytest.fixture()
def make_review(db_session: Session) -> Callable[..., Post]:
    """Return a factory for review posts with optional linked images."""

    def _make(
        user: User,
        spot: Spot,
        *,
        rating: int | None = 4,
        description: str | None = "Loved it",
        post_id: int | None = None,
        images: Sequence[Image] = (),
        thumbnail: Image | None = None,
    ) -> Post:
        post = Post(description=description, user_id=user.user_id, type="review")
        if post_id is not None:
            post.post_id = post_id
        db_session.add(post)
        db_session.flush()
        db_session.add(ReviewPost(post_id=post.post_id, spot_id=spot.spot_id, rating=rating))
        for position, image in enumerate(images, start=1):
            db_session.add(
                PostImage(
                    post_id=post.post_id,
                    image_id=image.image_id,
                    image_order=position,
                    is_thumbnail=thumbnail is not None and image.image_id == thumbnail.image_id,
                )
            )
        db_session.commit()
        return post

    return _make


@pytest.fixture()
def make_share(db_session: Session) -> Callable[..., Post]:
    """Return a factory for community or list posts sharing ``spot_list``."""

    def _make(
        user: User,
        spot_list: SpotList,
        *,
        post_type: str = "community",
        title: str = "Best of Lisbon",
        description: str | None = "Our favourite places",
        images: Sequence[Image] = (),
    ) -> Post:
        post = Post(description=description, user_id=user.user_id, type=post_type)
        db_session.add(post)
        db_session.flush()
        variant = CommunityPost if post_type == "community" else ListPost
        db_session.add(variant(post_id=post.post_id, title=title, list_id=spot_list.list_id))
        for position, image in enumerate(images, start=1):
            db_session.add(
                PostImage(
                    post_id=post.post_id,
                    image_id=image.image_id,
                    image_order=position,
                    is_thumbnail=position == 1,
                )
            )
        db_session.commit()
        return post

    return _make
