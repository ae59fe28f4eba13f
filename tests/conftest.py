# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from threadvote.core.security import create_access_token
from threadvote.db.session import Base
from threadvote.db.session import get_db as app_get_session
from threadvote.main import app as fastapi_app
from threadvote.models import Comment, Post
from threadvote.schemas.comment import CommentCreate
from threadvote.schemas.post import PostCreate
from threadvote.services.comment_service import CommentService
from threadvote.services.post_service import PostService

TEST_DB_URL = "sqlite://"

_CLOCK = count(1)
_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite needs explicit BEGIN for SAVEPOINT to behave.
    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record) -> None:  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn) -> None:  # pragma: no cover
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
    # Service commits only release savepoints; the outer transaction is rolled back.
    session = Session(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
        expire_on_commit=False,
    )
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


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


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def auth_token() -> dict[str, str]:
    """Return authorization headers for alice."""
    return {"Authorization": f"Bearer {create_access_token('alice')}"}


@pytest.fixture()
def other_auth_token() -> dict[str, str]:
    """Return authorization headers for bob."""
    return {"Authorization": f"Bearer {create_access_token('bob')}"}


@pytest.fixture()
def post_service(db_session: Session) -> PostService:
    return PostService(db_session)


@pytest.fixture()
def comment_service(db_session: Session) -> CommentService:
    return CommentService(db_session)


@pytest.fixture()
def test_post(post_service: PostService) -> Post:
    """Create a baseline post authored by alice."""
    return post_service.create(
        "alice",
        PostCreate(subreddit_name="python", title="Test post", body="Test post content"),
    )


@pytest.fixture()
def make_comment(
    db_session: Session,
    comment_service: CommentService,
) -> Callable[..., Comment]:
    """Return a factory creating comments with strictly increasing timestamps."""

    def _make(
        post: Post,
        parent: Comment | None = None,
        *,
        author: str = "alice",
        body: str | None = None,
    ) -> Comment:
        tick = next(_CLOCK)
        comment = comment_service.create(
            author,
            CommentCreate(
                post_id=post.id,
                parent_id=parent.id if parent is not None else None,
                body=body or f"comment {tick}",
            ),
        )
        comment.created_at = _EPOCH + timedelta(minutes=tick)
        db_session.commit()
        return comment

    return _make
