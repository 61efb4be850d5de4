"""Test configuration."""
import os
from collections.abc import AsyncIterator, Callable, Iterator
from datetime import datetime
from pathlib import Path
from uuid import uuid4

from alembic import command
from alembic.config import Config
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# --- Default configuration for the test run
os.environ.setdefault("DATABASE_URL", "sqlite:///./followgraph_test.db")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from followgraph.main import app  # noqa: E402
from followgraph.db import get_db  # noqa: E402
from followgraph.models import AccountType, ApiKey, ApiScope, Base, Follow, FollowStatus, User  # noqa: E402
from followgraph.utils.apikey import hash_key  # noqa: E402

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DB_PATH = Path("./followgraph_test.db")


def _run_migrations() -> None:
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", os.environ["DATABASE_URL"])
    command.upgrade(cfg, "head")


# --- (1) Fresh database file for the session
if DB_PATH.exists():
    DB_PATH.unlink()

engine = create_engine(
    os.environ["DATABASE_URL"],
    connect_args={"check_same_thread": False, "timeout": 30},
    future=True,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False,
                                   future=True, expire_on_commit=False)

# --- (2) Schema comes from Alembic only
_run_migrations()


def _truncate_all() -> None:
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture
def session_factory() -> sessionmaker[Session]:
    return TestingSessionLocal


@pytest.fixture
def db_session() -> Iterator[Session]:
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        _truncate_all()


@pytest.fixture(autouse=True)
def override_db_dependency(db_session: Session) -> Iterator[None]:
    def _get_db() -> Iterator[Session]:
        yield db_session
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_user(db_session: Session) -> Callable[..., User]:
    def _factory(
        name: str = "member",
        *,
        account_type: AccountType = AccountType.PUBLIC,
        profile_pic: str | None = None,
    ) -> User:
        user = User(
            name=name,
            email=f"{name}-{uuid4().hex[:8]}@example.com",
            profile_pic=profile_pic,
            account_type=account_type,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _factory


@pytest.fixture
def make_edge(db_session: Session) -> Callable[..., Follow]:
    """Insert an edge directly, bypassing the state machine."""

    def _factory(
        source: User,
        target: User,
        status: FollowStatus = FollowStatus.ACCEPTED,
        created_at: datetime | None = None,
    ) -> Follow:
        edge = Follow(user_id=source.id, target_id=target.id, status=status)
        if created_at is not None:
            edge.created_at = created_at
        db_session.add(edge)
        db_session.commit()
        db_session.refresh(edge)
        return edge

    return _factory


@pytest.fixture
def make_api_key(db_session: Session) -> Callable[..., ApiKey]:
    def _factory(
        key: str,
        *,
        scope: ApiScope = ApiScope.user,
        user: User | None = None,
        is_active: bool = True,
        expires_at: datetime | None = None,
    ) -> ApiKey:
        api_key = ApiKey(
            name=f"key-{uuid4().hex}",
            prefix="test_" + scope.value,
            key_hash=hash_key(key),
            scope=scope,
            user_id=user.id if user is not None else None,
            is_active=is_active,
            expires_at=expires_at,
        )
        db_session.add(api_key)
        db_session.commit()
        db_session.refresh(api_key)
        return api_key

    return _factory


@pytest.fixture
def headers_for(make_api_key: Callable[..., ApiKey]) -> Callable[[User], dict[str, str]]:
    """Return bearer headers acting as the given user."""

    def _factory(user: User) -> dict[str, str]:
        token = f"user-{uuid4().hex}"
        make_api_key(token, scope=ApiScope.user, user=user)
        return {"Authorization": f"Bearer {token}"}

    return _factory


@pytest.fixture
def admin_headers(make_api_key: Callable[..., ApiKey]) -> dict[str, str]:
    token = f"admin-{uuid4().hex}"
    make_api_key(token, scope=ApiScope.admin)
    return {"Authorization": f"Bearer {token}"}
