"""Shared test fixtures for all test modules."""

import contextlib
import uuid

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import bdc.models  # noqa: F401
from bdc.core import database as db_module
from bdc.core.database import Base
from bdc.service_worker.cache_storage import InMemoryCacheBucket, InMemoryCacheStorage
from bdc.service_worker.config import ServiceWorkerConfig
from bdc.service_worker.network import HttpxFetcher

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

# Well-known default user ID, the same one requests without X-User-Id resolve to
DEFAULT_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
OTHER_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = db_module.get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def default_user_id():
    return DEFAULT_USER_ID


# ── Service worker fixtures ──


class FakeNetwork:
    """Routes requests to canned responses and records every call.

    Paths in ``offline`` raise a connection error; unknown paths answer 404.
    """

    def __init__(self, routes=None, offline=()):
        self.routes = dict(routes or {})
        self.offline = set(offline)
        self.calls: list[httpx.Request] = []
        self.all_offline = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path
        if self.all_offline or path in self.offline:
            raise httpx.ConnectError("network unreachable", request=request)
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, content=route)

    def fetcher(self) -> HttpxFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return HttpxFetcher(client)


SW_ORIGIN = "https://bdc.example.com"

SW_CONFIG = ServiceWorkerConfig(
    origin=SW_ORIGIN,
    cache_name="car-exchange-cache-v2",
    precache_urls=("/", "/offline.html", "/static/js/bundle.js", "/favicon.ico"),
)


@pytest.fixture
def sw_config():
    return SW_CONFIG


@pytest.fixture
def network():
    return FakeNetwork(
        {
            "/": b"<html>shell</html>",
            "/offline.html": b"<html>offline</html>",
            "/static/js/bundle.js": b"console.log('bundle')",
            "/favicon.ico": b"\x00\x01icon",
        }
    )


@pytest.fixture
def storage():
    return InMemoryCacheStorage()


class QuotaBucket(InMemoryCacheBucket):
    """Bucket whose writes fail for the given paths, like a full disk."""

    def __init__(self, name, full_paths):
        super().__init__(name)
        self.full_paths = full_paths

    async def put(self, request, response):
        if request.url.path in self.full_paths:
            raise OSError("quota exceeded")
        await super().put(request, response)


class QuotaStorage(InMemoryCacheStorage):
    def __init__(self, full_paths=()):
        super().__init__()
        self.full_paths = set(full_paths)

    async def open(self, name):
        if name not in self._buckets:
            self._buckets[name] = QuotaBucket(name, self.full_paths)
        return self._buckets[name]
