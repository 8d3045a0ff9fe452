import os

# Settings and the engine are built at import time; point them at throwaway values first.
os.environ.setdefault("ENV", "dev")
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["DB_AUTO_CREATE"] = "false"
os.environ.setdefault("API_BASE_URL", "http://testserver")

from contextlib import contextmanager
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobtracker.client import ApiError, JobsClient
from jobtracker.core.base import Base
from jobtracker.core import config as app_config

# Import models so they register with SQLAlchemy metadata.
from jobtracker.models.job_application import JobApplication  # noqa: F401

from jobtracker.core.database import get_db
from jobtracker.dependencies.api_client import get_jobs_client


@pytest.fixture(scope="session")
def db_engine():
    # In-memory SQLite for fast, isolated tests.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def db_session(db_engine):
    # Important: because we use an in-memory SQLite DB with StaticPool, the DB
    # persists across tests. Reset schema per test to avoid cross-test coupling.
    Base.metadata.drop_all(bind=db_engine)
    Base.metadata.create_all(bind=db_engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _reset_mutable_settings():
    """
    Tests sometimes tweak global settings (app_config.settings.*). Because that object is
    process-global, we must restore values after each test to avoid cross-test coupling.
    """
    keys = [
        "DEFAULT_PAGE_SIZE",
        "MAX_PAGE_SIZE",
        "API_BASE_URL",
    ]
    original = {k: getattr(app_config.settings, k) for k in keys}
    try:
        yield
    finally:
        for k, v in original.items():
            setattr(app_config.settings, k, v)


@pytest.fixture()
def app(db_session):
    from jobtracker.main import app as fastapi_app

    def override_get_db():
        yield db_session
    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    """Client for the JSON API."""
    with TestClient(app) as c:
        yield c


def _job(job_id: int, **overrides) -> dict:
    now = datetime(2026, 10, 19, 15, 4, 5, tzinfo=timezone.utc).isoformat()
    job = {
        "id": job_id,
        "title": f"Engineer {job_id}",
        "company": f"Company {job_id}",
        "status": "APPLIED",
        "applied_date": "2026-10-01",
        "deadline": None,
        "notes": None,
        "created_at": now,
        "updated_at": now,
    }
    job.update(overrides)
    return job


class FakeJobsClient:
    """
    Records every call the HTML pages make and answers from an in-memory dict.

    Set `fail_with` to an ApiError to make every call raise it.
    """

    def __init__(self):
        self.calls: list[tuple[str, tuple, dict]] = []
        self.jobs: dict[int, dict] = {}
        self.fail_with: ApiError | None = None
        self.page_overrides: dict = {}
        self.stats_payload = {
            "total": 0,
            "applied": 0,
            "screening": 0,
            "interview": 0,
            "offer": 0,
            "accepted": 0,
            "rejected": 0,
            "withdrawn": 0,
        }
        self._next_id = 1

    def add(self, **overrides) -> dict:
        job = _job(self._next_id, **overrides)
        self.jobs[job["id"]] = job
        self._next_id += 1
        return job

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        if self.fail_with is not None:
            raise self.fail_with

    def calls_to(self, name: str) -> list[tuple[tuple, dict]]:
        return [(a, k) for n, a, k in self.calls if n == name]

    def _require(self, job_id: int) -> dict:
        if job_id not in self.jobs:
            raise ApiError(404, f"Job application not found with id: {job_id}", error="NOT_FOUND")
        return self.jobs[job_id]

    def list(self, **params):
        self._record("list", **params)
        content = list(self.jobs.values())[: int(params.get("size", 10))]
        page = {
            "content": content,
            "page_number": int(params.get("page", 0)),
            "page_size": int(params.get("size", 10)),
            "total_elements": len(self.jobs),
            "total_pages": 1 if self.jobs else 0,
            "last": True,
        }
        page.update(self.page_overrides)
        return page

    def get(self, job_id):
        self._record("get", job_id)
        return self._require(job_id)

    def create(self, payload):
        self._record("create", payload)
        return self.add(**payload)

    def update(self, job_id, payload):
        self._record("update", job_id, payload)
        self._require(job_id).update(payload)
        return self.jobs[job_id]

    def set_status(self, job_id, status):
        self._record("set_status", job_id, status)
        self._require(job_id)["status"] = status
        return self.jobs[job_id]

    def delete(self, job_id):
        self._record("delete", job_id)
        self._require(job_id)
        del self.jobs[job_id]
        return {"success": True, "message": "Job application deleted successfully"}

    def stats(self):
        self._record("stats")
        return dict(self.stats_payload)


@pytest.fixture()
def fake_api():
    return FakeJobsClient()


@pytest.fixture()
def pages(app, fake_api):
    """
    Browser-side client; the pages talk to `fake_api` instead of the real REST API.
    """
    app.dependency_overrides[get_jobs_client] = lambda: fake_api
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_jobs_client, None)


@pytest.fixture()
def pages_for_api(app):
    """
    Context manager yielding a browser-side client whose pages reach the real
    REST API (through a second in-process TestClient).

    Usage:
        with pages_for_api() as c:
            ...
    """

    @contextmanager
    def _pages_for_api():
        api_http = TestClient(app)
        app.dependency_overrides[get_jobs_client] = lambda: JobsClient(http=api_http)
        with TestClient(app) as c:
            yield c
        app.dependency_overrides.pop(get_jobs_client, None)
        api_http.close()

    return _pages_for_api
