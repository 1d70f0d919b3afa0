"""
CareerTrail Test Configuration

Shared fixtures for all tests.
"""
import pytest

from careertrail.config import reload_config
from careertrail.db import User, get_engine, get_session_factory, init_db
from tests.fixtures.jobs import make_job


# =============================================================================
# FIXTURES: Configuration
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Defaults only: no YAML file, no stray env overrides."""
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "missing.yml"))
    for name in ("DATABASE_URL", "JWT_SECRET_KEY", "OPENAI_API_KEY", "CAREERTRAIL_URL", "CAREERTRAIL_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    cfg = reload_config()
    yield cfg
    monkeypatch.undo()
    reload_config()


# =============================================================================
# FIXTURES: Database
# =============================================================================

@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with all tables."""
    eng = get_engine("sqlite://")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    db = get_session_factory(engine)()
    yield db
    db.close()


@pytest.fixture
def user(session) -> User:
    u = User(email="ada@example.com", name="Ada")
    session.add(u)
    session.commit()
    return u


@pytest.fixture
def other_user(session) -> User:
    u = User(email="grace@example.com", name="Grace")
    session.add(u)
    session.commit()
    return u


# =============================================================================
# FIXTURES: Board records
# =============================================================================

@pytest.fixture
def job_factory():
    return make_job
