"""
Shared fixtures: in-memory SQLite databases, seeded users and stub image providers.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from moodjournal.api.dependencies import get_image_chain
from moodjournal.db.init_db import seed_users
from moodjournal.db.session import get_db, init_db
from moodjournal.main import app
from moodjournal.models.user import User
from moodjournal.tests.helpers import StubProvider, make_chain

TEST_ROSTER = ["ana:Ana:🌻", "luis:Luis:🐢"]

LEGACY_MOOD_TABLE = """
CREATE TABLE mood_entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id),
    mood_type VARCHAR(10) NOT NULL,
    note TEXT,
    entry_date DATE NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL{extra}
)
"""


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine():
    engine = _memory_engine()
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def make_legacy_engine():
    """Build a database whose mood_entries table lacks some optional columns."""
    engines = []

    def _make(*extra_columns):
        engine = _memory_engine()
        User.__table__.create(bind=engine)
        extra = "".join(f",\n    {column}" for column in extra_columns)
        with engine.begin() as connection:
            connection.execute(text(LEGACY_MOOD_TABLE.format(extra=extra)))
        engines.append(engine)
        return engine

    yield _make
    for engine in engines:
        engine.dispose()


def _session_for(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    seed_users(session, TEST_ROSTER)
    return session


@pytest.fixture
def db(engine):
    session = _session_for(engine)
    yield session
    session.close()


@pytest.fixture
def session_factory():
    """Open seeded sessions on arbitrary engines (closed at teardown)."""
    sessions = []

    def _open(engine):
        session = _session_for(engine)
        sessions.append(session)
        return session

    yield _open
    for session in sessions:
        session.close()


@pytest.fixture
def image_chain():
    return make_chain(StubProvider("stub-model", image_url="https://img.example/cat.png"))


@pytest.fixture
def client(engine, db, image_chain):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_chain] = lambda: image_chain
    yield TestClient(app)
    app.dependency_overrides.clear()
