"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import ShapeTitle
from src.db.schema import Base
from src.shapes.catalog import DifficultyCatalog
from src.shapes.library import InMemoryShapeLibrary
from tests.helpers import CIRCLE_PIXELS, FakeClock, first_title

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_factory() -> Generator[sessionmaker[Session], None, None]:
    """Sessions on a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def library() -> InMemoryShapeLibrary:
    """Only the Circle has pixels. Every other title draws as an empty shape."""
    return InMemoryShapeLibrary({ShapeTitle.CIRCLE: CIRCLE_PIXELS})


@pytest.fixture
def catalog(library: InMemoryShapeLibrary) -> DifficultyCatalog:
    """Default tiers (Easy: 10s, Medium: 15s, Hard: 20s), always picking the first title of a tier."""
    return DifficultyCatalog(library, chooser=first_title)
