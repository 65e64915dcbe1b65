"""Shared fixtures: an in-memory SQLite project store and a FastAPI test client."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from apiforge.db.session import Base, get_db
from apiforge.db import models  # noqa
from apiforge.db.repository import ProjectStore
from apiforge.generators.types import GeneratorOptions


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return ProjectStore(db)


@pytest.fixture
def client(session_factory):
    from apiforge.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: the lifespan (database wait + migrations) is not run
    yield TestClient(app)
    app.dependency_overrides.clear()


def _build_options(
    database_type: str,
    connection_string: str,
    version: str = "",
    jwt: bool = False,
    crud: bool = True,
    swagger: bool = False,
    tests: bool = False,
) -> GeneratorOptions:
    return GeneratorOptions.build(
        version=version,
        database_type=database_type,
        connection_string=connection_string,
        features={"jwt": jwt, "crud": crud, "swagger": swagger, "tests": tests},
    )


@pytest.fixture
def make_options():
    """Factory for generator options; every feature but ``crud`` is off unless requested."""
    return _build_options
