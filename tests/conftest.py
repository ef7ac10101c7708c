import random
from collections.abc import Generator
from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from health_index.database import Base, build_engine, get_db
from health_index.main import app
from health_index.routers.deps import get_health_data_provider
from health_index.seed.taxonomy_seed import seed_taxonomy
from health_index.services.health_data import MockHealthDataProvider


@pytest.fixture()
def session_factory() -> Generator:
    engine = build_engine("sqlite://", poolclass=StaticPool)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(session_factory) -> Generator:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seeded_session(db_session):
    seed_taxonomy(db_session)
    return db_session


@pytest.fixture()
def client(db_session) -> Generator[TestClient, None, None]:
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    @asynccontextmanager
    async def no_lifespan(_app):
        yield

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_health_data_provider] = lambda: MockHealthDataProvider(
        delay_seconds=0, rng=random.Random(42)
    )

    # Tests use an in-memory DB via dependency override; skip the migration check and seeding.
    original_lifespan = app.router.lifespan_context
    app.router.lifespan_context = no_lifespan
    with TestClient(app) as test_client:
        yield test_client
    app.router.lifespan_context = original_lifespan
    app.dependency_overrides.clear()


@pytest.fixture()
def seeded_client(seeded_session, client):
    return client
