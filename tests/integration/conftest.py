import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401  registers the tables
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import generate_jwt
from src.depends import get_unit_of_work


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def seed(engine):
    """
    Insert entities through a session of their own.

    The returned objects are detached, so reading their attributes never
    triggers a reload after the API session rolls back.
    """
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _seed(*entities):
        async with Session() as session:
            for entity in entities:
                session.add(entity)
                # Flush in order so foreign keys resolve on SQLite
                await session.flush()
            await session.commit()
        return entities[0] if len(entities) == 1 else entities

    return _seed


@pytest.fixture
def auth_headers():
    """Bearer header for a seeded user"""

    def _headers(user) -> dict:
        return {"Authorization": f"Bearer {generate_jwt(user.id)}"}

    return _headers


@pytest_asyncio.fixture
async def client(db_session):
    from config import ApplicationConfig
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
