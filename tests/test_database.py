"""
Tests for the async database gateway and the user repository,
run against a throwaway SQLite file.
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from config.settings import Settings
from database.helpers import UserRepository
from database.models import Base
from database.session import Database
from utils.errors import StoreError


def _settings(url: str) -> Settings:
    return Settings(_env_file=None, database_url=url)


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(_settings(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}"))
    await db.connect()
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.dispose()


class TestDatabase:
    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self, database):
        engine = database.engine
        await database.connect()
        assert database.is_connected
        assert database.engine is engine

    @pytest.mark.asyncio
    async def test_query_binds_parameters(self, database):
        await database.query(
            'INSERT INTO "UsuariosVidal" ("Correo", "ContrasenaHash") VALUES (:correo, :hash)',
            {"correo": "x'); DROP TABLE \"UsuariosVidal\"; --", "hash": "h"},
        )
        rows = await database.query(
            'SELECT "Correo" AS correo FROM "UsuariosVidal" WHERE "ContrasenaHash" = :hash',
            {"hash": "h"},
        )
        assert rows == [{"correo": "x'); DROP TABLE \"UsuariosVidal\"; --"}]

    @pytest.mark.asyncio
    async def test_query_error_is_store_error(self, database):
        with pytest.raises(StoreError):
            await database.query("SELECT * FROM no_such_table")

    @pytest.mark.asyncio
    async def test_dispose_then_reconnect(self, database):
        await database.dispose()
        assert not database.is_connected
        rows = await database.query("SELECT 1 AS one")
        assert rows == [{"one": 1}]

    @pytest.mark.asyncio
    async def test_connect_failure_raises(self, tmp_path):
        db = Database(_settings(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'users.db'}"))
        with pytest.raises(StoreError):
            await db.connect()
        assert not db.is_connected

    @pytest.mark.asyncio
    async def test_session_requires_connection_first(self, tmp_path):
        db = Database(_settings(f"sqlite+aiosqlite:///{tmp_path / 'lazy.db'}"))
        assert not db.is_connected
        async with db.session() as session:
            assert session is not None
        assert db.is_connected
        await db.dispose()

    @pytest.mark.asyncio
    async def test_session_without_factory_raises_store_error(self, tmp_path):
        db = Database(_settings(f"sqlite+aiosqlite:///{tmp_path / 'idle.db'}"))
        db.connect = AsyncMock()
        with pytest.raises(StoreError, match="not connected"):
            async with db.session():
                pass


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_create_and_get(self, database):
        async with database.session() as session:
            repo = UserRepository(session)
            user = await repo.create("Ana", "ana@x.com", "hash")
            assert user.id is not None

        async with database.session() as session:
            fetched = await UserRepository(session).get_by_id(user.id)
        assert fetched.name == "Ana"
        assert fetched.email == "ana@x.com"

    @pytest.mark.asyncio
    async def test_get_unknown_is_none(self, database):
        async with database.session() as session:
            assert await UserRepository(session).get_by_id(999) is None

    @pytest.mark.asyncio
    async def test_list_all_ordered(self, database):
        async with database.session() as session:
            repo = UserRepository(session)
            await repo.create("A", "a@x.com", "h")
            await repo.create("B", "b@x.com", "h")
            users = await repo.list_all()
        assert [u.email for u in users] == ["a@x.com", "b@x.com"]

    @pytest.mark.asyncio
    async def test_get_by_email(self, database):
        async with database.session() as session:
            repo = UserRepository(session)
            created = await repo.create("Ana", "ana@x.com", "h")
            found = await repo.get_by_email("ana@x.com")
            missing = await repo.get_by_email("nobody@x.com")
        assert found.id == created.id
        assert missing is None

    @pytest.mark.asyncio
    async def test_update_name(self, database):
        async with database.session() as session:
            repo = UserRepository(session)
            user = await repo.create("Ana", "ana@x.com", "h")
            assert await repo.update_name(user.id, "Ana María") is True
            assert await repo.update_name(999, "X") is False

        async with database.session() as session:
            fetched = await UserRepository(session).get_by_id(user.id)
        assert fetched.name == "Ana María"
