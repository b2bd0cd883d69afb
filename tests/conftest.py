"""
Shared fixtures. Required settings are seeded before any project import.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-0123456789abcdef")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_user_repository
from auth.jwt import create_token
from config.settings import get_settings
from database.models import User


class InMemoryUserRepository:
    """Stand-in for ``UserRepository`` keeping rows in a dict."""

    def __init__(self) -> None:
        self.rows: Dict[int, User] = {}
        self._next_id = 1

    def add(self, name: Optional[str], email: str, password_hash: str) -> User:
        user = User(id=self._next_id, name=name, email=email, password_hash=password_hash)
        self.rows[user.id] = user
        self._next_id += 1
        return user

    async def create(self, name: str, email: str, password_hash: str) -> User:
        return self.add(name, email, password_hash)

    async def list_all(self) -> List[User]:
        return [self.rows[k] for k in sorted(self.rows)]

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return self.rows.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        matches = [u for u in self.rows.values() if u.email == email]
        return min(matches, key=lambda u: u.id) if matches else None

    async def update_name(self, user_id: int, name: str) -> bool:
        user = self.rows.get(user_id)
        if user is None:
            return False
        user.name = name
        return True


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def app(users):
    from main import app as fastapi_app

    fastapi_app.dependency_overrides[get_user_repository] = lambda: users
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_header() -> Dict[str, str]:
    token = create_token(1, "ana@x.com", "Ana")
    return {"Authorization": f"Bearer {token}"}
