"""
User persistence — every statement the HTTP layer needs against ``UsuariosVidal``.

All SQLAlchemy failures surface as ``StoreError``.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from utils.errors import StoreError

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, name: str, email: str, password_hash: str) -> User:
        """Insert a user row and return it with its store-assigned id."""
        user = User(name=name, email=email, password_hash=password_hash)
        try:
            self._session.add(user)
            await self._session.flush()
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("Failed to insert user")
            raise StoreError() from exc
        return user

    async def list_all(self) -> List[User]:
        try:
            result = await self._session.execute(select(User).order_by(User.id))
        except SQLAlchemyError as exc:
            logger.exception("Failed to list users")
            raise StoreError("Error al obtener los usuarios") from exc
        return list(result.scalars().all())

    async def get_by_id(self, user_id: int) -> Optional[User]:
        try:
            result = await self._session.execute(select(User).where(User.id == user_id))
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch user %s", user_id)
            raise StoreError("Error al buscar el usuario.") from exc
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self._session.execute(
                select(User).where(User.email == email).order_by(User.id).limit(1)
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to look up user by email")
            raise StoreError("Error al procesar la solicitud de inicio de sesión.") from exc
        return result.scalar_one_or_none()

    async def update_name(self, user_id: int, name: str) -> bool:
        """Set a new display name. Returns ``False`` when no row matched."""
        try:
            result = await self._session.execute(
                update(User).where(User.id == user_id).values(name=name)
            )
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("Failed to update name of user %s", user_id)
            raise StoreError("Error al actualizar el nombre del usuario.") from exc
        return result.rowcount > 0
