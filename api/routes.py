"""
User resource routes.

Route prefix: /usuarios  (login lives in ``auth.routes`` under the same prefix)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_user_repository
from auth.dependencies import get_current_user
from auth.models import TokenClaims
from auth.password import hash_password
from database.helpers import UserRepository
from database.session import get_database
from utils.errors import NotFoundError
from utils.schemas import (
    CreatedResponse,
    CreateUserRequest,
    ErrorResponse,
    MessageResponse,
    UpdateNameRequest,
    UserView,
    require,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Usuarios"])

_AUTH_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "No autorizado - Token no proporcionado"},
    403: {"model": ErrorResponse, "description": "Prohibido - Token inválido"},
    500: {"model": ErrorResponse, "description": "Error del servidor"},
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreatedResponse,
    summary="Crear un nuevo usuario",
    responses={
        400: {"model": ErrorResponse, "description": "Datos inválidos en la solicitud"},
        500: {"model": ErrorResponse, "description": "Error del servidor"},
    },
)
async def create_user(
    req: CreateUserRequest,
    users: UserRepository = Depends(get_user_repository),
) -> Dict[str, Any]:
    """Register a user. The password is stored only as a bcrypt hash."""
    require(req.nombre, req.correo, req.contrasena)

    password_hash = await asyncio.to_thread(hash_password, req.contrasena)
    user = await users.create(req.nombre, req.correo, password_hash)
    logger.info("Created user %s", user.id)

    return {"mensaje": "Usuario creado correctamente.", "id": user.id}


@router.get(
    "",
    response_model=List[UserView],
    summary="Obtener todos los usuarios",
    responses=_AUTH_RESPONSES,
)
async def list_users(
    _claims: TokenClaims = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> List[UserView]:
    rows = await users.list_all()
    return [UserView.model_validate(row) for row in rows]


@router.get(
    "/{user_id}",
    response_model=UserView,
    summary="Obtener un usuario por ID",
    responses={
        **_AUTH_RESPONSES,
        404: {"model": ErrorResponse, "description": "Usuario no encontrado"},
    },
)
async def get_user(
    user_id: int,
    _claims: TokenClaims = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> UserView:
    user = await users.get_by_id(user_id)
    if user is None:
        raise NotFoundError()
    return UserView.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Actualizar el nombre de un usuario",
    responses={
        **_AUTH_RESPONSES,
        400: {"model": ErrorResponse, "description": "El campo 'nombre' es obligatorio"},
        404: {"model": ErrorResponse, "description": "Usuario no encontrado"},
    },
)
async def update_user_name(
    user_id: int,
    req: UpdateNameRequest,
    claims: TokenClaims = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> Dict[str, str]:
    require(req.nombre, message="El campo 'nombre' es obligatorio.")

    if not await users.update_name(user_id, req.nombre):
        raise NotFoundError()
    logger.info("User %s renamed by user %s", user_id, claims.id)

    return {"mensaje": "Nombre actualizado correctamente."}


health_router = APIRouter(tags=["health"])


@health_router.get("/health")
async def health_check() -> Dict[str, str]:
    await get_database().query("SELECT 1 AS ok")
    return {"status": "ok"}
