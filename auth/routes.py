"""
Auth API routes — login.

Route prefix: /usuarios
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.dependencies import get_user_repository
from auth.jwt import create_token
from auth.password import verify_password
from database.helpers import UserRepository
from utils.errors import CredentialMismatch
from utils.schemas import ErrorResponse, LoginRequest, LoginResponse, UserView, require

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Usuarios"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Iniciar sesión de usuario",
    responses={
        400: {"model": ErrorResponse, "description": "Correo y contraseña son requeridos"},
        401: {"model": ErrorResponse, "description": "Credenciales inválidas"},
        500: {"model": ErrorResponse, "description": "Error del servidor"},
    },
)
async def login(
    req: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
) -> Dict[str, Any]:
    """Login with email + password; returns the public user view and a session token."""
    require(req.correo, req.contrasena, message="Correo y contraseña son requeridos.")

    user = await users.get_by_email(req.correo)
    if user is None:
        logger.info("Login failed: unknown email")
        raise CredentialMismatch()

    if not await asyncio.to_thread(verify_password, req.contrasena, user.password_hash):
        logger.info("Login failed: bad password for user %s", user.id)
        raise CredentialMismatch()

    token = create_token(user.id, user.email, user.name)
    logger.info("Login: user %s", user.id)

    return {
        "mensaje": "Inicio de sesión exitoso.",
        "usuario": UserView.model_validate(user),
        "token": token,
    }
