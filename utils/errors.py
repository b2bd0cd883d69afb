"""
Error hierarchy for the users service.

Every error carries the HTTP status it maps to; ``api.middleware`` turns
any ``UsuariosError`` raised by a route or dependency into a JSON body of the
form ``{"error": <message>}``.

    UsuariosError
    ├── ValidationError          400
    ├── AuthError
    │   ├── MissingTokenError    401
    │   └── InvalidTokenError    403
    │       └── TokenExpiredError
    ├── CredentialMismatch       401
    ├── NotFoundError            404
    └── StoreError               500
"""

from __future__ import annotations

from typing import Any, Dict


class UsuariosError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    default_message: str = "Error del servidor."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(UsuariosError):
    status_code = 400
    default_message = "Faltan campos obligatorios."


class AuthError(UsuariosError):
    status_code = 401
    default_message = "No autorizado."


class MissingTokenError(AuthError):
    status_code = 401
    default_message = "Token no proporcionado"


class InvalidTokenError(AuthError):
    status_code = 403
    default_message = "Token inválido"


class TokenExpiredError(InvalidTokenError):
    default_message = "Token expirado"


class CredentialMismatch(UsuariosError):
    """Unknown email and wrong password share this error, status and text."""

    status_code = 401
    default_message = "Correo o contraseña incorrectos."


class NotFoundError(UsuariosError):
    status_code = 404
    default_message = "Usuario no encontrado."


class StoreError(UsuariosError):
    status_code = 500
    default_message = "Error del servidor."
