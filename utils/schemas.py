"""
Pydantic schemas for the users API.

Request fields are all optional at the schema level: presence is checked
by the route so that a missing or blank field yields a 400 with the
service's own message instead of a framework validation error.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from utils.errors import ValidationError


def require(*values: Optional[str], message: Optional[str] = None) -> None:
    """Raise ``ValidationError`` unless every value is a non-blank string."""
    if any(value is None or not value.strip() for value in values):
        raise ValidationError(message)


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


class CreateUserRequest(BaseModel):
    nombre: Optional[str] = None
    correo: Optional[str] = None
    contrasena: Optional[str] = Field(default=None, repr=False)


class UpdateNameRequest(BaseModel):
    nombre: Optional[str] = None


class LoginRequest(BaseModel):
    correo: Optional[str] = None
    contrasena: Optional[str] = Field(default=None, repr=False)


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class UserView(BaseModel):
    """Public view of a user. The credential hash has no field here."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    nombre: Optional[str] = Field(default=None, validation_alias="name")
    correo: str = Field(validation_alias="email")


class MessageResponse(BaseModel):
    mensaje: str


class CreatedResponse(MessageResponse):
    id: int


class LoginResponse(BaseModel):
    mensaje: str
    usuario: UserView
    token: str


class ErrorResponse(BaseModel):
    error: str
