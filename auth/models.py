"""Claims carried inside a session token."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class TokenClaims(BaseModel):
    id: int
    correo: str
    nombre: Optional[str] = None
    iat: int
    exp: int
