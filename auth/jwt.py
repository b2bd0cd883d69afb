"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256.
Secret key and lifetime come from settings (env vars: ``JWT_SECRET``,
``JWT_EXPIRY_SECONDS``).  Tokens are never stored; a token is valid as
long as its signature matches and ``exp`` lies in the future.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from auth.models import TokenClaims
from config.settings import get_settings
from utils.errors import InvalidTokenError, TokenExpiredError


def _sign(raw: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    user_id: int,
    email: str,
    name: Optional[str],
    *,
    now: Optional[float] = None,
) -> str:
    """Create a signed token for the given user, expiring after the configured lifetime."""
    settings = get_settings()
    issued_at = int(now if now is not None else time.time())
    payload = {
        "id": user_id,
        "correo": email,
        "nombre": name,
        "iat": issued_at,
        "exp": issued_at + settings.jwt_expiry_seconds,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    encoded = urlsafe_b64encode(raw).decode().rstrip("=")
    return encoded + "." + _sign(raw, settings.jwt_secret)


def verify_token(token: str, *, now: Optional[float] = None) -> TokenClaims:
    """
    Verify a token and return its claims.

    Raises ``InvalidTokenError`` on a malformed token or signature mismatch
    and ``TokenExpiredError`` once ``exp`` has passed.
    """
    settings = get_settings()
    encoded, sep, signature = token.partition(".")
    if not sep or not encoded or not signature:
        raise InvalidTokenError()

    try:
        raw = urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
    except (binascii.Error, ValueError):
        raise InvalidTokenError()

    if not hmac.compare_digest(signature.encode(), _sign(raw, settings.jwt_secret).encode()):
        raise InvalidTokenError()

    try:
        claims = TokenClaims.model_validate_json(raw)
    except PydanticValidationError:
        raise InvalidTokenError()

    current = now if now is not None else time.time()
    if current >= claims.exp:
        raise TokenExpiredError()
    return claims
