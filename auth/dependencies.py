"""
FastAPI dependencies for authentication.

``get_current_user`` is the gate in front of every protected route: it
requires a Bearer token, verifies it and exposes the decoded claims.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.jwt import verify_token
from auth.models import TokenClaims
from utils.errors import InvalidTokenError, MissingTokenError

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> TokenClaims:
    """
    Return the claims of the caller's token.

    No token → 401 (``MissingTokenError``); bad signature, garbage or an
    expired token → 403 (``InvalidTokenError``).
    """
    if credentials is None:
        logger.warning("No bearer token on %s %s", request.method, request.url.path)
        raise MissingTokenError()

    try:
        claims = verify_token(credentials.credentials)
    except InvalidTokenError as exc:
        logger.warning(
            "Rejected token on %s %s: %s", request.method, request.url.path, exc.message
        )
        raise

    request.state.user = claims
    return claims
