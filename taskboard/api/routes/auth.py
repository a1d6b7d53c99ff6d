import base64
import binascii
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Request

from taskboard.core import identity
from taskboard.core.errors import RequestValidationFailed
from taskboard.core.validation import is_blank

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def basic_credentials(authorization: Optional[str]) -> tuple[str, str]:
    """Decode ``Basic base64(user:password)`` into its two parts."""
    if not authorization or not authorization.startswith("Basic "):
        raise RequestValidationFailed("Authorisation header missing or incorrect")

    encoded = authorization.split(" ", 1)[1].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise RequestValidationFailed("Invalid Basic auth credentials")

    username, _, password = decoded.partition(":")
    if not username or not password:
        raise RequestValidationFailed("Invalid Basic auth credentials")
    return username, password


@router.get("/login")
async def login(request: Request):
    """Exchange Basic credentials for an access/refresh token pair."""
    username, password = basic_credentials(request.headers.get("authorization"))

    tokens = await identity.request_token(
        {"grant_type": "password", "username": username, "password": password}
    )
    logger.info(f"Issued tokens for {username}")
    return identity.to_token_pair(tokens)


@router.post("/refresh")
async def refresh(body: Optional[Dict[str, Any]] = Body(default=None)):
    refresh_token = (body or {}).get("refreshToken")
    if is_blank(refresh_token) or not isinstance(refresh_token, str):
        raise RequestValidationFailed("refreshToken is required")

    tokens = await identity.request_token(
        {"grant_type": "refresh_token", "refresh_token": refresh_token}
    )
    return identity.to_token_pair(tokens)
