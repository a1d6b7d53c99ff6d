import json
import logging
from typing import Optional

import jwt
from jwt.algorithms import RSAAlgorithm
from fastapi import Request

from taskboard.core import identity
from taskboard.core.errors import AuthenticationFailed

logger = logging.getLogger(__name__)

ALGORITHM = "RS256"


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None


async def verify_token(token: str) -> dict:
    """Verify ``token`` against the first key the identity provider publishes."""
    try:
        keys = await identity.fetch_signing_keys()
        if not keys:
            raise AuthenticationFailed("Identity provider returned no signing keys")
        public_key = RSAAlgorithm.from_jwk(json.dumps(keys[0]))
        return jwt.decode(
            token,
            public_key,
            algorithms=[ALGORITHM],
            options={"verify_aud": False},
        )
    except AuthenticationFailed:
        raise
    except jwt.ExpiredSignatureError:
        raise AuthenticationFailed("Token has expired")
    except jwt.PyJWTError as e:
        raise AuthenticationFailed(f"Token validation failed: {e}")
    except Exception as e:
        # network errors, malformed JWKS and an unconfigured provider all deny access
        logger.warning(f"Could not verify token: {e}")
        raise AuthenticationFailed("Could not verify token")


async def require_bearer_token(request: Request) -> None:
    """Router dependency guarding every board, column and ticket endpoint."""
    if not getattr(request.app.state, "auth_enabled", True):
        return

    token = bearer_token(request.headers.get("authorization"))
    if not token:
        raise AuthenticationFailed("Forbidden")

    try:
        request.state.token_claims = await verify_token(token)
    except AuthenticationFailed as e:
        logger.warning(f"Rejected {request.method} {request.url.path}: {e.detail}")
        raise
