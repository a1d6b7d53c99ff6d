import os
import logging
from typing import Any, Dict, List

import httpx

from taskboard.core.errors import UpstreamFailure

KEYCLOAK_URL = os.getenv("KEYCLOAK_URL", "").rstrip("/")
KEYCLOAK_REALM = os.getenv("KEYCLOAK_REALM", "tasks")
KEYCLOAK_CLIENT_ID = os.getenv("KEYCLOAK_CLIENT_ID", "")
KEYCLOAK_CLIENT_SECRET = os.getenv("KEYCLOAK_CLIENT_SECRET", "")
IDENTITY_TIMEOUT = float(os.getenv("IDENTITY_TIMEOUT", "10"))

logger = logging.getLogger(__name__)


def is_configured() -> bool:
    return bool(KEYCLOAK_URL)


def openid_connect_url(endpoint: str) -> str:
    return f"{KEYCLOAK_URL}/realms/{KEYCLOAK_REALM}/protocol/openid-connect/{endpoint}"


async def fetch_signing_keys() -> List[Dict[str, Any]]:
    """Fetch the realm's current JWKS. Called on every verification, not cached."""
    if not is_configured():
        raise UpstreamFailure("Identity provider is not configured")

    async with httpx.AsyncClient(timeout=IDENTITY_TIMEOUT) as client:
        res = await client.get(openid_connect_url("certs"))
        res.raise_for_status()
        return res.json().get("keys", [])


async def request_token(form: Dict[str, str]) -> Dict[str, Any]:
    """
    POST a form-encoded grant to the token endpoint and return the raw JSON.
    Client credentials are added here; callers only supply the grant fields.
    """
    if not is_configured():
        raise UpstreamFailure("Identity provider is not configured")

    data = {
        "client_id": KEYCLOAK_CLIENT_ID,
        "client_secret": KEYCLOAK_CLIENT_SECRET,
        **form,
    }
    try:
        async with httpx.AsyncClient(timeout=IDENTITY_TIMEOUT) as client:
            res = await client.post(
                openid_connect_url("token"),
                data=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            res.raise_for_status()
            return res.json()
    except httpx.HTTPStatusError as e:
        logger.warning(
            f"Token endpoint rejected {form.get('grant_type')} grant: {e.response.status_code}"
        )
        try:
            body = e.response.json()
        except ValueError:
            body = e.response.text
        raise UpstreamFailure(body, status_code=e.response.status_code)
    except httpx.HTTPError as e:
        logger.error(f"Token endpoint unreachable: {e}", exc_info=True)
        raise UpstreamFailure(f"Identity provider request failed: {e}")


def to_token_pair(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Map the provider's snake_case token response onto the API's camelCase."""
    return {
        "accessToken": payload.get("access_token"),
        "refreshToken": payload.get("refresh_token"),
        "expiresIn": payload.get("expires_in"),
        "refreshExpiresIn": payload.get("refresh_expires_in"),
        "tokenType": payload.get("token_type"),
    }
