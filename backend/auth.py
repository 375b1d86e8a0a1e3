"""
Authentication module for Clerk JWT and API key validation.
Provides FastAPI dependencies for securing endpoints.

The authenticated user id is the trainer id for every conversion endpoint.
"""
import logging
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

_jwks_clients: dict = {}


def get_jwks_client(clerk_domain: str) -> Optional[jwt.PyJWKClient]:
    """Get or create the JWKS client for Clerk JWT validation."""
    if not clerk_domain:
        return None
    if clerk_domain not in _jwks_clients:
        _jwks_clients[clerk_domain] = jwt.PyJWKClient(f"https://{clerk_domain}/.well-known/jwks.json")
    return _jwks_clients[clerk_domain]


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Authenticate via API key OR Clerk JWT.
    Returns user_id string.

    Usage:
        @router.post("/programs/send-to-client")
        async def send(user_id: str = Depends(get_current_user)):
            ...
    """
    # Option 1: API Key authentication
    if x_api_key:
        return validate_api_key(x_api_key, settings)

    # Option 2: Clerk JWT authentication
    if authorization:
        return validate_jwt(authorization, settings)

    raise HTTPException(
        status_code=401,
        detail="Missing authentication. Provide Authorization header or X-API-Key."
    )


def validate_api_key(api_key: str, settings: Settings) -> str:
    """
    Validate API key and return user_id.

    API key format options:
    - Simple: "sk_test_abc123" -> returns "admin"
    - With user: "sk_test_abc123:trainer_12345" -> returns "trainer_12345"
    """
    valid_keys = settings.api_keys_list

    if not valid_keys:
        logger.warning("No API keys configured (API_KEYS env var empty)")
        raise HTTPException(status_code=401, detail="API key authentication not configured")

    key_part, _, user_part = api_key.partition(":")

    if key_part not in valid_keys:
        raise HTTPException(status_code=401, detail="Invalid API key")

    return user_part or "admin"


def validate_jwt(authorization: str, settings: Settings) -> str:
    """Validate a Clerk JWT (RS256 via JWKS) and return user_id."""
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = authorization.split(" ", 1)[1]
    jwks_client = get_jwks_client(settings.clerk_domain)

    if not jwks_client:
        raise HTTPException(
            status_code=500,
            detail="JWT validation not configured (missing CLERK_DOMAIN)"
        )

    try:
        signing_key = jwks_client.get_signing_key_from_jwt(token)
        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            options={"verify_aud": False}
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing user ID")
    return user_id
