"""Bearer-token authentication for creator endpoints.

Tokens are issued by the login provider as ``<user_id>.<signature>`` where
the signature is the hex HMAC-SHA256 of the user id under AUTH_SECRET.
"""

import hashlib
import hmac
import logging
from typing import Optional

from fastapi import Header, HTTPException

from parity.config import get_settings

logger = logging.getLogger(__name__)


def sign_user_id(user_id: str, secret: str) -> str:
    """Signature part of a bearer token."""
    return hmac.new(secret.encode(), user_id.encode(), hashlib.sha256).hexdigest()


def issue_token(user_id: str, secret: str) -> str:
    return f"{user_id}.{sign_user_id(user_id, secret)}"


def verify_token(token: str, secret: str) -> Optional[str]:
    """Return the user id of a valid token, else None."""
    user_id, sep, signature = token.rpartition(".")
    if not sep or not user_id or not signature:
        return None
    expected = sign_user_id(user_id, secret)
    if not hmac.compare_digest(expected, signature):
        return None
    return user_id


async def require_user(authorization: Optional[str] = Header(None)) -> str:
    """Resolve the calling user from the Authorization header.

    If AUTH_SECRET is not set, the bearer value is taken as the user id
    (dev mode).
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")

    token = authorization[7:].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")

    settings = get_settings()
    if not settings.auth_secret:
        if settings.is_production:
            logger.error("AUTH_SECRET is not set in production, rejecting request")
            raise HTTPException(status_code=401, detail="Unauthorized")
        return token

    user_id = verify_token(token, settings.auth_secret)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return user_id
