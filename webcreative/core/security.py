"""Security utilities for hashing and verifying the admin API key."""

import hashlib
import hmac
from typing import Optional
from fastapi import Header, HTTPException, status

from webcreative.constants.constants import ERR_UNAUTHORIZED
from .config import settings


def hash_key(key: str) -> str:
    """Hash the key using SHA-256."""
    key = key or ""
    return hashlib.sha256(key.encode()).hexdigest()


def verify_api_key(api_key: Optional[str] = None) -> bool:
    """
    Verify the API key hashed is the same as the one in the settings.

    Args:
        - api_key (Optional[str]): The API key to verify.

    Returns:
        - bool: Whether the API key is valid.
    """
    if not api_key:
        return False
    return hmac.compare_digest(hash_key(api_key), settings.ADMIN_API_KEY_HASH.lower())


async def require_admin_key(x_api_key: Optional[str] = Header(default=None)):
    """
    FastAPI dependency guarding the admin routes.

    Only enforced when ADMIN_API_KEY_HASH is configured; without it the
    routes stay open.
    """
    if not settings.ADMIN_API_KEY_HASH:
        return

    if not verify_api_key(x_api_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=ERR_UNAUTHORIZED
        )
