"""FastAPI dependencies shared by the contact endpoints."""

from functools import lru_cache
from typing import Optional
from fastapi import Request

from webcreative.core.config import settings
from webcreative.services.ContactStore import ContactStore
from webcreative.services.MicrosoftGraphClientPublic import MicrosoftGraphClientPublic


def get_contact_store(request: Request) -> ContactStore:
    """
    The store opened by the application lifespan.
    Usage:
    @router.get("/")
    async def endpoint(store: ContactStore = Depends(get_contact_store)):
        ...
    """
    return request.app.state.contact_store


@lru_cache
def get_mail_client() -> Optional[MicrosoftGraphClientPublic]:
    """One relay client per process so the access token is reused."""
    if not settings.MAIL_ENABLED:
        return None

    return MicrosoftGraphClientPublic(
        tenant_id=settings.MICROSOFT_TENANT_ID,
        client_id=settings.MICROSOFT_CLIENT_ID,
        client_secret=settings.MICROSOFT_CLIENT_SECRET,
        default_sender=settings.MAIL_SENDER
    )
