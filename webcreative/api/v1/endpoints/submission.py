"""Public contact form endpoint used by the site's form (`/api/contact`)."""

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from webcreative.api.v1.dependencies import get_contact_store, get_mail_client
from webcreative.core.config import settings
from webcreative.core.ratelimit import limiter
from webcreative.schemas.contactSchema import ContactSubmissionRequest
from webcreative.services.ContactStore import ContactStore
from webcreative.services.ContactSubmissionService import submit_contact

router = APIRouter(
    prefix="/api",
    tags=["contact-form"]
)


@router.post("/contact")
@limiter.limit(settings.CONTACT_RATE_LIMIT)
async def submit_contact_form(
    request: Request,
    payload: ContactSubmissionRequest,
    background_tasks: BackgroundTasks,
    store: ContactStore = Depends(get_contact_store),
    mail_client=Depends(get_mail_client)
):
    """Submit the contact form. Only POST is routed; anything else is a 405."""
    contact = await submit_contact(payload, store, background_tasks, mail_client)
    return {"success": True, "data": contact.to_response()}
