"""API endpoints for contact submissions and their admin panel."""

import logging
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, status

from webcreative.api.v1.dependencies import get_contact_store, get_mail_client
from webcreative.constants.constants import (
    ERR_DELETE_FAILED,
    ERR_GET_FAILED,
    ERR_LIST_FAILED,
    ERR_NOT_FOUND,
    ERR_UPDATE_FAILED,
    MSG_CONTACT_DELETED,
    MSG_CONTACT_SENT,
)
from webcreative.core.config import settings
from webcreative.core.ratelimit import limiter
from webcreative.core.security import require_admin_key
from webcreative.schemas.contactSchema import ContactSubmissionRequest
from webcreative.services.ContactStore import ContactStore
from webcreative.services.ContactSubmissionService import submit_contact

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contacts"])


@router.post("/contact", status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.CONTACT_RATE_LIMIT)
async def create_contact(
    request: Request,
    payload: ContactSubmissionRequest,
    background_tasks: BackgroundTasks,
    store: ContactStore = Depends(get_contact_store),
    mail_client=Depends(get_mail_client)
):
    """Create a contact and notify the submitter and the site owner."""
    contact = await submit_contact(payload, store, background_tasks, mail_client)
    return {
        "success": True,
        "message": MSG_CONTACT_SENT,
        "data": contact.to_response()
    }


@router.get("/contacts", dependencies=[Depends(require_admin_key)])
async def get_all_contacts(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    respondido: Optional[bool] = Query(None, description="Filter by answered flag"),
    store: ContactStore = Depends(get_contact_store)
):
    """
    List contacts for the admin panel, newest first. ``total`` counts every
    match of the filter, not just the returned page.
    """
    try:
        contacts = await store.list(skip=skip, limit=limit, answered=respondido)
        total = await store.count(answered=respondido)
    except Exception:
        logger.exception("❌ Error fetching contacts")
        raise HTTPException(status_code=500, detail=ERR_LIST_FAILED)

    return {
        "success": True,
        "data": [contact.to_response() for contact in contacts],
        "total": total
    }


@router.get("/contacts/{contact_id}", dependencies=[Depends(require_admin_key)])
async def get_contact_by_id(
    contact_id: str,
    store: ContactStore = Depends(get_contact_store)
):
    try:
        contact = await store.get(contact_id)
    except Exception:
        logger.exception(f"❌ Error fetching contact {contact_id}")
        raise HTTPException(status_code=500, detail=ERR_GET_FAILED)

    if not contact:
        raise HTTPException(status_code=404, detail=ERR_NOT_FOUND)

    return {"success": True, "data": contact.to_response()}


@router.put("/contacts/{contact_id}", dependencies=[Depends(require_admin_key)])
async def update_contact(
    contact_id: str,
    store: ContactStore = Depends(get_contact_store)
):
    """
    Mark a contact as answered. The transition is one-way, so the request
    body is not read.
    """
    try:
        contact = await store.mark_answered(contact_id)
    except Exception:
        logger.exception(f"❌ Error updating contact {contact_id}")
        raise HTTPException(status_code=500, detail=ERR_UPDATE_FAILED)

    if not contact:
        raise HTTPException(status_code=404, detail=ERR_NOT_FOUND)

    logger.info(f"✅ Contact {contact_id} marked as answered")
    return {"success": True, "data": contact.to_response()}


@router.delete("/contacts/{contact_id}", dependencies=[Depends(require_admin_key)])
async def delete_contact(
    contact_id: str,
    store: ContactStore = Depends(get_contact_store)
):
    try:
        deleted = await store.delete(contact_id)
    except Exception:
        logger.exception(f"❌ Error deleting contact {contact_id}")
        raise HTTPException(status_code=500, detail=ERR_DELETE_FAILED)

    if not deleted:
        raise HTTPException(status_code=404, detail=ERR_NOT_FOUND)

    logger.info(f"🗑️ Contact {contact_id} deleted")
    return {
        "success": True,
        "message": MSG_CONTACT_DELETED,
        "data": {"id": contact_id}
    }
