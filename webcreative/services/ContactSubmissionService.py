"""Validation and persistence flow shared by both submission routes."""

import logging
from typing import Optional
from fastapi import BackgroundTasks, HTTPException
from pydantic import EmailStr, TypeAdapter, ValidationError

from webcreative.constants.constants import (
    ERR_CREATE_FAILED,
    ERR_INVALID_EMAIL,
    ERR_INVALID_SERVICE,
    ERR_REQUIRED_FIELDS,
    ServiceType,
)
from webcreative.core.config import settings
from webcreative.schemas.contactSchema import (
    ContactRecord,
    ContactSubmission,
    ContactSubmissionRequest,
)
from webcreative.services.ContactEmailNotifications import notify_contact_submission
from webcreative.services.ContactStore import ContactStore

logger = logging.getLogger(__name__)

email_adapter = TypeAdapter(EmailStr)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_submission(payload: ContactSubmissionRequest) -> ContactSubmission:
    """Check the required fields and turn the raw body into a submission.

    Raises:
        HTTPException: 400 with the localized message of the first problem.
    """
    required = [payload.name, payload.email, payload.service_type, payload.message]
    if any(is_blank(value) for value in required):
        raise HTTPException(status_code=400, detail=ERR_REQUIRED_FIELDS)

    try:
        service_type = ServiceType(payload.service_type)
    except ValueError:
        raise HTTPException(status_code=400, detail=ERR_INVALID_SERVICE)

    try:
        email = email_adapter.validate_python(payload.email)
    except ValidationError:
        raise HTTPException(status_code=400, detail=ERR_INVALID_EMAIL)

    return ContactSubmission(
        name=payload.name,
        email=email,
        phone=None if is_blank(payload.phone) else payload.phone,
        service_type=service_type,
        message=payload.message,
        request_id=None if is_blank(payload.request_id) else payload.request_id,
    )


def schedule_notifications(
    contact: ContactRecord,
    background_tasks: BackgroundTasks,
    mail_client
) -> None:
    """Queue the two emails to run after the response is sent."""
    if mail_client is None:
        logger.info(f"📭 Mail relay not configured, no notifications for {contact.id}")
        return

    background_tasks.add_task(
        notify_contact_submission,
        contact,
        mail_client,
        settings.OWNER_NOTIFICATION_EMAIL,
    )


async def submit_contact(
    payload: ContactSubmissionRequest,
    store: ContactStore,
    background_tasks: BackgroundTasks,
    mail_client
) -> ContactRecord:
    """
    Validate, persist and schedule notifications for one submission.

    Returns:
        The stored record. A repeated ``requestId`` returns the first record
        and sends no new emails.
    """
    submission = validate_submission(payload)

    try:
        if submission.request_id:
            existing = await store.find_by_request_id(submission.request_id)
            if existing:
                logger.info(
                    f"🔁 Duplicate requestId {submission.request_id}, returning contact {existing.id}"
                )
                return existing

        contact = await store.create(submission)
    except Exception:
        logger.exception("❌ Error saving contact")
        raise HTTPException(status_code=500, detail=ERR_CREATE_FAILED)

    logger.info(f"✅ Contact {contact.id} saved ({contact.service_type.value})")
    schedule_notifications(contact, background_tasks, mail_client)
    return contact
