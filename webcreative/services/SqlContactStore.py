"""Relational contact store (Supabase / PostgreSQL table ``contacts``)."""

import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy import func, select, text

from webcreative.constants.constants import StoreBackend
from webcreative.core.database import DatabaseSessionManager
from webcreative.models.contact import Contact
from webcreative.schemas.contactSchema import ContactRecord, ContactSubmission
from webcreative.services.ContactStore import ContactStore


def to_record(contact: Contact) -> ContactRecord:
    """Map a ``contacts`` row to the shared record type."""
    return ContactRecord(
        id=contact.id,
        name=contact.name,
        email=contact.email,
        phone=contact.phone,
        service_type=contact.service_type,
        message=contact.message,
        created_at=contact.created_at,
        answered=contact.answered,
        request_id=contact.request_id,
    )


class SqlContactStore(ContactStore):
    backend = StoreBackend.sql

    def __init__(self, session_manager: DatabaseSessionManager):
        self.session_manager = session_manager

    async def init(self) -> None:
        await self.session_manager.init()

    async def close(self) -> None:
        await self.session_manager.close()

    async def ping(self) -> None:
        async with self.session_manager.get_session() as db:
            await db.execute(text("SELECT 1"))

    async def create(self, submission: ContactSubmission) -> ContactRecord:
        contact = Contact(
            id=str(uuid.uuid4()),
            name=submission.name,
            email=submission.email,
            phone=submission.phone,
            service_type=submission.service_type.value,
            message=submission.message,
            answered=False,
            request_id=submission.request_id,
            created_at=datetime.utcnow(),
        )
        async with self.session_manager.get_session() as db:
            db.add(contact)
            await db.flush()
            await db.refresh(contact)
            return to_record(contact)

    async def find_by_request_id(self, request_id: str) -> Optional[ContactRecord]:
        async with self.session_manager.get_session() as db:
            result = await db.execute(
                select(Contact).where(Contact.request_id == request_id).limit(1)
            )
            contact = result.scalar_one_or_none()
            return to_record(contact) if contact else None

    async def list(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        answered: Optional[bool] = None,
    ) -> List[ContactRecord]:
        query = select(Contact).order_by(Contact.created_at.desc(), Contact.seq.desc())

        if answered is not None:
            query = query.where(Contact.answered == answered)

        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        async with self.session_manager.get_session() as db:
            result = await db.execute(query)
            return [to_record(contact) for contact in result.scalars().all()]

    async def count(self, answered: Optional[bool] = None) -> int:
        query = select(func.count()).select_from(Contact)
        if answered is not None:
            query = query.where(Contact.answered == answered)

        async with self.session_manager.get_session() as db:
            result = await db.execute(query)
            return result.scalar_one()

    @staticmethod
    async def _find(db, contact_id: str) -> Optional[Contact]:
        result = await db.execute(select(Contact).where(Contact.id == contact_id))
        return result.scalar_one_or_none()

    async def get(self, contact_id: str) -> Optional[ContactRecord]:
        async with self.session_manager.get_session() as db:
            contact = await self._find(db, contact_id)
            return to_record(contact) if contact else None

    async def mark_answered(self, contact_id: str) -> Optional[ContactRecord]:
        async with self.session_manager.get_session() as db:
            contact = await self._find(db, contact_id)
            if not contact:
                return None

            contact.answered = True
            await db.flush()
            return to_record(contact)

    async def delete(self, contact_id: str) -> bool:
        async with self.session_manager.get_session() as db:
            contact = await self._find(db, contact_id)
            if not contact:
                return False

            await db.delete(contact)
            return True
