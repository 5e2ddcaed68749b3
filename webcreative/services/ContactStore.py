"""Persistence adapter for contact submissions.

Both store variants implement ``ContactStore``. They are interchangeable:
each inserts one record per submission, lists newest first, and propagates
backend errors to the caller untouched.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from webcreative.constants.constants import StoreBackend
from webcreative.schemas.contactSchema import ContactRecord, ContactSubmission


class ContactStore(ABC):
    """Interface shared by the relational and the document store."""

    backend: StoreBackend

    @abstractmethod
    async def init(self) -> None:
        ...

    @abstractmethod
    async def close(self) -> None:
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Round-trip to the backend; raises when it is unreachable."""

    @abstractmethod
    async def create(self, submission: ContactSubmission) -> ContactRecord:
        ...

    @abstractmethod
    async def find_by_request_id(self, request_id: str) -> Optional[ContactRecord]:
        ...

    @abstractmethod
    async def list(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        answered: Optional[bool] = None,
    ) -> List[ContactRecord]:
        """Return submissions ordered by creation time, newest first."""

    @abstractmethod
    async def count(self, answered: Optional[bool] = None) -> int:
        """Number of stored submissions matching the filter, ignoring paging."""

    @abstractmethod
    async def get(self, contact_id: str) -> Optional[ContactRecord]:
        ...

    @abstractmethod
    async def mark_answered(self, contact_id: str) -> Optional[ContactRecord]:
        """Set the answered flag; ``None`` when the id is unknown."""

    @abstractmethod
    async def delete(self, contact_id: str) -> bool:
        ...


def build_contact_store(settings) -> ContactStore:
    """Create the store variant selected by ``CONTACT_STORE``."""
    try:
        backend = StoreBackend(settings.CONTACT_STORE.strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown CONTACT_STORE '{settings.CONTACT_STORE}'. "
            f"Valid options: {', '.join(b.value for b in StoreBackend)}"
        )

    if backend == StoreBackend.mongo:
        from webcreative.core.mongo import MongoClientManager
        from webcreative.services.MongoContactStore import MongoContactStore

        return MongoContactStore(
            MongoClientManager(
                settings.MONGODB_URL,
                settings.MONGODB_DATABASE,
                settings.MONGODB_COLLECTION,
            )
        )

    from webcreative.core.database import DatabaseSessionManager
    from webcreative.services.SqlContactStore import SqlContactStore

    return SqlContactStore(
        DatabaseSessionManager(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    )
