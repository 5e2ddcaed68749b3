"""Document contact store (MongoDB collection ``contacts``)."""

from datetime import datetime
from typing import List, Optional
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument

from webcreative.constants.constants import StoreBackend
from webcreative.core.mongo import MongoClientManager
from webcreative.schemas.contactSchema import ContactRecord, ContactSubmission
from webcreative.services.ContactStore import ContactStore


def to_record(document: dict) -> ContactRecord:
    """Map a ``contacts`` document to the shared record type."""
    return ContactRecord(
        id=str(document["_id"]),
        name=document["nome"],
        email=document["email"],
        phone=document.get("telefone"),
        service_type=document["servico"],
        message=document["mensagem"],
        created_at=document["dataCriacao"],
        answered=document.get("respondido", False),
        request_id=document.get("requestId"),
    )


def bson_now() -> datetime:
    """BSON dates keep milliseconds only."""
    now = datetime.utcnow()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def parse_object_id(contact_id: str) -> Optional[ObjectId]:
    """Ids that are not ObjectIds cannot match any document."""
    try:
        return ObjectId(contact_id)
    except (InvalidId, TypeError):
        return None


class MongoContactStore(ContactStore):
    backend = StoreBackend.mongo

    def __init__(self, client_manager: MongoClientManager):
        self.client_manager = client_manager

    @property
    def collection(self):
        return self.client_manager.collection

    async def init(self) -> None:
        await self.client_manager.init()

    async def close(self) -> None:
        await self.client_manager.close()

    async def ping(self) -> None:
        await self.collection.find_one({}, projection={"_id": 1})

    async def create(self, submission: ContactSubmission) -> ContactRecord:
        document = {
            "nome": submission.name,
            "email": submission.email,
            "telefone": submission.phone,
            "servico": submission.service_type.value,
            "mensagem": submission.message,
            "dataCriacao": bson_now(),
            "respondido": False,
        }
        if submission.request_id is not None:
            document["requestId"] = submission.request_id

        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return to_record(document)

    async def find_by_request_id(self, request_id: str) -> Optional[ContactRecord]:
        document = await self.collection.find_one({"requestId": request_id})
        return to_record(document) if document else None

    async def list(
        self,
        skip: int = 0,
        limit: Optional[int] = None,
        answered: Optional[bool] = None,
    ) -> List[ContactRecord]:
        query = {}
        if answered is not None:
            query["respondido"] = answered

        # ObjectIds grow with insertion, so they break millisecond ties
        cursor = self.collection.find(
            query,
            sort=[("dataCriacao", DESCENDING), ("_id", DESCENDING)],
            skip=skip,
            limit=limit or 0,
        )
        documents = await cursor.to_list(length=None)
        return [to_record(document) for document in documents]

    async def count(self, answered: Optional[bool] = None) -> int:
        query = {}
        if answered is not None:
            query["respondido"] = answered

        return await self.collection.count_documents(query)

    async def get(self, contact_id: str) -> Optional[ContactRecord]:
        object_id = parse_object_id(contact_id)
        if object_id is None:
            return None

        document = await self.collection.find_one({"_id": object_id})
        return to_record(document) if document else None

    async def mark_answered(self, contact_id: str) -> Optional[ContactRecord]:
        object_id = parse_object_id(contact_id)
        if object_id is None:
            return None

        document = await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": {"respondido": True}},
            return_document=ReturnDocument.AFTER,
        )
        return to_record(document) if document else None

    async def delete(self, contact_id: str) -> bool:
        object_id = parse_object_id(contact_id)
        if object_id is None:
            return False

        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count == 1
