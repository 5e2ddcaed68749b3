from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from webcreative.constants.constants import ServiceType


class ContactSubmissionRequest(BaseModel):
    """Raw contact form body.

    Every field is optional here so that presence is checked by the
    submission service and answered with the localized 400 message.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, alias="nome")
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, alias="telefone")
    service_type: Optional[str] = Field(default=None, alias="servico")
    message: Optional[str] = Field(default=None, alias="mensagem")
    request_id: Optional[str] = Field(default=None, alias="requestId")


class ContactSubmission(BaseModel):
    """A validated submission, ready to be stored."""

    name: str
    email: str
    phone: Optional[str] = None
    service_type: ServiceType
    message: str
    request_id: Optional[str] = None


class ContactRecord(BaseModel):
    """A stored submission as returned by every store variant."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = Field(alias="nome")
    email: str
    phone: Optional[str] = Field(default=None, alias="telefone")
    service_type: ServiceType = Field(alias="servico")
    message: str = Field(alias="mensagem")
    created_at: datetime = Field(alias="dataCriacao")
    answered: bool = Field(default=False, alias="respondido")
    request_id: Optional[str] = Field(default=None, alias="requestId")

    def to_response(self) -> dict:
        """Serialize with the public (Portuguese) field names."""
        return self.model_dump(by_alias=True, mode="json")
