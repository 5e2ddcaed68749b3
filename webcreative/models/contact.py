import uuid
from sqlalchemy import Column, Integer, String, Text, Boolean

from webcreative.models.base import Base, TimestampMixin


class Contact(Base, TimestampMixin):
    """Model for contact form submissions.

    Column names follow the table the site's serverless function has always
    written to (``nome``, ``telefone``, ...); attribute names are English.
    ``seq`` records insertion order and breaks ties between equal timestamps.
    """

    __tablename__ = "contacts"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, index=True, nullable=False, default=lambda: str(uuid.uuid4()))
    name = Column("nome", String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column("telefone", String, nullable=True)
    service_type = Column("servico", String, nullable=False)
    message = Column("mensagem", Text, nullable=False)
    answered = Column("respondido", Boolean, default=False, nullable=False)
    request_id = Column(String, nullable=True, index=True)
