"""
Shared pytest fixtures for the contact API tests.

The API suite runs once per store variant: the relational store on a
temporary SQLite file and the document store on mongomock-motor.
"""
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ADMIN_API_KEY_HASH"] = ""

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from webcreative.api.v1.dependencies import get_mail_client
from webcreative.core.config import settings
from webcreative.core.ratelimit import limiter
from webcreative.main import app
from webcreative.services.MicrosoftGraphClientPublic import MailRelayError


class FakeMailClient:
    """Records emails instead of sending them; can refuse chosen recipients."""

    def __init__(self):
        self.sent = []
        self.failing_recipients = set()

    async def send_email(self, to_emails, subject, body_html, reply_to=None):
        if self.failing_recipients.intersection(to_emails):
            raise MailRelayError("relay unavailable", status_code=503)
        self.sent.append({
            "to": to_emails,
            "subject": subject,
            "body": body_html,
            "reply_to": reply_to,
        })
        return {"status": "sent", "to": to_emails, "subject": subject}


@pytest.fixture
def valid_payload():
    return {
        "nome": "Maria Silva",
        "email": "maria.silva@gmail.com",
        "telefone": "+55 11 98765-4321",
        "servico": "landing-page",
        "mensagem": "Gostaria de um orçamento para a página da minha loja.",
    }


@pytest.fixture
def mail_client():
    return FakeMailClient()


@pytest.fixture(params=["sql", "mongo"])
def store_backend(request, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "CONTACT_STORE", request.param)
    monkeypatch.setattr(
        settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'contacts.db'}"
    )
    if request.param == "mongo":
        mongo_client = AsyncMongoMockClient()
        monkeypatch.setattr(
            "webcreative.core.mongo.AsyncIOMotorClient",
            lambda *args, **kwargs: mongo_client,
        )
    return request.param


@pytest.fixture
def client(store_backend, mail_client, monkeypatch):
    monkeypatch.setattr(settings, "OWNER_EMAIL", "contato@webcreative.com.br")
    app.dependency_overrides[get_mail_client] = lambda: mail_client
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
        limiter.reset()
