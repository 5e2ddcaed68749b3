"""
Tests for the contact submission routes and the admin CRUD routes.
Every test runs against both store variants.
"""
from datetime import datetime

import pytest


SUBMISSION_ROUTES = [("/api/contact", 200), ("/contact", 201)]


class FrozenDatetime(datetime):
    """Clock that hands out the same creation time for every submission."""

    @classmethod
    def utcnow(cls):
        return datetime(2026, 3, 14, 12, 0, 0)


def submit(client, payload, route="/contact"):
    return client.post(route, json=payload)


@pytest.mark.parametrize("route,expected_status", SUBMISSION_ROUTES)
def test_valid_submission_is_stored(client, valid_payload, route, expected_status):
    response = submit(client, valid_payload, route)

    assert response.status_code == expected_status
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    for field, value in valid_payload.items():
        assert data[field] == value
    assert data["respondido"] is False
    assert data["id"]
    assert data["dataCriacao"]

    stored = client.get(f"/contacts/{data['id']}").json()["data"]
    assert stored == data


def test_create_contact_returns_localized_message(client, valid_payload):
    response = submit(client, valid_payload)

    assert response.json()["message"] == "Mensagem enviada com sucesso!"


def test_phone_is_optional(client, valid_payload):
    del valid_payload["telefone"]

    response = submit(client, valid_payload)

    assert response.status_code == 201
    assert response.json()["data"]["telefone"] is None


@pytest.mark.parametrize("field", ["nome", "email", "servico", "mensagem"])
@pytest.mark.parametrize("route", ["/api/contact", "/contact"])
def test_missing_required_field_is_rejected(client, valid_payload, field, route):
    del valid_payload[field]

    response = submit(client, valid_payload, route)

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Todos os campos obrigatórios devem ser preenchidos",
    }
    assert client.get("/contacts").json()["data"] == []


@pytest.mark.parametrize("field", ["nome", "email", "servico", "mensagem"])
def test_blank_required_field_is_rejected(client, valid_payload, field):
    valid_payload[field] = "   "

    response = submit(client, valid_payload)

    assert response.status_code == 400
    assert client.get("/contacts").json()["total"] == 0


def test_unknown_service_is_rejected(client, valid_payload):
    valid_payload["servico"] = "app-mobile"

    response = submit(client, valid_payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Serviço inválido"


def test_english_other_service_is_stored_as_outro(client, valid_payload):
    valid_payload["servico"] = "other"

    response = submit(client, valid_payload)

    assert response.status_code == 201
    assert response.json()["data"]["servico"] == "outro"


def test_invalid_email_is_rejected(client, valid_payload):
    valid_payload["email"] = "maria-at-gmail"

    response = submit(client, valid_payload)

    assert response.status_code == 400
    assert response.json()["error"] == "E-mail inválido"


def test_padded_email_is_stored_and_mailed_trimmed(client, valid_payload, mail_client):
    valid_payload["email"] = "  maria.silva@gmail.com  "

    response = submit(client, valid_payload)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "maria.silva@gmail.com"
    stored = client.get(f"/contacts/{data['id']}").json()["data"]
    assert stored["email"] == "maria.silva@gmail.com"
    confirmation, alert = mail_client.sent
    assert confirmation["to"] == ["maria.silva@gmail.com"]
    assert alert["reply_to"] == "maria.silva@gmail.com"


def test_non_string_field_is_rejected_without_coercion(client, valid_payload):
    valid_payload["nome"] = 12345

    response = submit(client, valid_payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Dados do formulário inválidos"}


def test_malformed_body_is_rejected(client):
    response = client.post(
        "/api/contact", content="nome=Maria", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.parametrize("route", ["/api/contact", "/contact"])
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
def test_submission_routes_only_accept_post(client, route, method):
    response = client.request(method, route)

    assert response.status_code == 405
    assert response.headers["allow"] == "POST"
    assert response.json() == {"success": False, "error": "Método não permitido"}


def test_list_returns_all_submissions_newest_first(client, valid_payload):
    created_ids = []
    for index in range(4):
        valid_payload["mensagem"] = f"Mensagem número {index}"
        created_ids.append(submit(client, valid_payload).json()["data"]["id"])

    response = client.get("/contacts")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 4
    assert [contact["id"] for contact in body["data"]] == list(reversed(created_ids))
    timestamps = [contact["dataCriacao"] for contact in body["data"]]
    assert timestamps == sorted(timestamps, reverse=True)


def test_list_supports_paging_and_answered_filter(client, valid_payload):
    ids = [submit(client, valid_payload).json()["data"]["id"] for _ in range(3)]
    client.put(f"/contacts/{ids[0]}")

    answered = client.get("/contacts", params={"respondido": True}).json()
    pending = client.get("/contacts", params={"respondido": False}).json()
    page = client.get("/contacts", params={"skip": 1, "limit": 1}).json()

    assert [contact["id"] for contact in answered["data"]] == [ids[0]]
    assert {contact["id"] for contact in pending["data"]} == {ids[1], ids[2]}
    assert [contact["id"] for contact in page["data"]] == [ids[1]]
    assert answered["total"] == 1
    assert pending["total"] == 2
    assert page["total"] == 3


def test_list_breaks_timestamp_ties_by_insertion_order(client, valid_payload, monkeypatch):
    monkeypatch.setattr("webcreative.services.SqlContactStore.datetime", FrozenDatetime)
    monkeypatch.setattr("webcreative.services.MongoContactStore.datetime", FrozenDatetime)
    created_ids = []
    for index in range(3):
        valid_payload["mensagem"] = f"Mensagem número {index}"
        created_ids.append(submit(client, valid_payload).json()["data"]["id"])

    body = client.get("/contacts").json()

    assert len({contact["dataCriacao"] for contact in body["data"]}) == 1
    assert [contact["id"] for contact in body["data"]] == list(reversed(created_ids))


def test_duplicate_submissions_without_request_id_are_both_stored(client, valid_payload):
    first = submit(client, valid_payload).json()["data"]
    second = submit(client, valid_payload).json()["data"]

    assert first["id"] != second["id"]
    assert client.get("/contacts").json()["total"] == 2


def test_repeated_request_id_stores_one_record(client, valid_payload, mail_client):
    valid_payload["requestId"] = "form-7f3a"

    first = submit(client, valid_payload)
    second = submit(client, valid_payload)

    assert first.status_code == second.status_code == 201
    assert first.json()["data"]["id"] == second.json()["data"]["id"]
    assert client.get("/contacts").json()["total"] == 1
    assert len(mail_client.sent) == 2


def test_get_unknown_contact_returns_404(client):
    response = client.get("/contacts/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Contato não encontrado"}


def test_mark_answered_only_changes_the_flag(client, valid_payload):
    original = submit(client, valid_payload).json()["data"]

    response = client.put(f"/contacts/{original['id']}", json={"nome": "Outro Nome"})

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["respondido"] is True
    assert {k: v for k, v in updated.items() if k != "respondido"} == {
        k: v for k, v in original.items() if k != "respondido"
    }
    assert client.get(f"/contacts/{original['id']}").json()["data"] == updated


def test_mark_answered_twice_keeps_it_answered(client, valid_payload):
    contact_id = submit(client, valid_payload).json()["data"]["id"]

    client.put(f"/contacts/{contact_id}")
    response = client.put(f"/contacts/{contact_id}")

    assert response.status_code == 200
    assert response.json()["data"]["respondido"] is True


def test_mark_answered_unknown_contact_returns_404(client):
    response = client.put("/contacts/does-not-exist")

    assert response.status_code == 404


def test_delete_removes_contact(client, valid_payload):
    contact_id = submit(client, valid_payload).json()["data"]["id"]

    response = client.delete(f"/contacts/{contact_id}")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Contato removido com sucesso",
        "data": {"id": contact_id},
    }
    assert client.get(f"/contacts/{contact_id}").status_code == 404
    assert client.delete(f"/contacts/{contact_id}").status_code == 404
    assert client.get("/contacts").json()["total"] == 0


def test_health_check_reports_store(client, store_backend):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["store"] == store_backend


@pytest.mark.parametrize("method,path,operation,error", [
    ("POST", "/api/contact", "create", "Erro ao processar sua solicitação"),
    ("GET", "/contacts", "list", "Erro ao buscar contatos"),
    ("GET", "/contacts", "count", "Erro ao buscar contatos"),
    ("GET", "/contacts/abc", "get", "Erro ao buscar contato"),
    ("PUT", "/contacts/abc", "mark_answered", "Erro ao atualizar contato"),
    ("DELETE", "/contacts/abc", "delete", "Erro ao remover contato"),
])
def test_store_failures_return_generic_500(
    client, valid_payload, mail_client, monkeypatch, method, path, operation, error
):
    async def broken(*args, **kwargs):
        raise RuntimeError("connection refused by db.internal:5432")

    monkeypatch.setattr(client.app.state.contact_store, operation, broken)

    response = client.request(method, path, json=valid_payload if method == "POST" else None)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": error}
    assert mail_client.sent == []
