"""Tests for the HTTP API and the messaging webhooks."""

import pytest
from fastapi.testclient import TestClient

from factcheck_bot.api.app import app
from factcheck_bot.domain.exceptions import ConfigurationError, RateLimitedError
from factcheck_bot.domain.services.conversation_service import ConversationService
from factcheck_bot.domain.services.intent_classifier import IntentClassifier
from factcheck_bot.domain.services.message_router import MessageRouter
from factcheck_bot.infrastructure.config import AppConfig
from factcheck_bot.infrastructure.dependencies import (
    ServiceContainer,
    get_claim_verifier,
    get_conversation_service,
    get_service_container,
    get_whatsapp_adapter,
)
from factcheck_bot.infrastructure.messaging.whatsapp_adapter import WhatsAppAdapter, WhatsAppConfig
from factcheck_bot.infrastructure.storage.memory_repository import (
    InMemoryConversationRepository,
    InMemoryUserRepository,
)


@pytest.fixture
def platforms(platform_factory):
    return {
        "telegram": platform_factory("telegram"),
        "whatsapp": platform_factory("whatsapp"),
    }


@pytest.fixture
def client(claim_verifier, platforms):
    service = ConversationService(
        router=MessageRouter(classifier=IntentClassifier(), verifier=claim_verifier),
        users=InMemoryUserRepository(),
        conversations=InMemoryConversationRepository(),
        platforms=platforms,
    )
    whatsapp = WhatsAppAdapter(config=WhatsAppConfig(verify_token="secret"))
    container = ServiceContainer(AppConfig())

    app.dependency_overrides[get_claim_verifier] = lambda: claim_verifier
    app.dependency_overrides[get_conversation_service] = lambda: service
    app.dependency_overrides[get_whatsapp_adapter] = lambda: whatsapp
    app.dependency_overrides[get_service_container] = lambda: container

    yield TestClient(app)

    app.dependency_overrides.clear()


def test_root_lists_endpoints(client):
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Walansi Kontonbile API"
    assert data["endpoints"]["factCheck"] == "/api/fact-check"


def test_health_reports_components(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "1.0.0"
    assert data["components"] == {"fact_check_source": False, "telegram": False, "whatsapp": False}


def test_verify_claim(client, fact_check_source):
    response = client.post("/api/fact-check", json={"claim_text": "  The bridge collapsed  ", "language": "en"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["claim_text"] == "the bridge collapsed"
    assert body["data"]["verification_status"] == "false"
    assert body["data"]["found"] is True
    fact_check_source.search.assert_awaited_once_with("the bridge collapsed", "en")


@pytest.mark.parametrize(
    "payload",
    [
        {"claim_text": "ab"},
        {"claim_text": "     "},
        {"claim_text": "x" * 1001},
        {"claim_text": "The bridge collapsed", "language": "eng"},
        {},
    ],
)
def test_verify_claim_validation_errors(client, fact_check_source, payload):
    response = client.post("/api/fact-check", json=payload)

    assert response.status_code == 422
    fact_check_source.search.assert_not_awaited()


@pytest.mark.parametrize(
    "error,status",
    [
        (RateLimitedError("Rate limit exceeded. Please try again later.", 429), 429),
        (ConfigurationError("Google Fact Check API key not configured"), 503),
    ],
)
def test_verify_claim_upstream_errors(client, fact_check_source, error, status):
    fact_check_source.search.side_effect = error

    response = client.post("/api/fact-check", json={"claim_text": "The bridge collapsed"})

    assert response.status_code == status
    assert response.json()["detail"]


def test_get_fact_check_by_id(client):
    created = client.post("/api/fact-check", json={"claim_text": "The bridge collapsed"}).json()["data"]

    response = client.get(f"/api/fact-check/{created['fact_id']}")

    assert response.status_code == 200
    record = response.json()["data"]
    assert record["fact_id"] == created["fact_id"]
    assert record["language"] == "en"
    assert record["verification_status"] == "false"


def test_get_unknown_fact_check_is_404(client):
    response = client.get("/api/fact-check/does-not-exist")

    assert response.status_code == 404
    assert response.json()["detail"] == "Fact-check not found"


def test_search_fact_checks(client):
    client.post("/api/fact-check", json={"claim_text": "The bridge collapsed"})

    response = client.get("/api/fact-check/search", params={"q": "bridge"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["data"][0]["claim_text"] == "the bridge collapsed"

    assert client.get("/api/fact-check/search", params={"q": "bridge", "limit": 0}).status_code == 422


def test_telegram_fact_check_message(client, platforms):
    update = {
        "update_id": 1,
        "message": {
            "message_id": 5,
            "chat": {"id": 99},
            "from": {"id": 7, "first_name": "Ama"},
            "text": "Is it true that the bridge collapsed?",
        },
    }

    response = client.post("/webhooks/telegram", json=update)

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    [sent] = platforms["telegram"].sent
    assert sent["chat_id"] == "99"
    assert "Fact-Check Result" in sent["text"]
    assert sent["options"] == {"parse_mode": "HTML"}


def test_telegram_callback_query(client, platforms):
    update = {
        "update_id": 2,
        "callback_query": {"id": "cb-1", "data": "more", "message": {"chat": {"id": 99}}},
    }

    response = client.post("/webhooks/telegram", json=update)

    assert response.json() == {"ok": True}
    assert platforms["telegram"].callbacks == ["cb-1"]
    assert platforms["telegram"].sent[0]["chat_id"] == "99"


def test_telegram_malformed_update_is_still_acknowledged(client, platforms):
    response = client.post("/webhooks/telegram", json={"message": {"text": "no chat"}})

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert platforms["telegram"].sent == []


def test_whatsapp_verification(client):
    params = {"hub.mode": "subscribe", "hub.verify_token": "secret", "hub.challenge": "12345"}

    response = client.get("/webhooks/whatsapp", params=params)

    assert response.status_code == 200
    assert response.text == "12345"


def test_whatsapp_verification_rejects_bad_token(client):
    params = {"hub.mode": "subscribe", "hub.verify_token": "wrong", "hub.challenge": "12345"}

    response = client.get("/webhooks/whatsapp", params=params)

    assert response.status_code == 403
    assert response.text == "Forbidden"


def test_whatsapp_message(client, platforms):
    body = {
        "object": "whatsapp_business_account",
        "entry": [{
            "changes": [{
                "value": {
                    "messages": [{
                        "from": "233200000000",
                        "id": "wamid.1",
                        "type": "text",
                        "text": {"body": "sos"},
                    }]
                }
            }]
        }],
    }

    response = client.post("/webhooks/whatsapp", json=body)

    assert response.status_code == 200
    assert response.text == "OK"
    whatsapp = platforms["whatsapp"]
    assert whatsapp.read == ["wamid.1"]
    assert whatsapp.sent[0]["chat_id"] == "233200000000"
    assert "Emergency Support" in whatsapp.sent[0]["text"]


def test_whatsapp_ignores_other_objects(client, platforms):
    response = client.post("/webhooks/whatsapp", json={"object": "page", "entry": []})

    assert response.text == "OK"
    assert platforms["whatsapp"].sent == []


def test_webhooks_index(client):
    response = client.get("/webhooks")

    assert response.status_code == 200
    assert response.json()["endpoints"] == {
        "telegram": "/webhooks/telegram",
        "whatsapp": "/webhooks/whatsapp",
    }
