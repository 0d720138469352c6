"""Tests for the blueprint agent HTTP endpoints.

The controller is wired with in-memory fakes via FastAPI dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from blueprint_agent.api.dependencies import get_controller
from blueprint_agent.core.session_store import SessionStore
from blueprint_agent.main import app
from blueprint_agent.services.conversation import ConversationController
from tests.fakes.fake_collaborators import FakeGateway, FakeRenderer, FakeSender, failing_sender


@pytest.fixture
def fakes():
    store = SessionStore()
    gateway = FakeGateway()
    renderer = FakeRenderer()
    sender = FakeSender()
    controller = ConversationController(
        store=store, gateway=gateway, renderer=renderer, sender=sender
    )
    app.dependency_overrides[get_controller] = lambda: controller
    yield {
        "store": store,
        "gateway": gateway,
        "renderer": renderer,
        "sender": sender,
        "controller": controller,
    }
    app.dependency_overrides.clear()


@pytest.fixture
def client(fakes):
    return TestClient(app)


def _start(client, fakes, reply="**Plan**\n- Hero section\n- Menu page"):
    fakes["gateway"].replies.append(reply)
    return client.post("/agent/start", json={"idea": "bakery site", "email": "a@b.com"})


class TestStartEndpoint:
    def test_start_returns_session_and_blueprint(self, client, fakes):
        response = _start(client, fakes)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"sessionId", "blueprint"}
        assert data["blueprint"] == "Plan\n- Hero section\n- Menu page"
        assert data["sessionId"] in fakes["store"]

    @pytest.mark.parametrize("body", [{}, {"idea": "bakery"}, {"email": "a@b.com"}, {"idea": "", "email": ""}])
    def test_missing_fields_return_400(self, client, fakes, body):
        response = client.post("/agent/start", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Idea and email required", "code": "request.invalid"}

    def test_generation_failure_returns_500(self, client, fakes):
        response = _start(client, fakes, reply=None)

        assert response.status_code == 500
        assert response.json() == {"error": "AI generation failed", "code": "generation.failed"}
        assert len(fakes["store"]) == 0

    def test_malformed_json_returns_400(self, client, fakes):
        response = client.post(
            "/agent/start", content="{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "request.invalid"


class TestMessageEndpoint:
    def test_message_returns_reply_and_blueprint(self, client, fakes):
        session_id = _start(client, fakes).json()["sessionId"]
        fakes["gateway"].replies.append("Plan v2")

        response = client.post("/agent/message", json={"sessionId": session_id, "message": "Add a blog"})

        assert response.status_code == 200
        assert response.json() == {"reply": "Plan v2", "blueprint": "Plan v2"}
        assert len(fakes["store"].get(session_id).conversation_history) == 5

    @pytest.mark.parametrize("body", [{"message": "hi"}, {"sessionId": "nope", "message": "hi"}])
    def test_invalid_session_returns_400(self, client, fakes, body):
        response = client.post("/agent/message", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid session", "code": "session.not_found"}

    def test_generation_failure_returns_500(self, client, fakes):
        session_id = _start(client, fakes).json()["sessionId"]

        response = client.post("/agent/message", json={"sessionId": session_id, "message": "more"})

        assert response.status_code == 500
        assert response.json()["code"] == "generation.failed"


class TestFinalizeEndpoint:
    def test_finalize_emails_and_closes_session(self, client, fakes):
        session_id = _start(client, fakes).json()["sessionId"]

        response = client.post("/agent/finalize", json={"sessionId": session_id})

        assert response.status_code == 200
        assert response.json() == {"message": "Blueprint finalized and emailed!"}
        assert fakes["sender"].sent[0][0] == "a@b.com"

        again = client.post("/agent/finalize", json={"sessionId": session_id})
        assert again.status_code == 400
        assert again.json()["code"] == "session.not_found"

    def test_delivery_failure_returns_500(self, client, fakes):
        session_id = _start(client, fakes).json()["sessionId"]
        fakes["controller"].sender = failing_sender()

        response = client.post("/agent/finalize", json={"sessionId": session_id})

        assert response.status_code == 500
        assert response.json()["code"] == "delivery.failed"
        assert session_id in fakes["store"]

    def test_missing_session_id_returns_400(self, client, fakes):
        response = client.post("/agent/finalize", json={})
        assert response.status_code == 400


class TestPlumbing:
    def test_unknown_route_returns_json_404(self, client):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"] == "Not found"

    def test_security_headers_present(self, client):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_cors_allows_configured_origin(self, client):
        response = client.options(
            "/agent/start",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")
