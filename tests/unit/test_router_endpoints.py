"""Tests for the chat and health endpoints."""

import pytest
from fastapi.testclient import TestClient

from restaurant_qa import __version__
from restaurant_qa.api.dependencies import get_orchestrator
from restaurant_qa.api.router import build_chat_payload
from restaurant_qa.app import create_app

SCALAR_RESULT = {
    "answer": "**count**: 42",
    "error": None,
    "query": "MATCH (d:Dish) RETURN count(d) AS count",
    "db_results": [{"count": 42}],
    "chart_data": None,
    "json_response": {"count": 42},
}

CHART = {
    "type": "bar",
    "data": {"labels": ["Pasta"], "datasets": [{"label": "Sold", "data": [30]}]},
    "options": {"title": "Sold by Dish"},
}

ERROR_RESULT = {
    "answer": None,
    "error": "No results found.",
    "query": "MATCH (d:Dish) WHERE d.price > 1000 RETURN d",
    "db_results": [],
    "chart_data": None,
    "json_response": None,
}


class StubOrchestrator:
    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.questions: list[str] = []

    async def answer_question(self, question):
        self.questions.append(question)
        if self.error:
            raise self.error
        return self.result


def _client(orchestrator: StubOrchestrator, settings) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    return TestClient(app)


# ==========================================
#  HEALTH
# ==========================================


def test_health(settings):
    response = _client(StubOrchestrator(), settings).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": __version__}


def test_unknown_route_is_404(settings):
    response = _client(StubOrchestrator(), settings).get("/v2/chat")
    assert response.status_code == 404


# ==========================================
#  CHAT
# ==========================================


def test_chat_text_format(settings):
    orchestrator = StubOrchestrator(SCALAR_RESULT)
    response = _client(orchestrator, settings).post("/v1/chat", json={"prompt": "How many dishes?"})

    assert response.status_code == 200
    assert response.json() == {"message": "**count**: 42"}
    assert orchestrator.questions == ["How many dishes?"]


def test_chat_json_format(settings):
    response = _client(StubOrchestrator(SCALAR_RESULT), settings).post(
        "/v1/chat", json={"prompt": "How many dishes?", "format": "json"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "**count**: 42",
        "data": {"count": 42},
        "rawData": [{"count": 42}],
        "query": "MATCH (d:Dish) RETURN count(d) AS count",
    }


def test_chat_pipeline_error_is_200_with_message(settings):
    response = _client(StubOrchestrator(ERROR_RESULT), settings).post(
        "/v1/chat", json={"prompt": "Dishes over 1000?", "format": "json"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "No results found."
    assert body["data"] is None


def test_chat_includes_chart(settings):
    result = {**SCALAR_RESULT, "answer": "**Sold by Dish**\n\n...", "chart_data": CHART}
    response = _client(StubOrchestrator(result), settings).post(
        "/v1/chat", json={"prompt": "Chart dishes sold"}
    )

    assert response.json()["chart"] == CHART


def test_chat_unexpected_error_is_500(settings):
    orchestrator = StubOrchestrator(error=ConnectionError("neo4j unreachable"))
    response = _client(orchestrator, settings).post("/v1/chat", json={"prompt": "How many dishes?"})

    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}


@pytest.mark.parametrize(
    "body",
    [{"prompt": "hi", "format": "xml"}, {"format": "text"}, {"prompt": ""}],
)
def test_chat_invalid_request(settings, body):
    response = _client(StubOrchestrator(SCALAR_RESULT), settings).post("/v1/chat", json=body)
    assert response.status_code == 422


# ==========================================
#  build_chat_payload
# ==========================================


def test_payload_without_chart_has_no_chart_key():
    assert "chart" not in build_chat_payload(SCALAR_RESULT, "json")
    assert "chart" not in build_chat_payload(SCALAR_RESULT, "text")
