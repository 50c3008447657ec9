"""Tests for the HTTP endpoints."""

from fastapi.testclient import TestClient

from fitcoach_advice.api.app import create_app
from fitcoach_advice.domain.advice import AdviceRequest, AdviceResult

EXAMPLE_PAYLOAD = {
    "totals": {"kcal": 1200, "p": 60, "f": 40, "c": 100},
    "goals": {
        "kcalTarget": 2000,
        "proteinTarget": 140,
        "fatTarget": 70,
        "carbsTarget": 250,
    },
    "extraContext": {
        "context": {"isTrainingDay": True, "sleepHoursAvg": 7, "nonce": "abc"},
        "user": {"id": "user-42"},
    },
}


class ExplodingAdviceService:
    def generate(self, request: AdviceRequest) -> AdviceResult:
        raise RuntimeError("boom")


def test_health_reports_uptime(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["uptime"] >= 0


def test_warmup_is_noop(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/warmup")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "warmed": True}


def test_advice_returns_text_and_topics(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/advice", json=EXAMPLE_PAYLOAD)

    assert response.status_code == 200
    data = response.json()
    assert isinstance(data["advice"], str)
    assert 4 <= len(data["topicsUsed"]) <= 6
    assert all(isinstance(topic, str) for topic in data["topicsUsed"])


def test_advice_is_deterministic(container) -> None:
    client = TestClient(create_app(container))

    first = client.post("/advice", json=EXAMPLE_PAYLOAD).json()
    second = client.post("/advice", json=EXAMPLE_PAYLOAD).json()

    assert first == second


def test_advice_tolerates_malformed_sections(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/advice",
        json={
            "totals": "lots",
            "goals": [1, 2, 3],
            "meals": "none",
            "extraContext": {"context": {"recentTopics": "nope", "nonce": 7}},
        },
    )

    assert response.status_code == 200
    assert response.json()["advice"]


def test_advice_accepts_empty_body(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/advice")

    assert response.status_code == 200
    assert response.json()["topicsUsed"]


def test_advice_rejects_invalid_json(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/advice",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "invalid-json"}


def test_advice_rejects_deeply_nested_json(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/advice",
        content="[" * 100_000 + "]" * 100_000,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "invalid-json"}


def test_advice_internal_fault_returns_500(container) -> None:
    container.advice_service = ExplodingAdviceService()
    client = TestClient(create_app(container))

    response = client.post("/advice", json=EXAMPLE_PAYLOAD)

    assert response.status_code == 500
    assert response.json() == {"error": "advice-failed"}


def test_cors_headers_present(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health", headers={"Origin": "https://app.example"})

    assert response.headers["access-control-allow-origin"] == "*"
