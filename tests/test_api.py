"""
Tests for the Judge API endpoints.
"""

import json

import pytest
from fastapi.testclient import TestClient

from judge.adapters.base import INVALID_ENCODING_MESSAGE
from judge.api.dependencies import JudgeService, get_judge_service
from judge.api.main import app
from tests.conftest import SUM_PYTHON


@pytest.fixture
def client(manager):
    app.dependency_overrides[get_judge_service] = lambda: JudgeService(manager, max_concurrent=2)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def case(input, expected_output, marks=4, hidden=True):
    return {"input": input, "expected_output": expected_output, "marks": marks, "hidden": hidden}


class TestHealth:
    def test_health_lists_languages(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["languages"] == ["c", "cpp", "java", "javascript", "python"]


class TestSubmit:
    def test_scores_submission(self, client):
        response = client.post("/api/v1/judge/submit", json={
            "code": SUM_PYTHON,
            "language": "python",
            "test_cases": [case("3\n5", "8"), case("1\n1", "3")],
        })

        assert response.status_code == 200
        body = response.json()
        assert body["passed"] == 1
        assert body["total"] == 2
        assert body["score"] == 4
        assert body["max_score"] == 8
        assert body["results"] == [
            {"index": 1, "passed": True, "error": None},
            {"index": 2, "passed": False, "error": "Wrong answer"},
        ]

    def test_expected_output_is_never_returned(self, client):
        response = client.post("/api/v1/judge/submit", json={
            "code": "print('nope')",
            "language": "python",
            "test_cases": [case("", "secret-answer")],
        })

        assert "secret-answer" not in response.text

    def test_hidden_runtime_errors_are_masked(self, client):
        response = client.post("/api/v1/judge/submit", json={
            "code": "x = input()\nraise ValueError(x)",
            "language": "python",
            "test_cases": [case("hidden-input", "", hidden=True), case("shown-input", "", hidden=False)],
        })

        results = response.json()["results"]
        assert results[0]["error"] == "Runtime error"
        assert "hidden-input" not in response.text
        assert "shown-input" in results[1]["error"]

    def test_lone_surrogate_in_code_is_bad_request(self, client):
        body = json.dumps({
            "code": "s = '\ud800'\nprint(1)\n",
            "language": "python",
            "test_cases": [case("", "1")],
        })

        response = client.post(
            "/api/v1/judge/submit",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == INVALID_ENCODING_MESSAGE

    def test_lone_surrogate_in_input_is_judged(self, client):
        body = json.dumps({
            "code": "print(input())",
            "language": "python",
            "test_cases": [case("a\ud800b", "a?b")],
        })

        response = client.post(
            "/api/v1/judge/submit",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json()["passed"] == 1

    def test_security_violation_is_bad_request(self, client):
        response = client.post("/api/v1/judge/submit", json={
            "code": "import subprocess",
            "language": "python",
            "test_cases": [case("", "")],
        })

        assert response.status_code == 400
        assert response.json()["detail"].startswith("security violation")

    def test_timeout_is_clamped(self, client):
        response = client.post("/api/v1/judge/submit", json={
            "code": "while True:\n    pass",
            "language": "python",
            "test_cases": [case("", "1")],
            "timeout_ms": 1,
        })

        assert response.status_code == 200
        assert response.json()["results"][0]["error"] == "Time limit exceeded"

    @pytest.mark.parametrize("payload", [
        {"code": "", "language": "python", "test_cases": []},
        {"code": "print(1)", "language": "ruby", "test_cases": []},
        {"code": "print(1)", "language": "python", "test_cases": [{"expected_output": "1", "marks": 0}]},
        {"language": "python"},
    ])
    def test_invalid_payload_is_rejected(self, client, payload):
        response = client.post("/api/v1/judge/submit", json=payload)

        assert response.status_code == 422


class TestRun:
    def test_returns_program_output(self, client):
        response = client.post("/api/v1/judge/run", json={
            "code": SUM_PYTHON,
            "language": "python",
            "input": "3\n5",
            "expected_output": "8",
        })

        body = response.json()
        assert body["success"] is True
        assert body["output"] == "8"
        assert body["passed"] is True
        assert body["error"] is None

    def test_wrong_answer_still_shows_output(self, client):
        response = client.post("/api/v1/judge/run", json={
            "code": "print(7)",
            "language": "python",
            "expected_output": "8",
        })

        body = response.json()
        assert body["output"] == "7"
        assert body["passed"] is False
        assert body["error"] is None

    def test_no_output_placeholder(self, client):
        response = client.post("/api/v1/judge/run", json={"code": "x = 1", "language": "python"})

        assert response.json()["output"] == "(no output)"

    def test_runtime_error_is_shown(self, client):
        response = client.post("/api/v1/judge/run", json={
            "code": "print(1 // 0)",
            "language": "python",
        })

        body = response.json()
        assert body["success"] is True
        assert "ZeroDivisionError" in body["error"]
        assert body["output"] == body["error"]

    def test_hard_error_is_not_successful(self, client):
        response = client.post("/api/v1/judge/run", json={
            "code": "eval('1')",
            "language": "python",
        })

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("security violation")
