"""
Tests for the FastAPI surface — catalog browsing and override resolution.
"""

from fastapi.testclient import TestClient

from semverlint.core.catalog import LINT_REGISTRY
from semverlint.main import app

client = TestClient(app)


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert data["lints"] == len(LINT_REGISTRY)


def test_list_lints():
    response = client.get("/lints")
    assert response.status_code == 200
    lints = response.json()
    assert [lint["id"] for lint in lints] == sorted(LINT_REGISTRY)

    by_id = {lint["id"]: lint for lint in lints}
    assert by_id["function_missing"]["lint_level"] == "deny"
    assert by_id["function_missing"]["required_update"] == "major"
    assert by_id["function_missing"]["has_witness"] is True


def test_get_lint():
    response = client.get("/lints/function_parameter_count_changed")
    assert response.status_code == 200
    lint = response.json()
    assert lint["id"] == "function_parameter_count_changed"

    arguments = lint["witness"]["witness_query"]["arguments"]
    assert arguments["path"] == {"inherit": "path"}
    assert arguments["public"] == "public"
    assert arguments["true"] is True


def test_get_unknown_lint():
    response = client.get("/lints/no_such_lint")
    assert response.status_code == 404
    assert response.json()["detail"] == "Unknown lint: no_such_lint"


def test_resolve_overrides():
    response = client.post(
        "/overrides/resolve",
        json={
            "layers": [
                {
                    "function_missing": {"lint-level": "allow", "required-update": "minor"},
                    "not_a_lint": "deny",
                },
                {"function_missing": "warn"},
            ]
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["unknown_lints"] == ["not_a_lint"]

    by_id = {lint["id"]: lint for lint in data["lints"]}
    assert len(by_id) == len(LINT_REGISTRY)
    assert by_id["function_missing"] == {
        "id": "function_missing",
        "lint_level": "warn",
        "required_update": "minor",
        "overridden": True,
    }
    assert by_id["struct_missing"]["overridden"] is False
    assert by_id["struct_missing"]["lint_level"] == "deny"


def test_resolve_without_layers_reports_defaults():
    response = client.post("/overrides/resolve", json={})
    assert response.status_code == 200
    data = response.json()
    assert not any(lint["overridden"] for lint in data["lints"])
    assert data["unknown_lints"] == []


def test_resolve_rejects_bad_level():
    response = client.post(
        "/overrides/resolve",
        json={"layers": [{}, {"function_missing": {"lint-level": "loud"}}]},
    )
    assert response.status_code == 422
    assert response.json()["detail"]["layer"] == 1
