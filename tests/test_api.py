import json

import jsonschema
import pytest
from fastapi.testclient import TestClient

from taskjson.core.config import get_settings
from taskjson.main import create_app
from taskjson.utils.json_extractor import complete_task_json


TASK_SCHEMA = {
    "type": "object",
    "required": ["title", "description", "details", "testStrategy", "dependencies"],
    "properties": {
        "title": {"type": "string", "minLength": 1},
        "description": {"type": "string", "minLength": 1},
        "details": {"type": "string", "minLength": 1},
        "testStrategy": {"type": "string", "minLength": 1},
        "dependencies": {"type": "array"},
    },
}


@pytest.fixture()
def client():
    get_settings.cache_clear()
    app = create_app()
    with TestClient(app) as client:
        yield client
    get_settings.cache_clear()


@pytest.fixture()
def limited_client(monkeypatch):
    monkeypatch.setenv("MAX_INPUT_CHARS", "50")
    get_settings.cache_clear()
    with TestClient(create_app()) as client:
        yield client
    get_settings.cache_clear()


@pytest.fixture()
def keyed_client(monkeypatch):
    monkeypatch.setenv("API_KEY", "secret")
    get_settings.cache_clear()
    with TestClient(create_app()) as client:
        yield client
    get_settings.cache_clear()


def test_root_lists_links(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "available"
    assert data["links"]["recover"].endswith("/v1/recover")


def test_health(client):
    response = client.get("/v1/health")
    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert response.headers["X-Request-Id"]


def test_version(client):
    data = client.get("/v1/version").json()
    assert data["name"] == "task-json-recovery"
    assert data["max_input_chars"] == 200_000


def test_request_id_is_echoed(client):
    response = client.get("/v1/health", headers={"X-Request-Id": "abc-123"})
    assert response.headers["X-Request-Id"] == "abc-123"


def test_extract(client):
    response = client.post("/v1/extract", json={"text": '```json\n{"title":"x"}\n```'})
    assert response.status_code == 200
    assert response.json() == {"json": '{"title":"x"}', "ok": True}


def test_extract_failure_returns_input(client):
    response = client.post("/v1/extract", json={"text": "no json here"})
    assert response.json() == {"json": "no json here", "ok": False}


def test_check(client):
    assert client.post("/v1/check", json={"json_text": '{"a": 1}'}).json() == {"complete": True}
    assert client.post("/v1/check", json={"json_text": '{"title": ""}'}).json() == {"complete": False}


def test_complete(client):
    response = client.post("/v1/complete", json={"json_text": '{"title": "x", "priority": 2}'})
    assert response.status_code == 200
    task = response.json()["task"]
    jsonschema.validate(instance=task, schema=TASK_SCHEMA)
    assert task["title"] == "x"
    assert task["priority"] == 2


@pytest.mark.parametrize(
    "text",
    [
        '{"title": "x", "dependencies":',
        "{title: 'x', dependencies: [2]}",
        "garbage",
        "",
    ],
)
def test_recover_always_yields_valid_task(client, text):
    response = client.post("/v1/recover", json={"text": text})
    assert response.status_code == 200
    data = response.json()
    jsonschema.validate(instance=data["task"], schema=TASK_SCHEMA)
    assert set(data) == {"task", "extracted", "extracted_ok", "complete", "defaults_applied"}


def test_recover_error_task(client):
    data = client.post("/v1/recover", json={"text": "garbage"}).json()
    assert data["task"]["title"] == "Error Recovery Task"
    assert data["extracted_ok"] is False


def test_validation_error_envelope(client):
    response = client.post("/v1/recover", json={})
    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["request_id"]


def test_input_too_large(limited_client):
    response = limited_client.post("/v1/recover", json={"text": "x" * 51})
    assert response.status_code == 413
    error = response.json()["error"]
    assert error["code"] == "INPUT_TOO_LARGE"
    assert error["details"] == {"size": 51, "limit": 50}


def test_api_key_required(keyed_client):
    response = keyed_client.get("/v1/health")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "HTTP_ERROR"

    response = keyed_client.get("/v1/health", headers={"X-API-Key": "secret"})
    assert response.status_code == 200


def test_complete_endpoint_stringifies_text_fields(client):
    raw = '{"title": 7, "details": ["a", "b"]}'
    task = client.post("/v1/complete", json={"json_text": raw}).json()["task"]
    assert task["title"] == "7"
    assert task["details"] == '["a", "b"]'
    assert json.loads(complete_task_json(raw))["title"] == 7
