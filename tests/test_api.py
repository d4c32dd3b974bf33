"""Tests for the FastAPI service."""

import textwrap

import pytest
from fastapi.testclient import TestClient

import main
from config_loader import ConfigLoader
from thinkgate_core.registry import get_global_registry, set_global_registry
from thinkgate_core.thinking import (
    MatchKind,
    ThinkingRule,
    get_global_classifier,
    get_global_converter,
    set_global_classifier,
    set_global_converter,
)

CONFIG = """
client_authentication:
  allowed_keys: [sk-test-key]
features:
  log_level: DEBUG
thinking:
  default_budget: 2048
  provider_rules:
    vertex:
      - {kind: suffix, value: "-reasoning"}
models:
  - id: local-reasoning
    owned_by: local
    thinking: {min: 100, max: 1000, zero_allowed: false, dynamic_allowed: false}
"""

AUTH = {"Authorization": "Bearer sk-test-key"}


def serve_config(tmp_path, monkeypatch, content):
    """Point the app at a fresh config file and force it to be loaded again."""
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    monkeypatch.setattr(main, "config_loader", ConfigLoader(str(path)))
    monkeypatch.setattr(main, "_config_loaded", False)
    return path


@pytest.fixture(autouse=True)
def restore_globals():
    previous = (get_global_registry(), get_global_classifier(), get_global_converter())
    yield
    set_global_registry(previous[0])
    set_global_classifier(previous[1])
    set_global_converter(previous[2])


@pytest.fixture
def client(tmp_path, monkeypatch):
    serve_config(tmp_path, monkeypatch, CONFIG)
    return TestClient(main.app)


class TestRoot:

    def test_status(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Thinkgate is running"
        assert data["config"]["features"]["default_thinking_budget"] == 2048
        assert "config" in data["config"]["providers"]

    def test_config_error_returns_500(self, tmp_path, monkeypatch):
        monkeypatch.setattr(main, "config_loader", ConfigLoader(str(tmp_path / "missing.yaml")))
        monkeypatch.setattr(main, "_config_loaded", False)
        response = TestClient(main.app).get("/")
        assert response.status_code == 500
        assert "Server configuration error" in response.json()["detail"]


class TestAuth:

    def test_rejects_unknown_key(self, client):
        response = client.get("/v1/models", headers={"Authorization": "Bearer sk-wrong"})
        assert response.status_code == 401

    def test_accepts_key_without_bearer_prefix(self, client):
        response = client.get("/v1/models", headers={"Authorization": "sk-test-key"})
        assert response.status_code == 200

    def test_missing_header_is_unauthorized(self, client):
        response = client.get("/v1/models")
        assert response.status_code == 401
        assert response.json()["detail"] == "Missing Authorization header"

    def test_key_passthrough_accepts_unknown_key(self, tmp_path, monkeypatch):
        serve_config(tmp_path, monkeypatch, """
            client_authentication:
              allowed_keys: [sk-test-key]
            features:
              key_passthrough: true
        """)
        client = TestClient(main.app)
        response = client.get("/v1/models", headers={"Authorization": "Bearer sk-anything"})
        assert response.status_code == 200
        # A key is still required
        assert client.get("/v1/models").status_code == 401


class TestReload:

    RELOADED = """
        client_authentication:
          allowed_keys: [sk-new-key]
        features:
          load_builtin_models: false
        thinking:
          provider_rules:
            vertex:
              - {kind: prefix, value: "o3-"}
        models:
          - id: reloaded-model
            thinking: {min: 1, max: 64}
    """

    def test_reload_replaces_registry_and_rules(self, tmp_path, monkeypatch):
        path = serve_config(tmp_path, monkeypatch, CONFIG)
        client = TestClient(main.app)
        assert client.get("/").status_code == 200
        assert main.classifier.is_thinking_enabled("vertex", "x-reasoning") is True

        path.write_text(textwrap.dedent(self.RELOADED), encoding="utf-8")
        main.load_runtime_config(reload=True)

        assert main.registry.get_model_info("local-reasoning") is None
        assert main.registry.get_model_info("gemini-2.5-pro") is None
        assert main.registry.get_model_info("reloaded-model").thinking.max == 64
        assert main.classifier.get_rules("vertex") == [ThinkingRule(MatchKind.PREFIX, "o3-")]
        assert main.classifier.is_thinking_enabled("vertex", "x-reasoning") is False
        assert get_global_registry() is main.registry
        assert get_global_classifier() is main.classifier

        assert client.get("/v1/models", headers=AUTH).status_code == 401
        response = client.post(
            "/v1/thinking/normalize",
            json={"model": "reloaded-model", "budget": 500},
            headers={"Authorization": "Bearer sk-new-key"},
        )
        assert response.json()["effective_budget"] == 64

    def test_repeated_reload_does_not_duplicate_rules(self, tmp_path, monkeypatch):
        serve_config(tmp_path, monkeypatch, CONFIG)
        main.load_runtime_config()
        main.load_runtime_config(reload=True)
        main.load_runtime_config(reload=True)
        assert main.classifier.get_rules("vertex") == [ThinkingRule(MatchKind.SUFFIX, "-reasoning")]


class TestModels:

    def test_list_models(self, client):
        response = client.get("/v1/models", headers=AUTH)
        assert response.status_code == 200
        models = {m["id"]: m for m in response.json()["data"]}
        assert models["local-reasoning"]["thinking"]["max"] == 1000
        assert "gemini-2.5-pro" in models
        assert "thinking" not in models["gemini-2.5-pro-image"]

    def test_model_thinking(self, client):
        response = client.get("/v1/models/gemini-claude-sonnet-4-5-thinking/thinking", headers=AUTH)
        assert response.status_code == 200
        data = response.json()
        assert data["supports_thinking"] is True
        assert data["special_handling"] is True
        assert data["enabled_for_providers"] == ["antigravity"]

    def test_model_thinking_unknown(self, client):
        response = client.get("/v1/models/nope/thinking", headers=AUTH)
        assert response.status_code == 404


class TestNormalize:

    def test_explicit_budget_clamped(self, client):
        response = client.post(
            "/v1/thinking/normalize",
            json={"model": "local-reasoning", "budget": 5000},
            headers=AUTH,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["requested_budget"] == 5000
        assert data["effective_budget"] == 1000
        assert data["supports_thinking"] is True
        assert data["thinking_enabled"] is None

    def test_dynamic_without_dynamic_support(self, client):
        response = client.post(
            "/v1/thinking/normalize",
            json={"model": "local-reasoning", "budget": -1, "provider": "vertex"},
            headers=AUTH,
        )
        data = response.json()
        assert data["effective_budget"] == 550
        assert data["thinking_enabled"] is True

    def test_reasoning_effort(self, client):
        response = client.post(
            "/v1/thinking/normalize",
            json={"model": "gemini-2.5-flash", "reasoning_effort": "none", "provider": "antigravity"},
            headers=AUTH,
        )
        data = response.json()
        assert data["requested_budget"] == 0
        assert data["effective_budget"] == 0
        assert data["reasoning_effort"] == "none"
        assert data["thinking_enabled"] is False

    def test_default_budget_for_unknown_model(self, client):
        response = client.post(
            "/v1/thinking/normalize",
            json={"model": "mystery-model"},
            headers=AUTH,
        )
        data = response.json()
        assert data["effective_budget"] == 2048
        assert data["supports_thinking"] is False
        assert data["special_handling"] is False

    def test_missing_model_is_validation_error(self, client):
        response = client.post("/v1/thinking/normalize", json={"budget": 10}, headers=AUTH)
        assert response.status_code == 422
