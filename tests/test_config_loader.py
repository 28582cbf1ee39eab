"""Tests for appsettings loading and defaults."""

import json

import pytest

from aadusers.config.loader import (
    get_auth_config, get_graph_config, get_http_config, load_appsettings
)


@pytest.fixture
def no_azure_env(monkeypatch):
    for k in ("AZURE_TENANT_ID", "AZURE_CLIENT_ID", "AZURE_CLIENT_SECRET"):
        monkeypatch.delenv(k, raising=False)


class TestLoader:

    def test_missing_file_is_empty(self, tmp_path):
        assert load_appsettings(tmp_path / "nope.json") == {}

    def test_malformed_file_is_empty(self, tmp_path):
        p = tmp_path / "appsettings.json"
        p.write_text("{not json", encoding="utf-8")

        assert load_appsettings(p) == {}

    def test_reads_sections(self, tmp_path):
        p = tmp_path / "appsettings.json"
        p.write_text(json.dumps({"http": {"timeout_seconds": 5}, "graph": {"api_version": "/beta/"}}),
                     encoding="utf-8")
        settings = load_appsettings(p)

        assert get_http_config(settings) == {"timeout_seconds": 5, "max_retries": 4}
        assert get_graph_config(settings) == {"base_url": "https://graph.microsoft.com", "api_version": "beta"}

    def test_auth_from_file(self, no_azure_env):
        cfg = get_auth_config({"auth": {"tenant_id": "t", "client_id": "c"}})

        assert cfg == {"tenant_id": "t", "client_id": "c", "client_secret": ""}

    def test_environment_overrides_file(self, no_azure_env, monkeypatch):
        monkeypatch.setenv("AZURE_CLIENT_SECRET", "s3cret")
        monkeypatch.setenv("AZURE_TENANT_ID", "env-tenant")

        cfg = get_auth_config({"auth": {"tenant_id": "t", "client_id": "c"}})

        assert cfg == {"tenant_id": "env-tenant", "client_id": "c", "client_secret": "s3cret"}

    def test_non_numeric_http_values_fall_back(self, capsys):
        cfg = get_http_config({"http": {"timeout_seconds": "thirty", "max_retries": None}})

        assert cfg == {"timeout_seconds": 30, "max_retries": 4}
        assert "timeout_seconds='thirty'" in capsys.readouterr().err
