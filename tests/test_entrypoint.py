"""Tests for the ``python -m configmaster`` entry point."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from configmaster import __main__ as entrypoint


def test_equals_form_overrides():
    args, overrides = entrypoint.parse_args(["--app.name=Widget", "--app.version=2.0", "--port", "9000"])
    assert overrides == {"app.name": "Widget", "app.version": "2.0"}
    assert args.port == 9000
    assert args.config_file is None


def test_separate_value_overrides():
    _, overrides = entrypoint.parse_args(["--app.description", "Demo service", "--host", "0.0.0.0"])
    assert overrides == {"app.description": "Demo service"}


def test_unrecognized_argument_is_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        entrypoint.parse_args(["--verbose"])
    assert exc_info.value.code == 2


def test_override_without_value_is_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        entrypoint.parse_args(["--app.name"])
    assert exc_info.value.code == 2


def test_main_runs_server_with_bound_properties(monkeypatch):
    calls = []
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda app, host, port: calls.append((app, host, port)))
    monkeypatch.setenv("ENVIRONMENT", "testing")

    assert entrypoint.main(["--app.name=Widget", "--host", "0.0.0.0", "--port", "9100"]) == 0

    app, host, port = calls[0]
    assert isinstance(app, FastAPI)
    assert (host, port) == ("0.0.0.0", 9100)

    response = TestClient(app).get("/config/info")
    assert response.status_code == 200
    assert response.text.startswith("App Name: Widget, ")


def test_main_aborts_on_configuration_error(monkeypatch, tmp_path):
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda *a, **kw: pytest.fail("server must not start"))
    monkeypatch.setenv("ENVIRONMENT", "testing")

    assert entrypoint.main(["--config-file", str(tmp_path / "missing.properties")]) == 1


def test_main_rejects_unknown_app_key(monkeypatch):
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda *a, **kw: pytest.fail("server must not start"))
    monkeypatch.setenv("ENVIRONMENT", "testing")

    assert entrypoint.main(["--app.colour=blue"]) == 1
