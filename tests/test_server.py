"""Tests for the command-line entry points."""

import runpy
from unittest.mock import patch

from app.server import main


def test_main_runs_uvicorn_on_listen_addr():
    with patch("app.server.uvicorn.run") as run:
        main(["--listen", "127.0.0.1:9090", "--log-level", "debug"])

    run.assert_called_once_with("app.main:app", host="127.0.0.1", port=9090, log_level="debug")


def test_main_defaults_to_all_interfaces():
    with patch("app.server.uvicorn.run") as run:
        main(["--listen", ":8080"])

    assert run.call_args.kwargs["host"] == "0.0.0.0"
    assert run.call_args.kwargs["port"] == 8080


def test_python_dash_m_app_invokes_main(monkeypatch):
    monkeypatch.setattr("sys.argv", ["app", "--listen", ":8181"])

    with patch("app.server.uvicorn.run") as run:
        runpy.run_module("app", run_name="__main__")

    assert run.call_args.kwargs["port"] == 8181
