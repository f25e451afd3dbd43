"""Startup behaviour of the standalone server entry point."""

from __future__ import annotations

import logging
import os

import pytest
from flask import Flask

from api import app as standalone
from statsproxy.config import Settings
from statsproxy.errors import ConfigurationError


@pytest.fixture
def run_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []

    def fake_run(self: Flask, **kwargs: object) -> None:
        calls.append(kwargs)

    monkeypatch.setattr(Flask, "run", fake_run)
    return calls


def test_module_exposes_wsgi_app() -> None:
    assert isinstance(standalone.app, Flask)


def test_run_plain_http(settings: Settings, run_calls: list[dict[str, object]]) -> None:
    standalone.run(settings)

    assert run_calls == [{"host": "0.0.0.0", "port": 3000, "ssl_context": None}]


def test_run_https_uses_cert_and_key(run_calls: list[dict[str, object]]) -> None:
    settings = Settings(use_https=True, ssl_key_path="key.pem", ssl_cert_path="cert.pem", port=8443)

    standalone.run(settings)

    assert run_calls[0]["port"] == 8443
    assert run_calls[0]["ssl_context"] == (os.path.abspath("cert.pem"), os.path.abspath("key.pem"))


def test_run_https_without_files_refuses_to_start(run_calls: list[dict[str, object]]) -> None:
    with pytest.raises(ConfigurationError):
        standalone.run(Settings(use_https=True, ssl_cert_path="cert.pem"))

    assert run_calls == []


def test_run_warns_about_missing_base_vars(
    run_calls: list[dict[str, object]], caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        standalone.run(Settings(client_id="id"))

    assert "SPOTIFY_CLIENT_SECRET, SPOTIFY_REDIRECT_URI" in caplog.text
    assert len(run_calls) == 1


def test_run_serves_the_module_app(monkeypatch: pytest.MonkeyPatch, settings: Settings) -> None:
    served: list[Flask] = []
    monkeypatch.setattr(Flask, "run", lambda self, **kwargs: served.append(self))

    standalone.run(settings)

    assert served == [standalone.app]
