#!/usr/bin/env python3
"""Tests for the local dev server."""

import threading

import pytest
import requests

import dev_server
from config import PreviewSettings


@pytest.fixture
def public_dir(temp_dir):
    previews = temp_dir / "src" / "previews"
    previews.mkdir(parents=True)
    (previews / "preview-2.html").write_text("<p>prévia</p>", encoding="utf-8")
    (temp_dir / "style.css").write_text("body{}", encoding="utf-8")
    return temp_dir


def _serve(settings, directory):
    server = dev_server.build_server(settings, directory)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server, f"http://127.0.0.1:{server.server_address[1]}"


@pytest.fixture
def running(public_dir, monkeypatch):
    calls = []
    monkeypatch.setattr(dev_server, "ensure_daily_preview", lambda settings: calls.append(settings))
    settings = PreviewSettings(port=0, generation_enabled=True)
    server, base = _serve(settings, public_dir)
    yield base, calls
    server.shutdown()
    server.server_close()


def test_serves_static_files_without_caching(running):
    base, _ = running
    response = requests.get(f"{base}/style.css", timeout=5)
    assert response.status_code == 200
    assert response.text == "body{}"
    assert response.headers["Cache-Control"] == "no-store"


def test_public_prefix_is_an_alias(running):
    base, _ = running
    response = requests.get(f"{base}/public/style.css", timeout=5)
    assert response.status_code == 200
    assert response.text == "body{}"


def test_percent_escapes_are_decoded_once(running, public_dir):
    base, _ = running
    (public_dir / "100%25.txt").write_text("encoded", encoding="utf-8")
    (public_dir / "100%.txt").write_text("literal", encoding="utf-8")

    for prefix in ("", "/public"):
        response = requests.get(f"{base}{prefix}/100%2525.txt", timeout=5)
        assert response.status_code == 200
        assert response.text == "encoded"


def test_preview_request_triggers_refresh(running):
    base, calls = running
    response = requests.get(f"{base}/src/previews/preview-2.html", timeout=5)
    assert response.status_code == 200
    assert "prévia" in response.content.decode("utf-8")
    assert len(calls) == 1


def test_refresh_failure_still_serves_existing_file(public_dir, monkeypatch):
    def failing(settings):
        raise OSError("read-only")

    monkeypatch.setattr(dev_server, "ensure_daily_preview", failing)
    server, base = _serve(PreviewSettings(port=0, generation_enabled=True), public_dir)
    try:
        response = requests.get(f"{base}/src/previews/preview-2.html", timeout=5)
    finally:
        server.shutdown()
        server.server_close()
    assert response.status_code == 200


def test_directory_listing_is_disabled(running):
    base, _ = running
    assert requests.get(f"{base}/src/", timeout=5).status_code == 404


def test_generate_preview_flag_runs_once(monkeypatch):
    calls = []
    monkeypatch.setattr(dev_server, "load_env", lambda: None)
    monkeypatch.setattr(dev_server, "ensure_daily_preview", lambda settings: calls.append(settings))
    assert dev_server.main(["--generate-preview", "--port", "4000"]) == 0
    assert len(calls) == 1
    assert calls[0].port == 4000
