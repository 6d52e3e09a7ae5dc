#!/usr/bin/env python3
"""Tests for the daily orchestrator: cache, atomic writes and fallbacks."""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest

import daily_preview
from config import PreviewSettings
from daily_preview import (
    RECENT_VARIANTS_LIMIT,
    SOURCE_GPT_APP,
    SOURCE_GPT_IDEA,
    SOURCE_LOCAL,
    PreviewCache,
    atomic_write_if_changed,
    ensure_daily_preview,
    load_cache,
    today_utc_key,
)
from generate_preview import Idea, VariantProfile
from gpt_provider import ProviderError, RemoteApp

DAY = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _settings(temp_dir: Path, use_remote: bool = False) -> PreviewSettings:
    return PreviewSettings(
        use_remote=use_remote,
        api_key="sk-test" if use_remote else "",
        preview_path=temp_dir / "previews" / "preview-2.html",
        cache_path=temp_dir / "previews" / ".preview-2-cache.json",
    )


def _read_cache(settings: PreviewSettings) -> dict:
    with open(settings.cache_path, "r", encoding="utf-8") as f:
        return json.load(f)


def _profile(key: str) -> VariantProfile:
    return VariantProfile(
        seed=1, key=key, theme_id="nebula", layout_id="tower", pattern_id="grid",
        mockup_id="list", signature=f"sig-{key}", accent="#38bdf8",
    )


class TestAtomicWrite:
    """Tests for atomic_write_if_changed."""

    def test_writes_once_for_identical_content(self, temp_dir):
        target = temp_dir / "out.html"
        assert atomic_write_if_changed(target, "<p>olá</p>") is True
        assert atomic_write_if_changed(target, "<p>olá</p>") is False
        assert target.read_text(encoding="utf-8") == "<p>olá</p>"
        assert [p.name for p in temp_dir.iterdir()] == ["out.html"]

    def test_rewrites_when_content_changes(self, temp_dir):
        target = temp_dir / "out.html"
        atomic_write_if_changed(target, "a")
        assert atomic_write_if_changed(target, "b") is True
        assert target.read_text(encoding="utf-8") == "b"

    def test_failed_rename_leaves_no_temp_file(self, temp_dir, monkeypatch):
        target = temp_dir / "out.html"
        target.write_text("old", encoding="utf-8")

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(daily_preview.os, "replace", broken_replace)
        with pytest.raises(OSError):
            atomic_write_if_changed(target, "new")
        assert target.read_text(encoding="utf-8") == "old"
        assert [p.name for p in temp_dir.iterdir()] == ["out.html"]


class TestPreviewCache:
    """Tests for cache state and persistence."""

    def test_history_is_bounded_and_ordered(self):
        cache = PreviewCache()
        for day in range(RECENT_VARIANTS_LIMIT + 7):
            key = f"day-{day:03d}"
            cache = cache.advance(key, {"title": key}, _profile(key))
        assert len(cache.recent_variants) == RECENT_VARIANTS_LIMIT
        assert cache.recent_variants[0].key == "day-007"
        assert cache.recent_variants[-1].key == f"day-{RECENT_VARIANTS_LIMIT + 6:03d}"
        assert cache.last_variant == cache.recent_variants[-1]
        assert cache.last_key == cache.last_variant.key

    def test_advance_without_profile_keeps_history(self):
        cache = PreviewCache().advance("d1", {}, _profile("d1"))
        advanced = cache.advance("d2", {"source": SOURCE_GPT_APP}, None)
        assert advanced.last_key == "d2"
        assert advanced.recent_variants == cache.recent_variants
        assert advanced.last_variant == cache.last_variant

    def test_json_uses_camel_case_keys(self):
        cache = PreviewCache().advance("d1", {"title": "Ação"}, _profile("d1"))
        data = json.loads(cache.to_json())
        assert set(data) == {"lastKey", "meta", "recentVariants", "lastVariant"}
        assert data["recentVariants"][0]["themeId"] == "nebula"
        assert "Ação" in cache.to_json()

    def test_load_round_trip(self, temp_dir):
        path = temp_dir / "cache.json"
        cache = PreviewCache().advance("d1", {"title": "x"}, _profile("d1"))
        path.write_text(cache.to_json(), encoding="utf-8")
        assert load_cache(path) == cache

    def test_missing_cache_is_empty(self, temp_dir):
        assert load_cache(temp_dir / "absent.json") == PreviewCache()

    def test_corrupt_cache_is_empty(self, temp_dir, caplog):
        path = temp_dir / "cache.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_cache(path) == PreviewCache()
        assert "unreadable cache" in caplog.text


def test_today_utc_key_converts_to_utc():
    late_evening = datetime(2024, 1, 1, 22, 0, tzinfo=timezone(timedelta(hours=-3)))
    assert today_utc_key(late_evening) == "2024-01-02"
    assert today_utc_key(DAY) == "2024-06-01"


class TestEnsureDailyPreview:
    """Tests for ensure_daily_preview."""

    def test_local_generation_writes_preview_and_cache(self, temp_dir):
        settings = _settings(temp_dir)
        outcome = ensure_daily_preview(settings, now=DAY)

        assert outcome.source == SOURCE_LOCAL
        assert settings.preview_path.read_text(encoding="utf-8") == outcome.html
        cache = _read_cache(settings)
        assert cache["lastKey"] == "2024-06-01"
        assert cache["meta"]["source"] == SOURCE_LOCAL
        assert cache["meta"]["template"] == "procedural-lab"
        assert cache["lastVariant"]["key"] == "2024-06-01"
        assert len(cache["recentVariants"]) == 1

    def test_same_day_does_not_write(self, temp_dir, monkeypatch):
        settings = _settings(temp_dir)
        ensure_daily_preview(settings, now=DAY)

        writes = []
        monkeypatch.setattr(daily_preview, "atomic_write_if_changed", lambda *a, **k: writes.append(a))
        assert ensure_daily_preview(settings, now=DAY + timedelta(hours=6)) is None
        assert writes == []

    def test_next_day_regenerates_and_extends_history(self, temp_dir):
        settings = _settings(temp_dir)
        first = ensure_daily_preview(settings, now=DAY)
        second = ensure_daily_preview(settings, now=DAY + timedelta(days=1))

        assert second.key == "2024-06-02"
        assert second.profile.theme_id != first.profile.theme_id
        cache = _read_cache(settings)
        assert [v["key"] for v in cache["recentVariants"]] == ["2024-06-01", "2024-06-02"]

    def test_force_regenerates_same_day(self, temp_dir):
        settings = _settings(temp_dir)
        ensure_daily_preview(settings, now=DAY)
        outcome = ensure_daily_preview(settings, now=DAY, force=True)
        assert outcome is not None
        assert outcome.key == "2024-06-01"

    def test_remote_disabled_never_calls_provider(self, temp_dir):
        provider = MagicMock()
        outcome = ensure_daily_preview(_settings(temp_dir), provider=provider, now=DAY)
        assert outcome.source == SOURCE_LOCAL
        provider.generate_project_app.assert_not_called()
        provider.generate_project_idea.assert_not_called()

    def test_remote_app_is_written_verbatim(self, temp_dir):
        settings = _settings(temp_dir, use_remote=True)
        provider = MagicMock()
        provider.generate_project_app.return_value = RemoteApp(
            title="Mini App", slug="mini-app", html="<!doctype html><title>Mini App</title>"
        )

        outcome = ensure_daily_preview(settings, provider=provider, now=DAY)

        assert outcome.source == SOURCE_GPT_APP
        assert settings.preview_path.read_text(encoding="utf-8") == "<!doctype html><title>Mini App</title>"
        cache = _read_cache(settings)
        assert cache["meta"] == {"source": SOURCE_GPT_APP, "title": "Mini App", "subtitle": "Gerado via GPT"}
        assert cache["recentVariants"] == []
        provider.generate_project_idea.assert_not_called()

    def test_remote_idea_is_rendered_procedurally(self, temp_dir):
        settings = _settings(temp_dir, use_remote=True)
        provider = MagicMock()
        provider.generate_project_app.return_value = RemoteApp(title="Vazio", slug="vazio", html="")
        provider.generate_project_idea.return_value = Idea(
            key="2024-06-01", title="Planner de Leitura", domain="Estudos",
            why="organiza capítulos.", features=["Metas", "Notas", "Resumo"], slug="planner-de-leitura",
        )

        outcome = ensure_daily_preview(settings, provider=provider, now=DAY)

        assert outcome.source == SOURCE_GPT_IDEA
        assert "Planner de Leitura" in settings.preview_path.read_text(encoding="utf-8")
        cache = _read_cache(settings)
        assert cache["meta"]["title"] == "Planner de Leitura"
        assert cache["meta"]["subtitle"] == "Estudos"
        assert len(cache["recentVariants"]) == 1

    def test_remote_failure_falls_back_to_local(self, temp_dir, caplog):
        settings = _settings(temp_dir, use_remote=True)
        provider = MagicMock()
        provider.generate_project_app.side_effect = ProviderError("boom")

        with caplog.at_level(logging.WARNING):
            outcome = ensure_daily_preview(settings, provider=provider, now=DAY)

        assert outcome.source == SOURCE_LOCAL
        assert "Remote generation failed" in caplog.text
        assert _read_cache(settings)["lastKey"] == "2024-06-01"

    def test_corrupt_cache_still_generates(self, temp_dir):
        settings = _settings(temp_dir)
        settings.cache_path.parent.mkdir(parents=True)
        settings.cache_path.write_text("][", encoding="utf-8")

        outcome = ensure_daily_preview(settings, now=DAY)

        assert outcome.source == SOURCE_LOCAL
        assert _read_cache(settings)["lastKey"] == "2024-06-01"

    def test_write_failure_propagates_and_keeps_cache(self, temp_dir, monkeypatch):
        settings = _settings(temp_dir)

        def failing_write(path, content, encoding="utf-8"):
            raise OSError("read-only file system")

        monkeypatch.setattr(daily_preview, "atomic_write_if_changed", failing_write)
        with pytest.raises(OSError):
            ensure_daily_preview(settings, now=DAY)
        assert not settings.cache_path.exists()


class _RecordingScheduler:
    started = []

    def __init__(self, job, **kwargs):
        self.job = job

    def run(self, max_runs=None):
        self.started.append(self.job)


class TestMain:
    """Tests for the command line entry point."""

    def _patch(self, monkeypatch, settings):
        _RecordingScheduler.started = []
        monkeypatch.setattr(daily_preview, "load_env", lambda: None)
        monkeypatch.setattr(daily_preview.PreviewSettings, "from_env", lambda *a, **k: settings)
        monkeypatch.setattr(daily_preview, "DailyScheduler", _RecordingScheduler)

        def failing_write(path, content, encoding="utf-8"):
            raise OSError("read-only file system")

        monkeypatch.setattr(daily_preview, "atomic_write_if_changed", failing_write)

    def test_loop_starts_even_if_first_generation_fails(self, temp_dir, monkeypatch, caplog):
        self._patch(monkeypatch, _settings(temp_dir))

        with caplog.at_level(logging.ERROR):
            assert daily_preview.main(["--loop"]) == 0

        assert len(_RecordingScheduler.started) == 1
        assert "Initial preview generation failed" in caplog.text

    def test_single_run_propagates_write_failure(self, temp_dir, monkeypatch):
        self._patch(monkeypatch, _settings(temp_dir))

        with pytest.raises(OSError):
            daily_preview.main([])
        assert _RecordingScheduler.started == []
