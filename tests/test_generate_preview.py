#!/usr/bin/env python3
"""Tests for local ideas and procedural preview composition."""

from dataclasses import replace

import pytest

import generate_preview
from color_utils import color_delta_e
from content_pools import LAYOUT_VARIANTS, LOCAL_DOMAINS, LOCAL_FEATURES, LOCAL_IDEAS
from generate_preview import (
    MAX_COLLISION_RETRIES,
    Idea,
    VariantProfile,
    ensure_feature_list,
    generate_idea_locally,
    generate_procedural_preview,
)
from seeded_rng import create_seeded_rng
from variant_selectors import ACCENT_MIN_DELTA_E

KEYS = ["2024-01-01", "2024-02-29", "2024-07-14", "2025-12-31"]


class TestLocalIdea:
    """Tests for generate_idea_locally."""

    @pytest.mark.parametrize("key", KEYS)
    def test_idea_is_deterministic(self, key):
        assert generate_idea_locally(key) == generate_idea_locally(key)

    @pytest.mark.parametrize("key", KEYS)
    def test_idea_comes_from_catalogs(self, key):
        idea = generate_idea_locally(key)
        assert idea.key == key
        assert idea.domain in {d["name"] for d in LOCAL_DOMAINS}
        assert idea.slug in {i["slug"] for i in LOCAL_IDEAS}
        assert len(idea.features) == 3
        assert len(set(idea.features)) == 3
        assert set(idea.features) <= set(LOCAL_FEATURES)

    def test_known_key_resolves_first_domain(self):
        # 3582842020 % 5 == 0
        assert generate_idea_locally("2024-01-01").domain == LOCAL_DOMAINS[0]["name"]


class TestFeatureList:
    """Tests for ensure_feature_list."""

    def test_keeps_given_features_in_order(self):
        result = ensure_feature_list(["A", "B", "C", "D"], create_seeded_rng(1), 3)
        assert result == ["A", "B", "C"]

    def test_pads_without_duplicates(self):
        result = ensure_feature_list(["A", "A", " ", None], create_seeded_rng(1), 5)
        assert result[0] == "A"
        assert len(result) == 5
        assert len(set(result)) == 5

    def test_empty_input_is_padded(self):
        assert len(ensure_feature_list(None, create_seeded_rng(8), 4)) == 4


class TestProceduralPreview:
    """Tests for generate_procedural_preview."""

    def _idea(self, key="2024-03-10"):
        return generate_idea_locally(key)

    def test_same_key_gives_identical_output(self):
        first = generate_procedural_preview("2024-03-10", self._idea())
        second = generate_procedural_preview("2024-03-10", self._idea())
        assert first.html == second.html
        assert first.profile == second.profile
        assert first.attempts == 0

    def test_profile_describes_chosen_variants(self):
        result = generate_procedural_preview("2024-03-10", self._idea())
        profile = result.profile
        assert profile.key == "2024-03-10"
        assert profile.seed == generate_preview.seed_from_key("2024-03-10")
        assert profile.layout_id in {v.id for v in LAYOUT_VARIANTS}
        assert profile.signature.startswith(f"{profile.theme_id}|{profile.layout_id}|{profile.pattern_id}|")
        assert profile.weights == {"theme": 0.42, "layout": 0.33, "pattern": 0.25}
        assert f'data-layout="{profile.layout_id}"' in result.html

    def test_feature_count_follows_layout(self):
        result = generate_procedural_preview("2024-03-10", self._idea())
        layout = next(v for v in LAYOUT_VARIANTS if v.id == result.profile.layout_id)
        assert result.html.count('<li>') >= layout.feature_count

    def test_previous_day_choices_are_avoided(self):
        yesterday = generate_procedural_preview("2024-03-09", self._idea("2024-03-09")).profile
        today = generate_procedural_preview("2024-03-10", self._idea(), [yesterday], yesterday).profile
        assert today.theme_id != yesterday.theme_id
        assert today.layout_id != yesterday.layout_id
        assert today.pattern_id != yesterday.pattern_id

    def test_recent_collision_triggers_retry(self):
        fresh = generate_procedural_preview("2024-03-10", self._idea()).profile
        clash = VariantProfile(
            seed=0,
            key="2024-01-01",
            theme_id="x",
            layout_id="x",
            pattern_id="x",
            mockup_id="x",
            signature=fresh.signature,
            accent="#000000",
        )
        result = generate_procedural_preview("2024-03-10", self._idea(), [clash])
        assert result.attempts >= 1
        assert result.profile.signature != fresh.signature

    def test_retries_are_bounded(self, monkeypatch):
        monkeypatch.setattr(generate_preview, "composite_signature", lambda *args: "same")
        clash = VariantProfile(
            seed=0, key="k", theme_id="x", layout_id="x", pattern_id="x",
            mockup_id="x", signature="same", accent="#000000",
        )
        result = generate_procedural_preview("2024-03-10", self._idea(), [clash])
        assert result.attempts == MAX_COLLISION_RETRIES
        assert result.profile.signature == "same"
        assert result.html

    @pytest.mark.parametrize("day", range(2, 29))
    def test_theme_reroll_keeps_avoiding_previous_day(self, monkeypatch, day):
        yesterday_key = f"2024-02-{day - 1:02d}"
        today_key = f"2024-02-{day:02d}"
        yesterday = generate_procedural_preview(yesterday_key, self._idea(yesterday_key)).profile
        clash = replace(yesterday, signature="same")
        monkeypatch.setattr(generate_preview, "composite_signature", lambda *args: "same")

        result = generate_procedural_preview(today_key, self._idea(today_key), [clash], clash)

        assert result.attempts == MAX_COLLISION_RETRIES
        assert result.profile.theme_id != yesterday.theme_id
        assert color_delta_e(result.profile.accent, yesterday.accent) >= ACCENT_MIN_DELTA_E

    def test_remote_idea_is_rendered(self):
        idea = Idea(key="2024-03-10", title="Diário de Leituras", domain="Estudos",
                    why="registra o progresso.", features=["Metas"], slug="diario-leituras")
        result = generate_procedural_preview("2024-03-10", idea)
        assert "Diário de Leituras" in result.html
        assert result.profile.mockup_id == "list"


def test_variant_profile_dict_round_trip():
    profile = generate_procedural_preview("2024-04-01", generate_idea_locally("2024-04-01")).profile
    data = profile.to_dict()
    assert data["themeId"] == profile.theme_id
    assert data["heroMode"] == profile.hero_mode
    assert VariantProfile.from_dict(data) == profile
