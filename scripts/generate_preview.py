#!/usr/bin/env python3
"""
Preview Generator - Composes the daily preview from seeded variant choices.

The whole pipeline draws from one seeded stream in a fixed order:

    1. theme          (variant_selectors.create_theme)
    2. layout         (one draw)
    3. pattern        (one draw)
    4. feature fill   (one draw per padded feature)
    5. motto          (one draw)
    6. mockup         (builder-specific, see mockup_builders)

and, for each collision retry: theme (3rd retry only, still avoiding the
previous day's theme and accent), layout, pattern, mockup.
Keeping this order is what makes a day key reproduce the same page.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from build_preview import render_preview_shell
from config import setup_logging
from content_pools import (
    DEFAULT_WEIGHTS,
    FOCUS_POINTS,
    LOCAL_DOMAINS,
    LOCAL_FEATURES,
    LOCAL_IDEAS,
    POWER_LINES,
    TRAINING_RITUALS,
)
from mockup_builders import Mockup, build_app_mockup
from seeded_rng import Rng, create_seeded_rng, random_pick, seed_from_key
from variant_selectors import create_theme, resolve_pattern_css, select_layout, select_pattern

logger = setup_logging("generate_preview")

# Profiles compared against when looking for repeats
HISTORY_WINDOW = 50
MAX_COLLISION_RETRIES = 6
THEME_REROLL_ATTEMPT = 3


@dataclass
class Idea:
    """The conceptual app of the day."""
    key: str
    title: str
    domain: str
    why: str
    features: List[str] = field(default_factory=list)
    slug: str = ""


@dataclass(frozen=True)
class VariantProfile:
    """Recorded combination chosen for one day key."""
    seed: int
    key: str
    theme_id: str
    layout_id: str
    pattern_id: str
    mockup_id: str
    signature: str
    accent: str
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    parts: List[str] = field(default_factory=list)
    hero_mode: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "seed": self.seed,
            "key": self.key,
            "themeId": self.theme_id,
            "layoutId": self.layout_id,
            "patternId": self.pattern_id,
            "mockupId": self.mockup_id,
            "signature": self.signature,
            "accent": self.accent,
            "weights": dict(self.weights),
            "parts": list(self.parts),
            "heroMode": self.hero_mode,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "VariantProfile":
        return cls(
            seed=int(data.get("seed") or 0),
            key=str(data.get("key") or ""),
            theme_id=str(data.get("themeId") or ""),
            layout_id=str(data.get("layoutId") or ""),
            pattern_id=str(data.get("patternId") or ""),
            mockup_id=str(data.get("mockupId") or ""),
            signature=str(data.get("signature") or ""),
            accent=str(data.get("accent") or ""),
            weights=dict(data.get("weights") or DEFAULT_WEIGHTS),
            parts=list(data.get("parts") or []),
            hero_mode=str(data.get("heroMode") or ""),
        )


@dataclass(frozen=True)
class ProceduralPreview:
    """Result of one procedural generation."""
    html: str
    profile: VariantProfile
    attempts: int


def _pick_by_seed(items: Sequence, seed: int):
    return items[seed % len(items)]


def generate_idea_locally(key: str) -> Idea:
    """Deterministic idea for a day key, no network involved."""
    seed = seed_from_key(key)
    domain = _pick_by_seed(LOCAL_DOMAINS, seed)
    idea = _pick_by_seed(LOCAL_IDEAS, seed >> 3)
    features = list(LOCAL_FEATURES)

    raw = [
        _pick_by_seed(features, seed >> 5),
        _pick_by_seed(features[::-1], seed >> 7),
        _pick_by_seed(features[1:], seed >> 9),
    ]
    unique: List[str] = []
    for feature in raw:
        if feature and feature not in unique:
            unique.append(feature)

    offset = 0
    while len(unique) < 3:
        candidate = features[((seed >> (11 + len(unique))) + offset) % len(features)]
        if candidate in unique:
            offset += 1
        else:
            unique.append(candidate)

    return Idea(
        key=key,
        title=idea["title"],
        domain=domain["name"],
        why=domain["why"],
        features=unique[:3],
        slug=idea["slug"],
    )


def ensure_feature_list(features: Optional[Sequence], rng: Rng, count: int) -> List[str]:
    """Keep the idea's features and pad from the copy pools up to ``count``."""
    base: List[str] = []
    for feature in features or []:
        text = str(feature).strip() if feature is not None else ""
        if text and text not in base:
            base.append(text)

    pool = list(dict.fromkeys(TRAINING_RITUALS + FOCUS_POINTS))
    while len(base) < count:
        candidate = random_pick(pool, rng)
        if candidate and candidate not in base:
            base.append(candidate)
    return base[:count]


def composite_signature(theme_id: str, layout_id: str, pattern_id: str, mockup: Mockup) -> str:
    return f"{theme_id}|{layout_id}|{pattern_id}|{mockup.signature}"


def _previous_profile(
    recent_variants: Sequence[VariantProfile],
    last_variant: Optional[VariantProfile],
) -> Optional[VariantProfile]:
    if last_variant is not None:
        return last_variant
    return recent_variants[-1] if recent_variants else None


def generate_procedural_preview(
    key: str,
    idea: Idea,
    recent_variants: Sequence[VariantProfile] = (),
    last_variant: Optional[VariantProfile] = None,
) -> ProceduralPreview:
    """
    Build the preview HTML and its Variant Profile for a day key.

    Args:
        key: UTC day key (YYYY-MM-DD)
        idea: Idea to present (local or remote)
        recent_variants: Recently recorded profiles, oldest first
        last_variant: The previous day's profile, if known

    Returns:
        ProceduralPreview with html, profile and the number of collision retries
    """
    seed = seed_from_key(key)
    rng = create_seeded_rng(seed)

    previous = _previous_profile(recent_variants, last_variant)
    previous_theme = {"themeId": previous.theme_id, "accent": previous.accent} if previous else None
    previous_layout = previous.layout_id if previous else None
    previous_pattern = previous.pattern_id if previous else None

    theme = create_theme(rng, previous_theme)
    layout = select_layout(rng, previous_layout)
    pattern = select_pattern(rng, previous_pattern)
    features = ensure_feature_list(idea.features, rng, layout.feature_count)
    motto = random_pick(POWER_LINES, rng) or POWER_LINES[0]
    mockup = build_app_mockup(rng, theme, idea)
    signature = composite_signature(theme.id, layout.id, pattern.id, mockup)

    seen = {profile.signature for profile in list(recent_variants)[-HISTORY_WINDOW:]}
    attempts = 0
    while signature in seen and attempts < MAX_COLLISION_RETRIES:
        attempts += 1
        logger.debug("Variant %s already used recently, retry %d", signature, attempts)
        if attempts == THEME_REROLL_ATTEMPT:
            theme = create_theme(rng, previous_theme, avoid_id=theme.id)
        layout = select_layout(rng, previous_layout, avoid_id=layout.id)
        pattern = select_pattern(rng, previous_pattern, avoid_id=pattern.id)
        mockup = build_app_mockup(rng, theme, idea)
        signature = composite_signature(theme.id, layout.id, pattern.id, mockup)

    if signature in seen:
        logger.info("Accepting repeated variant after %d retries: %s", attempts, signature)

    profile = VariantProfile(
        seed=seed,
        key=key,
        theme_id=theme.id,
        layout_id=layout.id,
        pattern_id=pattern.id,
        mockup_id=mockup.id,
        signature=signature,
        accent=theme.accent,
        weights=dict(DEFAULT_WEIGHTS),
        parts=list(mockup.parts),
        hero_mode=layout.hero_mode,
    )

    html_content = render_preview_shell(
        key=key,
        idea=idea,
        theme=theme,
        features=features,
        motto=motto,
        pattern_css=resolve_pattern_css(pattern, theme),
        profile=profile,
        typography=theme.font,
        layout_id=layout.id,
        hero_mode=layout.hero_mode,
        layout_css=layout.css,
        mockup=mockup,
    )
    return ProceduralPreview(html=html_content, profile=profile, attempts=attempts)
