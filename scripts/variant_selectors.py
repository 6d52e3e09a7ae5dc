#!/usr/bin/env python3
"""
Variant selectors - pick theme, layout and background pattern for a day.

Each selector consumes the shared seeded stream and avoids repeating the
previous day's choice where the pool allows it.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from color_utils import color_delta_e, hex_to_rgba
from content_pools import (
    FONT_STACKS,
    LAYOUT_VARIANTS,
    PATTERN_VARIANTS,
    THEME_PRESETS,
    LayoutVariant,
    PatternVariant,
)
from seeded_rng import Rng, random_pick, weighted_pick

# Minimum Lab distance between consecutive days' accents
ACCENT_MIN_DELTA_E = 10
# Minimum Lab distance between accent and highlight
HIGHLIGHT_MIN_DELTA_E = 6


@dataclass(frozen=True)
class Theme:
    """A theme preset resolved to one accent, one highlight and a font pair."""
    id: str
    base: str
    surface: str
    panel: str
    surface_soft: str
    text: str
    muted: str
    border: str
    accent: str
    highlight: str
    shadow: str
    success: str
    warning: str
    font: Dict[str, str] = field(default_factory=dict)
    accent_soft: str = ""
    accent_strong: str = ""
    highlight_soft: str = ""
    background: str = ""

    def palette(self) -> Tuple[str, ...]:
        """Unique hex colors of this theme, at most six."""
        colors = []
        for color in (self.accent, self.highlight, self.success, self.warning, self.surface, self.panel):
            if color not in colors:
                colors.append(color)
        return tuple(colors[:6])


def _compose_background(preset: Dict, accent_soft: str, highlight_soft: str) -> str:
    layers = []
    for layer in preset.get("background_layers", ()):
        color = highlight_soft if layer["color"] == "highlight" else accent_soft
        layers.append(
            f"{layer['shape']}-gradient({layer['size']} at {layer['position']}, {color}, transparent {layer['stop']})"
        )
    return ", ".join(layers + [preset["base"]])


def _pick_distinct_accent(preset: Dict, previous_accent: Optional[str], rng: Rng) -> Optional[str]:
    accents = list(preset.get("accents", ()))
    if not previous_accent:
        return random_pick(accents, rng)
    qualifying = [a for a in accents if color_delta_e(a, previous_accent) >= ACCENT_MIN_DELTA_E]
    return random_pick(qualifying, rng)


def _pick_highlight(preset: Dict, accent: str, rng: Rng) -> str:
    choices = [h for h in preset.get("highlights", ()) if h != accent]
    qualifying = [h for h in choices if color_delta_e(h, accent) >= HIGHLIGHT_MIN_DELTA_E]
    picked = random_pick(qualifying, rng)
    if picked:
        return picked
    return choices[0] if choices else accent


def create_theme(
    rng: Rng,
    previous: Optional[Dict] = None,
    presets: Sequence[Dict] = THEME_PRESETS,
    avoid_id: Optional[str] = None,
) -> Theme:
    """
    Resolve a theme for today.

    Args:
        rng: Shared seeded stream
        previous: Previous day's choice, ``{"themeId": ..., "accent": ...}``
        presets: Theme preset table
        avoid_id: Preset to skip as well, e.g. one that just collided

    Draw order: preset (1), accent (1 per preset tried), highlight (1), font (1).
    """
    previous = previous or {}
    previous_id = previous.get("themeId")
    previous_accent = previous.get("accent")

    excluded = (previous_id, avoid_id)
    candidates = (
        [p for p in presets if p["id"] not in excluded]
        or [p for p in presets if p["id"] != previous_id]
        or list(presets)
    )
    preset = weighted_pick(candidates, rng, lambda p: p.get("weight", 1))

    accent = _pick_distinct_accent(preset, previous_accent, rng)
    if accent is None:
        alternates = [p for p in presets if p["id"] != preset["id"] and p["id"] not in excluded]
        for alternate in alternates:
            alternate_accent = _pick_distinct_accent(alternate, previous_accent, rng)
            if alternate_accent:
                preset, accent = alternate, alternate_accent
                break
    if accent is None:
        accent = preset["accents"][0]

    highlight = _pick_highlight(preset, accent, rng)
    font = random_pick(FONT_STACKS, rng) or FONT_STACKS[0]

    accent_soft = hex_to_rgba(accent, 0.22)
    highlight_soft = hex_to_rgba(highlight, 0.20)

    return Theme(
        id=preset["id"],
        base=preset["base"],
        surface=preset["surface"],
        panel=preset["panel"],
        surface_soft=preset["surface_soft"],
        text=preset["text"],
        muted=preset["muted"],
        border=preset["border"],
        accent=accent,
        highlight=highlight,
        shadow=preset["shadow"],
        success=preset["success"],
        warning=preset["warning"],
        font=dict(font),
        accent_soft=accent_soft,
        accent_strong=hex_to_rgba(accent, 0.36),
        highlight_soft=highlight_soft,
        background=_compose_background(preset, accent_soft, highlight_soft),
    )


def _exclude(candidates: list, excluded_id: Optional[str]) -> list:
    if excluded_id and len(candidates) > 1:
        remaining = [c for c in candidates if c.id != excluded_id]
        if remaining:
            return remaining
    return candidates


def select_layout(
    rng: Rng,
    previous_id: Optional[str] = None,
    avoid_id: Optional[str] = None,
    variants: Sequence[LayoutVariant] = LAYOUT_VARIANTS,
) -> LayoutVariant:
    """Weighted layout pick skipping yesterday's layout and ``avoid_id``. One draw."""
    candidates = _exclude(_exclude(list(variants), previous_id), avoid_id)
    return weighted_pick(candidates, rng, lambda v: v.weight)


def select_pattern(
    rng: Rng,
    previous_id: Optional[str] = None,
    avoid_id: Optional[str] = None,
    variants: Sequence[PatternVariant] = PATTERN_VARIANTS,
) -> PatternVariant:
    """Weighted pattern pick with the same exclusions as layouts. One draw."""
    candidates = _exclude(_exclude(list(variants), previous_id), avoid_id)
    return weighted_pick(candidates, rng, lambda v: v.weight)


def resolve_pattern_css(pattern: PatternVariant, theme: Theme) -> str:
    return pattern.build(theme)
