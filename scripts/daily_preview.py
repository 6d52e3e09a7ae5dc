#!/usr/bin/env python3
"""
Daily Preview - Regenerates preview-2.html once per UTC day.

Flow: check the cache, short-circuit when today's key is already built,
otherwise try the remote provider (full app, then idea) when enabled and
fall back to the local procedural generator. Output and cache are written
atomically and only when their content changes.

Stores its state in `.preview-2-cache.json` next to the preview file.
"""

import argparse
import json
import os
import tempfile
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from config import PreviewSettings, load_env, setup_logging
from generate_preview import (
    Idea,
    VariantProfile,
    generate_idea_locally,
    generate_procedural_preview,
)
from gpt_provider import GptProvider
from scheduler import DailyScheduler

logger = setup_logging("daily_preview")

SOURCE_GPT_APP = "gpt-app"
SOURCE_GPT_IDEA = "gpt-idea+procedural"
SOURCE_LOCAL = "local-procedural"

# Maximum Variant Profiles kept in the cache
RECENT_VARIANTS_LIMIT = 50


def today_utc_key(now: Optional[datetime] = None) -> str:
    """YYYY-MM-DD for the current UTC date."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%d")


@dataclass(frozen=True)
class PreviewCache:
    """Persisted generation state."""
    last_key: Optional[str] = None
    meta: Dict = field(default_factory=dict)
    recent_variants: Tuple[VariantProfile, ...] = ()
    last_variant: Optional[VariantProfile] = None

    def advance(self, key: str, meta: Dict, profile: Optional[VariantProfile]) -> "PreviewCache":
        """Cache state after a successful generation for ``key``."""
        recent = self.recent_variants
        last_variant = self.last_variant
        if profile is not None:
            recent = (recent + (profile,))[-RECENT_VARIANTS_LIMIT:]
            last_variant = profile
        return replace(self, last_key=key, meta=dict(meta), recent_variants=recent, last_variant=last_variant)

    def to_dict(self) -> Dict:
        return {
            "lastKey": self.last_key,
            "meta": dict(self.meta),
            "recentVariants": [p.to_dict() for p in self.recent_variants],
            "lastVariant": self.last_variant.to_dict() if self.last_variant else None,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict) -> "PreviewCache":
        if not isinstance(data, dict):
            return cls()
        recent = [
            VariantProfile.from_dict(item)
            for item in data.get("recentVariants") or []
            if isinstance(item, dict)
        ]
        last = data.get("lastVariant")
        return cls(
            last_key=data.get("lastKey"),
            meta=dict(data.get("meta") or {}),
            recent_variants=tuple(recent[-RECENT_VARIANTS_LIMIT:]),
            last_variant=VariantProfile.from_dict(last) if isinstance(last, dict) else None,
        )


@dataclass(frozen=True)
class GenerationOutcome:
    """Artifacts of one generation attempt, not yet persisted."""
    key: str
    html: str
    meta: Dict
    cache: PreviewCache
    source: str
    profile: Optional[VariantProfile] = None
    idea: Optional[Idea] = None


def load_cache(path: Path) -> PreviewCache:
    """Read the cache file; a missing or corrupt file is an empty cache."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return PreviewCache.from_dict(json.load(f))
    except FileNotFoundError:
        return PreviewCache()
    except Exception as e:
        logger.warning("Ignoring unreadable cache %s: %s", path, e)
        return PreviewCache()


def atomic_write_if_changed(path: Path, content: str, encoding: str = "utf-8") -> bool:
    """
    Write ``content`` to ``path`` only when it differs from what is on disk.

    The data goes to a temp file in the same directory which is then renamed
    over the target, so readers see either the old or the new file.

    Returns:
        True when the file was written, False when it already matched
    """
    path = Path(path)
    data = content.encode(encoding)
    try:
        if path.read_bytes() == data:
            return False
    except OSError:
        pass

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return True


def run_generation(
    key: str,
    cache: PreviewCache,
    use_remote: bool = False,
    provider=None,
) -> Optional[GenerationOutcome]:
    """
    Produce today's preview from the given cache state.

    Returns None when ``cache`` already holds ``key`` (nothing to do).
    Remote failures are logged and fall through to local generation.
    """
    if cache.last_key == key:
        return None

    html_content = ""
    meta: Dict = {}
    source = ""
    remote_idea: Optional[Idea] = None

    if use_remote and provider is not None:
        try:
            app = provider.generate_project_app(key)
            if app and app.html:
                html_content = app.html
                source = SOURCE_GPT_APP
                meta = {"source": source, "title": app.title, "subtitle": "Gerado via GPT"}
                logger.info("Full app generated remotely: %s", app.title)
            else:
                remote_idea = provider.generate_project_idea(key)
        except Exception as e:
            logger.warning("Remote generation failed, using local generator: %s", e)

    profile = None
    idea = remote_idea
    if not html_content and remote_idea is not None:
        preview = generate_procedural_preview(key, remote_idea, cache.recent_variants, cache.last_variant)
        html_content, profile = preview.html, preview.profile
        source = SOURCE_GPT_IDEA
        meta = {"source": source, "title": remote_idea.title, "subtitle": remote_idea.domain}
        logger.info("Remote idea rendered with the local generator: %s", remote_idea.title)

    if not html_content:
        idea = generate_idea_locally(key)
        preview = generate_procedural_preview(key, idea, cache.recent_variants, cache.last_variant)
        html_content, profile = preview.html, preview.profile
        source = SOURCE_LOCAL
        meta = {
            "source": source,
            "title": idea.title,
            "subtitle": idea.domain,
            "template": "procedural-lab",
        }

    return GenerationOutcome(
        key=key,
        html=html_content,
        meta=meta,
        cache=cache.advance(key, meta, profile),
        source=source,
        profile=profile,
        idea=idea,
    )


def persist_outcome(outcome: GenerationOutcome, preview_path: Path, cache_path: Path) -> Tuple[bool, bool]:
    """Write the preview, then the cache. Write errors propagate."""
    html_changed = atomic_write_if_changed(preview_path, outcome.html)
    cache_changed = atomic_write_if_changed(cache_path, outcome.cache.to_json())
    return html_changed, cache_changed


def ensure_daily_preview(
    settings: Optional[PreviewSettings] = None,
    provider=None,
    now: Optional[datetime] = None,
    force: bool = False,
) -> Optional[GenerationOutcome]:
    """Bring preview-2.html up to date for the current UTC day."""
    settings = settings or PreviewSettings.from_env()
    key = today_utc_key(now)

    cache = load_cache(settings.cache_path)
    if force:
        cache = replace(cache, last_key=None)
    if cache.last_key == key:
        logger.debug("Preview already up to date for %s", key)
        return None

    if settings.use_remote and provider is None:
        provider = GptProvider.from_settings(settings)

    outcome = run_generation(key, cache, use_remote=settings.use_remote, provider=provider)
    if outcome is None:
        return None

    html_changed, cache_changed = persist_outcome(outcome, settings.preview_path, settings.cache_path)
    if html_changed or cache_changed:
        logger.info("Preview updated (%s) · %s", outcome.source, outcome.meta.get("title"))
    return outcome


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate the daily preview page")
    parser.add_argument(
        "--loop",
        action="store_true",
        help="Keep running and regenerate shortly after every UTC midnight",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Regenerate even if today's preview already exists",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    load_env()
    settings = PreviewSettings.from_env()

    if not args.loop:
        ensure_daily_preview(settings, force=args.force)
        return 0

    try:
        ensure_daily_preview(settings, force=args.force)
    except Exception as e:
        logger.error("Initial preview generation failed: %s", e)
    DailyScheduler(lambda: ensure_daily_preview(settings)).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
