#!/usr/bin/env python3
"""
Configuration for the daily preview lab.

Paths, environment switches and logging setup shared by the generator,
the daily orchestrator and the dev server.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


ROOT_DIR = Path(__file__).resolve().parent.parent
PUBLIC_DIR = ROOT_DIR / "public"
PREVIEWS_DIR = PUBLIC_DIR / "src" / "previews"
PREVIEW_PATH = PREVIEWS_DIR / "preview-2.html"
PREVIEW_CACHE_PATH = PREVIEWS_DIR / ".preview-2-cache.json"

ENV_FILES = (".env", ".env.local")
TRUTHY_VALUES = {"1", "true", "on", "yes"}

DEFAULT_PORT = 3000
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OPENAI_MODEL = "gpt-5"

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def setup_logging(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a named logger with a single stream handler attached."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level or os.getenv("LOG_LEVEL", "INFO").upper())
    return logger


def load_env(root: Optional[Path] = None) -> None:
    """Load .env then .env.local without overriding variables already set."""
    base = Path(root) if root else ROOT_DIR
    for name in ENV_FILES:
        env_path = base / name
        if env_path.is_file():
            load_dotenv(env_path, override=False)


def env_flag(value: Optional[str]) -> bool:
    return str(value or "").strip().lower() in TRUTHY_VALUES


@dataclass(frozen=True)
class PreviewSettings:
    """Effective switches for daily preview generation."""
    generation_enabled: bool = True
    use_remote: bool = False
    api_key: str = ""
    base_url: str = DEFAULT_OPENAI_BASE_URL
    model: str = DEFAULT_OPENAI_MODEL
    port: int = DEFAULT_PORT
    preview_path: Path = PREVIEW_PATH
    cache_path: Path = PREVIEW_CACHE_PATH

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "PreviewSettings":
        env = os.environ if environ is None else environ

        # Generation defaults to ON; set USE_PREVIEW2_GENERATION=0 to serve the static file.
        generation_enabled = env_flag(env.get("USE_PREVIEW2_GENERATION", "1"))

        api_key = (env.get("OPENAI_API_KEY") or "").strip()
        raw_remote = env.get("USE_GPT_PREVIEW2")
        if raw_remote is None:
            raw_remote = env.get("USE_GPT", "")
        raw_remote = raw_remote.strip()
        remote_requested = env_flag(raw_remote) if raw_remote else bool(api_key)

        return cls(
            generation_enabled=generation_enabled,
            use_remote=bool(api_key and remote_requested),
            api_key=api_key,
            base_url=(env.get("OPENAI_BASE_URL") or DEFAULT_OPENAI_BASE_URL).rstrip("/"),
            model=env.get("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            port=int(env.get("PORT") or DEFAULT_PORT),
        )
