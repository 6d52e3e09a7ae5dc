#!/usr/bin/env python3
"""
Dev Server - Serves the public/ tree locally and keeps the daily preview fresh.

Usage:
    python scripts/dev_server.py                      # serve + daily regeneration
    python scripts/dev_server.py --generate-preview   # generate once and exit
"""

import argparse
import threading
from dataclasses import replace
from functools import partial
from http.server import HTTPServer, SimpleHTTPRequestHandler
from pathlib import Path
from typing import List, Optional
from urllib.parse import unquote, urlsplit

from config import PUBLIC_DIR, ROOT_DIR, PreviewSettings, load_env, setup_logging
from daily_preview import ensure_daily_preview
from scheduler import DailyScheduler

logger = setup_logging("dev_server")

PREVIEW_URL_PATH = "/src/previews/preview-2.html"

# One generation at a time across the request handler and the scheduler thread
_generation_lock = threading.Lock()


def refresh_preview(settings: PreviewSettings):
    with _generation_lock:
        return ensure_daily_preview(settings)


class PreviewRequestHandler(SimpleHTTPRequestHandler):
    """Static handler with no-store caching and on-demand preview refresh."""

    settings: PreviewSettings = PreviewSettings()
    site_index: Path = ROOT_DIR / "index.html"

    @staticmethod
    def _strip_public_alias(path: str) -> str:
        if path.startswith("/public/"):
            return path[len("/public"):]
        return path

    @classmethod
    def _route(cls, path: str) -> str:
        """Decoded request path, used only for matching."""
        return unquote(urlsplit(cls._strip_public_alias(path)).path)

    def translate_path(self, path: str) -> str:
        if self._route(path) in ("/", "/index.html") and self.site_index.is_file():
            return str(self.site_index)
        return super().translate_path(self._strip_public_alias(path))

    def do_GET(self):
        if self._route(self.path) == PREVIEW_URL_PATH and self.settings.generation_enabled:
            try:
                refresh_preview(self.settings)
            except Exception as e:
                logger.error("Preview refresh failed, serving the existing file: %s", e)
        super().do_GET()

    def list_directory(self, path):
        self.send_error(404, "Not Found")
        return None

    def end_headers(self):
        self.send_header("Cache-Control", "no-store")
        super().end_headers()

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def build_server(settings: PreviewSettings, directory: Path = PUBLIC_DIR) -> HTTPServer:
    handler = partial(PreviewRequestHandler, directory=str(directory))
    PreviewRequestHandler.settings = settings
    return HTTPServer(("", settings.port), handler)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Local dev server with daily preview generation")
    parser.add_argument(
        "--generate-preview",
        action="store_true",
        help="Generate today's preview once and exit",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: PORT env or 3000)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    load_env()
    settings = PreviewSettings.from_env()
    if args.port:
        settings = replace(settings, port=args.port)

    if args.generate_preview:
        ensure_daily_preview(settings)
        return 0

    if settings.generation_enabled:
        try:
            refresh_preview(settings)
        except Exception as e:
            logger.error("Initial preview generation failed: %s", e)
        DailyScheduler(lambda: refresh_preview(settings)).start_in_thread()

    server = build_server(settings)
    logger.info("Dev server running at http://localhost:%d/", settings.port)
    logger.info("Preview: http://localhost:%d%s", settings.port, PREVIEW_URL_PATH)
    if settings.generation_enabled:
        logger.info(
            "Daily preview generation: ON (remote provider %s)",
            "ON" if settings.use_remote else "OFF, using local templates",
        )
    else:
        logger.info("Daily preview generation: OFF (serving static file)")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
