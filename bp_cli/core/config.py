"""Configuration helpers for bp CLI."""

from __future__ import annotations

import base64
import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

CONFIG_PATH = Path(os.path.expanduser("~")) / ".bp-cli.json"
# WordPress serves its REST API under this prefix
REST_PREFIX = "/wp-json"
# Upper bound the API accepts for ``per_page``
API_MAX_PER_PAGE = 100

_ENV_KEYS = {
    "url": "BP_CLI_URL",
    "root_url": "BP_CLI_ROOT_URL",
    "user": "BP_CLI_USER",
    "password": "BP_CLI_PASSWORD",
}


@dataclass(frozen=True)
class Site:
    """A WordPress site reachable over REST."""

    url: str
    auth: Optional[str] = None

    @property
    def api_base(self) -> str:
        base = self.url.rstrip("/")
        if not base.endswith(REST_PREFIX):
            base += REST_PREFIX
        return base

    def endpoint(self, path: str) -> str:
        return f"{self.api_base}/{path.lstrip('/')}"


def load_config() -> Dict[str, Any]:
    """Load configuration from disk and environment."""
    cfg: Dict[str, Any] = {}
    if CONFIG_PATH.exists():
        try:
            cfg = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config {}: {}", CONFIG_PATH, e)
            cfg = {}
    for key, env in _ENV_KEYS.items():
        if os.getenv(env):
            cfg[key] = os.getenv(env)
    return cfg


def save_config(**values: Optional[str]) -> None:
    """Persist the given non-empty values to CONFIG_PATH."""
    cfg = {}
    if CONFIG_PATH.exists():
        try:
            cfg = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            cfg = {}
    for key, value in values.items():
        if value is None:
            continue
        cfg[key] = value.rstrip("/") if key.endswith("url") else value
    CONFIG_PATH.write_text(json.dumps(cfg, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Success: Saved config to {CONFIG_PATH}")


def _basic_auth(cfg: Dict[str, Any]) -> Optional[str]:
    user, password = cfg.get("user"), cfg.get("password")
    if not user or not password:
        return None
    raw = f"{user}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def get_site() -> Site:
    """Return the configured site or exit if no URL is set."""
    cfg = load_config()
    url = cfg.get("url")
    if not url:
        print("Error: Missing site URL. Run: bp config set --url <URL>", file=sys.stderr)
        sys.exit(1)
    return Site(url.rstrip("/"), _basic_auth(cfg))
