"""Configuration commands."""

from __future__ import annotations

import json

from ..core import load_config, save_config


def cmd_config_set(args):
    save_config(url=args.url, root_url=args.root_url, user=args.user, password=args.password)


def cmd_config_show(_args):
    cfg = load_config()
    if cfg.get("password"):
        cfg["password"] = "********"
    print(json.dumps(cfg, ensure_ascii=False, indent=2))
