from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

import yaml


PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "config.yaml"


@lru_cache(maxsize=1)
def load_config() -> dict:
    """
    Load configs/config.yaml (or the file named by POSYANDU_CONFIG).

    POSYANDU_DB_URL, when set, replaces paths.db_url.
    """
    cfg_path = Path(os.environ.get("POSYANDU_CONFIG", DEFAULT_CONFIG_PATH))
    if not cfg_path.exists():
        raise FileNotFoundError(f"config not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    db_url = os.environ.get("POSYANDU_DB_URL")
    if db_url:
        cfg.setdefault("paths", {})["db_url"] = db_url
    return cfg


def setup_logging(level: str | None = None) -> None:
    level = level or load_config().get("app", {}).get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
