from __future__ import annotations

# coding_tracker/config.py
import logging
import os

import yaml
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

# DB path resolution order:
# 1) env CODING_TRACKER_DB (highest)
# 2) config.yaml db_path
# 3) fallback ./coding_tracker.db
ENV_DB = "CODING_TRACKER_DB"
ENV_CONFIG = "CODING_TRACKER_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_DB_PATH = "coding_tracker.db"


class TrackerConfig(BaseModel):
    db_path: str = DEFAULT_DB_PATH
    seed_on_empty: bool = True
    seed_count: int = 15
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        v = str(v).strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level: {v}")
        return v

    def resolved_db_path(self) -> str:
        path = self.db_path
        if path != ":memory:":
            dirn = os.path.dirname(path) or "."
            os.makedirs(dirn, exist_ok=True)
        return path


def _read_config_yaml(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in ("db_path", "seed_on_empty", "seed_count", "log_level"):
        v = cfg.get(k)
        if isinstance(v, str):
            v = v.strip()
            if not v:
                continue
        if v is not None:
            out[k] = v
    return out


def load_config(path: str | None = None, db_path: str | None = None) -> TrackerConfig:
    """
    Build a TrackerConfig from YAML plus environment.
    An explicit db_path argument beats everything else.
    """
    cfg_path = path or os.environ.get(ENV_CONFIG) or DEFAULT_CONFIG_PATH
    values = _read_config_yaml(cfg_path)
    env_db = os.environ.get(ENV_DB)
    if db_path:
        values["db_path"] = db_path
    elif env_db:
        values["db_path"] = env_db
    return TrackerConfig(**values)
