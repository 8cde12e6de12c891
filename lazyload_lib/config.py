"""YAML-backed configuration for the registry composition root."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('config/lazyload.yml')


@dataclass
class Config:
    # Re-registering an existing key replaces it when True, raises when False
    allow_reassignment: bool = True
    log_level: Optional[str] = None


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load `Config` from YAML, falling back to defaults.

    Expected layout:

        log_level: INFO
        registry:
          allow_reassignment: true

    A missing file returns the defaults. A file that cannot be parsed is
    logged and also returns the defaults.
    """
    cfg_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        logger.debug("No config at %s; using defaults", cfg_path)
        return Config()

    try:
        with cfg_path.open('r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError:
        logger.exception("Failed to parse %s; using defaults", cfg_path)
        return Config()

    if not isinstance(raw, dict):
        logger.warning("Ignoring %s: expected a mapping at the top level", cfg_path)
        return Config()

    registry_cfg = raw.get('registry') or {}
    lvl = raw.get('log_level')
    return Config(
        allow_reassignment=bool(registry_cfg.get('allow_reassignment', True)),
        log_level=lvl if isinstance(lvl, str) else None,
    )
