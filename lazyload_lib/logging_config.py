from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from lazyload_lib.config import Config, load_config


def configure_logging(config_path: Optional[Path] = None, config: Optional[Config] = None) -> logging.Logger:
    """Configure root logging for the application.

    Establishes an early NOTSET basic config so the config loader can emit,
    then reconfigures the root logger to the level named by `log_level` in
    the YAML config (WARNING when absent or invalid). Pass an already loaded
    `config` to skip reading `config_path`. Returns a module logger for the
    caller.
    """
    # Minimal early config so other imports can emit without error
    logging.basicConfig(level=logging.NOTSET, format='%(asctime)s INFO %(message)s')
    DEFAULT_LOG_LEVEL = logging.WARNING

    if config is None:
        config = load_config(config_path)
    _lvl = config.log_level
    if _lvl:
        _numeric = getattr(logging, _lvl.upper(), None)
        if isinstance(_numeric, int):
            DEFAULT_LOG_LEVEL = _numeric

    logging.log(100, f'[lazyload]: Log level set to: {logging.getLevelName(DEFAULT_LOG_LEVEL)}')

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=DEFAULT_LOG_LEVEL, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)

    # asyncio debug chatter is not useful at our DEBUG level
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    return logger
