"""Composition root for a lazyload registrar.

Callers own the registrar they build here and pass it to the code that
needs it; nothing is stored in a module-level global:

    from lazyload_lib.main import bootstrap
    registrar = bootstrap(Path('config/lazyload.yml'))
"""
from pathlib import Path
from typing import Optional

from lazyload_lib.config import Config, load_config
from lazyload_lib.logging_config import configure_logging
from lazyload_lib.registrar import Registrar
from lazyload_lib.services import ServiceContainer


def create_registrar(config: Optional[Config] = None) -> Registrar:
    """Create a registrar over a fresh, empty `ServiceContainer`."""
    config = config or Config()
    container = ServiceContainer(allow_reassignment=config.allow_reassignment)
    return Registrar(container)


def bootstrap(config_path: Optional[Path] = None) -> Registrar:
    """Configure logging from `config_path` and build a registrar from it."""
    config = load_config(config_path)
    logger = configure_logging(config=config)
    registrar = create_registrar(config)
    logger.info("Registrar ready (allow_reassignment=%s)", config.allow_reassignment)
    return registrar
