from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_BACKUP_FILENAME

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def open_store() -> Container:
    """Open the store described by the active settings module.

    Call once at startup and close the returned container at shutdown.
    """
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    store_config = dict(getattr(settings, "STORE_CONFIG"))
    container = build_container(
        store_config=store_config,
        backup_filename=getattr(settings, "BACKUP_FILENAME", DEFAULT_BACKUP_FILENAME),
        auto_init=bool(getattr(settings, "AUTO_INIT_STORE", True)),
    )

    if getattr(settings, "DEBUG", False):
        logger.debug("settings=%s store=%s", settings_module, container.store.path)
    return container
