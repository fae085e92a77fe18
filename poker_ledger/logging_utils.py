"""Logging helpers shared by the service, storage and API layers.

``get_logger`` configures the root logger once with a single stream handler,
so reloading modules in development does not stack duplicate handlers.
"""

from __future__ import annotations

import logging

from poker_ledger.config import LedgerConfig

_LOGGER_INITIALISED = False


def configure_root_logger(level: int | str | None = None) -> None:
    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level or LedgerConfig.from_env().log_level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: str | None = None) -> logging.Logger:
    configure_root_logger()
    return logging.getLogger(name)
