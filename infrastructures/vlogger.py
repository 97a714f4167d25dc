# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: Logging setup; call init_logging() once at application startup.

from __future__ import annotations

import logging
from typing import Optional

from infrastructures.vconfig import vconfig


def init_logging(level: Optional[str] = None) -> None:
    """Configure root logging. `level` defaults to LOG_LEVEL from config."""

    valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
    lvl = (level or vconfig.log_level or "").upper().strip()
    if lvl not in valid:
        lvl = "INFO"

    logging.basicConfig(
        level=getattr(logging, lvl),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    # httpx logs every request line at INFO; keep only warnings from it
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    vlogger.info("logging initialized level=%s", lvl)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


vlogger = get_logger("hyperbolic_adapter")
