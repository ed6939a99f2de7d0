# extpack/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers
from pathlib import Path

from .formatters import DevFormatter, JsonFormatter, RedactingFormatter

__all__ = [
    "configureLogging",
]



def configureLogging(*, devMode: bool = True, logFile: str | Path | None = None, jsonConsole: bool = False) -> None:
    """
    Initiate the global logging configuration for a build run.

    Dev:
      - Console pretty logs (DEBUG)
      - Optional JSON file log (DEBUG)

    Quiet (devMode=False):
      - Console INFO
      - Optional JSON file log INFO with rotation

    Secret scrubbing is always active, since manifests carry the signing key.
    """
    rootLevel = logging.DEBUG if devMode else logging.INFO

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(rootLevel)

    consoleFmt = RedactingFormatter(JsonFormatter() if jsonConsole else DevFormatter())

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(consoleFmt)
    root.addHandler(consoleHandler)

    if logFile is not None:
        fileHandler = logging.handlers.RotatingFileHandler(
            str(logFile),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(RedactingFormatter(JsonFormatter()))
        root.addHandler(fileHandler)

