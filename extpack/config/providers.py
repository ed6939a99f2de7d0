# extpack/config/providers.py
from __future__ import annotations
import os
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol, cast

import json5

logger = logging.getLogger(__name__)

__all__ = [
    "EnvProvider", "DictProvider", "EnvironProvider", "FileProvider",
]



class EnvProvider(Protocol):
    """Read-only source of raw environment values, looked up by flat key."""
    def get(self, key: str) -> str | None:
        ...

    def to_dict(self) -> dict[str, str]:
        ...



def _stringify(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)



# ----------------------------------------------
#       Read-only dict (caller-supplied values)
# ----------------------------------------------

class DictProvider:
    """
    Read-only mapping of environment values (tests, callers that already hold values).
    The mapping is copied on construction; later changes to the source are not observed.
    """
    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        if data is not None and not isinstance(data, Mapping):
            raise TypeError(f"{type(self).__name__}: 'data' must be a Mapping, not '{type(data).__name__}'")
        self._data: dict[str, str] = {}
        for key, value in (data or {}).items():
            text = _stringify(value)
            if text is not None:
                self._data[str(key)] = text

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def to_dict(self) -> dict[str, str]:
        return dict(self._data)



# ----------------------------------------------
#          Process environment snapshot
# ----------------------------------------------

class EnvironProvider(DictProvider):
    """
    Snapshot of process environment variables whose names start with one of `prefixes`.

    Taken once at construction so the build sees a stable view even if
    os.environ changes while it runs.
    """
    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        *,
        prefixes: Iterable[str] = ("CEB_", "CLI_CEB_"),
    ) -> None:
        source = os.environ if environ is None else environ
        prefixTuple = tuple(prefixes)
        super().__init__({key: value for key, value in source.items() if key.startswith(prefixTuple)})
        logger.debug("%s: captured %d variable(s)", type(self).__name__, len(self._data))



# ----------------------------------------------
#        File-backed provider JSON/JSON5
# ----------------------------------------------

class FileProvider(DictProvider):
    """
    Read-only provider backed by a .json or .json5 object of key/value pairs.

    Example:
        FileProvider("./env.json5")     # {"CEB_GOOGLE_CLIENT_ID": "1234.apps.googleusercontent.com"}

    Behavior:
        • Missing file → empty provider (strict=False) or FileNotFoundError (strict=True)
        • Parse error → TypeError
        • Non-object JSON → TypeError
    """
    def __init__(self, path: str | Path, *, strict: bool = False) -> None:
        self.path = Path(path)

        if not self.path.exists():
            if strict:
                raise FileNotFoundError(f"{type(self).__name__}: env file '{self.path}' not found")
            logger.debug("%s: '%s' is missing → starting as empty dict", type(self).__name__, self.path)
            super().__init__({})
            return

        if not self.path.is_file():
            raise IsADirectoryError(f"{type(self).__name__}: '{self.path}' exists but is not a file")

        try:
            parsed = json5.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as err:
            raise TypeError(f"{type(self).__name__}: failed to parse '{self.path}': {err}") from err

        if parsed is None:
            parsed = {}

        if not isinstance(parsed, Mapping):
            raise TypeError(
                f"{type(self).__name__}: file content must be a JSON object, not '{type(parsed).__name__}'"
            )

        super().__init__(cast(Mapping[str, Any], parsed))
        logger.debug("%s: loaded %d key(s) from '%s'", type(self).__name__, len(self._data), self.path)
