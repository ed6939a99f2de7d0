# extpack/config/resolver.py
from __future__ import annotations
import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from .providers import DictProvider, EnvProvider, EnvironProvider

logger = logging.getLogger(__name__)

__all__ = ["EnvKey", "ENV_DEFAULTS", "PLACEHOLDER_CLIENT_ID", "EnvResolver"]



PLACEHOLDER_CLIENT_ID = "your-google-client-id.apps.googleusercontent.com"

_TRUTHY = {"1", "true", "yes", "on"}



class EnvKey(str, Enum):
    GOOGLE_CLIENT_ID = "CEB_GOOGLE_CLIENT_ID"
    DEV_LOCALE = "CEB_DEV_LOCALE"
    API_URL = "CEB_API_URL"
    EXAMPLE = "CEB_EXAMPLE"
    DEV = "CLI_CEB_DEV"
    FIREFOX = "CLI_CEB_FIREFOX"



ENV_DEFAULTS: Mapping[EnvKey, str] = {
    EnvKey.GOOGLE_CLIENT_ID: PLACEHOLDER_CLIENT_ID,
    EnvKey.DEV_LOCALE: "",
    EnvKey.API_URL: "",
    EnvKey.EXAMPLE: "",
    EnvKey.DEV: "false",
    EnvKey.FIREFOX: "false",
}



class EnvResolver:
    """
    Resolves build-time environment values with documented fallbacks.

    Providers are consulted in order; the first one holding a non-blank value
    wins. When none does, the key's default from ENV_DEFAULTS is returned.
    A missing value is a normal case and never raises.

    Example:
        env = EnvResolver([FileProvider("env.json5"), EnvironProvider()])
        env.resolve(EnvKey.GOOGLE_CLIENT_ID)
    """
    def __init__(self, providers: Sequence[EnvProvider] | None = None) -> None:
        self._providers: tuple[EnvProvider, ...] = tuple(providers or ())

    @classmethod
    def fromMapping(cls, data: Mapping[str, Any]) -> EnvResolver:
        return cls([DictProvider(data)])

    @classmethod
    def fromEnviron(cls, environ: Mapping[str, str] | None = None) -> EnvResolver:
        return cls([EnvironProvider(environ)])

    @staticmethod
    def _toKey(key: EnvKey | str) -> EnvKey:
        if isinstance(key, EnvKey):
            return key
        try:
            return EnvKey(key)
        except ValueError:
            raise KeyError(f"Unrecognized environment key '{key}'") from None

    def resolve(self, key: EnvKey | str) -> str:
        envKey = self._toKey(key)
        for provider in self._providers:
            value = provider.get(envKey.value)
            if value is not None and value.strip():
                return value
        return ENV_DEFAULTS[envKey]

    def resolveBool(self, key: EnvKey | str) -> bool:
        return self.resolve(key).strip().lower() in _TRUTHY

    def isOverridden(self, key: EnvKey | str) -> bool:
        """True when some provider supplies a non-blank value for key."""
        envKey = self._toKey(key)
        return any((provider.get(envKey.value) or "").strip() for provider in self._providers)

    def snapshot(self) -> dict[str, str]:
        return {envKey.value: self.resolve(envKey) for envKey in EnvKey}
