# extpack/config/__init__.py
from .providers import DictProvider, EnvironProvider, EnvProvider, FileProvider
from .resolver import ENV_DEFAULTS, PLACEHOLDER_CLIENT_ID, EnvKey, EnvResolver

__all__ = [
    "EnvProvider",
    "DictProvider",
    "EnvironProvider",
    "FileProvider",
    "EnvKey",
    "EnvResolver",
    "ENV_DEFAULTS",
    "PLACEHOLDER_CLIENT_ID",
]
