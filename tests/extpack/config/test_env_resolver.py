# tests/extpack/config/test_env_resolver.py
from __future__ import annotations

from pathlib import Path

import json5
import pytest

from extpack.config.providers import DictProvider, EnvironProvider, FileProvider
from extpack.config.resolver import ENV_DEFAULTS, PLACEHOLDER_CLIENT_ID, EnvKey, EnvResolver


# ----------------------------
# Providers
# ----------------------------

def test_dictProvider_copiesAndStringifies() -> None:
    source = {"CEB_EXAMPLE": 42, "CLI_CEB_FIREFOX": True, "CEB_API_URL": None}
    provider = DictProvider(source)

    assert provider.get("CEB_EXAMPLE") == "42"
    assert provider.get("CLI_CEB_FIREFOX") == "true"
    assert provider.get("CEB_API_URL") is None

    source["CEB_EXAMPLE"] = "changed"
    assert provider.get("CEB_EXAMPLE") == "42"


def test_dictProvider_rejectsNonMapping() -> None:
    with pytest.raises(TypeError):
        DictProvider(["CEB_EXAMPLE"])  # type: ignore[arg-type]


def test_environProvider_keepsOnlyRecognizedPrefixes() -> None:
    provider = EnvironProvider({"CEB_GOOGLE_CLIENT_ID": "abc", "CLI_CEB_DEV": "1", "HOME": "/root"})

    assert provider.to_dict() == {"CEB_GOOGLE_CLIENT_ID": "abc", "CLI_CEB_DEV": "1"}


def test_environProvider_snapshotsProcessEnvironment(monkeypatch) -> None:
    monkeypatch.setenv("CEB_GOOGLE_CLIENT_ID", "first")
    provider = EnvironProvider()
    monkeypatch.setenv("CEB_GOOGLE_CLIENT_ID", "second")

    assert provider.get("CEB_GOOGLE_CLIENT_ID") == "first"


def test_fileProvider_readsJson5(tmp_path: Path) -> None:
    path = tmp_path / "env.json5"
    path.write_text("{ CEB_GOOGLE_CLIENT_ID: 'from-file', // comment\n }", encoding="utf-8")

    assert FileProvider(path).get("CEB_GOOGLE_CLIENT_ID") == "from-file"


def test_fileProvider_missingFile(tmp_path: Path) -> None:
    assert FileProvider(tmp_path / "nope.json5").to_dict() == {}
    with pytest.raises(FileNotFoundError):
        FileProvider(tmp_path / "nope.json5", strict=True)


def test_fileProvider_nonObjectRaises(tmp_path: Path) -> None:
    path = tmp_path / "env.json"
    path.write_text(json5.dumps(["a", "b"]), encoding="utf-8")
    with pytest.raises(TypeError):
        FileProvider(path)


# ----------------------------
# Resolver
# ----------------------------

def test_resolve_missingClientIdFallsBackToPlaceholder() -> None:
    env = EnvResolver.fromMapping({})
    assert env.resolve(EnvKey.GOOGLE_CLIENT_ID) == PLACEHOLDER_CLIENT_ID
    assert env.isOverridden(EnvKey.GOOGLE_CLIENT_ID) is False


def test_resolve_presentClientIdOverridesExactly() -> None:
    env = EnvResolver.fromMapping({"CEB_GOOGLE_CLIENT_ID": "123-abc.apps.googleusercontent.com"})
    assert env.resolve("CEB_GOOGLE_CLIENT_ID") == "123-abc.apps.googleusercontent.com"
    assert env.isOverridden(EnvKey.GOOGLE_CLIENT_ID) is True


@pytest.mark.parametrize("blank", ["", "   ", "\t"])
def test_resolve_blankValueUsesDefault(blank: str) -> None:
    env = EnvResolver.fromMapping({"CEB_GOOGLE_CLIENT_ID": blank})
    assert env.resolve(EnvKey.GOOGLE_CLIENT_ID) == PLACEHOLDER_CLIENT_ID


def test_resolve_firstNonBlankProviderWins() -> None:
    env = EnvResolver([
        DictProvider({"CEB_API_URL": ""}),
        DictProvider({"CEB_API_URL": "https://api.example.com"}),
        DictProvider({"CEB_API_URL": "https://ignored.example.com"}),
    ])
    assert env.resolve(EnvKey.API_URL) == "https://api.example.com"


def test_resolve_unknownKeyRaises() -> None:
    with pytest.raises(KeyError):
        EnvResolver().resolve("CEB_NOT_A_KEY")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("TRUE", True),
        ("1", True),
        ("yes", True),
        ("on", True),
        ("false", False),
        ("0", False),
        ("", False),
    ],
)
def test_resolveBool(raw: str, expected: bool) -> None:
    env = EnvResolver.fromMapping({"CLI_CEB_FIREFOX": raw})
    assert env.resolveBool(EnvKey.FIREFOX) is expected


def test_snapshot_coversEveryKey() -> None:
    snapshot = EnvResolver().snapshot()
    assert set(snapshot) == {key.value for key in EnvKey}
    assert snapshot == {key.value: value for key, value in ENV_DEFAULTS.items()}
