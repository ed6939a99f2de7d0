# tests/extpack/build/test_cli_and_signing.py
from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

import pytest

from extpack.cli import EXIT_MISSING_INPUT, EXIT_OK, main
from extpack.core.errors import SigningKeyError
from extpack.signing import extensionIdFromKey, publicKeyDer


@pytest.fixture(autouse=True)
def _restoreRootLogging():
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])


# ----------------------------
# Signing helpers
# ----------------------------

def test_extensionId_format(signing_pem: str) -> None:
    extId = extensionIdFromKey(signing_pem)
    assert len(extId) == 32
    assert set(extId) <= set("abcdefghijklmnop")
    assert extensionIdFromKey(signing_pem) == extId


def test_extensionId_matchesPublicKeyHash(signing_pem: str) -> None:
    digest = hashlib.sha256(publicKeyDer(signing_pem)).hexdigest()[:32]
    expected = "".join(chr(ord("a") + int(ch, 16)) for ch in digest)
    assert extensionIdFromKey(signing_pem) == expected


def test_invalidPem_raises() -> None:
    with pytest.raises(SigningKeyError):
        extensionIdFromKey("not a key")


# ----------------------------
# CLI
# ----------------------------

def test_cli_buildFirefox(tmp_path: Path, package_json: Path, key_file: Path, capsys, monkeypatch) -> None:
    monkeypatch.setenv("CEB_GOOGLE_CLIENT_ID", "from-env")
    out = tmp_path / "dist"
    code = main([
        "--quiet", "build", "--target", "firefox", "--out", str(out),
        "--package", str(package_json), "--key", str(key_file),
    ])

    assert code == EXIT_OK
    written = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
    assert written["oauth2"]["client_id"] == "from-env"
    assert "side_panel" not in written
    assert str(out / "manifest.json") in capsys.readouterr().out


def test_cli_targetFromEnvironment(tmp_path: Path, package_json: Path, key_file: Path, monkeypatch) -> None:
    monkeypatch.setenv("CLI_CEB_FIREFOX", "true")
    out = tmp_path / "dist"
    assert main(["--quiet", "build", "--out", str(out), "--package", str(package_json), "--key", str(key_file)]) == EXIT_OK

    written = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
    assert "scripts" in written["background"]


def test_cli_envFileOverridesEnvironment(tmp_path: Path, package_json: Path, key_file: Path, monkeypatch) -> None:
    monkeypatch.setenv("CEB_GOOGLE_CLIENT_ID", "from-env")
    envFile = tmp_path / "env.json5"
    envFile.write_text("{ CEB_GOOGLE_CLIENT_ID: 'from-file' }", encoding="utf-8")
    out = tmp_path / "dist"

    code = main([
        "--quiet", "build", "--target", "chrome", "--out", str(out), "--package", str(package_json),
        "--key", str(key_file), "--env-file", str(envFile),
    ])
    assert code == EXIT_OK
    written = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
    assert written["oauth2"]["client_id"] == "from-file"


def test_cli_buildAll(tmp_path: Path, package_json: Path, key_file: Path) -> None:
    out = tmp_path / "dist"
    code = main(["--quiet", "build", "--target", "all", "--out", str(out), "--package", str(package_json), "--key", str(key_file)])
    assert code == EXIT_OK
    assert (out / "chrome" / "manifest.json").is_file()
    assert (out / "firefox" / "manifest.json").is_file()


def test_cli_customDeclarations(tmp_path: Path, package_json: Path, key_file: Path) -> None:
    declarations = tmp_path / "declarations.json5"
    declarations.write_text("{ name: 'Tiny', permissions: ['tabs'] }", encoding="utf-8")
    out = tmp_path / "dist"

    code = main([
        "--quiet", "build", "--target", "chrome", "--out", str(out), "--package", str(package_json),
        "--key", str(key_file), "--declarations", str(declarations),
    ])
    assert code == EXIT_OK
    written = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
    assert written["name"] == "Tiny"
    assert written["permissions"] == ["tabs"]


def test_cli_missingKeyExitsWithoutOutput(tmp_path: Path, package_json: Path, capsys) -> None:
    out = tmp_path / "dist"
    code = main([
        "--quiet", "build", "--target", "chrome", "--out", str(out),
        "--package", str(package_json), "--key", str(tmp_path / "key.pem"),
    ])

    assert code == EXIT_MISSING_INPUT
    assert not out.exists()
    assert "key.pem" in capsys.readouterr().err


def test_cli_extensionId(key_file: Path, signing_pem: str, capsys) -> None:
    assert main(["--quiet", "extension-id", "--key", str(key_file)]) == EXIT_OK
    assert capsys.readouterr().out.strip() == extensionIdFromKey(signing_pem)


def test_cli_binaryKeyExitsWithoutOutput(tmp_path: Path, package_json: Path, capsys) -> None:
    keyPath = tmp_path / "key.der"
    keyPath.write_bytes(b"\x30\x82\xff\xfe\x00")
    out = tmp_path / "dist"

    code = main([
        "--quiet", "build", "--target", "chrome", "--out", str(out),
        "--package", str(package_json), "--key", str(keyPath),
    ])

    assert code == EXIT_MISSING_INPUT
    assert not out.exists()
    assert "not UTF-8 text" in capsys.readouterr().err


@pytest.mark.parametrize(
    "content",
    [
        "{ CEB_GOOGLE_CLIENT_ID: ",
        "[1, 2, 3]",
    ],
)
def test_cli_malformedEnvFileExitsWithoutOutput(
    tmp_path: Path, package_json: Path, key_file: Path, content: str, capsys
) -> None:
    envFile = tmp_path / "env.json5"
    envFile.write_text(content, encoding="utf-8")
    out = tmp_path / "dist"

    code = main([
        "--quiet", "build", "--target", "chrome", "--out", str(out), "--package", str(package_json),
        "--key", str(key_file), "--env-file", str(envFile),
    ])

    assert code == EXIT_MISSING_INPUT
    assert not out.exists()
    assert "env.json5" in capsys.readouterr().err


@pytest.mark.parametrize(
    "content",
    [
        "{ name: ",
        "'just a string'",
    ],
)
def test_cli_malformedDeclarationsExitsWithoutOutput(
    tmp_path: Path, package_json: Path, key_file: Path, content: str, capsys
) -> None:
    declarations = tmp_path / "declarations.json5"
    declarations.write_text(content, encoding="utf-8")
    out = tmp_path / "dist"

    code = main([
        "--quiet", "build", "--target", "chrome", "--out", str(out), "--package", str(package_json),
        "--key", str(key_file), "--declarations", str(declarations),
    ])

    assert code == EXIT_MISSING_INPUT
    assert not out.exists()
    assert "declarations.json5" in capsys.readouterr().err
