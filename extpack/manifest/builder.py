# extpack/manifest/builder.py
from __future__ import annotations
import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import json5

from extpack.config.resolver import EnvKey, EnvResolver
from extpack.core.errors import PackageVersionError, SigningKeyMissingError
from extpack.semver.semver import parseSemVerVersion
from .model import ManifestDocument

logger = logging.getLogger(__name__)

__all__ = ["buildManifest", "readPackageVersion", "readSigningKey"]



def buildManifest(
    declarations: Mapping[str, Any],
    *,
    version: str,
    signingKey: str,
    env: EnvResolver,
) -> ManifestDocument:
    """
    Builds the canonical manifest from static declarations plus injected values.

    Injects the package version, the signing key and, when the declarations
    carry an oauth2 block, the resolved OAuth client id. The declarations
    mapping itself is left untouched.

    Raises:
        pydantic.ValidationError: declarations (or injected values) break the manifest model
    """
    data: dict[str, Any] = copy.deepcopy(dict(declarations))
    data["version"] = version
    data["key"] = signingKey

    oauth = data.get("oauth2")
    if isinstance(oauth, Mapping):
        clientId = env.resolve(EnvKey.GOOGLE_CLIENT_ID)
        if not env.isOverridden(EnvKey.GOOGLE_CLIENT_ID):
            logger.warning("%s is not set; using placeholder OAuth client id", EnvKey.GOOGLE_CLIENT_ID.value)
        data["oauth2"] = {**oauth, "client_id": clientId}

    document = ManifestDocument.model_validate(data)
    logger.debug("Built canonical manifest '%s' version %s", document.name, document.version)
    return document



def readPackageVersion(path: str | Path) -> str:
    """
    Returns the normalized "version" of a package.json-style document.

    A leading "v" is dropped and missing components are filled in ("v1.2" -> "1.2.0").

    Raises:
        PackageVersionError: file missing/unreadable, version absent, or not semantic-version-like
    """
    path = Path(path)
    if not path.is_file():
        raise PackageVersionError(path, "file not found")

    try:
        parsed = json5.loads(path.read_text(encoding="utf-8"))
    except ValueError as err:
        raise PackageVersionError(path, f"failed to parse: {err}") from err

    if not isinstance(parsed, Mapping):
        raise PackageVersionError(path, "document is not a JSON object")

    raw = parsed.get("version")
    if not isinstance(raw, str) or not raw.strip():
        raise PackageVersionError(path, "missing or empty 'version'")

    try:
        version = parseSemVerVersion(raw)
    except ValueError as err:
        raise PackageVersionError(path, str(err)) from err
    if str(version) != raw.strip():
        logger.info("Package version '%s' normalized to '%s'", raw.strip(), version)
    return str(version)



def readSigningKey(path: str | Path) -> str:
    """
    Reads the local signing key as text.

    Raises:
        SigningKeyMissingError: the key file is absent, empty or not UTF-8 text. The build cannot proceed.
    """
    path = Path(path)
    if not path.is_file():
        raise SigningKeyMissingError(path)

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as err:
        raise SigningKeyMissingError(path, "is not UTF-8 text") from err
    if not text.strip():
        raise SigningKeyMissingError(path, "is empty")
    return text
