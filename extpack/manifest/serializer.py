# extpack/manifest/serializer.py
from __future__ import annotations
import json
import logging
import os
from pathlib import Path

import json5

from .constants import MANIFEST_FILE_NAME
from .model import ManifestDocument

logger = logging.getLogger(__name__)

__all__ = ["INDENT", "serializeManifest", "parseManifest", "writeManifest"]



INDENT = 2



def serializeManifest(document: ManifestDocument) -> str:
    """
    Renders a manifest as indented JSON.

    Keys follow the model's field declaration order; fields left as None are omitted.
    Output is deterministic for equal documents.
    """
    payload = document.model_dump(mode="json", exclude_none=True)
    return json.dumps(payload, indent=INDENT, ensure_ascii=False, allow_nan=False)



def parseManifest(text: str) -> ManifestDocument:
    """
    Parses manifest text (JSON or JSON5) back into a ManifestDocument.

    Raises:
        ValueError: text is not JSON
        pydantic.ValidationError: document does not fit the manifest model
    """
    return ManifestDocument.model_validate(json5.loads(text))



def writeManifest(document: ManifestDocument, outDir: str | Path, *, fileName: str = MANIFEST_FILE_NAME) -> Path:
    """
    Serializes `document` and writes it to outDir/fileName atomically.

    Serialization and encoding happen before anything touches the filesystem,
    and a failed write removes its temp file, so a failure leaves no partial
    manifest behind.
    """
    payload = (serializeManifest(document) + "\n").encode("utf-8")

    outDir = Path(outDir)
    outDir.mkdir(parents=True, exist_ok=True)
    target = outDir / fileName

    # Atomic write
    tmpPath = target.with_suffix(target.suffix + ".tmp")
    try:
        with open(tmpPath, "wb") as fl:
            fl.write(payload)
        os.replace(tmpPath, target)
    except BaseException:
        tmpPath.unlink(missing_ok=True)
        raise

    logger.debug("Wrote %d bytes to '%s'", len(payload), target)
    return target
