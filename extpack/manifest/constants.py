# extpack/manifest/constants.py
from __future__ import annotations

__all__ = [
    "MANIFEST_VERSION",
    "EXTENSION_PAGES_CSP",
    "SIDE_PANEL_PERMISSION",
    "EXECUTION_MODEL_MODULE",
    "MANIFEST_FILE_NAME",
    "FIREFOX_MV3_MIN_VERSION",
]



MANIFEST_VERSION = 3

# Content security policy for extension pages. Firefox builds always carry exactly this value.
EXTENSION_PAGES_CSP = (
    "script-src 'self'; object-src 'self'; img-src 'self' data: https: http:; "
    "media-src 'self' data: blob:; connect-src 'self' https: http: ws: wss:;"
)

# Chromium-only permission; Gecko has no side panel API and rejects it.
SIDE_PANEL_PERMISSION = "sidePanel"

EXECUTION_MODEL_MODULE = "module"

MANIFEST_FILE_NAME = "manifest.json"

# First Gecko release that loads Manifest V3 extensions.
FIREFOX_MV3_MIN_VERSION = "109.0"
