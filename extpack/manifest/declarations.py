# extpack/manifest/declarations.py
from __future__ import annotations
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import json5

from .constants import EXECUTION_MODEL_MODULE, EXTENSION_PAGES_CSP, FIREFOX_MV3_MIN_VERSION, MANIFEST_VERSION

logger = logging.getLogger(__name__)

__all__ = ["defaultDeclarations", "loadDeclarations"]

_ALL_PAGES = ["http://*/*", "https://*/*", "<all_urls>"]
_EXAMPLE_PAGES = ["https://example.com/*"]



def defaultDeclarations() -> dict[str, Any]:
    """
    Static capability declarations of the extension, before version, signing key
    and environment values are injected. Returns a fresh dict on every call.

    Notes:
      - default_locale: see the WebExtensions internationalization docs for adding locales.
      - browser_specific_settings: the gecko id must be unique to upload to addons.mozilla.org.
      - permissions: "sidePanel" is removed for Firefox by the manifest transform.
    """
    return {
        "manifest_version": MANIFEST_VERSION,
        "default_locale": "en",
        "name": "__MSG_extensionName__",
        "browser_specific_settings": {
            "gecko": {
                "id": "example@example.com",
                "strict_min_version": FIREFOX_MV3_MIN_VERSION,
            },
        },
        "description": "__MSG_extensionDescription__",
        "host_permissions": ["<all_urls>", "file:///*/*"],
        "permissions": ["storage", "scripting", "tabs", "notifications", "sidePanel", "activeTab", "identity"],
        "options_page": "options/index.html",
        "background": {
            "service_worker": "background.js",
            "type": EXECUTION_MODEL_MODULE,
        },
        "action": {
            "default_popup": "popup/index.html",
            "default_icon": "icon-34.png",
        },
        "icons": {
            "128": "icon-128.png",
        },
        "commands": {
            "toggle-side-panel": {
                "suggested_key": {
                    "default": "Ctrl+Shift+P",
                    "mac": "Command+Shift+P",
                },
                "description": "Toggle Philonet Side Panel",
            },
        },
        "content_scripts": [
            {"matches": list(_ALL_PAGES), "js": ["content/all.iife.js"]},
            {"matches": list(_EXAMPLE_PAGES), "js": ["content/example.iife.js"]},
            {"matches": list(_ALL_PAGES), "js": ["content-ui/all.iife.js"]},
            {"matches": list(_EXAMPLE_PAGES), "js": ["content-ui/example.iife.js"]},
            {"matches": list(_ALL_PAGES), "css": ["content.css"]},
        ],
        "devtools_page": "devtools/index.html",
        "web_accessible_resources": [
            {
                "resources": ["*.js", "*.css", "*.svg", "icon-128.png", "icon-34.png", "philonet.png"],
                "matches": ["*://*/*"],
            },
        ],
        "side_panel": {
            "default_path": "side-panel/index.html",
        },
        "oauth2": {
            "scopes": ["openid", "email", "profile"],
        },
        "content_security_policy": {
            "extension_pages": EXTENSION_PAGES_CSP,
        },
    }



def loadDeclarations(path: str | Path) -> dict[str, Any]:
    """
    Reads declarations from a JSON/JSON5 object file.

    Raises:
        FileNotFoundError: if the file does not exist
        TypeError: if the file is not a JSON object
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Declarations file '{path}' not found")

    parsed = json5.loads(path.read_text(encoding="utf-8"))
    if not isinstance(parsed, Mapping):
        raise TypeError(f"Declarations file '{path}' must contain a JSON object, not '{type(parsed).__name__}'")

    logger.debug("Loaded %d declaration field(s) from '%s'", len(parsed), path)
    return dict(parsed)
