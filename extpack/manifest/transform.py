# extpack/manifest/transform.py
from __future__ import annotations
import logging
from enum import Enum
from typing import Any

from .constants import EXTENSION_PAGES_CSP, SIDE_PANEL_PERMISSION
from .model import (
    ContentSecurityPolicy,
    ManifestDocument,
    OptionsUi,
    ScriptsBackground,
    ServiceWorkerBackground,
)

logger = logging.getLogger(__name__)

__all__ = ["TargetEngine", "transformManifest", "transformFor", "toFirefoxManifest"]



class TargetEngine(Enum):
    CHROME = "chrome"
    FIREFOX = "firefox"

    @property
    def isSecondary(self) -> bool:
        return self is TargetEngine.FIREFOX



def toFirefoxManifest(document: ManifestDocument) -> ManifestDocument:
    """
    Returns a Gecko-compatible copy of a Chromium manifest.

    Rewrites:
      - service worker background → script list carrying the same execution model
      - options_page → options_ui {page, browser_style: False}
      - content_security_policy → extension pages policy, always
      - "sidePanel" dropped from permissions
      - options_page and side_panel removed

    Every other field is carried over unchanged. The input is not modified.
    """
    update: dict[str, Any] = {}

    if isinstance(document.background, ServiceWorkerBackground):
        update["background"] = ScriptsBackground(
            scripts=(document.background.service_worker,),
            type=document.background.type,
        )
        logger.debug("background: service worker '%s' → scripts", document.background.service_worker)

    if document.options_page is not None:
        update["options_ui"] = OptionsUi(page=document.options_page, browser_style=False)
        logger.debug("options_page '%s' → options_ui", document.options_page)

    # Re-asserted even if the source already has a policy
    update["content_security_policy"] = ContentSecurityPolicy(extension_pages=EXTENSION_PAGES_CSP)

    if document.permissions is not None:
        update["permissions"] = tuple(perm for perm in document.permissions if perm != SIDE_PANEL_PERMISSION)
        if len(update["permissions"]) != len(document.permissions):
            logger.debug("permissions: dropped '%s'", SIDE_PANEL_PERMISSION)

    update["options_page"] = None
    update["side_panel"] = None

    return document.model_copy(update=update, deep=True)



def transformManifest(document: ManifestDocument, isSecondaryEngine: bool) -> ManifestDocument:
    """Identity for the primary engine, toFirefoxManifest for the secondary one."""
    if not isSecondaryEngine:
        return document
    return toFirefoxManifest(document)



def transformFor(document: ManifestDocument, target: TargetEngine) -> ManifestDocument:
    return transformManifest(document, target.isSecondary)
