# extpack/manifest/__init__.py
from .builder import buildManifest, readPackageVersion, readSigningKey
from .constants import EXTENSION_PAGES_CSP, SIDE_PANEL_PERMISSION
from .declarations import defaultDeclarations, loadDeclarations
from .model import ManifestDocument
from .serializer import parseManifest, serializeManifest, writeManifest
from .transform import TargetEngine, toFirefoxManifest, transformFor, transformManifest

__all__ = [
    "ManifestDocument",
    "TargetEngine",
    "EXTENSION_PAGES_CSP",
    "SIDE_PANEL_PERMISSION",
    "defaultDeclarations",
    "loadDeclarations",
    "buildManifest",
    "readPackageVersion",
    "readSigningKey",
    "transformManifest",
    "transformFor",
    "toFirefoxManifest",
    "serializeManifest",
    "parseManifest",
    "writeManifest",
]
