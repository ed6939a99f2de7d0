# extpack/build/pipeline.py
from __future__ import annotations
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from extpack.config.resolver import EnvKey, EnvResolver
from extpack.core.logging import clearLogContext, setLogContext
from extpack.manifest.builder import buildManifest, readPackageVersion, readSigningKey
from extpack.manifest.constants import FIREFOX_MV3_MIN_VERSION
from extpack.manifest.declarations import defaultDeclarations
from extpack.manifest.model import ManifestDocument
from extpack.manifest.serializer import writeManifest
from extpack.manifest.transform import TargetEngine, transformFor
from extpack.semver.semver import parseSemVerVersion

logger = logging.getLogger(__name__)

__all__ = [
    "BuildInputs",
    "BuildResult",
    "targetFromEnv",
    "geckoIdentityProblems",
    "buildExtensionManifest",
    "buildAll",
]



@dataclass(slots=True)
class BuildInputs:
    """
    Everything one build invocation reads.

    `declarations` is a factory so each build starts from its own copy.
    """
    packageJsonPath: Path
    signingKeyPath: Path
    env: EnvResolver = field(default_factory=EnvResolver.fromEnviron)
    declarations: Callable[[], Mapping[str, Any]] = defaultDeclarations



@dataclass(frozen=True, slots=True)
class BuildResult:
    target: TargetEngine
    path: Path
    document: ManifestDocument



def targetFromEnv(env: EnvResolver) -> TargetEngine:
    return TargetEngine.FIREFOX if env.resolveBool(EnvKey.FIREFOX) else TargetEngine.CHROME



def geckoIdentityProblems(document: ManifestDocument) -> list[str]:
    """
    Lists reasons Gecko's loader would refuse the document's identity block.
    Empty when the block is present and targets a release that loads MV3.
    """
    settings = document.browser_specific_settings
    if settings is None:
        return ["browser_specific_settings.gecko is missing"]

    minVersion = settings.gecko.strict_min_version
    if minVersion is None:
        return []
    try:
        declared = parseSemVerVersion(minVersion)
    except ValueError as err:
        return [f"strict_min_version '{minVersion}' is not a version: {err}"]
    if declared < parseSemVerVersion(FIREFOX_MV3_MIN_VERSION):
        return [f"strict_min_version '{minVersion}' predates Manifest V3 support ({FIREFOX_MV3_MIN_VERSION})"]
    return []



def _constructCanonical(inputs: BuildInputs) -> ManifestDocument:
    version = readPackageVersion(inputs.packageJsonPath)
    signingKey = readSigningKey(inputs.signingKeyPath)
    return buildManifest(
        inputs.declarations(),
        version=version,
        signingKey=signingKey,
        env=inputs.env,
    )



def buildExtensionManifest(inputs: BuildInputs, target: TargetEngine, outDir: str | Path) -> BuildResult:
    """
    Runs one build: read version → read key → construct → transform → serialize → write.

    Steps run strictly in order. A construction failure propagates before any
    file is written.
    """
    setLogContext(target=target.value)
    try:
        setLogContext(stage="construct")
        logger.debug("Environment: %s", inputs.env.snapshot())
        canonical = _constructCanonical(inputs)

        setLogContext(stage="transform")
        document = transformFor(canonical, target)
        if target.isSecondary:
            for problem in geckoIdentityProblems(document):
                logger.warning("Firefox manifest: %s", problem)

        setLogContext(stage="write")
        path = writeManifest(document, outDir)
        logger.info("Built %s manifest %s → %s", target.value, document.version, path)
        return BuildResult(target=target, path=path, document=document)
    finally:
        clearLogContext()



def buildAll(inputs: BuildInputs, outRoot: str | Path, targets: Iterable[TargetEngine] | None = None) -> list[BuildResult]:
    """Builds each target into outRoot/<target>, every build from a freshly constructed document."""
    outRoot = Path(outRoot)
    return [
        buildExtensionManifest(inputs, target, outRoot / target.value)
        for target in (targets if targets is not None else TargetEngine)
    ]
