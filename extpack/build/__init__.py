# extpack/build/__init__.py
from .pipeline import (
    BuildInputs,
    BuildResult,
    buildAll,
    buildExtensionManifest,
    geckoIdentityProblems,
    targetFromEnv,
)

__all__ = [
    "BuildInputs",
    "BuildResult",
    "buildAll",
    "buildExtensionManifest",
    "geckoIdentityProblems",
    "targetFromEnv",
]
