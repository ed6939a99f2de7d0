# extpack/core/errors.py
from __future__ import annotations
from pathlib import Path

__all__ = [
    "ManifestBuildError",
    "SigningKeyMissingError",
    "PackageVersionError",
    "SigningKeyError",
    "InputFileError",
]



class ManifestBuildError(Exception):
    """Raised when a required build input is missing or unusable. The build writes nothing."""
    pass



class SigningKeyMissingError(ManifestBuildError):
    """Raised when the local signing key file is absent or empty."""
    def __init__(self, path: str | Path, reason: str = "not found") -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Signing key '{self.path}' {reason}; cannot build manifest without it")



class PackageVersionError(ManifestBuildError):
    """Raised when the package metadata carries no usable version string."""
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Package version from '{self.path}' is unusable: {reason}")



class SigningKeyError(ManifestBuildError):
    """Raised when the signing key material cannot be parsed as a PEM private key."""
    pass



class InputFileError(ManifestBuildError):
    """Raised when an optional input file (env values, declarations) exists but cannot be used."""
    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Input file '{self.path}' is unusable: {reason}")
