# extpack/semver/semver.py
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

__all__ = ["SemVerVersion", "parseSemVerVersion"]



_NUMBER = r"(?:0|[1-9]\d*)"
_PRERELEASE_IDENT = rf"(?:{_NUMBER}|[0-9A-Za-z-]*[A-Za-z-][0-9A-Za-z-]*)"
_BUILD_IDENT = r"[0-9A-Za-z-]+"

# Optional "v", one to three numeric components, then the usual -prerelease / +build suffixes
VERSION_RE = re.compile(
    rf"v?(?P<core>{_NUMBER}(?:\.{_NUMBER}){{0,2}})"
    rf"(?:-(?P<prerelease>{_PRERELEASE_IDENT}(?:\.{_PRERELEASE_IDENT})*))?"
    rf"(?:\+(?P<build>{_BUILD_IDENT}(?:\.{_BUILD_IDENT})*))?"
)



@total_ordering
@dataclass(frozen=True, eq=False)
class SemVerVersion:
    """
    A version as package.json and Gecko's strict_min_version write it.

    Equality and ordering follow semver precedence, so build metadata is ignored.
    str() gives the normalized three-component form.
    """
    major: int
    minor: int = 0
    patch: int = 0
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @property
    def core(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        text = self.core
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def _precedence(self) -> tuple:
        # A release outranks its prereleases; numeric identifiers sort before alphanumeric ones
        idents = tuple((0, int(ident), "") if ident.isdigit() else (1, 0, ident) for ident in self.prerelease)
        return (self.major, self.minor, self.patch, not self.prerelease, idents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemVerVersion):
            return NotImplemented
        return self._precedence() == other._precedence()

    def __hash__(self) -> int:
        return hash(self._precedence())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVerVersion):
            return NotImplemented
        return self._precedence() < other._precedence()



def _identifiers(group: str | None) -> tuple[str, ...]:
    return tuple(group.split(".")) if group else ()



def parseSemVerVersion(raw: str) -> SemVerVersion:
    """
    Parses a lenient semantic version.

    Missing minor/patch components default to 0 ("109.0" -> 109.0.0) and a
    leading "v" is accepted. Leading zeroes, empty components and more than
    three numeric components are rejected.

    Raises:
        TypeError: raw is not a string
        ValueError: raw is not a version
    """
    if not isinstance(raw, str):
        raise TypeError(f"Version must be a string, got {type(raw).__name__}")

    mtch = VERSION_RE.fullmatch(raw.strip())
    if mtch is None:
        raise ValueError(f"Invalid version {raw!r}")

    numbers = [int(part) for part in mtch.group("core").split(".")]
    numbers += [0] * (3 - len(numbers))
    return SemVerVersion(
        *numbers,
        prerelease=_identifiers(mtch.group("prerelease")),
        build=_identifiers(mtch.group("build")),
    )
