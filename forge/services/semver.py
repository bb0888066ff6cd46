from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import StrEnum


class BumpLevel(StrEnum):
    major = "major"
    premajor = "premajor"
    minor = "minor"
    preminor = "preminor"
    patch = "patch"
    prepatch = "prepatch"
    prerelease = "prerelease"


_PRERELEASE_ID = r"(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)"

# Numeric prerelease identifiers may not have leading zeros.
_SEMVER_RE = re.compile(
    r"^[=v]?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    rf"(?:-({_PRERELEASE_ID}(?:\.{_PRERELEASE_ID})*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)
_NUMERIC_RE = re.compile(r"^(0|[1-9]\d*)$")

Identifier = int | str


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[Identifier, ...] = ()

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{base}-{'.'.join(str(p) for p in self.prerelease)}"
        return base

    def bump(self, level: BumpLevel) -> SemVer:
        """Increment following npm `semver.inc` rules.

        A prerelease of the target version is promoted rather than bumped
        again: `bump("major")` on 2.0.0-1 gives 2.0.0.
        """
        match level:
            case BumpLevel.major:
                if self.minor != 0 or self.patch != 0 or not self.prerelease:
                    return SemVer(self.major + 1, 0, 0)
                return SemVer(self.major, 0, 0)
            case BumpLevel.minor:
                if self.patch != 0 or not self.prerelease:
                    return SemVer(self.major, self.minor + 1, 0)
                return SemVer(self.major, self.minor, 0)
            case BumpLevel.patch:
                if not self.prerelease:
                    return SemVer(self.major, self.minor, self.patch + 1)
                return SemVer(self.major, self.minor, self.patch)
            case BumpLevel.premajor:
                return SemVer(self.major + 1, 0, 0)._pre()
            case BumpLevel.preminor:
                return SemVer(self.major, self.minor + 1, 0)._pre()
            case BumpLevel.prepatch:
                return SemVer(self.major, self.minor, self.patch + 1)._pre()
            case BumpLevel.prerelease:
                if not self.prerelease:
                    return SemVer(self.major, self.minor, self.patch + 1)._pre()
                return self._pre()
            case _:
                raise AssertionError(f"unexpected bump level: {level}")

    def _pre(self) -> SemVer:
        """Increment the last numeric prerelease identifier, or append 0."""
        if not self.prerelease:
            return replace(self, prerelease=(0,))
        parts = list(self.prerelease)
        for i in range(len(parts) - 1, -1, -1):
            part = parts[i]
            if isinstance(part, int):
                parts[i] = part + 1
                return replace(self, prerelease=tuple(parts))
        return replace(self, prerelease=(*parts, 0))


def parse_version(text: str) -> SemVer | None:
    """Parse a semantic version; a leading `v` or `=` is tolerated."""
    m = _SEMVER_RE.match(text.strip())
    if m is None:
        return None
    prerelease: tuple[Identifier, ...] = ()
    if m.group(4):
        prerelease = tuple(
            int(p) if _NUMERIC_RE.match(p) else p for p in m.group(4).split(".")
        )
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), prerelease)


def increment(version: str, level: BumpLevel) -> str | None:
    """Return the bumped version string, or None if `version` is not semver."""
    parsed = parse_version(version)
    if parsed is None:
        return None
    return str(parsed.bump(level))
