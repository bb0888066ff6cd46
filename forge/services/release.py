"""Release preparation for CI (`forge ci`).

Steps, applied in this order when requested:
1. Switch the build mode to release
2. Select a brand
3. Bump the brand's display version by a semver level
4. Override the brand's display version verbatim

Every step that changes a document persists it immediately; there is no
rollback if a later step fails.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..core.manifest import Manifest, ManifestError, UnknownBrand, save_manifest
from ..core.result import Err, Ok, Result
from ..core.state import DynamicConfig, StateError, save_state
from .base import BaseService
from .semver import BumpLevel, increment


@dataclass(frozen=True, slots=True)
class Bumped:
    old: str
    new: str


@dataclass(frozen=True, slots=True)
class Unchanged:
    current: str


VersionChange = Bumped | Unchanged

ReleaseError = UnknownBrand | ManifestError | StateError


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    state: DynamicConfig
    manifest: Manifest
    changes: tuple[VersionChange, ...] = ()


def next_version(current: str, level: BumpLevel) -> VersionChange:
    """Bump `current`; an unparseable version stays Unchanged."""
    bumped = increment(current, level)
    if bumped is None:
        return Unchanged(current)
    return Bumped(old=current, new=bumped)


def override_version(current: str, version: str) -> VersionChange:
    """Replace `current` verbatim; an empty override is a no-op."""
    if not version:
        return Unchanged(current)
    return Bumped(old=current, new=version)


class ReleaseService(BaseService):
    def prepare(
        self,
        *,
        brand: str | None = None,
        bump: BumpLevel | None = None,
        version: str | None = None,
    ) -> Result[ReleaseOutcome, ReleaseError]:
        if brand is not None:
            requested = self._manifest.get_brand(brand)
            if isinstance(requested, Err):
                return requested

        self._console.info("Set the build to release")
        state = self._state.with_build_mode("release")
        if brand is not None:
            self._console.info(f"Setting the brand to be '{brand}'")
            state = state.with_brand(brand)

        saved = save_state(self._project.state_path, state)
        if isinstance(saved, Err):
            return saved
        self._state = state

        changes: list[VersionChange] = []
        if bump is not None:
            applied = self._apply(lambda current: next_version(current, bump))
            if isinstance(applied, Err):
                return applied
            changes.append(applied.value)

        if version is not None:
            applied = self._apply(lambda current: override_version(current, version))
            if isinstance(applied, Err):
                return applied
            changes.append(applied.value)

        return Ok(ReleaseOutcome(state=state, manifest=self._manifest, changes=tuple(changes)))

    def _apply(
        self, compute: Callable[[str], VersionChange]
    ) -> Result[VersionChange, ReleaseError]:
        """Apply a version change to the active brand and persist the manifest."""
        brand_key = self._state.brand
        info = self._manifest.get_brand(brand_key)
        if isinstance(info, Err):
            return info

        change: VersionChange = compute(info.value.resolved_version)
        match change:
            case Bumped(old=old, new=new):
                self._manifest = self._manifest.with_display_version(brand_key, new)
                self._console.info(f"Bumped the version: {old} → {new}")
            case Unchanged(current=current):
                self._console.warning(f"Version left unchanged at {current}")

        saved = save_manifest(self._project.manifest_path, self._manifest)
        if isinstance(saved, Err):
            return saved
        return Ok(change)
