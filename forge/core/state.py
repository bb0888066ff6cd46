"""Dynamic project state - the active brand and build mode.

State is stored in .forge/state.json. It is loaded once per command,
handed to services explicitly, and written back only when a command
changes it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal, get_args

from forge.platform.files import atomic_write_text

from .result import Err, Ok, Result
from .structured import as_str_dict, get_str

__all__ = [
    "BUILD_MODES",
    "DEFAULT_BRAND",
    "BuildMode",
    "DynamicConfig",
    "KEYS",
    "StateError",
    "load_state",
    "save_state",
]

BuildMode = Literal["dev", "debug", "release"]
BUILD_MODES: tuple[str, ...] = get_args(BuildMode)

DEFAULT_BRAND = "unofficial"


@dataclass(frozen=True, slots=True)
class StateError:
    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class DynamicConfig:
    """Persisted project state.

    Attributes:
        brand: Key into the manifest's brands
        build_mode: One of BUILD_MODES; unknown values are kept as-is and
            rendered as an "unknown build mode" comment in the mozconfig
    """

    brand: str = DEFAULT_BRAND
    build_mode: str = "dev"

    def with_brand(self, brand: str) -> DynamicConfig:
        return replace(self, brand=brand)

    def with_build_mode(self, mode: str) -> DynamicConfig:
        return replace(self, build_mode=mode)

    def get(self, key: str) -> str | None:
        """Get a value by its JSON key, or None for unknown keys."""
        attr = KEYS.get(key)
        if attr is None:
            return None
        return getattr(self, attr)

    def to_dict(self) -> dict[str, str]:
        return {key: getattr(self, attr) for key, attr in KEYS.items()}


# JSON key -> attribute
KEYS: dict[str, str] = {"brand": "brand", "buildMode": "build_mode"}


def load_state(path: Path) -> DynamicConfig:
    """Load dynamic state from disk.

    A missing or corrupted file yields the defaults.
    """
    if not path.exists():
        return DynamicConfig()

    try:
        data = as_str_dict(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError):
        return DynamicConfig()

    if data is None:
        return DynamicConfig()

    defaults = DynamicConfig()
    return DynamicConfig(
        brand=get_str(data, "brand") or defaults.brand,
        build_mode=get_str(data, "buildMode") or defaults.build_mode,
    )


def save_state(path: Path, state: DynamicConfig) -> Result[None, StateError]:
    """Persist dynamic state to disk."""
    try:
        atomic_write_text(path, json.dumps(state.to_dict(), indent=2) + "\n")
    except OSError as e:
        return Err(StateError(f"Could not write {path}: {e}", path=path))
    return Ok(None)
