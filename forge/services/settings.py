"""`forge get` / `forge set` on the dynamic project state."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.manifest import UnknownBrand
from ..core.result import Err, Ok, Result
from ..core.state import BUILD_MODES, KEYS, DynamicConfig, StateError, save_state
from .base import BaseService


@dataclass(frozen=True, slots=True)
class InvalidSetting:
    key: str
    value: str | None
    allowed: tuple[str, ...]

    @property
    def message(self) -> str:
        if self.value is None:
            return f"Unknown setting: {self.key}"
        return f"Invalid value for {self.key}: {self.value}"

    @property
    def hint(self) -> str:
        return f"Allowed: {', '.join(self.allowed)}"


SettingsError = InvalidSetting | UnknownBrand | StateError


class SettingsService(BaseService):
    def get(self, key: str) -> Result[str, SettingsError]:
        value = self._state.get(key)
        if value is None:
            return Err(InvalidSetting(key=key, value=None, allowed=tuple(KEYS)))
        return Ok(value)

    def set(self, key: str, value: str) -> Result[DynamicConfig, SettingsError]:
        match key:
            case "brand":
                brand = self._manifest.get_brand(value)
                if isinstance(brand, Err):
                    return brand
                state = self._state.with_brand(value)
            case "buildMode":
                if value not in BUILD_MODES:
                    return Err(InvalidSetting(key=key, value=value, allowed=BUILD_MODES))
                state = self._state.with_build_mode(value)
            case _:
                return Err(InvalidSetting(key=key, value=None, allowed=tuple(KEYS)))

        saved = save_state(self._project.state_path, state)
        if isinstance(saved, Err):
            return saved
        self._state = state
        self._console.info(f"Set {key} to '{value}'")
        return Ok(state)
