from __future__ import annotations

from forge.core.manifest import Manifest
from forge.core.project import Project
from forge.core.state import DynamicConfig
from forge.output.console import ConsoleProtocol


class BaseService:
    """Shared wiring for services operating on a loaded project."""

    def __init__(
        self,
        *,
        project: Project,
        manifest: Manifest,
        state: DynamicConfig,
        console: ConsoleProtocol,
    ) -> None:
        self._project = project
        self._manifest = manifest
        self._state = state
        self._console = console

    @property
    def manifest(self) -> Manifest:
        return self._manifest

    @property
    def state(self) -> DynamicConfig:
        return self._state
