"""Services implementing forge commands."""

from .build import BuildService
from .release import ReleaseService
from .settings import SettingsService

__all__ = [
    "BuildService",
    "ReleaseService",
    "SettingsService",
]
