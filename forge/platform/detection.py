"""Host platform detection.

Gecko builds are driven per host: the platform decides which
`configs/<platform>/mozconfig` template is used and how `mach` is launched.
"""

from __future__ import annotations

import sys as _sys
from enum import Enum
from functools import lru_cache

__all__ = [
    "Platform",
    "detect_platform",
    "resolve_platform",
]


class Platform(Enum):
    """Supported build host. The value is the template directory name."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    def __str__(self) -> str:
        return self.value

    @property
    def is_windows(self) -> bool:
        return self == Platform.WINDOWS


def resolve_platform(host: str) -> Platform | None:
    """Map a `sys.platform`-style host identifier to a Platform.

    Returns None for hosts forge cannot build on (e.g. "freebsd13", "aix").
    """
    system = host.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return None


@lru_cache(maxsize=1)
def detect_platform() -> Platform | None:
    """Detect the current build host (cached)."""
    # NOTE: avoid platform.system() on Windows.
    # Python's platform.system() may query WMI (slow/hangs on some machines).
    return resolve_platform(_sys.platform)
