"""Platform abstraction layer."""

from .detection import (
    Platform,
    detect_platform,
    resolve_platform,
)
from .files import (
    atomic_write_text,
    write_text,
)
from .process import (
    ProcessError,
    run,
    stream,
)

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    "resolve_platform",
    # files
    "atomic_write_text",
    "write_text",
    # process
    "ProcessError",
    "run",
    "stream",
]
