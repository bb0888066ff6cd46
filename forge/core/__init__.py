"""Core domain types: project layout, manifest, state and results."""

from .errors import ErrorCode
from .manifest import BrandInfo, Manifest, ManifestError, UnknownBrand, load_manifest
from .project import Project, ProjectError, detect_project
from .result import Err, Ok, Result, is_err, is_ok
from .state import DynamicConfig, load_state, save_state

__all__ = [
    # errors
    "ErrorCode",
    # manifest
    "BrandInfo",
    "Manifest",
    "ManifestError",
    "UnknownBrand",
    "load_manifest",
    # project
    "Project",
    "ProjectError",
    "detect_project",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # state
    "DynamicConfig",
    "load_state",
    "save_state",
]
