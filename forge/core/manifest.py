"""Typed access to the `forge.json` project manifest.

The manifest is static for the duration of a command, except for the
per-brand display version which `forge ci` rewrites. Keys forge does not
know about are kept in `Manifest.raw` so saving never drops them.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from forge.platform.files import atomic_write_text

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "FALLBACK_VERSION",
    "BrandInfo",
    "Manifest",
    "ManifestError",
    "ReleaseInfo",
    "UnknownBrand",
    "load_manifest",
    "save_manifest",
]

FALLBACK_VERSION = "1.0.0"


@dataclass(frozen=True, slots=True)
class ManifestError:
    """Error when the manifest cannot be read, parsed or written."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class UnknownBrand:
    """The active or requested brand is not declared in the manifest."""

    name: str
    available: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Unknown brand: {self.name}"

    @property
    def hint(self) -> str | None:
        if not self.available:
            return "No brands are declared in forge.json"
        return f"Available: {', '.join(self.available)}"


@dataclass(frozen=True, slots=True)
class ReleaseInfo:
    display_version: str | None = None


@dataclass(frozen=True, slots=True)
class BrandInfo:
    """Per-brand release metadata."""

    brand_short_name: str | None = None
    brand_full_name: str | None = None
    release: ReleaseInfo | None = None

    @property
    def display_version(self) -> str | None:
        return self.release.display_version if self.release else None

    @property
    def resolved_version(self) -> str:
        """Display version, or FALLBACK_VERSION when none is declared."""
        return self.display_version or FALLBACK_VERSION

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> BrandInfo:
        release = get_table(data, "release")
        return cls(
            brand_short_name=get_str(data, "brandShortName"),
            brand_full_name=get_str(data, "brandFullName"),
            release=(
                ReleaseInfo(display_version=get_str(release, "displayVersion"))
                if release is not None
                else None
            ),
        )


def _empty_raw() -> StrDict:
    return {}


def _required_str(data: Mapping[str, object], key: str) -> str:
    value = get_str(data, key)
    if value is None:
        raise ValueError(f"'{key}' must be a non-empty string")
    return value


@dataclass(frozen=True, slots=True)
class Manifest:
    """Static project manifest."""

    name: str
    vendor: str
    app_id: str
    binary_name: str
    brands: Mapping[str, BrandInfo] = field(default_factory=dict)
    raw: StrDict = field(default_factory=_empty_raw, compare=False, repr=False)

    def get_brand(self, name: str) -> Result[BrandInfo, UnknownBrand]:
        """Look up a brand; a missing key is an error, never a default."""
        info = self.brands.get(name)
        if info is None:
            return Err(UnknownBrand(name=name, available=tuple(sorted(self.brands))))
        return Ok(info)

    def with_display_version(self, brand: str, version: str) -> Manifest:
        """Return a copy with `brand`'s display version replaced."""
        current = self.brands[brand]
        updated = replace(
            current,
            release=replace(current.release or ReleaseInfo(), display_version=version),
        )
        brands = dict(self.brands)
        brands[brand] = updated
        return replace(self, brands=brands)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Manifest:
        """Create a Manifest from the parsed JSON document.

        Raises:
            ValueError: If a required key is missing or has the wrong type.
        """
        name = _required_str(data, "name")
        app_id = _required_str(data, "appId")
        binary_name = _required_str(data, "binaryName")

        brands_obj = data.get("brands", {})
        brands_table = as_str_dict(brands_obj)
        if brands_table is None:
            raise ValueError("'brands' must be an object")

        brands: dict[str, BrandInfo] = {}
        for key, value in brands_table.items():
            brand_table = as_str_dict(value)
            if brand_table is None:
                raise ValueError(f"brand '{key}' must be an object")
            brands[key] = BrandInfo.from_dict(brand_table)

        return cls(
            name=name,
            vendor=get_str(data, "vendor") or name,
            app_id=app_id,
            binary_name=binary_name,
            brands=brands,
            raw=copy.deepcopy(dict(data)),
        )

    def to_dict(self) -> StrDict:
        """Serialize back to a JSON-ready dict, preserving unknown keys."""
        out = copy.deepcopy(self.raw)
        out["name"] = self.name
        # An absent vendor is loaded as the name; do not write that default back.
        if "vendor" in self.raw or self.vendor != self.name:
            out["vendor"] = self.vendor
        out["appId"] = self.app_id
        out["binaryName"] = self.binary_name

        raw_brands = as_str_dict(out.get("brands")) or {}
        brands: StrDict = {}
        for key, info in self.brands.items():
            entry = as_str_dict(raw_brands.get(key)) or {}
            if info.brand_short_name is not None:
                entry["brandShortName"] = info.brand_short_name
            if info.brand_full_name is not None:
                entry["brandFullName"] = info.brand_full_name
            if info.release is not None:
                release = as_str_dict(entry.get("release")) or {}
                if info.release.display_version is not None:
                    release["displayVersion"] = info.release.display_version
                entry["release"] = release
            brands[key] = entry
        out["brands"] = brands
        return out


def load_manifest(path: Path) -> Result[Manifest, ManifestError]:
    """Load and validate forge.json.

    Returns:
        Ok(Manifest) on success, Err(ManifestError) on failure
    """
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ManifestError(f"Manifest not found: {path}", path=path))
    except PermissionError:
        return Err(ManifestError(f"Permission denied reading: {path}", path=path))
    except json.JSONDecodeError as e:
        return Err(ManifestError(f"Invalid JSON in manifest: {e}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestError(f"Error reading manifest: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ManifestError("Manifest root must be a JSON object", path=path))

    try:
        return Ok(Manifest.from_dict(data))
    except ValueError as e:
        return Err(ManifestError(f"Invalid manifest: {e}", path=path))


def save_manifest(path: Path, manifest: Manifest) -> Result[None, ManifestError]:
    """Write the manifest back to disk (2-space indented JSON)."""
    content = json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False) + "\n"
    try:
        atomic_write_text(path, content)
    except OSError as e:
        return Err(ManifestError(f"Could not write {path}: {e}", path=path))
    return Ok(None)
