from __future__ import annotations

import json
from pathlib import Path

import pytest

from forge.core.manifest import Manifest, UnknownBrand, load_manifest
from forge.core.project import Project
from forge.core.result import Err, Ok
from forge.core.state import DynamicConfig, load_state
from forge.output.console import MockConsole
from forge.services.release import (
    Bumped,
    ReleaseService,
    Unchanged,
    next_version,
    override_version,
)
from forge.services.semver import BumpLevel


def _project(tmp_path: Path) -> Project:
    manifest = {
        "name": "Forge Browser",
        "appId": "org.forge.browser",
        "binaryName": "forge-browser",
        "updateHostname": "updates.example.org",
        "brands": {
            "stable": {
                "brandShortName": "Forge",
                "release": {"displayVersion": "1.2.3", "github": {"repo": "forge/browser"}},
            },
            "nightly": {},
        },
    }
    (tmp_path / "forge.json").write_text(json.dumps(manifest), encoding="utf-8")
    return Project(root=tmp_path)


def _load(project: Project) -> Manifest:
    result = load_manifest(project.manifest_path)
    assert isinstance(result, Ok)
    return result.value


def _service(project: Project, console: MockConsole, state: DynamicConfig) -> ReleaseService:
    return ReleaseService(
        project=project, manifest=_load(project), state=state, console=console
    )


def _display_version(project: Project, brand: str) -> str | None:
    return _load(project).brands[brand].display_version


class TestVersionChanges:
    def test_next_version(self) -> None:
        assert next_version("1.2.3", BumpLevel.minor) == Bumped(old="1.2.3", new="1.3.0")

    def test_next_version_unparseable(self) -> None:
        assert next_version("banana", BumpLevel.patch) == Unchanged("banana")

    def test_next_version_leading_zero_prerelease(self) -> None:
        assert next_version("1.2.3-01", BumpLevel.prerelease) == Unchanged("1.2.3-01")

    def test_override_version(self) -> None:
        assert override_version("1.2.3", "9.9.9") == Bumped(old="1.2.3", new="9.9.9")

    def test_empty_override_is_noop(self) -> None:
        assert override_version("1.2.3", "") == Unchanged("1.2.3")


class TestPrepare:
    def test_sets_release_mode_only(self, tmp_path: Path) -> None:
        project = _project(tmp_path)
        console = MockConsole()

        result = _service(project, console, DynamicConfig(brand="stable")).prepare()

        assert isinstance(result, Ok)
        assert result.value.changes == ()
        assert load_state(project.state_path) == DynamicConfig(
            brand="stable", build_mode="release"
        )
        assert "info: Set the build to release" in console.messages
        assert _display_version(project, "stable") == "1.2.3"

    def test_bump_minor(self, tmp_path: Path) -> None:
        project = _project(tmp_path)
        console = MockConsole()

        result = _service(project, console, DynamicConfig(brand="stable")).prepare(
            bump=BumpLevel.minor
        )

        assert isinstance(result, Ok)
        assert result.value.changes == (Bumped(old="1.2.3", new="1.3.0"),)
        assert _display_version(project, "stable") == "1.3.0"
        assert "info: Bumped the version: 1.2.3 → 1.3.0" in console.messages

    def test_override_version(self, tmp_path: Path) -> None:
        project = _project(tmp_path)

        _service(project, MockConsole(), DynamicConfig(brand="stable")).prepare(
            version="9.9.9"
        )

        assert _display_version(project, "stable") == "9.9.9"

    def test_brand_then_bump_then_override(self, tmp_path: Path) -> None:
        project = _project(tmp_path)
        console = MockConsole()

        result = _service(project, console, DynamicConfig()).prepare(
            brand="stable", bump=BumpLevel.major, version="9.9.9"
        )

        assert isinstance(result, Ok)
        assert result.value.changes == (
            Bumped(old="1.2.3", new="2.0.0"),
            Bumped(old="2.0.0", new="9.9.9"),
        )
        assert _display_version(project, "stable") == "9.9.9"
        assert load_state(project.state_path).brand == "stable"
        assert "info: Setting the brand to be 'stable'" in console.messages

    def test_bump_from_fallback_version(self, tmp_path: Path) -> None:
        project = _project(tmp_path)

        result = _service(project, MockConsole(), DynamicConfig(brand="nightly")).prepare(
            bump=BumpLevel.patch
        )

        assert isinstance(result, Ok)
        assert result.value.changes == (Bumped(old="1.0.0", new="1.0.1"),)
        assert _display_version(project, "nightly") == "1.0.1"

    def test_empty_override_keeps_version(self, tmp_path: Path) -> None:
        project = _project(tmp_path)
        console = MockConsole()

        result = _service(project, console, DynamicConfig(brand="stable")).prepare(version="")

        assert isinstance(result, Ok)
        assert result.value.changes == (Unchanged("1.2.3"),)
        assert _display_version(project, "stable") == "1.2.3"
        assert console.has_warning()

    def test_unknown_brand_changes_nothing(self, tmp_path: Path) -> None:
        project = _project(tmp_path)
        before = project.manifest_path.read_text(encoding="utf-8")

        result = _service(project, MockConsole(), DynamicConfig()).prepare(
            brand="beta", bump=BumpLevel.patch
        )

        assert result == Err(UnknownBrand(name="beta", available=("nightly", "stable")))
        assert not project.state_path.exists()
        assert project.manifest_path.read_text(encoding="utf-8") == before

    def test_bump_with_unknown_active_brand(self, tmp_path: Path) -> None:
        project = _project(tmp_path)

        result = _service(project, MockConsole(), DynamicConfig(brand="beta")).prepare(
            bump=BumpLevel.patch
        )

        assert isinstance(result, Err)
        assert isinstance(result.error, UnknownBrand)
        # Release mode was already persisted before the bump failed.
        assert load_state(project.state_path).build_mode == "release"

    def test_unknown_keys_survive_rewrite(self, tmp_path: Path) -> None:
        project = _project(tmp_path)

        _service(project, MockConsole(), DynamicConfig(brand="stable")).prepare(
            bump=BumpLevel.patch
        )

        data = json.loads(project.manifest_path.read_text(encoding="utf-8"))
        assert data["updateHostname"] == "updates.example.org"
        assert "vendor" not in data
        assert data["brands"]["stable"]["release"] == {
            "displayVersion": "1.2.4",
            "github": {"repo": "forge/browser"},
        }
        assert project.manifest_path.read_text(encoding="utf-8").endswith("}\n")

    @pytest.mark.parametrize(
        ("level", "expected"),
        [("premajor", "2.0.0-0"), ("preminor", "1.3.0-0"), ("prerelease", "1.2.4-0")],
    )
    def test_prerelease_levels(self, tmp_path: Path, level: str, expected: str) -> None:
        project = _project(tmp_path)

        _service(project, MockConsole(), DynamicConfig(brand="stable")).prepare(
            bump=BumpLevel(level)
        )

        assert _display_version(project, "stable") == expected
