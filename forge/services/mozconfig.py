"""Merged mozconfig assembly.

The merged file is, in order: a generated-file header, the common template,
the platform template, the user override and forge's internal fragment.
"""

from __future__ import annotations

HEADER = (
    "# This file is automatically generated. "
    "You should only modify this if you know what you are doing!\n\n"
)

# Lines starting with these are echoed as the build summary.
SUMMARY_PREFIXES = ("mk", "ac", "export")
_SUMMARY_STRIP = ("mk_add_options ", "ac_add_options ", "export ")

_BUILD_MODE_OPTIONS = {
    "dev": "# Development build settings",
    "debug": "ac_add_options --enable-debug\nac_add_options --disable-optimize",
    "release": (
        "ac_add_options --enable-release\n"
        "ac_add_options --disable-debug\n"
        "ac_add_options --enable-optimize\n"
        "ac_add_options --enable-update-channel=release"
    ),
}


def internal_fragment(brand: str, build_mode: str) -> str:
    """Options forge always appends, parameterised by brand and build mode."""
    mode_options = _BUILD_MODE_OPTIONS.get(build_mode, f"# Unknown build mode {build_mode}")
    return f"""
# =====================
# Internal forge config
# =====================

{mode_options}

ac_add_options --disable-geckodriver
ac_add_options --disable-profiling
ac_add_options --disable-tests

# Custom branding
ac_add_options --with-branding=browser/branding/{brand}

# Version files
ac_add_options --with-version-file-path=browser/config
"""


def merge(common: str, platform: str, override: str, fragment: str) -> str:
    """Concatenate rendered sections into the final mozconfig text."""
    return HEADER + common + "\n\n" + platform + "\n\n" + override + "\n" + fragment


def summary_lines(merged: str) -> list[str]:
    """Effective settings, with the mozconfig directive prefixes removed."""
    out: list[str] = []
    for line in merged.split("\n"):
        if not line.startswith(SUMMARY_PREFIXES):
            continue
        for prefix in _SUMMARY_STRIP:
            line = line.replace(prefix, "", 1)
        out.append(line)
    return out
