"""`${key}` placeholder substitution for mozconfig templates."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields

__all__ = ["PLACEHOLDERS", "TemplateOptions", "render"]

_PLACEHOLDER_RE = re.compile(r"\$\{(\w+)\}")


@dataclass(frozen=True, slots=True)
class TemplateOptions:
    """Values available to templates, built fresh for every build."""

    name: str
    vendor: str
    appId: str  # noqa: N815 - placeholder names are part of the template format
    brandingDir: str  # noqa: N815
    binName: str  # noqa: N815
    changeset: str

    def as_mapping(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


PLACEHOLDERS: frozenset[str] = frozenset(f.name for f in fields(TemplateOptions))


def render(text: str, options: Mapping[str, str] | TemplateOptions) -> str:
    """Replace every known `${key}` in text with its value.

    Unknown placeholders are left verbatim. Substitution is a single pass,
    so a value containing `${...}` is never expanded again.
    """
    values = options.as_mapping() if isinstance(options, TemplateOptions) else options

    def _sub(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        return match.group(0) if value is None else value

    return _PLACEHOLDER_RE.sub(_sub, text)
