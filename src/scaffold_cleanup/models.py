from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

MANIFEST_FILENAME = "package.json"


@dataclass(frozen=True)
class PluginPackage:
    root: Path
    manifest: dict[str, Any]
    plugin_id: str

    @property
    def role(self) -> str | None:
        backstage = self.manifest.get("backstage")
        if isinstance(backstage, dict) and isinstance(backstage.get("role"), str):
            return backstage["role"]
        return None


@dataclass(frozen=True)
class RemovalTarget:
    path: str  # relative to the package root, POSIX separators
    description: str = ""


@dataclass(frozen=True)
class Substitution:
    pattern: str
    replacement: str
    literal: bool = False
    flags: int = 0

    def apply(self, text: str) -> tuple[str, int]:
        """Return the rewritten text and the number of replacements made."""
        if self.literal:
            count = text.count(self.pattern)
            if not count:
                return text, 0
            return text.replace(self.pattern, self.replacement), count
        return re.subn(self.pattern, self.replacement, text, flags=self.flags)


@dataclass(frozen=True)
class RenameOperation:
    source: str  # placeholder directory, relative to the package root
    placeholder: str
    content_rules: list[Substitution] = field(default_factory=list)
    wiring_files: list[str] = field(default_factory=list)
    wiring_rules: list[Substitution] = field(default_factory=list)

    def destination(self, component_name: str) -> str:
        parent = Path(self.source).parent
        return (parent / component_name).as_posix()


@dataclass(frozen=True)
class PatchRule:
    target: str
    substitution: Substitution
    description: str = ""


@dataclass(frozen=True)
class RewriteRule:
    target: str
    content: str
    description: str = ""


@dataclass(frozen=True)
class Variant:
    name: str  # "frontend" or "backend"
    title: str
    removals: list[RemovalTarget] = field(default_factory=list)
    renames: list[RenameOperation] = field(default_factory=list)
    patches: list[PatchRule] = field(default_factory=list)
    rewrites: list[RewriteRule] = field(default_factory=list)
    changes: list[str] = field(default_factory=list)
    next_steps: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StepOutcome:
    step: str  # "remove", "rename", "wiring", "patch" or "rewrite"
    path: str
    status: str  # "removed", "skipped", "renamed", "moved", "updated", "unchanged" or "rewritten"
    detail: str = ""


@dataclass(frozen=True)
class RenameOutcome:
    source: str
    destination: str
    status: str  # "renamed" or "skipped"
    files: list[StepOutcome] = field(default_factory=list)
    wiring: list[StepOutcome] = field(default_factory=list)
