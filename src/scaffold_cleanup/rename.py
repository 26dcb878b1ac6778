"""Rename a placeholder component directory and propagate the new name.

The placeholder unit is copied file by file into a directory named after the
component. Each new file is written before its original is deleted, so an
interrupted run never loses content: re-running picks up whatever is left in
the placeholder directory.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from collections.abc import Iterable, Iterator
from pathlib import Path

from scaffold_cleanup.errors import MutationError
from scaffold_cleanup.models import RenameOperation, RenameOutcome, StepOutcome, Substitution

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = {
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
    ".json",
    ".md",
    ".css",
    ".scss",
    ".html",
    ".yaml",
    ".yml",
    ".txt",
    ".snap",
}


def identifier_rule(placeholder: str, replacement: str) -> Substitution:
    """Match ``placeholder`` as a whole identifier.

    Not preceded by an identifier character, and not followed by a lowercase
    letter, digit, ``_`` or ``$``. ``ExampleComponentProps`` therefore
    becomes ``<replacement>Props`` while ``ExampleComponents`` and
    ``MyExampleComponent`` are left alone. Text that already reads
    ``replacement`` is never renamed again, even when ``replacement`` starts
    with ``placeholder`` (``ExampleComponent`` -> ``ExampleComponentPage``).
    """
    already_renamed = rf"(?!{re.escape(replacement)}(?![a-z0-9_$]))"
    pattern = rf"(?<![A-Za-z0-9_$]){already_renamed}{re.escape(placeholder)}(?![a-z0-9_$])"
    return Substitution(pattern=pattern, replacement=replacement.replace("\\", "\\\\"))


def apply_rules(text: str, rules: Iterable[Substitution]) -> tuple[str, int]:
    total = 0
    for rule in rules:
        text, count = rule.apply(text)
        total += count
    return text, total


def rename(root: Path, component_name: str, operation: RenameOperation) -> RenameOutcome:
    destination = operation.destination(component_name)
    status = "renamed" if _has_placeholder(root, component_name, operation) else "skipped"
    files: list[StepOutcome] = []
    wiring: list[StepOutcome] = []
    for outcome in iter_rename(root, component_name, operation):
        (wiring if outcome.step == "wiring" else files).append(outcome)
    return RenameOutcome(
        source=operation.source,
        destination=destination,
        status=status,
        files=files,
        wiring=wiring,
    )


def iter_rename(
    root: Path, component_name: str, operation: RenameOperation
) -> Iterator[StepOutcome]:
    """Yield one outcome per moved file, then one per wiring file.

    A missing placeholder directory yields a single ``skipped`` outcome for
    the move before the wiring files are checked.
    """
    destination = operation.destination(component_name)
    source_dir = root / operation.source
    dest_dir = root / destination
    rename_rule = identifier_rule(operation.placeholder, component_name)

    if _has_placeholder(root, component_name, operation):
        content_rules = [*operation.content_rules, rename_rule]
        for path in sorted(p for p in source_dir.rglob("*") if p.is_file()):
            yield _move_file(
                root,
                path,
                source_dir,
                dest_dir,
                operation.placeholder,
                component_name,
                content_rules,
            )
        _remove_empty_dirs(root, source_dir)
        logger.debug("Moved %s -> %s", operation.source, destination)
    else:
        logger.debug("Placeholder %s not found; nothing to rename", source_dir)
        yield StepOutcome(
            step="rename",
            path=operation.source,
            status="skipped",
            detail="placeholder not found",
        )

    wiring_rules = [*operation.wiring_rules, rename_rule]
    for relative in operation.wiring_files:
        yield _rewire(root, relative, wiring_rules)


def _has_placeholder(root: Path, component_name: str, operation: RenameOperation) -> bool:
    source_dir = root / operation.source
    dest_dir = root / operation.destination(component_name)
    return source_dir.is_dir() and source_dir.resolve() != dest_dir.resolve()


def _move_file(
    root: Path,
    path: Path,
    source_dir: Path,
    dest_dir: Path,
    placeholder: str,
    component_name: str,
    rules: list[Substitution],
) -> StepOutcome:
    relative = path.relative_to(source_dir)
    new_relative = relative.parent / relative.name.replace(placeholder, component_name)
    target = dest_dir / new_relative
    old_rel = path.relative_to(root).as_posix()
    new_rel = target.relative_to(root).as_posix()

    count = 0
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() in TEXT_EXTENSIONS:
            content = path.read_bytes().decode("utf-8")
            content, count = apply_rules(content, rules)
            target.write_bytes(content.encode("utf-8"))
        else:
            shutil.copy2(path, target)
        path.unlink()
    except (OSError, UnicodeDecodeError) as exc:
        raise MutationError("rename", old_rel, str(exc)) from exc

    if relative.name != new_relative.name:
        status = "renamed"
    elif count:
        status = "updated"
    else:
        status = "moved"
    logger.debug("%s -> %s (%d replacements)", old_rel, new_rel, count)
    return StepOutcome(
        step="rename",
        path=new_rel,
        status=status,
        detail=f"{old_rel} -> {new_rel}",
    )


def _rewire(root: Path, relative: str, rules: list[Substitution]) -> StepOutcome:
    path = root / relative
    if not path.is_file():
        return StepOutcome(step="wiring", path=relative, status="skipped")
    try:
        content = path.read_bytes().decode("utf-8")
        updated, count = apply_rules(content, rules)
        if not count or updated == content:
            return StepOutcome(step="wiring", path=relative, status="unchanged")
        path.write_bytes(updated.encode("utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise MutationError("wiring", relative, str(exc)) from exc
    logger.debug("Rewired %s (%d replacements)", relative, count)
    return StepOutcome(
        step="wiring",
        path=relative,
        status="updated",
        detail=f"{count} reference(s) rewritten",
    )


def _remove_empty_dirs(root: Path, top: Path) -> None:
    try:
        for dirpath, _dirnames, _filenames in os.walk(top, topdown=False):
            current = Path(dirpath)
            if not any(current.iterdir()):
                current.rmdir()
    except OSError as exc:
        raise MutationError("rename", top.relative_to(root).as_posix(), str(exc)) from exc
    if top.exists():
        logger.warning("Left %s in place: it still contains non-file entries", top)
