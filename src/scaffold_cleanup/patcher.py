from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from scaffold_cleanup.errors import MutationError
from scaffold_cleanup.models import PatchRule, RewriteRule, StepOutcome

logger = logging.getLogger(__name__)


def patch(root: Path, rules: Iterable[PatchRule]) -> list[StepOutcome]:
    """Apply each rule to its target file.

    A missing target or a pattern that no longer matches is reported, never
    raised: generator templates drift between versions, and a rule that has
    already been applied must stay a no-op on the next run.
    """
    return list(iter_patch(root, rules))


def iter_patch(root: Path, rules: Iterable[PatchRule]) -> Iterator[StepOutcome]:
    for rule in rules:
        path = root / rule.target
        if not path.is_file():
            logger.debug("Patch target %s missing; skipping", rule.target)
            yield StepOutcome(step="patch", path=rule.target, status="skipped", detail=rule.description)
            continue
        try:
            content = path.read_bytes().decode("utf-8")
            updated, count = rule.substitution.apply(content)
            if count and updated != content:
                path.write_bytes(updated.encode("utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise MutationError("patch", rule.target, str(exc)) from exc
        status = "updated" if count and updated != content else "unchanged"
        logger.debug("Patched %s: %s (%d matches)", rule.target, rule.description, count)
        yield StepOutcome(step="patch", path=rule.target, status=status, detail=rule.description)


def rewrite(root: Path, rules: Iterable[RewriteRule]) -> list[StepOutcome]:
    return list(iter_rewrite(root, rules))


def iter_rewrite(root: Path, rules: Iterable[RewriteRule]) -> Iterator[StepOutcome]:
    for rule in rules:
        path = root / rule.target
        if not path.is_file():
            yield StepOutcome(step="rewrite", path=rule.target, status="skipped", detail=rule.description)
            continue
        try:
            current = path.read_bytes()
            wanted = rule.content.encode("utf-8")
            if current != wanted:
                path.write_bytes(wanted)
        except OSError as exc:
            raise MutationError("rewrite", rule.target, str(exc)) from exc
        status = "rewritten" if current != wanted else "unchanged"
        logger.debug("Rewrite of %s: %s", rule.target, status)
        yield StepOutcome(step="rewrite", path=rule.target, status=status, detail=rule.description)
