from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable, Iterator
from pathlib import Path

from scaffold_cleanup.errors import MutationError
from scaffold_cleanup.models import RemovalTarget, StepOutcome

logger = logging.getLogger(__name__)


def remove(root: Path, targets: Iterable[RemovalTarget]) -> list[StepOutcome]:
    """Delete each target under ``root``. Absent targets are skipped, not errors."""
    return list(iter_remove(root, targets))


def iter_remove(root: Path, targets: Iterable[RemovalTarget]) -> Iterator[StepOutcome]:
    """Yield one outcome per target as soon as it has been handled."""
    for target in targets:
        path = root / target.path
        if not path.exists() and not path.is_symlink():
            logger.debug("Nothing to remove at %s", path)
            yield StepOutcome(step="remove", path=target.path, status="skipped")
            continue
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as exc:
            raise MutationError("remove", target.path, str(exc)) from exc
        logger.debug("Removed %s", path)
        yield StepOutcome(
            step="remove",
            path=target.path,
            status="removed",
            detail=target.description,
        )
