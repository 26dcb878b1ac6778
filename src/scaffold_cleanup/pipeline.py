from __future__ import annotations

import logging

from scaffold_cleanup.models import PluginPackage, Variant
from scaffold_cleanup.naming import component_name
from scaffold_cleanup.patcher import iter_patch, iter_rewrite
from scaffold_cleanup.remover import iter_remove
from scaffold_cleanup.rename import iter_rename
from scaffold_cleanup.report import RunReport

logger = logging.getLogger(__name__)


def run(package: PluginPackage, variant: Variant, report: RunReport | None = None) -> RunReport:
    """Run every step of ``variant`` against an already validated package.

    Each outcome is added to ``report`` the moment its file or directory has
    been handled. A ``MutationError`` propagates unchanged; the caller still
    holds the report with everything completed before the failure.
    """
    if report is None:
        report = RunReport()
    root = package.root

    logger.info("Removing example code (%d targets)", len(variant.removals))
    for outcome in iter_remove(root, variant.removals):
        report.add(outcome)

    component = component_name(package.plugin_id)
    for operation in variant.renames:
        logger.info("Renaming %s -> %s", operation.placeholder, component)
        for outcome in iter_rename(root, component, operation):
            report.add(outcome)

    if variant.patches:
        logger.info("Patching wiring files (%d rules)", len(variant.patches))
        for outcome in iter_patch(root, variant.patches):
            report.add(outcome)
    if variant.rewrites:
        logger.info("Rewriting %d file(s)", len(variant.rewrites))
        for outcome in iter_rewrite(root, variant.rewrites):
            report.add(outcome)

    report.succeed()
    return report
