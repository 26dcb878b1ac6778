from __future__ import annotations

import argparse
import logging
import sys
import traceback
from collections.abc import Iterable

from scaffold_cleanup import __version__
from scaffold_cleanup.errors import ValidationError
from scaffold_cleanup.naming import component_name
from scaffold_cleanup.pipeline import run
from scaffold_cleanup.report import RunReport
from scaffold_cleanup.validator import validate
from scaffold_cleanup.variants import VARIANTS, get_variant


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(
    argv: Iterable[str] | None = None,
    variant: str | None = None,
    prog: str = "scaffold-cleanup",
) -> int:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=(
            "Remove example code from a freshly generated Backstage plugin and "
            "rename its placeholder component to match the plugin ID. "
            "Files are changed in place without confirmation."
        ),
    )
    parser.add_argument("path", help="Path to the generated plugin package")
    if variant is None:
        parser.add_argument(
            "--variant",
            choices=["auto", *VARIANTS],
            default="auto",
            help="Cleanup tables to apply (default: detect from backstage.role)",
        )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(list(argv) if argv is not None else None)
    setup_logging(args.verbose)

    try:
        package = validate(args.path)
    except ValidationError as exc:
        raise SystemExit(f"Error: {exc}") from exc

    selected = get_variant(variant or args.variant, package)
    print(f"Cleaning up scaffolding from {selected.title}...")
    print(f"Plugin path: {args.path}")
    print(f"Plugin ID: {package.plugin_id}")
    if selected.renames:
        print(f"Component name: {component_name(package.plugin_id)}")

    report = RunReport()
    try:
        run(package, selected, report)
    except Exception as exc:
        report.fail(exc)
        print(report.render(selected, package))
        traceback.print_exc(file=sys.stderr)
        raise SystemExit(f"Cleanup failed: {exc}") from exc

    print(report.render(selected, package))
    return 0


def main_frontend(argv: Iterable[str] | None = None) -> int:
    return main(argv, variant="frontend", prog="cleanup-scaffolding")


def main_backend(argv: Iterable[str] | None = None) -> int:
    return main(argv, variant="backend", prog="cleanup-scaffolding-backend")


if __name__ == "__main__":
    raise SystemExit(main())
