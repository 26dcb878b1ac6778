from __future__ import annotations

from dataclasses import dataclass, field

from scaffold_cleanup.models import PluginPackage, StepOutcome, Variant
from scaffold_cleanup.naming import component_name


@dataclass
class RunReport:
    """Outcomes of one run, in execution order.

    Filled in as each step completes so that a failed run can still show
    exactly which steps finished.
    """

    entries: list[StepOutcome] = field(default_factory=list)
    status: str = "running"  # "running", "succeeded" or "failed"
    error: str | None = None

    def add(self, *outcomes: StepOutcome) -> None:
        self.entries.extend(outcomes)

    def succeed(self) -> None:
        self.status = "succeeded"

    def fail(self, error: BaseException | str) -> None:
        self.status = "failed"
        self.error = str(error)

    @property
    def changed(self) -> list[StepOutcome]:
        return [e for e in self.entries if e.status not in {"skipped", "unchanged"}]

    def render(self, variant: Variant, package: PluginPackage) -> str:
        lines = ["", "Steps:"]
        if not self.entries:
            lines.append("  - (none)")
        for entry in self.entries:
            line = f"  - [{entry.step}] {entry.path}: {entry.status}"
            if entry.detail:
                line += f" ({entry.detail})"
            lines.append(line)
        lines.append("")
        lines.append(f"Summary: {_summarize_by_status(self.entries)}")

        if self.status == "failed":
            lines.append("")
            lines.append(f"Cleanup failed: {self.error}")
            lines.append("The package may be partially cleaned; fix the error and re-run.")
            lines.append("")
            return "\n".join(lines)

        values = {
            "plugin_id": package.plugin_id,
            "component": component_name(package.plugin_id),
        }
        lines.append("")
        lines.append("Cleanup complete!")
        if not self.changed:
            lines.append("Nothing to do: the package was already clean.")
        lines.append("")
        lines.append("What changed:")
        for change in variant.changes:
            lines.append(f"  - {change.format(**values)}")
        lines.append("")
        lines.append("Next steps:")
        for index, step in enumerate(variant.next_steps, start=1):
            lines.append(f"  {index}. {step.format(**values)}")
        lines.append("")
        return "\n".join(lines)


def _summarize_by_status(entries: list[StepOutcome]) -> str:
    counts: dict[str, int] = {}
    for entry in entries:
        counts[entry.status] = counts.get(entry.status, 0) + 1
    if not counts:
        return "no steps run"
    return ", ".join(f"{count} {status}" for status, count in sorted(counts.items()))
