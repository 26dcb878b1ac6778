from __future__ import annotations

WORD_SEPARATOR = "-"
PAGE_SUFFIX = "Page"


def to_pascal_case(plugin_id: str) -> str:
    """``my-service`` -> ``MyService``. Only the first letter of each segment changes."""
    return "".join(
        segment[:1].upper() + segment[1:]
        for segment in plugin_id.split(WORD_SEPARATOR)
    )


def component_name(plugin_id: str, suffix: str = PAGE_SUFFIX) -> str:
    return to_pascal_case(plugin_id) + suffix
