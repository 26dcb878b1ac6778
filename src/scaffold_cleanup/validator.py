from __future__ import annotations

import json
import logging
from pathlib import Path

from scaffold_cleanup.errors import (
    InvalidManifest,
    MissingDirectory,
    MissingIdentifier,
    MissingManifest,
)
from scaffold_cleanup.models import MANIFEST_FILENAME, PluginPackage

logger = logging.getLogger(__name__)


def validate(path: str | Path) -> PluginPackage:
    """Check that ``path`` is a Backstage plugin package and read its identifier.

    This is the only check made during a run; later steps trust the returned
    package. Nothing on disk is modified.
    """
    root = Path(path)
    if not root.is_dir():
        raise MissingDirectory(str(path))

    manifest_path = root / MANIFEST_FILENAME
    if not manifest_path.is_file():
        raise MissingManifest(str(path))

    try:
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidManifest(str(manifest_path), str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise InvalidManifest(str(manifest_path), f"invalid JSON ({exc})") from exc
    if not isinstance(manifest, dict):
        raise InvalidManifest(str(manifest_path), "expected a JSON object")

    plugin_id = _plugin_id(manifest)
    if not plugin_id:
        raise MissingIdentifier(str(manifest_path))

    logger.debug("Validated %s (pluginId=%s)", root, plugin_id)
    return PluginPackage(root=root, manifest=manifest, plugin_id=plugin_id)


def _plugin_id(manifest: dict) -> str:
    backstage = manifest.get("backstage")
    if not isinstance(backstage, dict):
        return ""
    value = backstage.get("pluginId")
    if not isinstance(value, str):
        return ""
    return value.strip()
