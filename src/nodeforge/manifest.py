"""Editing of the generated package.json manifest."""

import json
import logging
from pathlib import Path
from typing import Any

from nodeforge.models import Language, PackageManager

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"
START_SCRIPT = "node dist/index.js"


class ManifestError(Exception):
    """Error raised when package.json cannot be read or parsed."""


def build_scripts(
    language: Language, package_manager: PackageManager = PackageManager.NPM
) -> dict[str, str]:
    """Build the scripts map for the manifest.

    ``start`` is always present; ``dev`` only for TypeScript projects, where it
    recompiles on change and restarts the server via ``start``.
    """
    scripts = {"start": START_SCRIPT}
    if language == Language.TYPESCRIPT:
        scripts["dev"] = f'tsc-watch --onSuccess "{package_manager} start"'
    return scripts


def load_manifest(project_dir: Path) -> dict[str, Any]:
    """Load and parse package.json from a project directory."""
    manifest_path = project_dir / MANIFEST_FILE
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ManifestError(f"{manifest_path} does not exist") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{manifest_path} is not a JSON object")
    return data


def write_manifest(project_dir: Path, data: dict[str, Any]) -> Path:
    """Write package.json pretty-printed with two-space indentation."""
    manifest_path = project_dir / MANIFEST_FILE
    manifest_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return manifest_path


def update_scripts(
    project_dir: Path,
    language: Language,
    package_manager: PackageManager = PackageManager.NPM,
) -> dict[str, Any]:
    """Replace the manifest's scripts with the generated ones.

    Scripts written by the package manager's init command are discarded.
    """
    data = load_manifest(project_dir)
    data["scripts"] = build_scripts(language, package_manager)
    manifest_path = write_manifest(project_dir, data)
    logger.debug(f"Updated scripts in {manifest_path}: {sorted(data['scripts'])}")
    return data
