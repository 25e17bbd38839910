"""Dependency selection, installation and pruning."""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from nodeforge.models import ApiType, DependencySet, PackageManager
from nodeforge.package_manager import INSTALL_DIR, get_commands

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from nodeforge.models import Answers
    from nodeforge.package_manager import CommandRunner

logger = logging.getLogger(__name__)

WEB_FRAMEWORK = "express"
CORS_MIDDLEWARE = "cors"
GRAPHQL_PACKAGES = ("graphql", "@apollo/server")
TYPESCRIPT_DEV_PACKAGES = (
    "typescript",
    "@types/node",
    "@types/express",
    "ts-node",
    "tsc-watch",
)


def compute_dependencies(answers: Answers) -> DependencySet:
    """Compute the runtime and dev packages implied by the answers."""
    runtime = [WEB_FRAMEWORK]
    if answers.enable_cors:
        runtime.append(CORS_MIDDLEWARE)
    if answers.api_type == ApiType.GRAPHQL:
        runtime.extend(GRAPHQL_PACKAGES)

    dev = list(TYPESCRIPT_DEV_PACKAGES) if answers.is_typescript else []
    return DependencySet(runtime=runtime, dev=dev)


def install_packages(
    project_dir: Path,
    packages: list[str],
    runner: CommandRunner,
    package_manager: PackageManager = PackageManager.NPM,
    *,
    dev: bool = False,
) -> list[str] | None:
    """Add packages to the manifest through the package manager.

    Returns the command line that was run, or None when there was nothing to
    add, since some package managers reject an empty ``add``.
    """
    if not packages:
        logger.debug(f"No {'dev ' if dev else ''}dependencies, skipping install")
        return None

    commands = get_commands(package_manager)
    cmd = [*(commands.add_dev if dev else commands.add), *packages]
    runner.run(cmd, project_dir)
    return cmd


def install_dependencies(
    project_dir: Path,
    dependencies: DependencySet,
    runner: CommandRunner,
    package_manager: PackageManager = PackageManager.NPM,
    console: Console | None = None,
) -> list[list[str]]:
    """Install the runtime set, then the dev set.

    Progress lines go to ``console`` when one is given. Returns the command
    lines that were run.
    """
    issued: list[list[str]] = []

    if console is not None:
        console.print("[blue]Installing dependencies...[/blue]")
    cmd = install_packages(project_dir, dependencies.runtime, runner, package_manager)
    if cmd is not None:
        issued.append(cmd)

    if dependencies.dev and console is not None:
        console.print("[blue]Installing dev dependencies...[/blue]")
    cmd = install_packages(project_dir, dependencies.dev, runner, package_manager, dev=True)
    if cmd is not None:
        issued.append(cmd)

    return issued


def prune_install_artifacts(
    project_dir: Path, package_manager: PackageManager = PackageManager.NPM
) -> list[Path]:
    """Delete the installed dependency tree and the lockfile.

    Missing artifacts are ignored. Returns the paths that were removed.
    """
    removed: list[Path] = []

    install_dir = project_dir / INSTALL_DIR
    if install_dir.is_dir() and not install_dir.is_symlink():
        shutil.rmtree(install_dir)
        removed.append(install_dir)
    elif install_dir.exists() or install_dir.is_symlink():
        install_dir.unlink()
        removed.append(install_dir)

    lockfile = project_dir / get_commands(package_manager).lockfile
    if lockfile.exists():
        lockfile.unlink()
        removed.append(lockfile)

    for path in removed:
        logger.debug(f"Removed {path}")
    return removed
