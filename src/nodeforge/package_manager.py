"""Invocation of the external Node package manager."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from nodeforge.models import PackageManager

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class PackageManagerError(Exception):
    """Error raised for package manager failures."""


@dataclass(frozen=True)
class CommandFailure(PackageManagerError):
    """Error raised when a package manager command fails."""

    command: list[str]
    returncode: int | None
    reason: str = ""

    def __str__(self) -> str:
        command_str = " ".join(self.command)
        parts = [f"Command failed: {command_str}"]
        if self.returncode is not None:
            parts.append(f"Exit code: {self.returncode}")
        if self.reason:
            parts.append(self.reason)
        return "\n".join(parts)


class CommandRunner(Protocol):
    """Protocol for running package manager commands."""

    def run(self, args: list[str], cwd: Path) -> None:
        """Run a command to completion, raising CommandFailure on error."""
        ...


class SubprocessRunner:
    """Subprocess-backed command runner.

    Output is not captured: the child inherits the terminal so the package
    manager's own progress is visible. Calls block with no timeout.
    """

    def run(self, args: list[str], cwd: Path) -> None:
        executable = shutil.which(args[0])
        if executable is None:
            raise CommandFailure(command=args, returncode=None, reason=f"{args[0]} not found")

        logger.debug(f"Running {' '.join(args)} in {cwd}")
        try:
            subprocess.run([executable, *args[1:]], cwd=cwd, check=True)
        except subprocess.CalledProcessError as exc:
            raise CommandFailure(command=args, returncode=exc.returncode) from exc


@dataclass(frozen=True)
class PackageManagerCommands:
    """Command lines and artifacts for one package manager."""

    init: tuple[str, ...]
    add: tuple[str, ...]
    add_dev: tuple[str, ...]
    lockfile: str
    run_script: tuple[str, ...]

    @property
    def executable(self) -> str:
        return self.init[0]


_COMMANDS: dict[PackageManager, PackageManagerCommands] = {
    PackageManager.NPM: PackageManagerCommands(
        init=("npm", "init", "-y"),
        add=("npm", "install"),
        add_dev=("npm", "install", "-D"),
        lockfile="package-lock.json",
        run_script=("npm", "run"),
    ),
    PackageManager.YARN: PackageManagerCommands(
        init=("yarn", "init", "-y"),
        add=("yarn", "add"),
        add_dev=("yarn", "add", "-D"),
        lockfile="yarn.lock",
        run_script=("yarn",),
    ),
    PackageManager.PNPM: PackageManagerCommands(
        init=("pnpm", "init"),
        add=("pnpm", "add"),
        add_dev=("pnpm", "add", "-D"),
        lockfile="pnpm-lock.yaml",
        run_script=("pnpm",),
    ),
}

INSTALL_DIR = "node_modules"


def get_commands(package_manager: PackageManager) -> PackageManagerCommands:
    """Return the command table for a package manager."""
    return _COMMANDS[package_manager]
