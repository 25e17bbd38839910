"""Pytest fixtures for nodeforge tests."""

import io
import json
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

from nodeforge.generator import ExecutionContext
from nodeforge.models import PackageManager
from nodeforge.package_manager import INSTALL_DIR, CommandFailure, get_commands


@dataclass(frozen=True)
class RecordedCommand:
    """Record a command invocation for assertions."""

    args: list[str]
    cwd: Path


class FakeRunner:
    """Fake package manager that mimics init/add side effects on disk."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.commands: list[RecordedCommand] = []

    def run(self, args: list[str], cwd: Path) -> None:
        self.commands.append(RecordedCommand(args=list(args), cwd=cwd))
        if self.fail_on is not None and self.fail_on in args:
            raise CommandFailure(command=args, returncode=1)

        commands = get_commands(PackageManager(args[0]))
        if tuple(args) == commands.init:
            manifest = {
                "name": cwd.name,
                "version": "1.0.0",
                "main": "index.js",
                "scripts": {"test": 'echo "Error: no test specified" && exit 1'},
            }
            (cwd / "package.json").write_text(json.dumps(manifest, indent=2))
            return

        for package in args[len(commands.add) :]:
            if package.startswith("-"):
                continue
            (cwd / INSTALL_DIR / package).mkdir(parents=True, exist_ok=True)
        (cwd / commands.lockfile).write_text("{}")

    @property
    def argv(self) -> list[list[str]]:
        return [cmd.args for cmd in self.commands]


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide a temporary directory for project generation."""
    output_dir = tmp_path / "projects"
    output_dir.mkdir(parents=True, exist_ok=True)
    yield output_dir


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Provide a fake package manager runner."""
    return FakeRunner()


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    """Provide the fake runner class for tests that configure failures."""
    return FakeRunner


@pytest.fixture
def quiet_console() -> Console:
    """Provide a console that writes to memory."""
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def execution_context(
    temp_output_dir: Path, fake_runner: FakeRunner, quiet_console: Console
) -> ExecutionContext:
    """Provide an execution context wired to the fake runner."""
    return ExecutionContext(
        working_dir=temp_output_dir,
        runner=fake_runner,
        console=quiet_console,
    )
