"""Project generator - materializes a server project from answers."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from rich.console import Console

from nodeforge.dependencies import (
    compute_dependencies,
    install_dependencies,
    prune_install_artifacts,
)
from nodeforge.manifest import update_scripts
from nodeforge.models import Answers, PackageManager
from nodeforge.package_manager import CommandRunner, SubprocessRunner, get_commands
from nodeforge.template_engine import (
    TSCONFIG,
    create_jinja_environment,
    render_gitignore,
    render_server,
)

logger = logging.getLogger(__name__)


class Stage(StrEnum):
    """Pipeline stages run by the generator, in order."""

    INITIALIZE = "initialize project"
    EDIT_MANIFEST = "edit manifest"
    INSTALL_DEPENDENCIES = "install dependencies"
    PRUNE_ARTIFACTS = "prune install artifacts"
    EMIT_SOURCE = "write server source"
    EMIT_AUXILIARY = "write auxiliary files"


class ScaffoldError(Exception):
    """Error raised when project generation fails."""


class StageFailure(ScaffoldError):
    """A pipeline stage failed; earlier side effects are left in place."""

    def __init__(self, stage: Stage, cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"Failed to {stage.value}: {cause}")


@dataclass
class ExecutionContext:
    """Ambient inputs for a generation run."""

    working_dir: Path
    runner: CommandRunner = field(default_factory=SubprocessRunner)
    package_manager: PackageManager = PackageManager.NPM
    console: Console = field(default_factory=Console)


class ProjectGenerator:
    """Generates a server project from collected answers."""

    def __init__(self, answers: Answers, context: ExecutionContext) -> None:
        self.answers = answers
        self.context = context
        self.project_dir = context.working_dir.absolute() / answers.project_name
        self.commands = get_commands(context.package_manager)
        self.env = create_jinja_environment()

    def generate(self) -> Path:
        """Run every stage in order and return the project directory.

        Raises:
            StageFailure: Wrapping the first error, tagged with its stage.
        """
        stages: list[tuple[Stage, Callable[[], None]]] = [
            (Stage.INITIALIZE, self._initialize_project),
            (Stage.EDIT_MANIFEST, self._edit_manifest),
            (Stage.INSTALL_DEPENDENCIES, self._install_dependencies),
            (Stage.PRUNE_ARTIFACTS, self._prune_artifacts),
            (Stage.EMIT_SOURCE, self._emit_source),
            (Stage.EMIT_AUXILIARY, self._emit_auxiliary_files),
        ]
        for stage, run_stage in stages:
            logger.debug(f"Stage: {stage.value}")
            try:
                run_stage()
            except Exception as e:
                raise StageFailure(stage, e) from e

        logger.info(f"Project '{self.answers.project_name}' generated at {self.project_dir}")
        return self.project_dir

    def _initialize_project(self) -> None:
        """Create the project directory and an initial package.json."""
        self.project_dir.mkdir(parents=True, exist_ok=True)
        self.context.console.print(f"[blue]Creating project at {self.project_dir}...[/blue]")
        self.context.runner.run(list(self.commands.init), self.project_dir)

    def _edit_manifest(self) -> None:
        update_scripts(self.project_dir, self.answers.language, self.context.package_manager)

    def _install_dependencies(self) -> None:
        install_dependencies(
            self.project_dir,
            compute_dependencies(self.answers),
            self.context.runner,
            self.context.package_manager,
            console=self.context.console,
        )

    def _prune_artifacts(self) -> None:
        self.context.console.print(
            "[yellow]Removing node_modules to defer installation...[/yellow]"
        )
        prune_install_artifacts(self.project_dir, self.context.package_manager)

    def _emit_source(self) -> None:
        """Write the server entry point under src/."""
        entry_path = self.project_dir / self.answers.entry_point
        entry_path.parent.mkdir(parents=True, exist_ok=True)
        content = render_server(self.env, self.answers.enable_cors, self.answers.api_type)
        entry_path.write_text(content, encoding="utf-8")
        logger.debug(f"Created file: {entry_path}")

    def _emit_auxiliary_files(self) -> None:
        """Write .gitignore and tsconfig.json when requested."""
        if self.answers.add_gitignore:
            gitignore_path = self.project_dir / ".gitignore"
            gitignore_path.write_text(render_gitignore(self.env), encoding="utf-8")
            logger.debug(f"Created .gitignore: {gitignore_path}")

        if self.answers.is_typescript:
            tsconfig_path = self.project_dir / "tsconfig.json"
            tsconfig_path.write_text(json.dumps(TSCONFIG, indent=2) + "\n", encoding="utf-8")
            logger.debug(f"Created tsconfig.json: {tsconfig_path}")


def build_next_steps(
    answers: Answers, package_manager: PackageManager = PackageManager.NPM
) -> list[tuple[str, str]]:
    """Build the (description, command) pairs shown after generation."""
    commands = get_commands(package_manager)
    steps = [
        ("Navigate to your project folder:", f"cd {answers.project_name}"),
        ("Install dependencies:", f"{package_manager} install"),
        ("Start your server:", f"{package_manager} start"),
    ]
    if answers.is_typescript:
        steps.append(("For development mode:", " ".join([*commands.run_script, "dev"])))
    return steps


def generate_project(answers: Answers, context: ExecutionContext) -> Path:
    """Generate a project from collected answers.

    Args:
        answers: The completed interactive answers
        context: Working directory, command runner and package manager

    Returns:
        Path to the generated project directory
    """
    return ProjectGenerator(answers, context).generate()
