"""CLI interface for nodeforge."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from nodeforge.generator import ExecutionContext, StageFailure, build_next_steps, generate_project
from nodeforge.interactive_prompts import PromptError, run_interactive_session
from nodeforge.models import Answers, PackageManager
from nodeforge.package_manager import SubprocessRunner
from nodeforge.user_config import (
    coerce_config_value,
    get_answer_defaults,
    get_config_path,
    get_default_config_template,
    get_package_manager,
    load_user_config,
    save_user_config,
)

app = typer.Typer(
    name="nodeforge",
    help="Interactively scaffold a starter Node.js/Express server project.",
)

config_app = typer.Typer(
    name="config",
    help="Manage user-level default preferences.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    """Run the project generator when no command is given."""
    if ctx.invoked_subcommand is None:
        create_project()


@app.command("create")
def create_project(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output")] = False,
) -> None:
    """Answer a few questions and generate a new server project."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    rprint("[bold green]Welcome to the custom Node.js/Express project generator![/bold green]")

    try:
        user_cfg = load_user_config()
        answers = run_interactive_session(get_answer_defaults(user_cfg), console)
        package_manager = get_package_manager(user_cfg)
        context = ExecutionContext(
            working_dir=Path.cwd(),
            runner=SubprocessRunner(),
            package_manager=package_manager,
            console=console,
        )
        generate_project(answers, context)
    except (PromptError, StageFailure) as e:
        rprint(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    except KeyboardInterrupt:
        rprint("\n[yellow]Aborted.[/yellow]")
        raise typer.Exit(1) from None
    except Exception as e:
        rprint(f"[red]Unexpected error: {e}[/red]")
        if verbose:
            import traceback

            traceback.print_exc()
        raise typer.Exit(1) from None

    _display_next_steps(answers, package_manager)


def _display_next_steps(answers: Answers, package_manager: PackageManager) -> None:
    """Print the instructions for running the generated project."""
    rprint("\n[bold green]Project setup complete![/bold green]")
    rprint("\n[bold cyan]Next Steps:🚀[/bold cyan]")
    for index, (description, command) in enumerate(
        build_next_steps(answers, package_manager), start=1
    ):
        rprint(f"[cyan]{index}. {description}[/cyan]")
        rprint(f"[cyan]   {command}[/cyan]")
    rprint("\n[bold magenta]Happy coding! 🚀[/bold magenta]")


@config_app.command("show")
def config_show_cmd() -> None:
    """Show current user configuration."""
    config_path = get_config_path()
    user_cfg = load_user_config()

    if not user_cfg:
        rprint(f"[yellow]No user config found at {config_path}[/yellow]")
        rprint("[dim]Run 'nodeforge config init' to create one.[/dim]")
        return

    rprint(f"[cyan]Config file:[/cyan] {config_path}\n")
    table = Table(title="User Defaults")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in user_cfg.items():
        table.add_row(key, str(value))

    console.print(table)


@config_app.command("init")
def config_init_cmd(
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing config")] = False,
) -> None:
    """Create a default user configuration file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        rprint(f"[yellow]Config already exists at {config_path}[/yellow]")
        rprint("[dim]Use --force to overwrite.[/dim]")
        raise typer.Exit(1)

    saved_path = save_user_config(get_default_config_template())
    rprint(f"[green]Created default config at {saved_path}[/green]")
    rprint("[dim]Edit this file to customize your defaults.[/dim]")


@config_app.command("set")
def config_set_cmd(
    key: Annotated[str, typer.Argument(help="Config key to set")],
    value: Annotated[str, typer.Argument(help="Value to set")],
) -> None:
    """Set a single configuration value."""
    user_cfg = load_user_config()
    coerced = coerce_config_value(value)
    user_cfg[key] = coerced
    save_user_config(user_cfg)
    rprint(f"[green]Set {key} = {coerced}[/green]")


@config_app.command("path")
def config_path_cmd() -> None:
    """Print the path to the user config file."""
    rprint(str(get_config_path()))


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
