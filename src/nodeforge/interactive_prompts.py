"""Interactive prompts for collecting project answers."""

import logging
import sys
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Confirm, Prompt

from nodeforge.models import Answers, ApiType, Language

logger = logging.getLogger(__name__)


class PromptError(Exception):
    """Error raised when answers cannot be collected interactively."""


def _stdin_is_interactive() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


class PromptCollector:
    """Interactive session asking the five project questions in order."""

    def __init__(
        self,
        defaults: dict[str, Any] | None = None,
        console: Console | None = None,
    ) -> None:
        self.defaults = defaults or {}
        self.console = console or Console()

    def _default(self, name: str) -> Any:
        if name in self.defaults:
            return self.defaults[name]
        return Answers.model_fields[name].default

    def collect(self) -> Answers:
        """Ask every question and return the completed answers.

        Raises:
            PromptError: If stdin is not a terminal, input ends early or an
                answer is invalid.
        """
        if not _stdin_is_interactive():
            raise PromptError("An interactive terminal is required to answer the setup questions")

        try:
            project_name = Prompt.ask(
                "Enter your project name",
                default=str(self._default("project_name")),
                console=self.console,
            )
            language = Prompt.ask(
                "Select your preferred language",
                choices=[lang.value for lang in Language],
                default=str(self._default("language")),
                console=self.console,
            )
            add_gitignore = Confirm.ask(
                "Do you want to add a .gitignore file?",
                default=bool(self._default("add_gitignore")),
                console=self.console,
            )
            enable_cors = Confirm.ask(
                "Do you want to enable CORS?",
                default=bool(self._default("enable_cors")),
                console=self.console,
            )
            api_type = Prompt.ask(
                "Which type of API do you want to use?",
                choices=[api.value for api in ApiType],
                default=str(self._default("api_type")),
                console=self.console,
            )
        except EOFError as e:
            raise PromptError("Input ended before all questions were answered") from e

        # A blank name falls back to the default
        project_name = project_name.strip() or str(self._default("project_name")).strip()

        try:
            answers = Answers(
                project_name=project_name,
                language=Language(language),
                add_gitignore=add_gitignore,
                enable_cors=enable_cors,
                api_type=ApiType(api_type),
            )
        except ValidationError as e:
            fields = ", ".join(str(error["loc"][0]) for error in e.errors())
            raise PromptError(f"Invalid answer for {fields}") from e

        logger.debug(f"Collected answers: {answers.model_dump()}")
        return answers


def run_interactive_session(
    defaults: dict[str, Any] | None = None, console: Console | None = None
) -> Answers:
    """Run an interactive session to collect the project answers."""
    return PromptCollector(defaults, console).collect()
