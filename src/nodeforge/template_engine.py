"""Template engine for rendering generated project files."""

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from nodeforge.models import ApiType, ServerVariant

logger = logging.getLogger(__name__)

REST_DEFAULT_PORT = 3000
GRAPHQL_DEFAULT_PORT = 8000
GRAPHQL_PATH = "/graphql"
BUILD_DIR = "dist"

TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ES6",
        "module": "CommonJS",
        "outDir": f"./{BUILD_DIR}",
        "rootDir": "./src",
        "strict": True,
        "esModuleInterop": True,
    },
}


def get_templates_dir() -> Path:
    """Get the directory containing built-in templates."""
    return Path(__file__).parent / "templates"


def create_jinja_environment() -> Environment:
    """Create a Jinja2 environment with the templates directory."""
    templates_dir = get_templates_dir()
    return Environment(
        loader=FileSystemLoader(templates_dir),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )


def get_server_template(variant: ServerVariant) -> str:
    """Return the template name for a server variant."""
    return f"server/{variant.value}.js.j2"


def get_server_context(variant: ServerVariant) -> dict[str, Any]:
    """Build the values interpolated into a server template."""
    if variant in (ServerVariant.GRAPHQL, ServerVariant.GRAPHQL_CORS):
        return {"port": GRAPHQL_DEFAULT_PORT, "graphql_path": GRAPHQL_PATH}
    return {"port": REST_DEFAULT_PORT}


def render_template(env: Environment, template_name: str, context: dict[str, Any]) -> str:
    """Render a template with the given context."""
    template = env.get_template(template_name)
    return template.render(**context)


def render_server(env: Environment, enable_cors: bool, api_type: ApiType) -> str:
    """Render the entry-point source for a CORS/API combination.

    The result is trimmed and ends with a single newline.
    """
    variant = ServerVariant.select(enable_cors, api_type)
    content = render_template(env, get_server_template(variant), get_server_context(variant))
    logger.debug(f"Rendered server variant {variant.value}")
    return content.strip() + "\n"


def render_gitignore(env: Environment) -> str:
    """Render the .gitignore for a generated project."""
    return render_template(env, "gitignore.j2", {"build_dir": BUILD_DIR})
