"""Tests for template engine functionality."""

import pytest

from nodeforge.models import ApiType, ServerVariant
from nodeforge.template_engine import (
    TSCONFIG,
    create_jinja_environment,
    get_server_context,
    get_server_template,
    get_templates_dir,
    render_gitignore,
    render_server,
)


class TestGetTemplatesDir:
    """Tests for get_templates_dir function."""

    def test_templates_dir_exists(self) -> None:
        """Test that templates directory exists."""
        templates_dir = get_templates_dir()
        assert templates_dir.exists()
        assert templates_dir.is_dir()


class TestCreateJinjaEnvironment:
    """Tests for create_jinja_environment function."""

    def test_every_variant_has_a_template(self) -> None:
        """Test that each server variant resolves to a built-in template."""
        templates = create_jinja_environment().list_templates()
        for variant in ServerVariant:
            assert get_server_template(variant) in templates


class TestRenderServer:
    """Tests for render_server."""

    def test_rest_without_cors(self) -> None:
        """Test the plain REST body."""
        content = render_server(create_jinja_environment(), False, ApiType.REST)

        assert "require('express')" in content
        assert "app.get('/'" in content
        assert "Welcome to your REST API!" in content
        assert "process.env.PORT || 3000" in content
        assert "cors" not in content
        assert "ApolloServer" not in content

    def test_rest_with_cors_registers_before_routes(self) -> None:
        """Test that CORS middleware is registered before the root route."""
        content = render_server(create_jinja_environment(), True, ApiType.REST)

        assert "require('cors')" in content
        assert content.index("app.use(cors());") < content.index("app.get('/'")

    @pytest.mark.parametrize("enable_cors", [True, False])
    def test_graphql_structure(self, enable_cors: bool) -> None:
        """Test the GraphQL body with and without CORS."""
        content = render_server(create_jinja_environment(), enable_cors, ApiType.GRAPHQL)

        assert "async function init()" in content
        assert "new ApolloServer" in content
        assert "typeDefs: ''" in content
        assert "resolvers: {}" in content
        assert "await gqlServer.start();" in content
        assert "app.use('/graphql', expressMiddleware(gqlServer));" in content
        assert "Number(process.env.PORT) || 8000" in content
        assert content.rstrip().endswith("init();")
        assert ("app.use(cors());" in content) is enable_cors
        assert "app.get('/'" not in content

    def test_four_distinct_bodies(self) -> None:
        """Test that every combination renders a different body."""
        env = create_jinja_environment()
        bodies = {
            render_server(env, enable_cors, api_type)
            for enable_cors in (True, False)
            for api_type in ApiType
        }
        assert len(bodies) == 4

    def test_trimmed_with_single_newline(self) -> None:
        """Test that rendered content has no surrounding blank lines."""
        content = render_server(create_jinja_environment(), False, ApiType.REST)
        assert content.startswith("const express")
        assert content.endswith(";\n")
        assert not content.endswith("\n\n")


class TestServerContext:
    """Tests for get_server_context."""

    def test_rest_port(self) -> None:
        """REST servers default to port 3000."""
        assert get_server_context(ServerVariant.REST_CORS) == {"port": 3000}

    def test_graphql_port_and_path(self) -> None:
        """GraphQL servers default to port 8000 at /graphql."""
        context = get_server_context(ServerVariant.GRAPHQL)
        assert context["port"] == 8000
        assert context["graphql_path"] == "/graphql"


class TestAuxiliaryTemplates:
    """Tests for .gitignore and tsconfig content."""

    def test_gitignore_entries(self) -> None:
        """Test the three ignored paths."""
        content = render_gitignore(create_jinja_environment())
        assert content.split() == ["node_modules", ".env", "dist"]

    def test_tsconfig_options(self) -> None:
        """Test the fixed compiler options."""
        options = TSCONFIG["compilerOptions"]
        assert options == {
            "target": "ES6",
            "module": "CommonJS",
            "outDir": "./dist",
            "rootDir": "./src",
            "strict": True,
            "esModuleInterop": True,
        }
