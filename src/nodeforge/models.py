"""Configuration models for nodeforge."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Language(StrEnum):
    """Source language of the generated server."""

    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"


class ApiType(StrEnum):
    """Style of API the generated server exposes."""

    REST = "REST"
    GRAPHQL = "GraphQL"


class PackageManager(StrEnum):
    """Node package manager used to initialize and resolve the project."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


class ServerVariant(StrEnum):
    """One of the four entry-point bodies, keyed by API type and CORS."""

    REST = "rest"
    REST_CORS = "rest_cors"
    GRAPHQL = "graphql"
    GRAPHQL_CORS = "graphql_cors"

    @classmethod
    def select(cls, enable_cors: bool, api_type: ApiType) -> "ServerVariant":
        """Pick the variant for a CORS/API combination."""
        if api_type == ApiType.GRAPHQL:
            return cls.GRAPHQL_CORS if enable_cors else cls.GRAPHQL
        return cls.REST_CORS if enable_cors else cls.REST


class Answers(BaseModel):
    """Answers collected from the interactive session."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field("server", min_length=1, description="Project directory name")
    language: Language = Field(Language.JAVASCRIPT, description="Source language")
    add_gitignore: bool = Field(True, description="Whether to write a .gitignore")
    enable_cors: bool = Field(True, description="Whether to register CORS middleware")
    api_type: ApiType = Field(ApiType.REST, description="REST or GraphQL")

    @property
    def is_typescript(self) -> bool:
        return self.language == Language.TYPESCRIPT

    @property
    def entry_point(self) -> str:
        """Relative path of the generated server source file."""
        return "src/index.ts" if self.is_typescript else "src/index.js"

    @property
    def server_variant(self) -> ServerVariant:
        return ServerVariant.select(self.enable_cors, self.api_type)


class DependencySet(BaseModel):
    """Runtime and development packages to add to the manifest."""

    model_config = ConfigDict(frozen=True)

    runtime: list[str] = Field(default_factory=list, description="Runtime dependencies")
    dev: list[str] = Field(default_factory=list, description="Development dependencies")
