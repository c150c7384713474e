"""
MCP Registry Models

This module defines the records published by external MCP registries.

Registries are loosely specified: most fields are optional, field names come in
both snake_case and camelCase, and unknown keys are preserved so packages can be
passed on verbatim.
"""

from typing import Annotated, Any, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Discriminator, Field, Tag

OFFICIAL_META_KEY = "io.modelcontextprotocol.registry/official"


class RegistryModel(BaseModel):
    """Base for registry records: lenient about names and extra keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)

    def to_dict(self) -> dict[str, Any]:
        """Dump without unset/None values, keeping extra keys."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_registry_dict(self) -> dict[str, Any]:
        """Dump in registry wire format ($schema, _meta, camelCase meta keys)."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class KeyValueInput(RegistryModel):
    """Environment variable or header declaration."""
    name: str | None = None
    description: str | None = None
    value: str | None = None
    default: Any | None = None
    format: str | None = None
    is_required: bool | None = Field(default=None, validation_alias=AliasChoices("is_required", "isRequired"))
    is_secret: bool | None = Field(default=None, validation_alias=AliasChoices("is_secret", "isSecret"))


class NamedArgument(RegistryModel):
    """A `--name value` style argument."""
    type: str = "named"
    name: str | None = None
    value: str | None = None
    value_hint: Any | None = Field(default=None, validation_alias=AliasChoices("value_hint", "valueHint"))
    description: str | None = None
    default: Any | None = None
    format: str | None = None
    is_required: bool | None = Field(default=None, validation_alias=AliasChoices("is_required", "isRequired"))
    is_repeated: bool | None = Field(default=None, validation_alias=AliasChoices("is_repeated", "isRepeated"))

    def extract_value(self) -> str | None:
        return self.value


class PositionalArgument(RegistryModel):
    """A bare positional argument."""
    type: str = "positional"
    value: str | None = None
    value_hint: Any | None = Field(default=None, validation_alias=AliasChoices("value_hint", "valueHint"))
    description: str | None = None
    default: Any | None = None
    format: str | None = None
    is_required: bool | None = Field(default=None, validation_alias=AliasChoices("is_required", "isRequired"))
    is_repeated: bool | None = Field(default=None, validation_alias=AliasChoices("is_repeated", "isRepeated"))

    def extract_value(self) -> str | None:
        return self.value


def _argument_kind(value: Any) -> str:
    """Pick the union member: anything not explicitly named is positional."""
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return "named" if isinstance(kind, str) and kind.strip().lower() == "named" else "positional"


Argument = Annotated[
    Union[
        Annotated[NamedArgument, Tag("named")],
        Annotated[PositionalArgument, Tag("positional")],
    ],
    Discriminator(_argument_kind),
]


class Package(RegistryModel):
    """A locally launched (stdio) server distribution."""
    registry_type: str | None = Field(default=None, validation_alias=AliasChoices("registry_type", "registryType"))
    registry_base_url: str | None = Field(
        default=None, validation_alias=AliasChoices("registry_base_url", "registryBaseUrl")
    )
    identifier: str | None = None
    version: str | None = None
    file_sha256: str | None = Field(default=None, validation_alias=AliasChoices("file_sha256", "fileSha256"))
    runtime_hint: str | None = Field(default=None, validation_alias=AliasChoices("runtime_hint", "runtimeHint"))
    runtime_arguments: list[Argument] | None = Field(
        default=None, validation_alias=AliasChoices("runtime_arguments", "runtimeArguments")
    )
    package_arguments: list[Argument] | None = Field(
        default=None, validation_alias=AliasChoices("package_arguments", "packageArguments")
    )
    environment_variables: list[KeyValueInput] | None = Field(
        default=None, validation_alias=AliasChoices("environment_variables", "environmentVariables")
    )


class Remote(RegistryModel):
    """A network reachable server endpoint."""
    transport_type: str | None = Field(
        default=None, validation_alias=AliasChoices("transport_type", "transportType", "type"),
        serialization_alias="type"
    )
    url: str | None = None
    headers: list[KeyValueInput] | dict[str, str] | None = None


class Repository(RegistryModel):
    url: str | None = None
    source: str | None = None
    id: str | None = None
    subfolder: str | None = None


class OfficialMeta(RegistryModel):
    """Metadata attached by the official registry."""
    id: str | None = Field(
        default=None, validation_alias=AliasChoices("serverId", "server_id", "id"), serialization_alias="serverId"
    )
    version_id: str | None = Field(
        default=None, validation_alias=AliasChoices("versionId", "version_id"), serialization_alias="versionId"
    )
    published_at: str | None = Field(
        default=None, validation_alias=AliasChoices("publishedAt", "published_at"), serialization_alias="publishedAt"
    )
    updated_at: str | None = Field(
        default=None, validation_alias=AliasChoices("updatedAt", "updated_at"), serialization_alias="updatedAt"
    )
    is_latest: bool | None = Field(
        default=None, validation_alias=AliasChoices("isLatest", "is_latest"), serialization_alias="isLatest"
    )


class Meta(RegistryModel):
    official: OfficialMeta | None = Field(
        default=None, validation_alias=AliasChoices(OFFICIAL_META_KEY, "official"), serialization_alias=OFFICIAL_META_KEY
    )


class RegistryServer(RegistryModel):
    """One server description as published by a registry.

    Bare listings and full detail records share this model; packages, remotes and
    meta are simply absent on bare listings.
    """
    schema_uri: str | None = Field(
        default=None, validation_alias=AliasChoices("$schema", "schema_uri"), serialization_alias="$schema"
    )
    name: str | None = None
    description: str | None = None
    status: str | None = None
    version: str | None = None
    website_url: str | None = Field(default=None, validation_alias=AliasChoices("website_url", "websiteUrl"))
    published_at: str | None = Field(default=None, validation_alias=AliasChoices("published_at", "publishedAt"))
    updated_at: str | None = Field(default=None, validation_alias=AliasChoices("updated_at", "updatedAt"))
    repository: Repository | None = None
    packages: list[Package] | None = None
    remotes: list[Remote] | None = None
    meta: Meta | None = Field(default=None, validation_alias=AliasChoices("_meta", "meta"), serialization_alias="_meta")

    @property
    def official(self) -> OfficialMeta | None:
        return self.meta.official if self.meta else None


class RegistryListMetadata(RegistryModel):
    next_cursor: Any | None = None
    count: int | None = None


class RegistryServerList(RegistryModel):
    """A page of a registry listing.

    Servers are kept raw so that one malformed entry does not reject the page.
    """
    servers: list[Any] | None = None
    metadata: RegistryListMetadata | None = None
