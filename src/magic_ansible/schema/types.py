"""Typed model of magic-modules product and resource definitions.

Only the fields the generator reads are declared. Everything else in the
YAML is kept as extra data (``extra="allow"``) so templates can still
reach it through ``model_extra``.
"""

from __future__ import annotations

import pathlib as _pathlib
import typing as _typing

import jinja2 as _jinja2
import pydantic as _pydantic

import magic_ansible.constants as constants


class SchemaBase(_pydantic.BaseModel):
    """Base class for all schema types."""

    model_config = _pydantic.ConfigDict(extra="allow", populate_by_name=True)


# =============================================================================
# Properties
# =============================================================================


class Property(SchemaBase):
    """A parameter or property of a resource (mmv1 ``Type``)."""

    name: str = ""
    type: str = "String"
    description: str = ""
    required: bool = False
    output: bool = False
    immutable: bool = False
    url_param_only: bool = False
    sensitive: bool = False
    exclude: bool = False
    default_value: _typing.Any = None
    enum_values: list[_typing.Any] = _pydantic.Field(default_factory=list)

    conflicts: list[str] = _pydantic.Field(default_factory=list)
    at_least_one_of: list[str] = _pydantic.Field(default_factory=list)
    exactly_one_of: list[str] = _pydantic.Field(default_factory=list)
    required_with: list[str] = _pydantic.Field(default_factory=list)

    item_type: Property | None = None
    """Element type when ``type`` is Array."""

    properties: list[Property] = _pydantic.Field(default_factory=list)
    """Fields of a NestedObject."""

    resource: str = ""
    """Referenced resource name when ``type`` is ResourceRef."""

    imports: str = ""
    """Field of the referenced resource used when ``type`` is ResourceRef."""

    def is_a(self, type_name: str) -> bool:
        return self.type == type_name

    def elements_are(self, type_name: str) -> bool:
        return self.item_type is not None and self.item_type.is_a(type_name)

    @property
    def nested_properties(self) -> list[Property]:
        """Fields of this object, or of its elements for arrays of objects."""
        if self.is_a("NestedObject"):
            return self.properties
        if self.is_a("Array") and self.elements_are("NestedObject"):
            return self.item_type.properties  # type: ignore[union-attr]
        return []


# =============================================================================
# Resource metadata
# =============================================================================


class Example(SchemaBase):
    """A usage example whose text comes from a template file."""

    name: str = ""
    primary_resource_id: str = ""
    vars: dict[str, _typing.Any] = _pydantic.Field(default_factory=dict)
    test_env_vars: dict[str, _typing.Any] = _pydantic.Field(default_factory=dict)
    config_path: str = ""

    def render(self) -> str:
        """
        Render the example template at ``config_path``.

        The template sees ``name``, ``primary_resource_id``, ``vars`` and
        ``test_env_vars``.

        Raises:
            FileNotFoundError: If config_path does not point at a file.
            jinja2.TemplateError: If the template is invalid or uses an
                undefined variable.
        """
        path = _pathlib.Path(self.config_path)
        if not self.config_path or not path.is_file():
            raise FileNotFoundError(f"example template not found: {self.config_path!r}")

        environment = _jinja2.Environment(
            loader=_jinja2.FileSystemLoader(str(path.parent)),
            keep_trailing_newline=True,
            undefined=_jinja2.StrictUndefined,
        )
        template = environment.get_template(path.name)
        return template.render(
            name=self.name,
            primary_resource_id=self.primary_resource_id,
            vars=self.vars,
            test_env_vars=self.test_env_vars,
        )


class Timeouts(SchemaBase):
    insert_minutes: int = constants.DEFAULT_TIMEOUT_MINUTES
    update_minutes: int = constants.DEFAULT_TIMEOUT_MINUTES
    delete_minutes: int = constants.DEFAULT_TIMEOUT_MINUTES


class AsyncOperation(SchemaBase):
    base_url: str = ""


class Async(SchemaBase):
    """Long-running operation handling for a resource."""

    type: str = ""
    actions: list[str] = _pydantic.Field(default_factory=lambda: ["create", "delete", "update"])
    operation: AsyncOperation = _pydantic.Field(default_factory=AsyncOperation)


class References(SchemaBase):
    api: str = ""
    guides: dict[str, str] = _pydantic.Field(default_factory=dict)


class ProductVersion(SchemaBase):
    name: str = ""
    base_url: str = ""


# =============================================================================
# Product and resource
# =============================================================================


class Product(SchemaBase):
    """A GCP product (``products/<product>/product.yaml``)."""

    name: str = ""
    display_name: str = ""
    versions: list[ProductVersion] = _pydantic.Field(default_factory=list)
    scopes: list[str] = _pydantic.Field(default_factory=list)

    source_file: _pathlib.Path | None = _pydantic.Field(default=None, exclude=True)
    """File this product was loaded from, if any."""

    @property
    def directory_name(self) -> str:
        """Lowercased name of the product directory (falls back to ``name``)."""
        if self.source_file is not None:
            return self.source_file.parent.name.lower()
        return self.name.lower()

    def lowest_version(self) -> ProductVersion | None:
        """The most stable declared version (ga before beta before alpha)."""
        for wanted in constants.VERSION_ORDER:
            for version in self.versions:
                if version.name == wanted:
                    return version
        return self.versions[0] if self.versions else None

    def version(self, name: str) -> ProductVersion | None:
        for version in self.versions:
            if version.name == name:
                return version
        return None


class Resource(SchemaBase):
    """A resource of a product (``products/<product>/<Resource>.yaml``)."""

    name: str = ""
    description: str = ""
    base_url: str = ""
    self_link: str = ""
    create_url: str = ""
    update_url: str = ""
    delete_url: str = ""
    create_verb: str = ""
    read_verb: str = ""
    update_verb: str = ""
    delete_verb: str = ""
    min_version: str = ""
    parameters: list[Property] = _pydantic.Field(default_factory=list)
    properties: list[Property] = _pydantic.Field(default_factory=list)
    examples: list[Example] = _pydantic.Field(default_factory=list)
    async_: Async | None = _pydantic.Field(default=None, alias="async")
    timeouts: Timeouts = _pydantic.Field(default_factory=Timeouts)
    references: References = _pydantic.Field(default_factory=References)
    custom_code: dict[str, _typing.Any] = _pydantic.Field(default_factory=dict)

    source_file: _pathlib.Path | None = _pydantic.Field(default=None, exclude=True)
    """File this resource was loaded from, if any."""

    @property
    def file_name(self) -> str:
        """Resource file name without extension (falls back to ``name``)."""
        if self.source_file is not None:
            return self.source_file.stem
        return self.name

    def all_user_properties(self) -> list[Property]:
        return [p for p in self.parameters + self.properties if not p.exclude]

    def gettable_properties(self) -> list[Property]:
        return [p for p in self.all_user_properties() if not p.url_param_only]

    def settable_properties(self) -> list[Property]:
        return [
            p for p in self.all_user_properties() if not p.output and not p.url_param_only
        ]

    def url_param_only_properties(self) -> list[Property]:
        return [p for p in self.all_user_properties() if p.url_param_only]

    def self_link_uri(self) -> str:
        if self.self_link:
            return self.self_link
        return f"{self.base_url}/{{{{name}}}}"

    def collection_uri(self) -> str:
        return self.base_url

    def create_uri(self) -> str:
        if self.create_url:
            return self.create_url
        if self.create_verb in ("", "POST"):
            return self.collection_uri()
        return self.self_link_uri()

    def update_uri(self) -> str:
        return self.update_url or self.self_link_uri()

    def delete_uri(self) -> str:
        return self.delete_url or self.self_link_uri()


Property.model_rebuild()
