"""
The Ansible module generated for one resource.

Module gathers everything the module template needs: options,
documentation blocks, the argument spec and the HTTP operation settings,
plus helpers over the resource's properties.
"""

from __future__ import annotations

import logging as _logging

import magic_ansible.ansible.argspec as argspec
import magic_ansible.ansible.documentation as documentation
import magic_ansible.ansible.examples as examples
import magic_ansible.ansible.naming as naming
import magic_ansible.ansible.operations as operations
import magic_ansible.ansible.options as options_mod
import magic_ansible.ansible.returns as returns
import magic_ansible.schema.types as schema_types

_logger = _logging.getLogger(__name__)


def module_name(product: schema_types.Product, resource: schema_types.Resource) -> str:
    """``gcp_<product>_<resource>`` in snake case."""
    return f"gcp_{naming.underscore(product.directory_name)}_{naming.underscore(resource.file_name)}"


def sort_properties(properties: list[schema_types.Property]) -> list[schema_types.Property]:
    return sorted(properties, key=lambda prop: prop.name)


class Module:
    """
    A generated Ansible module.

    Attributes:
        name: Module name, also the generated file name without ``.py``.
        product: Product the resource belongs to.
        resource: Source resource definition.
        options: Top-level options keyed by Ansible name.
        documentation: DOCUMENTATION block.
        returns: RETURN block.
        examples: EXAMPLES block.
        argument_spec: Argument spec for AnsibleModule.
        operations: CRUD operation settings keyed by operation name.
        async_ops: Long-running operation settings, None if synchronous.
    """

    def __init__(self, product: schema_types.Product, resource: schema_types.Resource) -> None:
        self.name = module_name(product, resource)
        self.product = product
        self.resource = resource
        self.options = options_mod.build_options(resource)
        self.examples = examples.ExampleBlock(list(resource.examples))

        _logger.info("creating return block for %s", self.name)
        self.returns = returns.ReturnBlock.build(resource)

        _logger.info("creating documentation for %s", self.name)
        self.documentation = documentation.Documentation.build(
            self.name, product, resource, self.options
        )

        _logger.info("creating argument spec for %s", self.name)
        self.argument_spec = argspec.ArgumentSpec.from_options(self.options)

        self.operations = operations.build_operations(resource)
        self.async_ops = (
            operations.AsyncOps.build(resource.async_, resource.timeouts)
            if resource.async_ is not None
            else None
        )

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Module({self.name!r})"

    # =========================================================================
    # Naming
    # =========================================================================

    @property
    def parent_name(self) -> str:
        return self.product.directory_name

    @property
    def parent_class(self) -> str:
        return naming.camelize(self.product.name, "upper")

    @property
    def kind(self) -> str:
        """API kind string, e.g. ``filestore#instance``."""
        return f"{self.product.directory_name}#{naming.camelize(self.resource.name, 'lower')}"

    # =========================================================================
    # Versions and scopes
    # =========================================================================

    @property
    def min_version(self) -> str:
        if self.resource.min_version:
            return self.resource.min_version
        lowest = self.product.lowest_version()
        return lowest.name if lowest is not None else ""

    @property
    def base_url(self) -> str:
        """Product base URL for the resource's minimum version ("" if unknown)."""
        version = self.product.version(self.min_version)
        return version.base_url if version is not None else ""

    @property
    def scopes(self) -> list[str]:
        return list(self.product.scopes)

    @property
    def custom_code(self) -> dict:
        return self.resource.custom_code

    # =========================================================================
    # Properties
    # =========================================================================

    def all_user_properties(self) -> list[schema_types.Property]:
        return sort_properties(self.resource.all_user_properties())

    def gettable_properties(self) -> list[schema_types.Property]:
        return sort_properties(self.resource.gettable_properties())

    def settable_properties(self) -> list[schema_types.Property]:
        return sort_properties(self.resource.settable_properties())

    def url_param_only_properties(self) -> list[schema_types.Property]:
        return sort_properties(self.resource.url_param_only_properties())

    def flattened_body_properties(self) -> dict[str, list[schema_types.Property]]:
        """
        Request body properties grouped by the object that holds them.

        The root level is keyed by ``""``. Nested objects are keyed by the
        PascalCase path of their property names, e.g. ``ConfigGithub``;
        arrays of objects drop a plural ``s`` from the array name.
        """
        body = self.resource.gettable_properties()
        result: dict[str, list[schema_types.Property]] = {}
        if body:
            result[""] = list(body)
        self._flatten(sort_properties(body), "", result)
        return result

    def _flatten(
        self,
        properties: list[schema_types.Property],
        parent_path: str,
        result: dict[str, list[schema_types.Property]],
    ) -> None:
        for prop in properties:
            if prop.is_a("NestedObject") and prop.properties:
                path = parent_path + naming.camelize(prop.name, "upper")
                result[path] = list(prop.properties)
                self._flatten(prop.properties, path, result)
            elif prop.is_a("Array") and prop.elements_are("NestedObject"):
                item_properties = prop.nested_properties
                if not item_properties:
                    continue
                item_name = prop.name
                if item_name.endswith("s") and naming.plural(item_name[:-1]) == item_name:
                    item_name = item_name[:-1]
                path = parent_path + naming.camelize(item_name, "upper")
                if path not in result:
                    flat = [p for p in item_properties if not p.is_a("NestedObject")]
                    if flat:
                        result[path] = flat
                self._flatten(item_properties, path, result)
