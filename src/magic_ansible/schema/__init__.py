"""
magic-modules definitions as typed objects.

Product and resource YAML files are patched by the override engine and
then validated into pydantic models.
"""

from magic_ansible.schema.discovery import discover_products, discover_resources
from magic_ansible.schema.loader import (
    load_product,
    load_resource,
    parse_document,
    patch_definition,
    serialize_document,
)
from magic_ansible.schema.types import (
    Async,
    AsyncOperation,
    Example,
    Product,
    ProductVersion,
    Property,
    References,
    Resource,
    Timeouts,
)

__all__ = [
    "Async",
    "AsyncOperation",
    "Example",
    "Product",
    "ProductVersion",
    "Property",
    "References",
    "Resource",
    "Timeouts",
    "discover_products",
    "discover_resources",
    "load_product",
    "load_resource",
    "parse_document",
    "patch_definition",
    "serialize_document",
]
