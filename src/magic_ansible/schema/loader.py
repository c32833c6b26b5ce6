"""
Loading of product and resource definitions.

Every definition goes through the same pipeline:

1. parse the file into a node tree
2. merge the matching override file into the tree, if there is one
3. (resources only) point example templates at our template directory
4. serialize the patched tree and load it into the typed model

The model is built from the re-serialized text, not from the node tree,
so anything the override engine produces is validated exactly like
upstream content.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

import magic_ansible.config as config
import magic_ansible.constants as constants
import magic_ansible.errors as errors
import magic_ansible.overrides as overrides
import magic_ansible.schema.types as types

_logger = _logging.getLogger(__name__)

ModelT = _typing.TypeVar("ModelT", types.Product, types.Resource)


def parse_document(text: str, source: _pathlib.Path | str) -> overrides.Document:
    """
    Parse definition text into a Document.

    An empty file yields a Document holding an empty mapping, so the
    override engine always has something to merge into.

    Raises:
        SchemaLoadError: If the text is not valid YAML.
    """
    try:
        document = overrides.compose(text)
    except _yaml.YAMLError as e:
        raise errors.SchemaLoadError(source, f"invalid YAML: {e}") from e

    if document.root is None:
        document.root = _yaml.MappingNode(tag=overrides.MAP_TAG, value=[])
    return document


def serialize_document(document: overrides.Document) -> str:
    return overrides.serialize(document)


def patch_definition(path: _pathlib.Path, settings: config.Settings) -> overrides.Document:
    """
    Read a product or resource file and run it through the override engine.

    Overrides are applied first. For resource files, example
    ``config_path`` values are then rewritten to
    ``<template_dir>/examples/<example name>.tmpl``, so an override can
    add or rename examples.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        OverrideError: If its override file is malformed and strict
            override handling is enabled.
    """
    document = _read_document(path)
    overrides.apply_overrides(
        document, settings.overrides_dir, path, strict=settings.overrides.strict
    )
    if path.name == constants.PRODUCT_FILE:
        return document

    patched = overrides.patch_example_paths(document, settings.template_dir)
    if patched:
        _logger.debug(
            "patched %d example(s) for resource: %s/%s",
            patched,
            path.parent.name,
            path.stem,
        )
    return document


def load_product(path: _pathlib.Path, settings: config.Settings) -> types.Product:
    """
    Load ``products/<product>/product.yaml``.

    Raises:
        SchemaLoadError: If the file cannot be read, parsed or validated.
        OverrideError: If its override file is malformed and strict
            override handling is enabled.
    """
    product = _build_model(types.Product, patch_definition(path, settings), path)
    _logger.debug("loaded product %s from %s", product.name, path)
    return product


def load_resource(
    path: _pathlib.Path,
    product: types.Product,
    settings: config.Settings,
) -> types.Resource:
    """
    Load ``products/<product>/<Resource>.yaml``.

    Raises:
        SchemaLoadError: If the file cannot be read, parsed or validated.
        OverrideError: If its override file is malformed and strict
            override handling is enabled.
    """
    resource = _build_model(types.Resource, patch_definition(path, settings), path)
    _logger.debug("loaded resource %s.%s from %s", product.name, resource.name, path)
    return resource


def _read_document(path: _pathlib.Path) -> overrides.Document:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise errors.SchemaLoadError(path, f"cannot read file: {e}") from e
    except UnicodeDecodeError as e:
        raise errors.SchemaLoadError(path, f"not valid UTF-8: {e}") from e
    return parse_document(text, path)


def _build_model(
    model: type[ModelT],
    document: overrides.Document,
    path: _pathlib.Path,
) -> ModelT:
    text = serialize_document(document)
    try:
        data = _yaml.safe_load(text)
    except _yaml.YAMLError as e:
        raise errors.SchemaLoadError(path, f"patched document is not loadable: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise errors.SchemaLoadError(
            path, f"expected a mapping at the top level, got {type(data).__name__}"
        )

    try:
        instance = model.model_validate(data)
    except _pydantic.ValidationError as e:
        raise errors.SchemaLoadError(path, str(e)) from e

    instance.source_file = path
    return instance
