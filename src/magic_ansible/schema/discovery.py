"""Finding product and resource files in a magic-modules checkout."""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import pathlib as _pathlib

import magic_ansible.constants as constants

_logger = _logging.getLogger(__name__)


def _matches(name: str, include: _abc.Collection[str]) -> bool:
    if not include:
        return True
    wanted = {item.lower() for item in include}
    return name.lower() in wanted


def discover_products(
    products_dir: _pathlib.Path,
    include: _abc.Collection[str] = (),
) -> list[_pathlib.Path]:
    """
    List ``product.yaml`` files under ``products_dir``, sorted by product.

    Args:
        products_dir: The ``mmv1/products`` directory.
        include: Product directory names to keep (case-insensitive).
            Empty keeps everything.
    """
    if not products_dir.is_dir():
        _logger.warning("products directory not found: %s", products_dir)
        return []

    found = []
    for product_dir in sorted(products_dir.iterdir()):
        product_file = product_dir / constants.PRODUCT_FILE
        if not product_file.is_file():
            continue
        if not _matches(product_dir.name, include):
            continue
        found.append(product_file)

    _logger.debug("found %d product(s) in %s", len(found), products_dir)
    return found


def discover_resources(
    product_file: _pathlib.Path,
    include: _abc.Collection[str] = (),
) -> list[_pathlib.Path]:
    """
    List resource files next to a ``product.yaml``, sorted by name.

    Args:
        product_file: Path of the product definition (or its directory).
        include: Resource names (file stems) to keep (case-insensitive).
            Empty keeps everything.
    """
    product_dir = product_file if product_file.is_dir() else product_file.parent
    return [
        path
        for path in sorted(product_dir.glob(f"*{constants.RESOURCE_SUFFIX}"))
        if path.name != constants.PRODUCT_FILE and _matches(path.stem, include)
    ]
