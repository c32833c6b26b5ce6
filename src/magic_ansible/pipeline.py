"""
End-to-end generation run over a magic-modules checkout.

For every selected product, each resource is loaded, turned into a
Module and rendered. Resources are independent: a MagicAnsibleError on
one is logged and counted and the run moves on to the next.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib

import magic_ansible.ansible as ansible
import magic_ansible.config as config
import magic_ansible.errors as errors
import magic_ansible.render as render
import magic_ansible.schema as schema

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass
class RunSummary:
    """Outcome of a generation run."""

    generated: list[str] = _dataclasses.field(default_factory=list)
    """Names of modules written."""

    failed: list[str] = _dataclasses.field(default_factory=list)
    """``<product>/<file>`` labels of definitions that could not be generated."""

    files: list[_pathlib.Path] = _dataclasses.field(default_factory=list)
    """Every file written."""

    @property
    def ok(self) -> bool:
        return not self.failed


def run(settings: config.Settings) -> RunSummary:
    """
    Generate modules (and tests, unless disabled) for the configured products.

    Raises:
        MagicAnsibleError: If no magic-modules directory is configured.
    """
    products_dir = settings.products_dir
    if products_dir is None:
        raise errors.MagicAnsibleError(
            "no magic-modules directory configured (set paths.mmv1_dir or --mmv1-dir)"
        )

    generator = render.Generator(
        settings.template_dir,
        settings.output_dir,
        overwrite=settings.generation.overwrite,
    )
    summary = RunSummary()

    for product_file in schema.discover_products(products_dir, settings.generation.products):
        try:
            product = schema.load_product(product_file, settings)
        except errors.MagicAnsibleError as e:
            _logger.error("failed to load product %s: %s", product_file.parent.name, e)
            summary.failed.append(f"{product_file.parent.name}/{product_file.name}")
            continue

        resource_files = schema.discover_resources(product_file, settings.generation.resources)
        _logger.info("product %s: %d resource(s)", product.name, len(resource_files))
        for resource_file in resource_files:
            _generate_one(generator, product, resource_file, settings, summary)

    _logger.info(
        "generated %d module(s), %d failure(s)", len(summary.generated), len(summary.failed)
    )
    return summary


def _generate_one(
    generator: render.Generator,
    product: schema.Product,
    resource_file: _pathlib.Path,
    settings: config.Settings,
    summary: RunSummary,
) -> None:
    label = f"{resource_file.parent.name}/{resource_file.name}"
    try:
        resource = schema.load_resource(resource_file, product, settings)
        module = ansible.Module(product, resource)
        summary.files.append(generator.generate_code(module))
        if settings.generation.tests:
            summary.files.extend(generator.generate_tests(module))
    except errors.MagicAnsibleError as e:
        _logger.error("failed to generate %s: %s", label, e)
        summary.failed.append(label)
        return

    summary.generated.append(module.name)
