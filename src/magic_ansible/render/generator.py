"""
Writing generated modules and integration tests to a collection tree.

Layout under the output directory:

    plugins/modules/<module>.py
    tests/integration/targets/<module>/aliases
    tests/integration/targets/<module>/defaults/main.yml
    tests/integration/targets/<module>/meta/main.yml
    tests/integration/targets/<module>/tasks/autogen.yml

Each file comes from the template of the same relative path (plus
``.j2``) in the template directory.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib

import jinja2 as _jinja2

import magic_ansible.ansible as ansible
import magic_ansible.constants as constants
import magic_ansible.errors as errors
import magic_ansible.render.filters as filters

_logger = _logging.getLogger(__name__)

MODULE_TEMPLATE = "plugins/module.py.j2"
TEMPLATE_SUFFIX = ".j2"


def create_environment(template_dir: _pathlib.Path) -> _jinja2.Environment:
    """Jinja2 environment rooted at ``template_dir`` with our filters installed."""
    environment = _jinja2.Environment(
        loader=_jinja2.FileSystemLoader(str(template_dir)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=_jinja2.StrictUndefined,
    )
    environment.filters.update(filters.FILTERS)
    environment.globals.update(filters.GLOBALS)
    return environment


class Generator:
    """
    Renders modules and their tests into an output directory.

    Args:
        template_dir: Root of the template tree.
        output_dir: Root of the collection to write into.
        overwrite: Replace existing files instead of failing.
    """

    def __init__(
        self,
        template_dir: _pathlib.Path,
        output_dir: _pathlib.Path,
        *,
        overwrite: bool = False,
    ) -> None:
        self.template_dir = template_dir.resolve()
        self.output_dir = output_dir.resolve()
        self.overwrite = overwrite
        self.module_directory = self.output_dir.joinpath(*constants.MODULE_DIRECTORY)
        self.integration_test_directory = self.output_dir.joinpath(
            *constants.INTEGRATION_TEST_DIRECTORY
        )
        self._environment = create_environment(self.template_dir)

    def generate_code(self, module: ansible.Module) -> _pathlib.Path:
        """
        Write ``plugins/modules/<module>.py``.

        Raises:
            GenerationError: If the file exists and overwrite is off, or if
                rendering or writing fails.
        """
        _logger.info("generating code for resource: %s", module.name)
        path = self.module_directory / f"{module.name}.py"
        self._write(path, MODULE_TEMPLATE, module)
        return path

    def generate_tests(self, module: ansible.Module) -> list[_pathlib.Path]:
        """
        Write the integration test target for a module.

        Raises:
            GenerationError: If a file exists and overwrite is off, or if
                rendering or writing fails.
        """
        _logger.info("generating tests for resource: %s", module.name)
        target = self.integration_test_directory / module.name
        written = []
        for relative in constants.INTEGRATION_TEST_FILES:
            path = target / relative
            template_name = f"tests/integration/{relative}{TEMPLATE_SUFFIX}"
            self._write(path, template_name, module)
            written.append(path)
        return written

    def render(self, template_name: str, module: ansible.Module) -> str:
        """
        Render a template for a module without writing it.

        Raises:
            GenerationError: If the template is missing or fails to render.
        """
        try:
            template = self._environment.get_template(template_name)
            return template.render(module=module, resource=module.resource, product=module.product)
        except (_jinja2.TemplateError, UnicodeDecodeError) as e:
            raise errors.GenerationError(
                f"error rendering {template_name} for {module.name}: {e}"
            ) from e

    def _write(self, path: _pathlib.Path, template_name: str, module: ansible.Module) -> None:
        _logger.debug("writing file: %s", path)
        if path.exists():
            if not self.overwrite:
                raise errors.GenerationError(f"file already exists: {path}")
            _logger.warning("overwriting file: %s", path)

        contents = self.render(template_name, module)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")
        except OSError as e:
            raise errors.GenerationError(f"error writing {path}: {e}") from e
