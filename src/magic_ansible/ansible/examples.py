"""EXAMPLES block of a generated module."""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging

import magic_ansible.constants as constants
import magic_ansible.schema.types as schema_types

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass
class ExampleBlock:
    examples: list[schema_types.Example]

    def to_text(self) -> str:
        """
        Render every example and join them with a line of ``#``.

        Examples whose template file does not exist are skipped with a
        warning; most upstream examples have no Ansible counterpart yet.
        """
        rendered = []
        for example in self.examples:
            try:
                rendered.append(example.render())
            except FileNotFoundError:
                _logger.warning("no template for example %r, skipping", example.name)
        return constants.EXAMPLE_SEPARATOR.join(rendered)
