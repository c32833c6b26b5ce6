"""
Exception hierarchy for magic-ansible.

Every error raised on purpose by the generator derives from
MagicAnsibleError so the CLI can report a failing resource and move on
to the next one.
"""

import pathlib as _pathlib


class MagicAnsibleError(Exception):
    """Base class for all generator errors."""

    pass


class OverrideError(MagicAnsibleError):
    """An override file exists but could not be parsed (strict mode only)."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in override file {path}: {message}")


class SchemaLoadError(MagicAnsibleError):
    """A product or resource definition could not be loaded."""

    def __init__(self, path: _pathlib.Path | str, message: str) -> None:
        self.path = _pathlib.Path(path)
        super().__init__(f"Error loading {path}: {message}")


class GenerationError(MagicAnsibleError):
    """Rendering or writing a generated file failed."""

    pass
