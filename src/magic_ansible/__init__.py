"""
magic-ansible - Ansible module generator for Google Cloud.

Reads magic-modules resource definitions, applies local overrides and
renders Ansible modules plus their integration test scaffolding.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("magic-ansible")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "magic-ansible Contributors"

from magic_ansible.config import Settings  # noqa: E402
from magic_ansible.errors import (  # noqa: E402
    GenerationError,
    MagicAnsibleError,
    OverrideError,
    SchemaLoadError,
)

__all__ = [
    "__version__",
    "__version_info__",
    "GenerationError",
    "MagicAnsibleError",
    "OverrideError",
    "SchemaLoadError",
    "Settings",
]
