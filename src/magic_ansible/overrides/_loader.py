"""
Loading of override files.

Overrides live in a directory tree parallel to the magic-modules
products directory:

    <mmv1>/products/<product>/<resource>.yaml
    <overrides>/<product>/<resource>.yaml

Most resources have no override, so a missing file is a silent no-op.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib

import yaml as _yaml

import magic_ansible.errors as errors
import magic_ansible.overrides._merge as merge
import magic_ansible.overrides._nodes as nodes

_logger = _logging.getLogger(__name__)


def override_path_for(
    overrides_dir: _pathlib.Path | str,
    source_file: _pathlib.Path | str,
) -> _pathlib.Path:
    """
    Compute the override file matching a source file.

    Only the last two path segments of the source file are used: the
    parent directory (the product) and the file name (the resource).
    """
    source = _pathlib.Path(source_file)
    return _pathlib.Path(overrides_dir) / source.parent.name / source.name


def load_override(
    path: _pathlib.Path,
    *,
    strict: bool = False,
) -> nodes.Document | None:
    """
    Read and parse an override file.

    Args:
        path: Override file location.
        strict: Raise instead of logging when the file is malformed.

    Returns:
        The parsed Document, or None if the file is absent, unreadable or
        (in lenient mode) malformed.

    Raises:
        OverrideError: If strict is set and the file is not valid UTF-8 or
            not valid YAML.
    """
    label = f"{path.parent.name}/{path.name}"
    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        _logger.debug("no override file found for file: %s", label)
        return None
    except UnicodeDecodeError as e:
        if strict:
            raise errors.OverrideError(path, f"not valid UTF-8: {e}") from e
        _logger.error("error reading override file %s: %s", path, e)
        return None

    try:
        return nodes.compose(content)
    except _yaml.YAMLError as e:
        if strict:
            raise errors.OverrideError(path, f"invalid YAML: {e}") from e
        _logger.error("error parsing override file %s: %s", path, e)
        return None


def apply_overrides(
    base: nodes.Document,
    overrides_dir: _pathlib.Path | str | None,
    source_file: _pathlib.Path | str,
    *,
    strict: bool = False,
) -> bool:
    """
    Merge the override for ``source_file`` (if any) into ``base``.

    Args:
        base: Parsed source document, updated in place.
        overrides_dir: Root of the overrides tree. None disables overrides.
        source_file: Path of the file ``base`` was parsed from.
        strict: Raise OverrideError on malformed override files.

    Returns:
        True if an override was found and merged.
    """
    if overrides_dir is None:
        return False

    path = override_path_for(overrides_dir, source_file)
    override = load_override(path, strict=strict)
    if override is None:
        return False

    _logger.info("applying overrides for file: %s/%s", path.parent.name, path.name)
    merge.merge_nodes(base, override)
    return True
