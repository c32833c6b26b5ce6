"""HTTP operation settings used by the generated module at runtime."""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging

import magic_ansible.constants as constants
import magic_ansible.schema.types as schema_types

_logger = _logging.getLogger(__name__)


def collapse_braces(template: str) -> str:
    """Turn magic-modules ``{{field}}`` placeholders into ``{field}``."""
    return template.replace("{{", "{").replace("}}", "}")


@_dataclasses.dataclass
class OperationConfig:
    """How to call one CRUD operation."""

    uri: str
    verb: str
    timeout_minutes: int = 0
    async_uri: str = ""


@_dataclasses.dataclass
class AsyncOps:
    """Polling settings for resources backed by long-running operations."""

    base_url: str
    actions: list[str]
    timeouts: dict[str, int]
    """Seconds allowed per action."""

    @classmethod
    def build(cls, async_: schema_types.Async, timeouts: schema_types.Timeouts) -> AsyncOps:
        return cls(
            base_url=collapse_braces(async_.operation.base_url),
            actions=[action.lower() for action in async_.actions],
            timeouts={
                "create": timeouts.insert_minutes * 60,
                "update": timeouts.update_minutes * 60,
                "delete": timeouts.delete_minutes * 60,
            },
        )


def build_operations(resource: schema_types.Resource) -> dict[str, OperationConfig]:
    """
    Build read/create/update/delete settings for a resource.

    Verbs fall back to GET/POST/PUT/DELETE. Operations listed as async
    actions get the operation polling URI.
    """
    timeouts = resource.timeouts

    def verb(declared: str, operation: str) -> str:
        return declared or constants.DEFAULT_VERBS[operation]

    operations = {
        "read": OperationConfig(
            uri=collapse_braces(resource.self_link_uri()),
            verb=verb(resource.read_verb, "read"),
        ),
        "create": OperationConfig(
            uri=collapse_braces(resource.create_uri()),
            verb=verb(resource.create_verb, "create"),
            timeout_minutes=timeouts.insert_minutes,
        ),
        "update": OperationConfig(
            uri=collapse_braces(resource.update_uri()),
            verb=verb(resource.update_verb, "update"),
            timeout_minutes=timeouts.update_minutes,
        ),
        "delete": OperationConfig(
            uri=collapse_braces(resource.delete_uri()),
            verb=verb(resource.delete_verb, "delete"),
            timeout_minutes=timeouts.delete_minutes,
        ),
    }

    if resource.async_ is not None:
        for action in resource.async_.actions:
            operation = operations.get(action.lower())
            if operation is None:
                _logger.warning("unknown async action %r on %s", action, resource.name)
                continue
            operation.async_uri = collapse_braces(resource.async_.operation.base_url)

    _logger.debug("operation configs for %s: %s", resource.name, operations)
    return operations
