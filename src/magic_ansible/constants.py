"""
Shared constants for magic-ansible.

This module provides a single source of truth for values that are used
across multiple modules.
"""

# Override merge
IDENTIFYING_KEYS: tuple[str, ...] = ("name", "id")
"""Fields used, in priority order, to match mapping items inside sequences."""

DROP_MARKER_KEY = "_drop"
"""Field on an override list item that removes the matched base item."""

DROP_MARKER_VALUE = "true"
"""Scalar text that activates the drop marker."""

# Example patching
EXAMPLES_KEY = "examples"
EXAMPLE_CONFIG_PATH_KEY = "config_path"
EXAMPLE_TEMPLATE_SUFFIX = ".tmpl"

# Documentation formatting
MAX_DESCRIPTION_LENGTH = 140
"""Description strings longer than this are emitted in folded style."""

NO_DESCRIPTION = "No description available."

IMMUTABLE_NOTE = (
    "This property is immutable, to change it, you must delete and recreate the resource."
)

STANDARD_MODULE_REQUIREMENTS: tuple[str, ...] = (
    "python >= 3.8",
    "requests >= 2.18.4",
    "google-auth >= 1.3.0",
)

STANDARD_AUTH_NOTES: tuple[str, ...] = (
    "For authentication, you can set service_account_file using the C(GCP_SERVICE_ACCOUNT_FILE) env variable.",
    "For authentication, you can set service_account_contents using the C(GCP_SERVICE_ACCOUNT_CONTENTS) env variable.",
    "For authentication, you can set service_account_email using the C(GCP_SERVICE_ACCOUNT_EMAIL) env variable.",
    "For authentication, you can set access_token using the C(GCP_ACCESS_TOKEN) env variable.",
    "For authentication, you can set auth_kind using the C(GCP_AUTH_KIND) env variable.",
    "For authentication, you can set scopes using the C(GCP_SCOPES) env variable.",
    "Environment variables values will only be used if the playbook values are not set.",
    "The I(service_account_email) and I(service_account_file) options are mutually exclusive.",
)

EXAMPLE_SEPARATOR = "#" * 80 + "\n"
"""Line placed between rendered examples in the EXAMPLES block."""

# Schema
PRODUCT_FILE = "product.yaml"
RESOURCE_SUFFIX = ".yaml"

VERSION_ORDER: tuple[str, ...] = ("ga", "beta", "alpha")
"""API versions from most to least stable."""

# Operations
DEFAULT_TIMEOUT_MINUTES = 20
"""Timeout used by magic-modules when a resource does not declare one."""

DEFAULT_VERBS: dict[str, str] = {
    "read": "GET",
    "create": "POST",
    "update": "PUT",
    "delete": "DELETE",
}

# Output layout
MODULE_DIRECTORY = ("plugins", "modules")
INTEGRATION_TEST_DIRECTORY = ("tests", "integration", "targets")
INTEGRATION_TEST_FILES: tuple[str, ...] = (
    "aliases",
    "defaults/main.yml",
    "meta/main.yml",
    "tasks/autogen.yml",
)
