"""
Shared pytest fixtures for magic-ansible tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import textwrap as _textwrap
import typing as _typing

import pytest as _pytest
import yaml as _yaml

import magic_ansible.config as config
import magic_ansible.schema as schema

# =============================================================================
# Sample magic-modules definitions
# =============================================================================

PRODUCT_YAML = _textwrap.dedent(
    """\
    name: Filestore
    display_name: Filestore
    versions:
      - name: ga
        base_url: https://file.googleapis.com/v1/
      - name: beta
        base_url: https://file.googleapis.com/v1beta1/
    scopes:
      - https://www.googleapis.com/auth/cloud-platform
    """
)

RESOURCE_YAML = _textwrap.dedent(
    """\
    name: Instance
    description: A Google Cloud Filestore instance.
    base_url: projects/{{project}}/locations/{{zone}}/instances
    create_url: projects/{{project}}/locations/{{zone}}/instances?instanceId={{name}}
    self_link: projects/{{project}}/locations/{{zone}}/instances/{{name}}
    update_verb: PATCH
    async:
      type: OpAsync
      actions: ['create', 'delete', 'update']
      operation:
        base_url: '{{op_id}}'
    timeouts:
      insert_minutes: 30
      update_minutes: 25
      delete_minutes: 20
    references:
      api: https://cloud.google.com/filestore/docs/reference/rest/v1/projects.locations.instances
      guides:
        Official Documentation: https://cloud.google.com/filestore/docs/creating-instances
    examples:
      - name: filestore_instance_basic
        primary_resource_id: instance
        vars:
          instance_name: test-instance
        config_path: templates/terraform/examples/filestore_instance_basic.tf.tmpl
    parameters:
      - name: zone
        type: String
        required: true
        immutable: true
        url_param_only: true
        description: The name of the Filestore zone of the instance.
      - name: name
        type: String
        required: true
        immutable: true
        url_param_only: true
        description: The resource name of the instance.
    properties:
      - name: description
        type: String
        description: A description of the instance.
      - name: createTime
        type: Time
        output: true
        description: Creation timestamp in RFC3339 text format.
      - name: tier
        type: Enum
        required: true
        immutable: true
        description: The service tier of the instance.
        enum_values:
          - STANDARD
          - PREMIUM
      - name: labels
        type: KeyValueLabels
        description: Resource labels to represent user-provided metadata.
      - name: fileShares
        type: Array
        required: true
        description: File system shares on the instance.
        item_type:
          type: NestedObject
          properties:
            - name: name
              type: String
              required: true
              description: The name of the fileshare (16 characters or less).
            - name: capacityGb
              type: Integer
              required: true
              description: File share capacity in GiB.
      - name: networks
        type: Array
        required: true
        immutable: true
        description: VPC networks to which the instance is connected.
        item_type:
          type: NestedObject
          properties:
            - name: network
              type: String
              required: true
              description: The name of the GCE VPC network to which the instance is connected.
            - name: modes
              type: Array
              required: true
              description: IP versions for which the instance has IP addresses assigned.
              item_type:
                type: Enum
            - name: ipAddresses
              type: Array
              output: true
              description: A list of IPv4 or IPv6 addresses.
              item_type:
                type: String
      - name: performanceConfig
        type: NestedObject
        description: Performance configuration for the instance.
        properties:
          - name: iopsPerTb
            type: Integer
            exactly_one_of:
              - performance_config.0.iops_per_tb
              - performance_config.0.fixed_iops
            description: The instance provisions IOPS per TB of capacity.
          - name: fixedIops
            type: Integer
            exactly_one_of:
              - performance_config.0.iops_per_tb
              - performance_config.0.fixed_iops
            description: The instance provisions a fixed number of IOPS.
    """
)

EXAMPLE_TEMPLATE = _textwrap.dedent(
    """\
    - name: Create an instance
      google.cloud.gcp_filestore_instance:
        name: {{ vars.instance_name }}
        tier: STANDARD
        state: present
    """
)

# Environment keys that should be cleared for isolated tests
ENV_PREFIX = "MAGIC_ANSIBLE_"


# =============================================================================
# Environment
# =============================================================================


@_pytest.fixture
def isolated_env(monkeypatch: _pytest.MonkeyPatch, tmp_path: _pathlib.Path) -> _pathlib.Path:
    """
    Drop MAGIC_ANSIBLE_* variables and run from an empty directory.

    Returns the working directory, so tests can drop a magic-ansible.yaml
    into it.
    """
    for key in list(_os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


@_pytest.fixture(autouse=True)
def _restore_package_logger() -> _typing.Iterator[None]:
    """Undo handlers and levels installed by CLI commands."""
    logger = _logging.getLogger("magic_ansible")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


# =============================================================================
# magic-modules trees
# =============================================================================


@_pytest.fixture
def mmv1_dir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """An mmv1 directory with products/filestore/{product,Instance}.yaml."""
    root = tmp_path / "mmv1"
    product_dir = root / "products" / "filestore"
    product_dir.mkdir(parents=True)
    (product_dir / "product.yaml").write_text(PRODUCT_YAML)
    (product_dir / "Instance.yaml").write_text(RESOURCE_YAML)
    return root


@_pytest.fixture
def overrides_dir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """An empty overrides tree with a filestore product directory."""
    root = tmp_path / "overrides"
    (root / "filestore").mkdir(parents=True)
    return root


@_pytest.fixture
def template_dir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """Copy of the bundled templates plus an example template."""
    root = tmp_path / "templates"
    for source in config.BUILTIN_TEMPLATE_DIR.rglob("*.j2"):
        target = root / source.relative_to(config.BUILTIN_TEMPLATE_DIR)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(source.read_text())
    examples = root / "examples"
    examples.mkdir(parents=True, exist_ok=True)
    (examples / "filestore_instance_basic.tmpl").write_text(EXAMPLE_TEMPLATE)
    return root


@_pytest.fixture
def settings(
    isolated_env: _pathlib.Path,
    mmv1_dir: _pathlib.Path,
    overrides_dir: _pathlib.Path,
    template_dir: _pathlib.Path,
    tmp_path: _pathlib.Path,
) -> config.Settings:
    """Settings pointing at the sample trees, writing into tmp_path/out."""
    return config.Settings(
        paths={
            "mmv1_dir": str(mmv1_dir),
            "overrides_dir": str(overrides_dir),
            "template_dir": str(template_dir),
            "output_dir": str(tmp_path / "out"),
        }
    )


# =============================================================================
# Typed definitions
# =============================================================================


@_pytest.fixture
def product(mmv1_dir: _pathlib.Path) -> schema.Product:
    """The sample product, loaded without overrides."""
    path = mmv1_dir / "products" / "filestore" / "product.yaml"
    model = schema.Product.model_validate(_yaml.safe_load(PRODUCT_YAML))
    model.source_file = path
    return model


@_pytest.fixture
def resource(mmv1_dir: _pathlib.Path) -> schema.Resource:
    """The sample resource, loaded without overrides or example patching."""
    path = mmv1_dir / "products" / "filestore" / "Instance.yaml"
    model = schema.Resource.model_validate(_yaml.safe_load(RESOURCE_YAML))
    model.source_file = path
    return model
