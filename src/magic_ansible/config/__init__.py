"""
Configuration module for magic-ansible.

Uses pydantic-settings for environment variable and config file loading.
"""

from magic_ansible.config.settings import BUILTIN_TEMPLATE_DIR, Settings
from magic_ansible.config.sources import ConfigFileError

__all__ = ["BUILTIN_TEMPLATE_DIR", "ConfigFileError", "Settings"]
