"""
CLI module for magic-ansible.

Provides the command-line interface using Click.
"""

from magic_ansible.cli.main import cli, main

__all__ = ["main", "cli"]
