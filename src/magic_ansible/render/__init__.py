"""
Template rendering for generated modules and integration tests.

Templates are Jinja2 files under a template directory (the package ships
a default set, see magic_ansible.config.BUILTIN_TEMPLATE_DIR).
"""

from magic_ansible.render.filters import FILTERS, GLOBALS
from magic_ansible.render.generator import Generator, create_environment

__all__ = ["FILTERS", "GLOBALS", "Generator", "create_environment"]
