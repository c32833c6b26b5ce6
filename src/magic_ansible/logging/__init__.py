"""
Logging setup for magic-ansible.

Library modules only create module-level loggers
(``_logging.getLogger(__name__)``); handlers are installed by the CLI
through configure_logging().
"""

from magic_ansible.logging.setup import LOGGER_NAME, configure_logging

__all__ = ["LOGGER_NAME", "configure_logging"]
