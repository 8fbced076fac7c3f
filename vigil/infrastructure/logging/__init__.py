"""Logging adapters.

Usage:
    from vigil.core.container import get_logger
"""

from vigil.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
