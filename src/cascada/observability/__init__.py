"""Logging setup for Cascada."""

from cascada.observability.logging import ContextLogger, setup_logging

__all__ = ["ContextLogger", "setup_logging"]
