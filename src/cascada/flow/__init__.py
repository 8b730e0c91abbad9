"""Dialog stack management."""

from cascada.flow.manager import StackManager

__all__ = ["StackManager"]
