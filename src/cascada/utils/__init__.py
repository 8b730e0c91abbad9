"""Utility modules for Cascada."""

from cascada.utils.timex import recognize_date, to_natural_language

__all__ = ["recognize_date", "to_natural_language"]
