"""Утилиты для генератора"""

from .identifiers import capitalize_first, clean_identifier

__all__ = [
    "capitalize_first",
    "clean_identifier",
]
