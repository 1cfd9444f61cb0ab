"""
Ifacemaker Formatting Module

Turns assembled Go source into its canonical, gofmt-style form.
"""

from .formatter import GoFormatter, format_code
from .imports import assumed_name, import_group
from .config import FORMATTER_CONFIG

__all__ = [
    "GoFormatter",
    "format_code",
    "assumed_name",
    "import_group",
    "FORMATTER_CONFIG",
]
