"""
Ifacemaker Synthesis Module

Builds interface declarations out of parsed Go sources.
"""

from .facade import make, generate_interface
from .emitter import make_interface
from .context import RunContext
from .config import DEFAULT_COMMENT, DEFAULT_IFACE_COMMENT

__all__ = [
    # Main facade
    "make",
    "generate_interface",

    # Emission
    "make_interface",
    "RunContext",

    # Configuration
    "DEFAULT_COMMENT",
    "DEFAULT_IFACE_COMMENT",
]
