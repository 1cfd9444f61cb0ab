"""
Ifacemaker - Go interface generator

Reads Go source files and writes an interface declaring the methods of a struct.
"""

__version__ = "1.3.0"

# Core exports
from ifacemaker.synthesis import make, generate_interface, make_interface
from ifacemaker.formatting import format_code
from ifacemaker.schemas import DeclaredType, MakeOptions, Method
from ifacemaker.exceptions import IfacemakerError

__all__ = [
    "__version__",
    "make",
    "generate_interface",
    "make_interface",
    "format_code",
    "DeclaredType",
    "MakeOptions",
    "Method",
    "IfacemakerError",
]
