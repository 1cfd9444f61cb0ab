"""
CLI support modules: output mode configuration and machine-aware printing.
"""

from ifacemaker.cli.config import CLIConfig
from ifacemaker.cli.output import echo, print_code, print_error

__all__ = ['CLIConfig', 'echo', 'print_code', 'print_error']
