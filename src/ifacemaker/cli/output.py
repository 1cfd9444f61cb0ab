"""
CLI Output Utilities

Machine-aware output functions that adapt based on machine mode.
"""

import json
from typing import Optional

import typer
from rich.console import Console as RichConsole
from rich.markup import escape
from rich.syntax import Syntax

from ifacemaker.cli.config import CLIConfig


class MachineAwareConsole:
    """
    A Console wrapper that automatically adapts output based on machine mode.
    """

    def __init__(self, stderr: bool = False):
        self._rich_console = RichConsole(stderr=stderr)

    def print(self, *args, **kwargs):
        """Print that respects machine mode."""
        if CLIConfig.is_machine_mode():
            for arg in args:
                if isinstance(arg, str) and arg:
                    typer.echo(arg, err=self._rich_console.stderr)
        else:
            self._rich_console.print(*args, **kwargs)


# Console instances for rich output (machine-aware)
_console = MachineAwareConsole()
_error_console = MachineAwareConsole(stderr=True)


def echo(message: str = "", **kwargs) -> None:
    """
    Print a message respecting machine mode.
    """
    typer.echo(message, **kwargs)


def print_code(code: str) -> None:
    """
    Print generated Go code.

    Machine mode writes the code verbatim followed by a newline; human mode
    syntax-highlights it.
    """
    if CLIConfig.is_machine_mode():
        echo(code)
    else:
        _console.print(Syntax(code, "go", theme="monokai", line_numbers=False))


def print_error(message: str, code: Optional[str] = None) -> None:
    """
    Print an error message to stderr respecting machine mode.
    In machine mode, outputs a structured JSON error.

    Args:
        message: Error message
        code: Error code (e.g., "TYPE_NOT_FOUND")
    """
    if CLIConfig.is_machine_mode():
        error_obj = {
            "status": "error",
            "message": message
        }
        if code:
            error_obj["code"] = code
        echo(json.dumps(error_obj, separators=(',', ':')), err=True)
    else:
        _error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")

