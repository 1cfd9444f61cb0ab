from typing import List, Optional

import typer

from ifacemaker import __version__
from ifacemaker.cli.config import CLIConfig
from ifacemaker.cli.output import print_code, print_error
from ifacemaker.exceptions import (
    ConfigError,
    FormatError,
    IfacemakerError,
    ParserError,
    SourceReadError,
    TypeNotFoundError,
)
from ifacemaker.formatting import format_code
from ifacemaker.logging_config import logger, setup_logging
from ifacemaker.schemas import MakeOptions
from ifacemaker.sources import expand_patterns, write_output
from ifacemaker.synthesis import DEFAULT_IFACE_COMMENT, make
from ifacemaker.user_config import get_user_config

app = typer.Typer(add_completion=False)

ERROR_CODES = {
    ParserError: "PARSE_ERROR",
    TypeNotFoundError: "TYPE_NOT_FOUND",
    FormatError: "FORMAT_ERROR",
    SourceReadError: "IO_ERROR",
    ConfigError: "CONFIG_ERROR",
}


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """
    Parses the value of a true/false option.

    Accepts `-d false`, `--doc=false` and the short form `-d=false`.
    """
    if value is None:
        return None
    normalized = value.lstrip("=").strip().lower()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    raise typer.BadParameter(f"expected true or false, got {value!r}")


def version_callback(value: bool):
    if value:
        typer.echo(f"ifacemaker v{__version__}")
        raise typer.Exit()


@app.command()
def main(
    files: List[str] = typer.Option(
        ..., "--file", "-f",
        help="Go source file to read, either filename or glob. Repeatable."
    ),
    struct_type: str = typer.Option(
        ..., "--struct", "-s",
        help="Generate an interface for this structure name"
    ),
    iface_name: str = typer.Option(
        ..., "--iface", "-i",
        help="Name of the generated interface"
    ),
    pkg_name: str = typer.Option(
        ..., "--pkg", "-p",
        help="Package name for the generated interface"
    ),
    iface_comment: Optional[str] = typer.Option(
        None, "--iface-comment", "-y",
        help="Comment for the interface, default is '// <iface> ...'"
    ),
    copy_docs: Optional[str] = typer.Option(
        None, "--doc", "-d",
        help="Copy docs from methods (true|false, default true)"
    ),
    copy_type_doc: bool = typer.Option(
        False, "--type-doc", "-D",
        help="Copy type doc from struct"
    ),
    comment: Optional[str] = typer.Option(
        None, "--comment", "-c",
        help="Append comment to top"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o",
        help="Output file name. If not provided, result will be printed to stdout."
    ),
    import_module: str = typer.Option(
        "", "--import-module", "-m",
        help="Fully qualified module import for types of the struct's own package"
    ),
    with_promoted: bool = typer.Option(
        False, "--promoted", "-P",
        help="Include methods promoted from embedded structs"
    ),
    exclude_methods: List[str] = typer.Option(
        [], "--exclude-method", "-e",
        help="Name of a method to leave out. Repeatable."
    ),
    with_not_exported: bool = typer.Option(
        False, "--not-exported", "-N",
        help="Include unexported methods"
    ),
    human: bool = typer.Option(
        False, "--human", "-H",
        help="Enable human mode: highlighted output (also via IFACEMAKER_HUMAN_MODE env var)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log progress to stderr"
    ),
    version: bool = typer.Option(
        False, "--version",
        callback=version_callback, is_eager=True,
        help="Print the version and exit"
    ),
):
    """
    Generate a Go interface from the methods of a struct.
    """
    if human:
        CLIConfig.set_machine_mode(False)
    if verbose:
        setup_logging(level="DEBUG", suppress_console=False)
    elif CLIConfig.is_machine_mode():
        # Machine mode is default - suppress console logging
        setup_logging(suppress_console=True)

    docs_flag = parse_bool(copy_docs)

    try:
        user_config = get_user_config()
        options = MakeOptions(
            files=expand_patterns(files),
            struct_type=struct_type,
            iface_name=iface_name,
            pkg_name=pkg_name,
            comment=comment if comment is not None else user_config.get("defaults.comment", ""),
            iface_comment=iface_comment or DEFAULT_IFACE_COMMENT.format(iface=iface_name),
            import_module=import_module,
            copy_docs=docs_flag if docs_flag is not None else bool(user_config.get("defaults.copy_docs", True)),
            copy_type_doc=copy_type_doc or bool(user_config.get("defaults.copy_type_doc", False)),
            with_promoted=with_promoted or bool(user_config.get("defaults.with_promoted", False)),
            with_not_exported=with_not_exported,
            exclude_methods=exclude_methods,
        )
        formatter_config = user_config.formatter_config()

        result = make(options, formatter=lambda code: format_code(code, config=formatter_config))

        if output:
            write_output(output, result)
        else:
            print_code(result)
    except IfacemakerError as e:
        logger.error(str(e))
        print_error(str(e), code=ERROR_CODES.get(type(e)))
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
