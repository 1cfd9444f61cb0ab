from typing import Callable, List, Optional

from ifacemaker.formatting import format_code
from ifacemaker.logging_config import logger
from .config import COMMENT_PREFIX, DIRECTIVE_COMMENT_PREFIX, DIRECTIVE_PREFIXES

Formatter = Callable[[str], str]


def interface_doc(iface_comment: str) -> str:
    """
    Turns a plain-text interface comment into Go line comments.

    A leading directive such as `go:generate` is written without a space
    after the `//` so the Go toolchain still recognizes it.
    """
    prefix = COMMENT_PREFIX
    if iface_comment.startswith(DIRECTIVE_PREFIXES):
        prefix = DIRECTIVE_COMMENT_PREFIX
    return prefix + iface_comment.replace("\n", "\n" + COMMENT_PREFIX)


def make_interface(
    comment: str,
    pkg_name: str,
    iface_name: str,
    iface_comment: str,
    type_params: str,
    methods: List[str],
    imports: List[str],
    formatter: Optional[Formatter] = None,
) -> str:
    """
    Assembles the Go file declaring the interface and formats it.

    `methods` are ready-made interface member lines (docs and signatures),
    `imports` are import specs as written in the source files. Unused imports
    are removed by the formatter.

    Raises:
        FormatError: If the assembled code is not valid Go.
    """
    output = [
        COMMENT_PREFIX + comment,
        "",
        "package " + pkg_name,
        "import (",
    ]
    output.extend(imports or [])
    output.extend([
        ")",
        "",
    ])
    if iface_comment:
        output.append(interface_doc(iface_comment))
    output.append(f"type {iface_name}{type_params} interface {{")
    output.extend(methods or [])
    output.append("}")

    code = "\n".join(output)
    logger.debug(f"Formatting interface {iface_name} ({len(code)} bytes)")
    return (formatter or format_code)(code)
