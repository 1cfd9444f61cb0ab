from typing import Iterator, Optional

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

from ifacemaker.exceptions import ParserError
from ifacemaker.logging_config import logger
from .config import DEFAULT_SOURCE_NAME, TOP_LEVEL_DECLARATIONS

# Loaded once; tree-sitter languages are immutable and safe to share
GO_LANGUAGE = Language(tsgo.language())

_parser: Optional[Parser] = None


def get_parser() -> Parser:
    """
    Returns the shared Go parser, creating it on first use.
    """
    global _parser
    if _parser is None:
        parser = Parser()
        parser.language = GO_LANGUAGE
        _parser = parser
        logger.debug("Initialized Go parser")
    return _parser


def node_text(src: bytes, node: Node) -> str:
    """Literal source text covered by a node."""
    return src[node.start_byte:node.end_byte].decode("utf-8")


def iter_errors(node: Node) -> Iterator[Node]:
    """Yields ERROR and MISSING nodes in document order."""
    if node.type == "ERROR" or node.is_missing:
        yield node
        return
    if not node.has_error:
        return
    for child in node.children:
        yield from iter_errors(child)


def describe_error(src: bytes, node: Node) -> str:
    """Human readable `line:col: message` for an ERROR or MISSING node."""
    row, col = node.start_point[0] + 1, node.start_point[1] + 1
    if node.is_missing:
        return f"{row}:{col}: expected {node.type!r}"
    snippet = node_text(src, node).splitlines()
    found = snippet[0][:20] if snippet else ""
    return f"{row}:{col}: unexpected {found!r}"


def find_syntax_error(src: bytes, tree: Tree, require_package: bool = True) -> Optional[str]:
    """
    Returns a description of the first syntax error in the tree, or None.

    Besides tree-sitter ERROR/MISSING nodes this rejects what the Go compiler
    rejects but the grammar tolerates: files without a package clause and
    statements at the top level.
    """
    root = tree.root_node
    for error in iter_errors(root):
        return describe_error(src, error)

    declarations = [child for child in root.named_children if child.type != "comment"]
    if require_package and (not declarations or declarations[0].type != "package_clause"):
        return "1:1: expected 'package', found " + (
            repr((node_text(src, declarations[0]).split() or [""])[0]) if declarations else "EOF"
        )

    for child in declarations:
        if child.type not in TOP_LEVEL_DECLARATIONS:
            row, col = child.start_point[0] + 1, child.start_point[1] + 1
            return f"{row}:{col}: non-declaration statement outside function body"
    return None


def parse_source(src: bytes, file_path: str = DEFAULT_SOURCE_NAME) -> Tree:
    """
    Parses Go source code.

    Raises:
        ParserError: If the source is not valid UTF-8 or not syntactically valid Go.
    """
    try:
        src.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParserError(file_path, f"illegal UTF-8 encoding at byte {e.start}") from e

    tree = get_parser().parse(src)
    error = find_syntax_error(src, tree)
    if error:
        raise ParserError(file_path, error)
    return tree


def package_name(src: bytes, tree: Tree) -> str:
    """Name from the file's package clause."""
    for child in tree.root_node.named_children:
        if child.type == "package_clause":
            for ident in child.named_children:
                if ident.type == "package_identifier":
                    return node_text(src, ident)
    return ""
