from typing import Iterator, List

from tree_sitter import Node

from ifacemaker.logging_config import logger
from ifacemaker.schemas import DeclaredType
from .config import DEFAULT_SOURCE_NAME, TYPE_SPEC_NODES
from .language_manager import node_text, package_name, parse_source


def iter_type_specs(declaration: Node) -> Iterator[Node]:
    """
    Yields the type_spec / type_alias nodes of a type declaration.

    Grouped declarations (`type ( A int; B string )`) yield every spec in order.
    Anything other than a type declaration yields nothing.
    """
    if declaration.type != "type_declaration":
        return
    for child in declaration.named_children:
        if child.type in TYPE_SPEC_NODES:
            yield child


def is_grouped(declaration: Node) -> bool:
    """True for a parenthesized type declaration."""
    return any(child.type == "(" for child in declaration.children)


def type_declaration_names(declaration: Node, src: bytes) -> List[str]:
    """All type names declared by a declaration; empty for non-type declarations."""
    names = []
    for spec in iter_type_specs(declaration):
        name = spec.child_by_field_name("name")
        if name is not None:
            names.append(node_text(src, name))
    return names


def type_declaration_name(declaration: Node, src: bytes) -> str:
    """Name of the first type declared by a declaration, or an empty string."""
    names = type_declaration_names(declaration, src)
    return names[0] if names else ""


def scan_declared_types(src: bytes, file_path: str = DEFAULT_SOURCE_NAME) -> List[DeclaredType]:
    """
    Finds every top-level type declaration in a Go source file.

    Raises:
        ParserError: If the source is not valid Go.
    """
    tree = parse_source(src, file_path)
    package = package_name(src, tree)

    declared_types = [
        DeclaredType(name=name, package=package)
        for declaration in tree.root_node.named_children
        for name in type_declaration_names(declaration, src)
    ]
    logger.debug(f"{file_path}: {len(declared_types)} type declarations in package {package}")
    return declared_types
