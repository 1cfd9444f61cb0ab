"""
Type reference formatting.

A type expression is reproduced from its literal source text, then rewritten
so that it is correct inside the destination package: types declared in other
input packages get qualified, and qualifiers naming the destination package
itself are dropped.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from tree_sitter import Node

from ifacemaker.schemas import DeclaredType
from .config import (
    ELEMENT_TYPES,
    GENERIC_TYPES,
    POINTER_TYPES,
    TYPENAME_PATTERN,
    destination_qualifier_pattern,
)
from .language_manager import node_text


def base_ident_name(src: bytes, expr: Optional[Node]) -> str:
    """
    Base identifier of a type expression.

    Follows pointer, slice, array, map value, generic and qualified
    expressions down to the identifier. Returns an empty string for types
    without one (functions, channels, literal structs, ...).
    """
    if expr is None:
        return ""
    if expr.type == "type_identifier":
        return node_text(src, expr)
    if expr.type == "qualified_type":
        return node_text(src, expr.child_by_field_name("name"))
    if expr.type in POINTER_TYPES:
        return base_ident_name(src, expr.named_children[0] if expr.named_children else None)
    if expr.type in ELEMENT_TYPES:
        return base_ident_name(src, expr.child_by_field_name("element"))
    if expr.type == "map_type":
        return base_ident_name(src, expr.child_by_field_name("value"))
    if expr.type in GENERIC_TYPES:
        return base_ident_name(src, expr.child_by_field_name("type"))
    return ""


@dataclass(frozen=True)
class TypeRef:
    """
    A type expression split into modifier prefix, base name and generic suffix.

    `matched` is False when the text does not have the simple
    `<prefix><name><generics>` shape (qualified names, arrays, funcs, ...);
    such references can only be rewritten by plain substitution.
    """
    text: str
    base: str
    prefix: str = ""
    generics: str = ""
    matched: bool = False

    @classmethod
    def parse(cls, text: str, base: str) -> "TypeRef":
        match = TYPENAME_PATTERN.match(text)
        if match is None:
            return cls(text=text, base=base)
        return cls(
            text=text,
            base=base,
            prefix=match.group(1) or "",
            generics=match.group(4) or "",
            matched=True,
        )

    def qualified(self, fullname: str) -> str:
        """The reference with its base identifier replaced by `fullname`."""
        if self.matched:
            return f"{self.prefix}{fullname}{self.generics}"
        return self.text.replace(self.base, fullname, 1)


def qualify(ref: TypeRef, dest_package: str, declared_types: Iterable[DeclaredType]) -> str:
    """Qualifies the reference if its base is declared in another package."""
    for declared in declared_types:
        if ref.base == declared.name and dest_package != declared.package:
            return ref.qualified(declared.fullname)
    return ref.text


def strip_destination(text: str, dest_package: str) -> str:
    """Removes `dest_package.` qualifiers; those types are local to the output."""
    if not dest_package:
        return text
    return destination_qualifier_pattern(dest_package).sub(r"\1", text)


def format_type_ref(
    src: bytes,
    expr: Node,
    dest_package: str,
    declared_types: Iterable[DeclaredType],
    text: Optional[str] = None,
) -> str:
    """
    Canonical text of a single type expression for the destination package.

    `text` overrides the literal node text (used for variadic `...T`).
    """
    literal = node_text(src, expr) if text is None else text
    ref = TypeRef.parse(literal, base_ident_name(src, expr))
    qualified = qualify(ref, dest_package, declared_types or ())
    return strip_destination(qualified, dest_package)


def _field_names(src: bytes, field: Node) -> List[str]:
    return [node_text(src, name) for name in field.children_by_field_name("name")]


def _variadic_text(src: bytes, field: Node) -> str:
    """`...T` exactly as written, from the ellipsis to the end of the type."""
    type_node = field.child_by_field_name("type")
    for child in field.children:
        if child.type == "...":
            return src[child.start_byte:type_node.end_byte].decode("utf-8")
    return node_text(src, type_node)


def format_field_list(
    src: bytes,
    field_list: Optional[Node],
    dest_package: str,
    declared_types: Iterable[DeclaredType],
) -> Optional[List[str]]:
    """
    Formats a parameter or result list, one entry per declaration.

    Declarations sharing a type keep their grouping (`"a, b int"`); unnamed
    declarations produce just the type text. Returns None for a missing list.
    """
    if field_list is None:
        return None

    # A bare result type (`func F() int`) is a list of one unnamed field
    if field_list.type != "parameter_list":
        return [format_type_ref(src, field_list, dest_package, declared_types)]

    parts = []
    for field in field_list.named_children:
        if field.type == "parameter_declaration":
            type_text = format_type_ref(src, field.child_by_field_name("type"), dest_package, declared_types)
        elif field.type == "variadic_parameter_declaration":
            type_node = field.child_by_field_name("type")
            type_text = format_type_ref(
                src, type_node, dest_package, declared_types, text=_variadic_text(src, field)
            )
        else:
            continue

        names = _field_names(src, field)
        if names:
            parts.append(f"{', '.join(names)} {type_text}")
        else:
            parts.append(type_text)
    return parts
