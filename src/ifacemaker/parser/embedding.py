from typing import Optional

from tree_sitter import Node

from ifacemaker.graph import EmbeddingGraph
from ifacemaker.logging_config import logger
from .config import DEFAULT_SOURCE_NAME, GENERIC_TYPES, POINTER_TYPES
from .declarations import iter_type_specs
from .language_manager import node_text, parse_source


def embedded_struct_name(src: bytes, expr: Optional[Node]) -> str:
    """
    Base struct name of an embedded field's type.

    Unwraps pointers and generic instantiations; for a qualified name only the
    local identifier is kept (`otherpkg.External` -> `External`).
    """
    if expr is None:
        return ""
    if expr.type == "type_identifier":
        return node_text(src, expr)
    if expr.type == "qualified_type":
        return node_text(src, expr.child_by_field_name("name"))
    if expr.type in GENERIC_TYPES:
        return embedded_struct_name(src, expr.child_by_field_name("type"))
    if expr.type in POINTER_TYPES:
        return embedded_struct_name(src, expr.named_children[0] if expr.named_children else None)

    logger.warning(f"Unsupported embedded field type: {expr.type}")
    return ""


def _struct_fields(spec: Node):
    struct = spec.child_by_field_name("type")
    if struct is None or struct.type != "struct_type":
        return None
    for child in struct.named_children:
        if child.type == "field_declaration_list":
            return [f for f in child.named_children if f.type == "field_declaration"]
    return []


def scan_embedding_graph(src: bytes, file_path: str = DEFAULT_SOURCE_NAME) -> EmbeddingGraph:
    """
    Finds the embedding relationships between the structs of a Go source file.

    Raises:
        ParserError: If the source is not valid Go.
    """
    tree = parse_source(src, file_path)
    graph = EmbeddingGraph()

    for declaration in tree.root_node.named_children:
        for spec in iter_type_specs(declaration):
            fields = _struct_fields(spec)
            if fields is None:
                continue

            parent = node_text(src, spec.child_by_field_name("name"))
            graph.add_node(parent)
            for field in fields:
                # Named fields are regular members, not embeddings
                if field.child_by_field_name("name") is not None:
                    continue
                name = embedded_struct_name(src, field.child_by_field_name("type"))
                if name:
                    graph.add_edge(parent, name)

    logger.debug(f"{file_path}: embedding graph {graph!r}")
    return graph
