"""
This facade exposes the public API for the parser module.
"""
from .facade import scan_file
from .declarations import scan_declared_types, type_declaration_name, type_declaration_names
from .embedding import scan_embedding_graph
from .methods import extract_methods, receiver_type_name
from .type_ref import format_field_list, format_type_ref

__all__ = [
    "scan_file",
    "scan_declared_types",
    "type_declaration_name",
    "type_declaration_names",
    "scan_embedding_graph",
    "extract_methods",
    "receiver_type_name",
    "format_field_list",
    "format_type_ref",
]
