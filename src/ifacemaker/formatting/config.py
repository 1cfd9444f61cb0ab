"""
Configuration for the Go code formatter.
"""

FORMATTER_CONFIG = {
    # Name of a formatter on PATH (e.g. "goimports") that replaces the
    # built-in one. It reads source on stdin and writes the result to stdout.
    "external_command": None,
    "external_args": [],
    "timeout": 30,
}

# Top-level node type -> declaration keyword, used for blank-line placement
DECLARATION_TOKENS = {
    "package_clause": "package",
    "import_declaration": "import",
    "type_declaration": "type",
    "const_declaration": "const",
    "var_declaration": "var",
    "function_declaration": "func",
    "method_declaration": "func",
}

# Interface member node types across tree-sitter-go releases
INTERFACE_METHOD_NODES = ("method_elem", "method_spec")

# Import groups, in output order
IMPORT_GROUPS = {
    "std": 0,
    "third_party": 1,
    "appengine": 2,
    "local": 3,
}

# At most one blank line between top-level items
MAX_NEWLINES = 2
