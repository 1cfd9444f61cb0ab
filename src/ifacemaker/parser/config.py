import re
from functools import lru_cache

# Default name used when a source has no path (mirrors the Go toolchain's "src.go")
DEFAULT_SOURCE_NAME = "src.go"

# Top-level node types a Go source file may contain
TOP_LEVEL_DECLARATIONS = {
    "package_clause",
    "import_declaration",
    "function_declaration",
    "method_declaration",
    "type_declaration",
    "const_declaration",
    "var_declaration",
    "comment",
}

# Children of a type_declaration that declare a name
TYPE_SPEC_NODES = ("type_spec", "type_alias")

# Node types that wrap another type and carry no identifier of their own
POINTER_TYPES = ("pointer_type",)
ELEMENT_TYPES = ("slice_type", "array_type", "implicit_length_array_type")
GENERIC_TYPES = ("generic_type",)

# Matches any of the following to extract the <type>:
#
#   *<type>
#   []<type>
#   []*<type>
#   map[<keyType>]<type>
#   map[<keyType>]*<type>
#
# The prefix is optional so generic types without modifiers also match.
# Group 1 is the prefix, group 3 the base type name, group 4 the generic arguments.
TYPENAME_PATTERN = re.compile(r"^((\[\]|\*|map\[[^\]]+\])*)?(\w+)(\[.+\])?$")

# Receiver base name, with generic parameters stripped (Foo[T] -> Foo)
RECEIVER_PATTERN = re.compile(r"^(\w+)(?:\[.+\])?$")


@lru_cache(maxsize=None)
def destination_qualifier_pattern(pkg_name: str) -> re.Pattern:
    """
    Pattern matching `pkg_name.` at a word boundary, including after
    composite-type punctuation such as `[`, `*` or `(`.
    """
    return re.compile(rf"(^|[^\w]){re.escape(pkg_name)}\.")
