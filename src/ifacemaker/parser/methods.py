import json
from typing import Iterable, List, Optional, Set

from tree_sitter import Node, Tree

from ifacemaker.logging_config import logger
from ifacemaker.schemas import DeclaredType, ExtractionResult, Method
from .comments import comment_text, doc_comments, doc_lines
from .config import DEFAULT_SOURCE_NAME, RECEIVER_PATTERN
from .declarations import is_grouped, iter_type_specs
from .language_manager import node_text, parse_source
from .type_ref import format_field_list


def receiver_type_name(node: Node, src: bytes) -> str:
    """
    Base type name of a method's receiver.

    `*Person` and `Box[T]` both resolve to the bare name. Plain functions
    and anything else without a receiver return an empty string.
    """
    if node.type != "method_declaration":
        return ""
    receiver = node.child_by_field_name("receiver")
    if receiver is None:
        return ""

    for param in receiver.named_children:
        if param.type != "parameter_declaration":
            continue
        type_node = param.child_by_field_name("type")
        if type_node is None:
            return ""
        name = node_text(src, type_node)
        if name.startswith("*"):
            name = name[1:]
        match = RECEIVER_PATTERN.match(name)
        return match.group(1) if match else name
    return ""


def is_exported(name: str) -> bool:
    return bool(name) and name[0].isupper()


def go_quote(value: str) -> str:
    """Double-quoted Go string literal."""
    return json.dumps(value, ensure_ascii=False)


def _iter_import_specs(root: Node) -> Iterable[Node]:
    for declaration in root.named_children:
        if declaration.type != "import_declaration":
            continue
        for child in declaration.named_children:
            if child.type == "import_spec":
                yield child
            elif child.type == "import_spec_list":
                for spec in child.named_children:
                    if spec.type == "import_spec":
                        yield spec


def collect_imports(src: bytes, tree: Tree, import_module: str = "") -> List[str]:
    """
    Every import of the file as written, used or not.

    Aliased imports keep their alias (`notmain "fmt"`). When `import_module`
    is given it is dot-imported so unqualified types from the struct's own
    package keep resolving.
    """
    imports = []
    for spec in _iter_import_specs(tree.root_node):
        path = node_text(src, spec.child_by_field_name("path"))
        alias = spec.child_by_field_name("name")
        if alias is not None:
            imports.append(f"{node_text(src, alias)} {path}")
        else:
            imports.append(path)

    if import_module:
        imports.append(f". {go_quote(import_module)}")
    return imports


def struct_type_params(src: bytes, tree: Tree, struct_name: str) -> str:
    """Literal type parameter clause of the struct, e.g. `[T any]`."""
    type_params = ""
    for declaration in tree.root_node.named_children:
        for spec in iter_type_specs(declaration):
            name = spec.child_by_field_name("name")
            if name is None or node_text(src, name) != struct_name:
                continue
            params = spec.child_by_field_name("type_parameters")
            if params is not None:
                type_params = node_text(src, params)
    return type_params


def struct_type_doc(src: bytes, tree: Tree, struct_name: str) -> str:
    """
    Documentation of a type declaration as plain text.

    A spec inside a grouped declaration uses its own doc comment, falling
    back to the one on the group.
    """
    for declaration in tree.root_node.named_children:
        for spec in iter_type_specs(declaration):
            name = spec.child_by_field_name("name")
            if name is None or node_text(src, name) != struct_name:
                continue

            comments = doc_comments(spec) if is_grouped(declaration) else []
            if not comments:
                comments = doc_comments(declaration)
            text = comment_text([node_text(src, c) for c in comments])
            return text[:-1] if text.endswith("\n") else text
    return ""


def method_code(
    src: bytes,
    node: Node,
    pkg_name: str,
    declared_types: List[DeclaredType],
) -> str:
    """Interface member line for a method: `Name(params)` or `Name(params) (results)`."""
    name = node_text(src, node.child_by_field_name("name"))
    params = format_field_list(src, node.child_by_field_name("parameters"), pkg_name, declared_types) or []
    results = format_field_list(src, node.child_by_field_name("result"), pkg_name, declared_types)

    if not results:
        return f"{name}({', '.join(params)})"
    return f"{name}({', '.join(params)}) ({', '.join(results)})"


class _MethodCollector:
    """Builds Method entries for one file, each name at most once."""

    def __init__(self, src: bytes, pkg_name: str, declared_types: List[DeclaredType],
                 copy_docs: bool, with_not_exported: bool):
        self.src = src
        self.pkg_name = pkg_name
        self.declared_types = declared_types
        self.copy_docs = copy_docs
        self.with_not_exported = with_not_exported
        self.seen: Set[str] = set()
        self.methods: List[Method] = []

    def collect(self, node: Node, promoted: bool = False) -> None:
        name = node_text(self.src, node.child_by_field_name("name"))
        if name in self.seen:
            return
        if not self.with_not_exported and not is_exported(name):
            return

        docs = doc_lines(self.src, node) if self.copy_docs else []
        self.methods.append(Method(
            name=name,
            code=method_code(self.src, node, self.pkg_name, self.declared_types),
            docs=docs,
            promoted=promoted,
        ))
        self.seen.add(name)


def extract_methods(
    src: bytes,
    struct_name: str,
    copy_docs: bool = False,
    copy_type_doc: bool = False,
    pkg_name: str = "",
    declared_types: Optional[List[DeclaredType]] = None,
    import_module: str = "",
    with_not_exported: bool = False,
    embedded_closure: Optional[Iterable[str]] = None,
    with_promoted: bool = False,
    file_path: str = DEFAULT_SOURCE_NAME,
) -> ExtractionResult:
    """
    Extracts the interface-relevant parts of one Go source file.

    Methods declared directly on `struct_name` come first, in source order.
    With `with_promoted`, methods of every type in `embedded_closure` follow;
    a name already taken by a direct method is skipped so the outer struct's
    method wins. Imports are returned as written, unused ones included.

    Raises:
        ParserError: If the source is not valid Go.
    """
    tree = parse_source(src, file_path)
    declared_types = declared_types or []
    embedded = set(embedded_closure or ())

    method_nodes = [node for node in tree.root_node.named_children if node.type == "method_declaration"]
    collector = _MethodCollector(src, pkg_name, declared_types, copy_docs, with_not_exported)

    for node in method_nodes:
        if receiver_type_name(node, src) == struct_name:
            collector.collect(node)

    if with_promoted:
        for node in method_nodes:
            if receiver_type_name(node, src) in embedded:
                collector.collect(node, promoted=True)

    result = ExtractionResult(
        methods=collector.methods,
        imports=collect_imports(src, tree, import_module),
        type_doc=struct_type_doc(src, tree, struct_name) if copy_type_doc else "",
        type_params=struct_type_params(src, tree, struct_name),
    )
    logger.debug(f"{file_path}: {len(result.methods)} methods for {struct_name}, {len(result.imports)} imports")
    return result
