"""
Import block handling: pruning unused imports, sorting and grouping.
"""

import posixpath
from dataclasses import dataclass, field
from typing import List, Optional, Set

from tree_sitter import Node

from ifacemaker.parser.language_manager import node_text
from .config import IMPORT_GROUPS


@dataclass
class ImportEntry:
    """One import spec with the comments that travel with it."""
    path: str
    alias: str = ""
    comments: List[str] = field(default_factory=list)
    trailing: str = ""

    @property
    def unquoted_path(self) -> str:
        return self.path[1:-1]

    @property
    def local_name(self) -> str:
        """Identifier the importing file uses for this package."""
        return self.alias or assumed_name(self.unquoted_path)

    @property
    def always_kept(self) -> bool:
        # Dot and blank imports are not referenced by name
        return self.alias in (".", "_")

    def render(self) -> str:
        text = f"{self.alias} {self.path}" if self.alias else self.path
        if self.trailing:
            text = f"{text} {self.trailing}"
        return text


def _is_identifier_char(char: str) -> bool:
    return char == "_" or char.isalnum()


def assumed_name(import_path: str) -> str:
    """
    Package name Go tooling assumes for an import path.

    The last path element, skipping a trailing major version (`/v2`),
    without a `go-` prefix and cut at the first non-identifier character.
    """
    base = posixpath.basename(import_path)
    if base.startswith("v") and base[1:].isdigit():
        parent = posixpath.dirname(import_path)
        if parent not in ("", "."):
            base = posixpath.basename(parent)
    if base.startswith("go-"):
        base = base[3:]
    for index, char in enumerate(base):
        if not _is_identifier_char(char):
            return base[:index]
    return base


def import_group(import_path: str, local_prefix: Optional[str] = None) -> int:
    """Sort group of an import path: standard library first."""
    if local_prefix:
        for prefix in local_prefix.split(","):
            prefix = prefix.strip()
            if prefix and (import_path.startswith(prefix) or import_path == prefix.rstrip("/")):
                return IMPORT_GROUPS["local"]
    if import_path.startswith("appengine"):
        return IMPORT_GROUPS["appengine"]
    first_element = import_path.split("/", 1)[0]
    if "." in first_element:
        return IMPORT_GROUPS["third_party"]
    return IMPORT_GROUPS["std"]


def used_package_names(src: bytes, root: Node) -> Set[str]:
    """Identifiers used as package qualifiers anywhere outside import declarations."""
    used: Set[str] = set()
    stack = [child for child in root.children if child.type != "import_declaration"]

    while stack:
        node = stack.pop()
        if node.type == "qualified_type":
            package = node.child_by_field_name("package")
            if package is not None:
                used.add(node_text(src, package))
        elif node.type == "selector_expression":
            operand = node.child_by_field_name("operand")
            if operand is not None and operand.type == "identifier":
                used.add(node_text(src, operand))
        stack.extend(node.children)

    return used


def _iter_spec_nodes(declaration: Node):
    """Import specs and comments of a declaration in source order."""
    for child in declaration.named_children:
        if child.type == "import_spec_list":
            for item in child.named_children:
                yield item
        else:
            yield child


def read_import_entries(src: bytes, declaration: Node, with_comments: bool = True) -> List[ImportEntry]:
    """
    Import specs of one declaration.

    A comment on its own line is attached to the following spec; a comment on
    the same line as a spec is kept as its trailing comment. Comments after
    the last spec are dropped with the declaration's closing parenthesis.
    """
    entries: List[ImportEntry] = []
    pending: List[str] = []
    last: Optional[Node] = None

    for node in _iter_spec_nodes(declaration):
        if node.type == "comment":
            if not with_comments:
                continue
            text = node_text(src, node)
            if last is not None and node.start_point[0] == last.end_point[0]:
                entries[-1].trailing = text
            else:
                pending.append(text)
        elif node.type == "import_spec":
            alias = node.child_by_field_name("name")
            entries.append(ImportEntry(
                path=node_text(src, node.child_by_field_name("path")),
                alias=node_text(src, alias) if alias is not None else "",
                comments=pending,
            ))
            pending = []
            last = node

    return entries


def prune_imports(entries: List[ImportEntry], used: Set[str]) -> List[ImportEntry]:
    """Drops unused and duplicate imports, keeping first occurrences."""
    kept: List[ImportEntry] = []
    seen = set()
    for entry in entries:
        key = (entry.alias, entry.path)
        if key in seen:
            continue
        if not entry.always_kept and entry.local_name not in used:
            continue
        seen.add(key)
        kept.append(entry)
    return kept


def dedupe_imports(entries: List[ImportEntry]) -> List[ImportEntry]:
    seen = set()
    unique = []
    for entry in entries:
        key = (entry.alias, entry.path)
        if key not in seen:
            seen.add(key)
            unique.append(entry)
    return unique


def sort_imports(entries: List[ImportEntry], local_prefix: Optional[str] = None) -> List[List[ImportEntry]]:
    """Sorts by (group, path, alias) and splits the result into groups."""
    ordered = sorted(
        entries,
        key=lambda e: (import_group(e.unquoted_path, local_prefix), e.unquoted_path, e.alias),
    )

    groups: List[List[ImportEntry]] = []
    current_group = None
    for entry in ordered:
        group = import_group(entry.unquoted_path, local_prefix)
        if group != current_group:
            groups.append([])
            current_group = group
        groups[-1].append(entry)
    return groups


def render_import_declaration(groups: List[List[ImportEntry]], indent: str, parenthesized: bool) -> Optional[str]:
    """Text of an import declaration, or None when nothing is left to import."""
    if not groups:
        return None

    entries = [entry for group in groups for entry in group]
    if not parenthesized and len(entries) == 1 and not entries[0].comments:
        return f"import {entries[0].render()}"

    lines = ["import ("]
    for index, group in enumerate(groups):
        if index:
            lines.append("")
        for entry in group:
            lines.extend(f"{indent}{comment}" for comment in entry.comments)
            lines.append(f"{indent}{entry.render()}")
    lines.append(")")
    return "\n".join(lines)
