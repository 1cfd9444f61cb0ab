"""
GoFormatter: canonical layout for generated Go files.

Removes unused imports, sorts the rest into groups and lays out interface
declarations the way gofmt does. Everything else is copied through with
trailing whitespace trimmed. An external tool such as goimports can take over
via FORMATTER_CONFIG["external_command"].
"""

import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from tree_sitter import Node

from ifacemaker.exceptions import FormatError
from ifacemaker.logging_config import logger
from ifacemaker.parser.comments import doc_comments
from ifacemaker.parser.declarations import is_grouped, iter_type_specs
from ifacemaker.parser.language_manager import find_syntax_error, get_parser, node_text
from ifacemaker.schemas import FormatOptions
from .config import DECLARATION_TOKENS, FORMATTER_CONFIG, INTERFACE_METHOD_NODES, MAX_NEWLINES
from .imports import (
    dedupe_imports,
    prune_imports,
    read_import_entries,
    render_import_declaration,
    sort_imports,
    used_package_names,
)


@dataclass
class _Unit:
    """A top-level item of the output: a declaration with its doc, or a loose comment."""
    text: str
    start_row: int
    end_row: int
    token: Optional[str] = None
    has_doc: bool = False


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


class GoFormatter:
    """
    Formats Go source text.

    Features:
    - Syntax validation (FormatError with line and column)
    - Unused import removal, import sorting and grouping
    - gofmt layout for interface declarations
    - Optional external formatter
    """

    def __init__(self, options: Optional[FormatOptions] = None, config: Optional[dict] = None):
        self.options = options or FormatOptions()
        self.config = {**FORMATTER_CONFIG, **(config or {})}
        self.indent = "\t" if self.options.tab_indent else " " * self.options.tab_width

    def format(self, code: str) -> str:
        """
        Formats Go source code.

        Raises:
            FormatError: If the code is not valid Go, or the external formatter fails.
        """
        command = self.config.get("external_command")
        if command:
            if shutil.which(command):
                return self._run_external(command, code)
            logger.warning(f"Formatter '{command}' not found in PATH, using built-in formatter")
        return self._format_builtin(code)

    def _run_external(self, command: str, code: str) -> str:
        full_command = [command] + list(self.config.get("external_args") or [])
        timeout = self.config.get("timeout", 30)

        try:
            result = subprocess.run(
                full_command,
                input=code,
                capture_output=True,
                text=True,
                timeout=timeout
            )
        except subprocess.TimeoutExpired as e:
            raise FormatError(f"Formatter timeout after {timeout}s") from e
        except OSError as e:
            raise FormatError(f"Formatter error: {e}") from e

        if result.returncode != 0:
            error_msg = (result.stderr or result.stdout).strip()
            logger.error(f"Formatter failed: {error_msg}")
            raise FormatError(error_msg)

        logger.debug(f"Formatted code with {command}")
        return result.stdout

    def _format_builtin(self, code: str) -> str:
        src = code.encode("utf-8")
        tree = get_parser().parse(src)

        error = find_syntax_error(src, tree, require_package=not self.options.fragment)
        if error:
            raise FormatError(error)

        root = tree.root_node
        used = used_package_names(src, root)
        units = self._collect_units(src, root, used)
        return self._layout(units)

    # Top-level layout

    def _collect_units(self, src: bytes, root: Node, used) -> List[_Unit]:
        units: List[_Unit] = []
        pending: List[Node] = []

        for child in root.named_children:
            if child.type == "comment":
                pending.append(child)
                continue

            doc = doc_comments(child)
            doc_starts = {comment.start_byte for comment in doc}
            for comment in pending:
                if comment.start_byte not in doc_starts:
                    self._add_comment_unit(src, comment, units)
            pending = []

            text = self._render_declaration(src, child, used)
            if text is None:
                logger.debug(f"Dropped empty {child.type} at line {child.start_point[0] + 1}")
                continue

            if not self.options.comments:
                doc = []
            lines = [node_text(src, comment) for comment in doc]
            lines.append(text)
            units.append(_Unit(
                text="\n".join(lines),
                start_row=doc[0].start_point[0] if doc else child.start_point[0],
                end_row=child.end_point[0],
                token=DECLARATION_TOKENS.get(child.type, child.type),
                has_doc=bool(doc),
            ))

        for comment in pending:
            self._add_comment_unit(src, comment, units)
        return units

    def _add_comment_unit(self, src: bytes, comment: Node, units: List[_Unit]) -> None:
        if not self.options.comments:
            return
        units.append(_Unit(
            text=node_text(src, comment),
            start_row=comment.start_point[0],
            end_row=comment.end_point[0],
        ))

    def _layout(self, units: List[_Unit]) -> str:
        parts: List[str] = []
        previous: Optional[_Unit] = None
        previous_token: Optional[str] = None

        for unit in units:
            if previous is None:
                parts.append(unit.text)
            else:
                gap = unit.start_row - previous.end_row
                if gap == 0 and unit.token is None:
                    # line comment trailing the previous item
                    parts.append(" ")
                else:
                    minimum = 1
                    if unit.token is not None and (unit.token != previous_token or unit.has_doc):
                        minimum = 2
                    parts.append("\n" * min(max(gap, minimum), MAX_NEWLINES))
                parts.append(unit.text)

            previous = unit
            if unit.token is not None:
                previous_token = unit.token

        return self._tidy("".join(parts))

    @staticmethod
    def _tidy(text: str) -> str:
        """Trims trailing whitespace and collapses runs of blank lines."""
        lines: List[str] = []
        for line in text.split("\n"):
            line = line.rstrip()
            if not line and (not lines or not lines[-1]):
                continue
            lines.append(line)
        while lines and not lines[-1]:
            lines.pop()
        return "\n".join(lines) + "\n"

    # Declarations

    def _render_declaration(self, src: bytes, node: Node, used) -> Optional[str]:
        if node.type == "import_declaration":
            return self._render_imports(src, node, used)
        if node.type == "type_declaration":
            return self._render_type_declaration(src, node)
        return node_text(src, node)

    def _render_imports(self, src: bytes, declaration: Node, used) -> Optional[str]:
        entries = read_import_entries(src, declaration, with_comments=self.options.comments)
        if self.options.format_only:
            entries = dedupe_imports(entries)
        else:
            entries = prune_imports(entries, used)
        groups = sort_imports(entries, self.options.local_prefix)
        parenthesized = any(child.type in ("(", "import_spec_list") for child in declaration.children)
        return render_import_declaration(groups, self.indent, parenthesized)

    def _render_type_declaration(self, src: bytes, declaration: Node) -> str:
        specs = list(iter_type_specs(declaration))
        if is_grouped(declaration) or len(specs) != 1 or specs[0].type != "type_spec":
            return node_text(src, declaration)

        spec = specs[0]
        type_node = spec.child_by_field_name("type")
        if type_node is None or type_node.type != "interface_type":
            return node_text(src, declaration)

        name = node_text(src, spec.child_by_field_name("name"))
        type_params = spec.child_by_field_name("type_parameters")
        params = collapse_whitespace(node_text(src, type_params)) if type_params is not None else ""
        return f"type {name}{params} {self._render_interface(src, type_node)}"

    # Interfaces

    def _render_interface(self, src: bytes, interface: Node) -> str:
        members = [
            child for child in interface.named_children
            if child.type != "comment" or self.options.comments
        ]
        if not members:
            multiline = interface.start_point[0] != interface.end_point[0]
            return "interface {\n}" if multiline else "interface{}"

        lines = ["interface {"]
        previous: Optional[Node] = None
        for member in members:
            if member.type == "comment":
                text = self._reindent_comment(node_text(src, member), member.start_point[1])
                if previous is not None and member.start_point[0] == previous.end_point[0]:
                    lines[-1] = f"{lines[-1]} {text}"
                    previous = member
                    continue
            else:
                text = self._render_member(src, member)

            if previous is not None and member.start_point[0] - previous.end_point[0] > 1:
                lines.append("")
            lines.append(f"{self.indent}{text}")
            previous = member

        lines.append("}")
        return "\n".join(lines)

    def _reindent_comment(self, text: str, column: int) -> str:
        """Moves continuation lines of a block comment to the member indentation."""
        lines = text.split("\n")
        for index in range(1, len(lines)):
            line = lines[index]
            lead = len(line) - len(line.lstrip(" \t"))
            lines[index] = self.indent + line[min(lead, column):]
        return "\n".join(lines)

    def _render_member(self, src: bytes, member: Node) -> str:
        if member.type not in INTERFACE_METHOD_NODES:
            return collapse_whitespace(node_text(src, member))

        name = node_text(src, member.child_by_field_name("name"))
        params = self._render_parameters(src, member.child_by_field_name("parameters"))
        result = self._render_result(src, member.child_by_field_name("result"))
        return f"{name}{params} {result}" if result else f"{name}{params}"

    def _render_parameters(self, src: bytes, params: Optional[Node]) -> str:
        if params is None:
            return "()"
        rendered = [
            self._render_parameter(src, param)
            for param in params.named_children
            if param.type in ("parameter_declaration", "variadic_parameter_declaration")
        ]
        return f"({', '.join(rendered)})"

    def _render_parameter(self, src: bytes, param: Node) -> str:
        names = [node_text(src, name) for name in param.children_by_field_name("name")]
        type_text = collapse_whitespace(node_text(src, param.child_by_field_name("type")))
        if param.type == "variadic_parameter_declaration":
            type_text = f"...{type_text}"
        if names:
            return f"{', '.join(names)} {type_text}"
        return type_text

    def _render_result(self, src: bytes, result: Optional[Node]) -> str:
        if result is None:
            return ""
        if result.type != "parameter_list":
            return collapse_whitespace(node_text(src, result))

        fields = [
            param for param in result.named_children
            if param.type in ("parameter_declaration", "variadic_parameter_declaration")
        ]
        # A single unnamed result needs no parentheses
        if len(fields) == 1 and fields[0].type == "parameter_declaration" \
                and fields[0].child_by_field_name("name") is None:
            return collapse_whitespace(node_text(src, fields[0].child_by_field_name("type")))
        return self._render_parameters(src, result)


def format_code(code: str, options: Optional[FormatOptions] = None, config: Optional[dict] = None) -> str:
    """
    Formats generated Go code, removing unused imports.

    Raises:
        FormatError: If the code is not valid Go.
    """
    return GoFormatter(options, config).format(code)
