"""
Doc comment handling for Go declarations.

Go attaches a comment group to a declaration when the group ends on the line
directly above it. A group is a run of comments separated by at most one
newline; comments sharing a line with preceding code belong to that code.
"""

import re
from typing import List

from tree_sitter import Node

from .language_manager import node_text

# Terminator tokens emitted by the grammar between declarations
_TERMINATORS = ("\n", ";")

# "//[a-z0-9]+:[a-z0-9]" (go:generate, nolint:xyz, ...) with no space after //
_DIRECTIVE = re.compile(r"^[a-z0-9]+:[a-z0-9]")
_DIRECTIVE_PREFIXES = ("line ", "extern ", "export ")


def doc_comments(node: Node) -> List[Node]:
    """
    Comment nodes forming the doc group of a declaration, in source order.
    """
    group: List[Node] = []
    next_start = node.start_point[0]
    previous_code = None

    sibling = node.prev_sibling
    while sibling is not None:
        if sibling.type in _TERMINATORS:
            sibling = sibling.prev_sibling
            continue
        if sibling.type != "comment":
            previous_code = sibling
            break
        if sibling.end_point[0] < next_start - 1:
            # blank line ends the group
            break
        group.insert(0, sibling)
        next_start = sibling.start_point[0]
        sibling = sibling.prev_sibling

    # comments trailing code on the same line are that code's line comments
    if previous_code is not None:
        code_row = previous_code.end_point[0]
        while group and group[0].start_point[0] == code_row:
            group.pop(0)

    return group


def doc_lines(src: bytes, node: Node) -> List[str]:
    """Verbatim text of each comment in the declaration's doc group."""
    return [node_text(src, comment) for comment in doc_comments(node)]


def _is_directive(text: str) -> bool:
    if text.startswith(_DIRECTIVE_PREFIXES):
        return True
    return bool(_DIRECTIVE.match(text))


def comment_text(comments: List[str]) -> str:
    """
    Text of a comment group with comment markers removed.

    Line comments lose their `//` and one leading space, directives are
    dropped, trailing whitespace is stripped, leading blank lines are removed
    and runs of blank lines collapse into one. A non-empty result always ends
    in a newline.
    """
    lines: List[str] = []
    for comment in comments:
        if comment.startswith("//"):
            body = comment[2:]
            if body.startswith(" "):
                body = body[1:]
            elif body and _is_directive(body):
                continue
        else:
            body = comment[2:-2]
        lines.extend(line.rstrip() for line in body.split("\n"))

    kept: List[str] = []
    for line in lines:
        if line or (kept and kept[-1]):
            kept.append(line)

    if kept and kept[-1]:
        kept.append("")
    return "\n".join(kept)
