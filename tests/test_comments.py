"""Unit tests for doc comment handling."""

import pytest

from ifacemaker.parser.comments import comment_text, doc_lines
from ifacemaker.parser.language_manager import parse_source

pytestmark = pytest.mark.fast


def last_declaration(src: bytes):
    tree = parse_source(src)
    return [n for n in tree.root_node.named_children if n.type != "comment"][-1]


def test_adjacent_comments_form_the_doc():
    src = b"""package main

// First line
// Second line
func F() {}
"""
    assert doc_lines(src, last_declaration(src)) == ["// First line", "// Second line"]


def test_blank_line_detaches_comment():
    src = b"""package main

// Floating

func F() {}
"""
    assert doc_lines(src, last_declaration(src)) == []


def test_blank_line_splits_groups():
    src = b"""package main

// Unrelated

// Doc
func F() {}
"""
    assert doc_lines(src, last_declaration(src)) == ["// Doc"]


def test_trailing_comment_of_previous_code_is_not_doc():
    src = b"""package main

var x = 1 // about x
func F() {}
"""
    assert doc_lines(src, last_declaration(src)) == []


def test_block_comment_doc():
    src = b"""package main

/* Block doc */
func F() {}
"""
    assert doc_lines(src, last_declaration(src)) == ["/* Block doc */"]


def test_comment_text_strips_markers():
    assert comment_text(["// Person contains data.", "//  indented"]) == "Person contains data.\n indented\n"


def test_comment_text_drops_directives():
    assert comment_text(["//go:generate mockgen", "// Person ..."]) == "Person ...\n"


def test_comment_text_collapses_blank_lines():
    text = comment_text(["//", "// First", "//", "//", "// Second", "//"])
    assert text == "First\n\nSecond\n"


def test_comment_text_block_comment():
    assert comment_text(["/*\nLine one\nLine two\n*/"]) == "Line one\nLine two\n"


def test_comment_text_empty():
    assert comment_text([]) == ""
