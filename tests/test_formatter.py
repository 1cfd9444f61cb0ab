"""Tests for the built-in Go formatter and import handling."""

import subprocess

import pytest

from ifacemaker.exceptions import FormatError
from ifacemaker.formatting import GoFormatter, assumed_name, format_code, import_group
from ifacemaker.schemas import FormatOptions


class TestValidation:

    def test_valid_program(self):
        code = 'package main\n\nfunc main() {\n\tprintln("hi")\n}\n'
        assert format_code(code) == code

    def test_invalid_code(self):
        with pytest.raises(FormatError):
            format_code("not a valid go code")

    def test_missing_package_clause(self):
        with pytest.raises(FormatError) as exc_info:
            format_code("type A interface{}\n", options=FormatOptions(fragment=False))
        assert "expected 'package'" in str(exc_info.value)

    def test_invalid_type_name(self):
        with pytest.raises(FormatError):
            format_code("package p\n\ntype 1bad interface {\n}\n")


class TestImports:

    def test_unused_imports_removed(self):
        code = 'package p\n\nimport (\n\t"fmt"\n\t"io"\n)\n\ntype R interface {\n\tRead() io.Reader\n}\n'
        assert format_code(code) == 'package p\n\nimport (\n\t"io"\n)\n\ntype R interface {\n\tRead() io.Reader\n}\n'

    def test_empty_import_declaration_removed(self):
        code = 'package p\nimport (\n"fmt"\n)\n\ntype R interface {\nRead()\n}'
        assert format_code(code) == "package p\n\ntype R interface {\n\tRead()\n}\n"

    def test_single_import_without_parens(self):
        code = 'package p\n\nimport "io"\n\ntype R interface {\n\tRead() io.Reader\n}\n'
        assert format_code(code) == code

    def test_dot_and_blank_imports_kept(self):
        code = 'package p\n\nimport (\n\t. "example.com/mod"\n\t_ "embed"\n)\n\ntype R interface {\n\tRead()\n}\n'
        result = format_code(code)
        assert '\t_ "embed"\n\n\t. "example.com/mod"\n' in result

    def test_aliased_import_used_by_alias(self):
        code = 'package p\n\nimport (\n\tnotmain "fmt"\n)\n\ntype S interface {\n\tStringer() notmain.Stringer\n}\n'
        assert format_code(code) == code

    def test_sorted_and_grouped(self):
        code = (
            'package p\n\nimport (\n'
            '"github.com/b/pkg"\n"os"\n"github.com/a/pkg2"\n"io"\n'
            ')\n\ntype R interface {\n'
            'A(f *os.File, r io.Reader)\nB(x pkg.X, y pkg2.Y)\n'
            '}\n'
        )
        assert format_code(code) == (
            'package p\n\nimport (\n'
            '\t"io"\n\t"os"\n\n\t"github.com/a/pkg2"\n\t"github.com/b/pkg"\n'
            ')\n\ntype R interface {\n'
            '\tA(f *os.File, r io.Reader)\n\tB(x pkg.X, y pkg2.Y)\n'
            '}\n'
        )

    def test_duplicate_imports(self):
        code = 'package p\n\nimport (\n\t"io"\n\t"io"\n)\n\ntype R interface {\n\tRead() io.Reader\n}\n'
        assert format_code(code).count('"io"') == 1

    def test_format_only_keeps_unused(self):
        code = 'package p\n\nimport (\n\t"fmt"\n)\n\ntype R interface {\n\tRead()\n}\n'
        assert format_code(code, options=FormatOptions(format_only=True)) == code

    def test_local_prefix_group(self):
        code = (
            'package p\n\nimport (\n\t"example.com/me/util"\n\t"github.com/x/y"\n)\n\n'
            'type R interface {\n\tA(u util.U, v y.V)\n}\n'
        )
        result = format_code(code, options=FormatOptions(local_prefix="example.com/me"))
        assert '\t"github.com/x/y"\n\n\t"example.com/me/util"\n' in result


class TestInterfaces:

    def test_indentation(self):
        code = "package p\n\ntype I interface {\n  // Foo does foo\n     Foo(a int,   b string) error\n}\n"
        assert format_code(code) == "package p\n\ntype I interface {\n\t// Foo does foo\n\tFoo(a int, b string) error\n}\n"

    def test_single_unnamed_result_unwrapped(self):
        code = "package p\n\ntype I interface {\n\tFoo() (error)\n\tBar() (n int)\n\tBaz() (int, error)\n}\n"
        assert format_code(code) == "package p\n\ntype I interface {\n\tFoo() error\n\tBar() (n int)\n\tBaz() (int, error)\n}\n"

    def test_variadic_parameter(self):
        code = "package p\n\ntype I interface {\n\tLog(format string, args ...interface{})\n}\n"
        assert format_code(code) == code

    def test_block_comment_continuation_reindented(self):
        code = "package p\n\ntype I interface {\n    /* Foo does\n       things */\n    Foo()\n}\n"
        assert format_code(code) == "package p\n\ntype I interface {\n\t/* Foo does\n\t   things */\n\tFoo()\n}\n"

    def test_empty_interface(self):
        assert format_code("package p\n\ntype I interface {\n}\n") == "package p\n\ntype I interface {\n}\n"
        assert format_code("package p\n\ntype I interface{}\n") == "package p\n\ntype I interface{}\n"

    def test_generic_interface(self):
        code = "package p\n\ntype Box[T any] interface {\n\tGet() (T)\n}\n"
        assert format_code(code) == "package p\n\ntype Box[T any] interface {\n\tGet() T\n}\n"

    def test_blank_line_between_groups_kept(self):
        code = "package p\n\ntype I interface {\n\tA()\n\n\n\tB()\n}\n"
        assert format_code(code) == "package p\n\ntype I interface {\n\tA()\n\n\tB()\n}\n"

    def test_space_indent(self):
        code = "package p\n\ntype I interface {\n\tA()\n}\n"
        result = format_code(code, options=FormatOptions(tab_indent=False, tab_width=4))
        assert "\n    A()\n" in result

    def test_comments_dropped(self):
        code = "// header\n\npackage p\n\n// I doc\ntype I interface {\n\t// A doc\n\tA()\n}\n"
        result = format_code(code, options=FormatOptions(comments=False))
        assert result == "package p\n\ntype I interface {\n\tA()\n}\n"


class TestLayout:

    def test_header_comment_and_trailing_whitespace(self):
        code = "// Code generated; DO NOT EDIT.   \n\n\n\npackage p   \n\n\n\ntype I interface {\n}\n\n\n"
        assert format_code(code) == "// Code generated; DO NOT EDIT.\n\npackage p\n\ntype I interface {\n}\n"

    def test_blank_line_after_package(self):
        code = "package p\ntype I interface {\n}"
        assert format_code(code) == "package p\n\ntype I interface {\n}\n"


class TestExternalFormatter:

    def test_missing_command_falls_back(self):
        code = "package p\ntype I interface {\n}"
        result = format_code(code, config={"external_command": "definitely-not-a-formatter-xyz"})
        assert result == "package p\n\ntype I interface {\n}\n"

    def test_external_command_output(self, monkeypatch):
        calls = []

        def fake_run(command, **kwargs):
            calls.append((command, kwargs["input"]))
            return subprocess.CompletedProcess(command, 0, stdout="formatted\n", stderr="")

        monkeypatch.setattr("ifacemaker.formatting.formatter.shutil.which", lambda name: "/usr/bin/" + name)
        monkeypatch.setattr("ifacemaker.formatting.formatter.subprocess.run", fake_run)

        formatter = GoFormatter(config={"external_command": "goimports", "external_args": ["-local", "x"]})
        assert formatter.format("package p") == "formatted\n"
        assert calls == [(["goimports", "-local", "x"], "package p")]

    def test_external_command_failure(self, monkeypatch):
        def fake_run(command, **kwargs):
            return subprocess.CompletedProcess(command, 2, stdout="", stderr="<standard input>:1:1: expected 'package'\n")

        monkeypatch.setattr("ifacemaker.formatting.formatter.shutil.which", lambda name: "/usr/bin/" + name)
        monkeypatch.setattr("ifacemaker.formatting.formatter.subprocess.run", fake_run)

        with pytest.raises(FormatError) as exc_info:
            format_code("bad", config={"external_command": "goimports"})
        assert "expected 'package'" in str(exc_info.value)


@pytest.mark.fast
@pytest.mark.parametrize("path,expected", [
    ("fmt", "fmt"),
    ("net/http", "http"),
    ("gopkg.in/yaml.v2", "yaml"),
    ("github.com/x/go-foo", "foo"),
    ("example.com/mod/v2", "mod"),
    ("github.com/test/footest", "footest"),
])
def test_assumed_name(path, expected):
    assert assumed_name(path) == expected


@pytest.mark.fast
@pytest.mark.parametrize("path,local,expected", [
    ("fmt", None, 0),
    ("net/http", None, 0),
    ("github.com/x/y", None, 1),
    ("appengine/datastore", None, 2),
    ("example.com/me/util", "example.com/me", 3),
    ("example.com/other", "example.com/me", 1),
])
def test_import_group(path, local, expected):
    assert import_group(path, local) == expected
