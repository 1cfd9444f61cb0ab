"""Unit tests for the embedding graph builder."""

import pytest

from ifacemaker.exceptions import ParserError
from ifacemaker.parser import scan_embedding_graph

pytestmark = pytest.mark.fast


def test_embedding_graph(turing_src):
    graph = scan_embedding_graph(turing_src)

    assert graph["Turing"] == ["Person"]
    assert graph["Person"] == []
    assert graph["SomeType"] == []


def test_qualified_embeddings_keep_local_name():
    src = b"""package main
import "otherpkg"
type MyStruct struct {
    otherpkg.External
    *otherpkg.Pointer
}"""
    graph = scan_embedding_graph(src)
    assert "MyStruct" in graph
    assert sorted(graph["MyStruct"]) == ["External", "Pointer"]


@pytest.mark.parametrize("field", ["Generic[int]", "*Generic[int]"])
def test_generic_embeddings(field):
    src = f"""package main
type Generic[T any] struct{{}}
type MyStruct struct {{
       {field}
}}""".encode()
    graph = scan_embedding_graph(src)
    assert graph["MyStruct"] == ["Generic"]


def test_named_fields_are_not_embeddings():
    src = b"""package main
type Inner struct{}
type Outer struct {
    inner Inner
    Inner
}"""
    assert scan_embedding_graph(src)["Outer"] == ["Inner"]


def test_duplicate_embeddings_are_kept():
    src = b"package main\ntype B struct{}\ntype A struct{B; B}"
    assert scan_embedding_graph(src)["A"] == ["B", "B"]


def test_non_struct_types_have_no_entry():
    graph = scan_embedding_graph(b"package main\ntype Alias int")
    assert len(graph) == 0


def test_invalid_source_raises():
    with pytest.raises(ParserError):
        scan_embedding_graph(b"invalid")
