"""Tests for grammar.json output."""

import json
from pathlib import Path

from sapling.core.assembler import compile_grammar
from sapling.core.emit import write_grammar


def test_write_grammar(tmp_path: Path, expression_union) -> None:
    grammar = compile_grammar("calc", [expression_union])
    path = write_grammar(grammar, tmp_path / "grammars")

    assert path == tmp_path / "grammars" / "calc" / "grammar.json"
    text = path.read_text()
    assert text.endswith("}\n")
    assert json.loads(text) == grammar.to_json()


def test_rewrite_is_byte_identical(tmp_path: Path, expression_union) -> None:
    grammar = compile_grammar("calc", [expression_union])
    first = write_grammar(grammar, tmp_path).read_bytes()
    second = write_grammar(compile_grammar("calc", [expression_union]), tmp_path).read_bytes()
    assert first == second


def test_compact_output(tmp_path: Path, expression_union) -> None:
    grammar = compile_grammar("calc", [expression_union])
    text = write_grammar(grammar, tmp_path, indent=None).read_text()
    assert text.count("\n") == 1
