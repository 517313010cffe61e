"""
Sapling - tree-sitter grammars from typed schema definitions.

Describe a language's abstract syntax once, as records and tagged unions
whose fields carry parsing annotations, and derive the ``grammar.json``
consumed by tree-sitter from the same source.
"""

from __future__ import annotations

from ._version import __version__
from .core import ir
from .core.assembler import compile_grammar
from .core.errors import ManifestError, SaplingError, SchemaError, TypeSyntaxError
from .core.loader import generate_grammars, load_schema

__all__ = [
    "__version__",
    "ir",
    "compile_grammar",
    "generate_grammars",
    "load_schema",
    "SaplingError",
    "SchemaError",
    "TypeSyntaxError",
    "ManifestError",
]
