"""
Sapling Intermediate Representation (IR) types.

Schema side: declared types, fields, records, unions and modules.
Output side: grammar rules and the compiled Grammar.

All types are re-exported from this package.
"""

# Types must load before schema: the schema's type parser depends on them
from .types import (
    WRAPPER_NAMES,
    ShapeKind,
    TypeRef,
    TypeShape,
    WrapperKind,
)

# Schema
from .schema import (
    Definition,
    FieldSpec,
    GrammarModule,
    LeafMeta,
    ListMeta,
    RecordSpec,
    RepeatMeta,
    UnionSpec,
    VariantSpec,
)

# Rules
from .rules import (
    GRAMMAR_NAME_PATTERN,
    START_RULE,
    Blank,
    Choice,
    FieldRule,
    Grammar,
    Pattern,
    PrecLeft,
    Repeat,
    Repeat1,
    Rule,
    RuleAdapter,
    Seq,
    StringLiteral,
    Symbol,
    optional,
)

__all__ = [
    # Types
    "WRAPPER_NAMES",
    "ShapeKind",
    "TypeRef",
    "TypeShape",
    "WrapperKind",
    # Schema
    "Definition",
    "FieldSpec",
    "GrammarModule",
    "LeafMeta",
    "ListMeta",
    "RecordSpec",
    "RepeatMeta",
    "UnionSpec",
    "VariantSpec",
    # Rules
    "GRAMMAR_NAME_PATTERN",
    "START_RULE",
    "Blank",
    "Choice",
    "FieldRule",
    "Grammar",
    "Pattern",
    "PrecLeft",
    "Repeat",
    "Repeat1",
    "Rule",
    "RuleAdapter",
    "Seq",
    "StringLiteral",
    "Symbol",
    "optional",
]
