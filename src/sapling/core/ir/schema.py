"""
Schema definitions for Sapling IR.

A schema is a tree of modules. Modules that carry a grammar name hold the
record and tagged-union definitions a grammar is compiled from. Fields
carry the parsing annotations (``leaf``, ``delimited``, ``repeat``);
definitions carry ``prec_left``, ``extra`` and ``language``. Unknown keys
are rejected, so the annotation set is closed.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    StringConstraints,
    field_validator,
    model_validator,
)

from ..errors import TypeSyntaxError
from ..type_parser import parse_type
from .rules import GRAMMAR_NAME_PATTERN
from .types import TypeRef

# Levels are u32 in tree-sitter
PrecedenceLevel = Annotated[StrictInt, Field(ge=0, le=2**32 - 1)]
GrammarName = Annotated[str, StringConstraints(strict=True, pattern=GRAMMAR_NAME_PATTERN)]


class LeafMeta(BaseModel):
    """
    Terminal annotation on a field.

    Attributes:
        pattern: Regular expression the field matches
        text: Literal text the field matches
        transform: Runtime conversion of the matched text; carried, never evaluated

    With neither ``pattern`` nor ``text`` the field is a reference to another
    definition's rule.
    """

    pattern: StrictStr | None = None
    text: StrictStr | None = None
    transform: StrictStr | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def check_single_terminal(self) -> LeafMeta:
        if self.pattern is not None and self.text is not None:
            raise ValueError("leaf takes either 'pattern' or 'text', not both")
        return self


class RepeatMeta(BaseModel):
    """Repetition policy of a list field."""

    non_empty: StrictBool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


class ListMeta(BaseModel):
    """
    Everything the repetition synthesizer needs to know about a list field.

    Attributes:
        delimiter: Field matched between consecutive items
        non_empty: Whether at least one item is required
    """

    delimiter: FieldSpec | None = None
    non_empty: bool = False

    model_config = ConfigDict(frozen=True)


class FieldSpec(BaseModel):
    """
    A single field of a record or variant.

    Attributes:
        name: Field name; None for positional fields
        type: Declared type (text is parsed with the type parser)
        leaf: Terminal annotation
        delimited: Delimiter between items of a list field
        repeat: Repetition policy of a list field
    """

    name: str | None = None
    type: TypeRef
    leaf: LeafMeta | None = None
    delimited: FieldSpec | None = None
    repeat: RepeatMeta | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("type", mode="before")
    @classmethod
    def parse_declared_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                return parse_type(v)
            except TypeSyntaxError as e:
                raise ValueError(str(e)) from e
        return v

    def identity(self, index: int) -> str:
        """Field name, or the positional index for unnamed fields."""
        return self.name if self.name is not None else str(index)

    @property
    def list_meta(self) -> ListMeta:
        return ListMeta(
            delimiter=self.delimited,
            non_empty=self.repeat.non_empty if self.repeat else False,
        )


def _check_fields(fields: list[FieldSpec]) -> list[FieldSpec]:
    named = [f.name for f in fields if f.name is not None]
    if named and len(named) != len(fields):
        raise ValueError("fields must be either all named or all positional")
    duplicates = sorted({n for n in named if named.count(n) > 1})
    if duplicates:
        raise ValueError(f"duplicate field names: {', '.join(duplicates)}")
    return fields


class RecordSpec(BaseModel):
    """
    A record definition: one rule matching its fields in order.

    Attributes:
        name: Definition name, also the rule name
        fields: Fields in declaration order
        prec_left: Left-associative precedence level
        extra: Rule may appear between any two tokens (whitespace, comments)
        language: Marks the root definition of the grammar
    """

    kind: Literal["record"] = "record"
    name: str
    fields: list[FieldSpec] = Field(default_factory=list)
    prec_left: PrecedenceLevel | None = None
    extra: StrictBool = False
    language: StrictBool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("fields")
    @classmethod
    def check_fields(cls, v: list[FieldSpec]) -> list[FieldSpec]:
        return _check_fields(v)


class VariantSpec(BaseModel):
    """One alternative of a tagged union."""

    name: str
    fields: list[FieldSpec] = Field(default_factory=list)
    prec_left: PrecedenceLevel | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("fields")
    @classmethod
    def check_fields(cls, v: list[FieldSpec]) -> list[FieldSpec]:
        return _check_fields(v)


class UnionSpec(BaseModel):
    """
    A tagged union: a choice between its variants.

    Attributes:
        name: Definition name, also the rule name of the choice
        variants: Variants in declaration order
        extra: Rule may appear between any two tokens
        language: Marks the root definition of the grammar
    """

    kind: Literal["union"] = "union"
    name: str
    variants: list[VariantSpec] = Field(min_length=1)
    extra: StrictBool = False
    language: StrictBool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("variants")
    @classmethod
    def check_unique_variants(cls, v: list[VariantSpec]) -> list[VariantSpec]:
        names = [variant.name for variant in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate variant names: {', '.join(duplicates)}")
        return v


Definition = Annotated[RecordSpec | UnionSpec, Field(discriminator="kind")]


class GrammarModule(BaseModel):
    """
    A module of a schema.

    Attributes:
        name: Module name
        grammar: Grammar name; only modules carrying one are compiled
        definitions: Definitions in declaration order
        modules: Nested modules
    """

    name: str = "root"
    grammar: GrammarName | None = None
    definitions: list[Definition] = Field(default_factory=list)
    modules: list[GrammarModule] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")


ListMeta.model_rebuild()
FieldSpec.model_rebuild()
GrammarModule.model_rebuild()
