"""
Grammar rule types for Sapling IR.

These mirror the rule nodes of tree-sitter's ``grammar.json``. Each model
serialises (``model_dump(mode="json")``) to exactly the object the parser
generator expects, ``type`` key first.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

START_RULE = "source_file"

# tree-sitter grammar names are identifiers; they also name the output directory
GRAMMAR_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


class Symbol(BaseModel):
    """Reference to a named rule."""

    type: Literal["SYMBOL"] = "SYMBOL"
    name: str

    model_config = ConfigDict(frozen=True)


class Seq(BaseModel):
    type: Literal["SEQ"] = "SEQ"
    members: list[Rule]

    model_config = ConfigDict(frozen=True)


class Choice(BaseModel):
    type: Literal["CHOICE"] = "CHOICE"
    members: list[Rule]

    model_config = ConfigDict(frozen=True)


class Repeat(BaseModel):
    """Zero or more occurrences of ``content``."""

    type: Literal["REPEAT"] = "REPEAT"
    content: Rule

    model_config = ConfigDict(frozen=True)


class Repeat1(BaseModel):
    """One or more occurrences of ``content``."""

    type: Literal["REPEAT1"] = "REPEAT1"
    content: Rule

    model_config = ConfigDict(frozen=True)


class FieldRule(BaseModel):
    """Names the node matched by ``content`` as a field of its parent."""

    type: Literal["FIELD"] = "FIELD"
    name: str
    content: Rule

    model_config = ConfigDict(frozen=True)


class PrecLeft(BaseModel):
    """Left-associative precedence."""

    type: Literal["PREC_LEFT"] = "PREC_LEFT"
    value: int = Field(ge=0, le=2**32 - 1)
    content: Rule

    model_config = ConfigDict(frozen=True)


class Pattern(BaseModel):
    """Regular expression terminal."""

    type: Literal["PATTERN"] = "PATTERN"
    value: str

    model_config = ConfigDict(frozen=True)


class StringLiteral(BaseModel):
    """Literal text terminal."""

    type: Literal["STRING"] = "STRING"
    value: str

    model_config = ConfigDict(frozen=True)


class Blank(BaseModel):
    """Matches the empty string."""

    type: Literal["BLANK"] = "BLANK"

    model_config = ConfigDict(frozen=True)


Rule = Annotated[
    Symbol
    | Seq
    | Choice
    | Repeat
    | Repeat1
    | FieldRule
    | PrecLeft
    | Pattern
    | StringLiteral
    | Blank,
    Field(discriminator="type"),
]

for _model in (Seq, Choice, Repeat, Repeat1, FieldRule, PrecLeft):
    _model.model_rebuild()


def optional(rule: Rule) -> Choice:
    """``CHOICE[BLANK, rule]``"""
    return Choice(members=[Blank(), rule])


class Grammar(BaseModel):
    """
    A compiled grammar, ready to be written as ``grammar.json``.

    Attributes:
        name: Grammar name
        rules: Named rules in insertion order; ``source_file`` is first
        extras: Rules allowed between any two tokens
    """

    name: str
    rules: dict[str, Rule]
    extras: list[Symbol] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def start_rule(self) -> Rule:
        return self.rules[START_RULE]

    def to_json(self) -> dict[str, Any]:
        """Plain JSON-compatible dict in tree-sitter's grammar.json shape."""
        return self.model_dump(mode="json")

    def dumps(self, indent: int | None = 2) -> str:
        """Serialise deterministically; key order follows rule insertion order."""
        return json.dumps(self.to_json(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, data: dict[str, Any] | str) -> Grammar:
        """Load a grammar previously produced by ``to_json``/``dumps``."""
        if isinstance(data, str):
            return cls.model_validate_json(data)
        return cls.model_validate(data)


RuleAdapter: TypeAdapter[Rule] = TypeAdapter(Rule)
