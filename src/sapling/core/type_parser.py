"""
Parser for declared field types.

Schemas write field types the way the host language spells them, e.g.
``Vec<Number>``, ``Option<Box<Expression>>`` or ``()``. This module turns
that text into a ``TypeRef`` tree.

Type syntax:

    type  := "(" [type ("," type)*] ")"
           | path ["<" type ("," type)* ">"]
    path  := ident (("::" | ".") ident)*
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .errors import TypeSyntaxError
from .ir.types import TypeRef


class TokenType(str, Enum):
    IDENT = "ident"
    PATH_SEP = "path_sep"
    LANGLE = "<"
    RANGLE = ">"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    EOF = "eof"


@dataclass
class Token:
    """
    A single token of a type expression.

    Attributes:
        type: Type of token
        value: Matched text
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    column: int


_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<path_sep>::|\.)
    |(?P<punct>[<>(),])
    """,
    re.VERBOSE,
)


def tokenize(text: str) -> list[Token]:
    """Split a type expression into tokens, ending with an EOF token."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match:
            raise TypeSyntaxError(f"Unexpected character {text[pos]!r}", text, pos + 1)
        kind = match.lastgroup
        value = match.group()
        if kind == "ident":
            tokens.append(Token(TokenType.IDENT, value, pos + 1))
        elif kind == "path_sep":
            tokens.append(Token(TokenType.PATH_SEP, value, pos + 1))
        elif kind == "punct":
            tokens.append(Token(TokenType(value), value, pos + 1))
        pos = match.end()
    tokens.append(Token(TokenType.EOF, "", len(text) + 1))
    return tokens


class TypeParser:
    """Recursive descent parser over the tokens of one type expression."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0

    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def expect(self, token_type: TokenType) -> Token:
        token = self.current()
        if token.type != token_type:
            found = token.value or "end of input"
            raise TypeSyntaxError(
                f"Expected '{token_type.value}', found '{found}'", self.text, token.column
            )
        return self.advance()

    def parse(self) -> TypeRef:
        """Parse the whole text as a single type."""
        if self.current().type == TokenType.EOF:
            raise TypeSyntaxError("Empty type", self.text, 1)
        type_ref = self.parse_type()
        trailing = self.current()
        if trailing.type != TokenType.EOF:
            raise TypeSyntaxError(
                f"Unexpected '{trailing.value}' after type", self.text, trailing.column
            )
        return type_ref

    def parse_type(self) -> TypeRef:
        if self.current().type == TokenType.LPAREN:
            self.advance()
            members = self.parse_list(TokenType.RPAREN)
            return TypeRef(path=(), args=tuple(members))

        segments = [self.expect(TokenType.IDENT).value]
        while self.current().type == TokenType.PATH_SEP:
            self.advance()
            segments.append(self.expect(TokenType.IDENT).value)

        args: list[TypeRef] = []
        if self.current().type == TokenType.LANGLE:
            opening = self.advance()
            args = self.parse_list(TokenType.RANGLE)
            if not args:
                raise TypeSyntaxError("Empty generic argument list", self.text, opening.column)
        return TypeRef(path=tuple(segments), args=tuple(args))

    def parse_list(self, closing: TokenType) -> list[TypeRef]:
        """Parse comma separated types up to and including ``closing``."""
        items: list[TypeRef] = []
        if self.current().type == closing:
            self.advance()
            return items
        items.append(self.parse_type())
        while self.current().type == TokenType.COMMA:
            self.advance()
            items.append(self.parse_type())
        self.expect(closing)
        return items


def parse_type(text: str) -> TypeRef:
    """
    Parse a declared type.

    Args:
        text: Type expression, e.g. ``Option<Box<Expression>>``

    Returns:
        Parsed TypeRef

    Raises:
        TypeSyntaxError: If the text is not a well-formed type
    """
    return TypeParser(text).parse()
