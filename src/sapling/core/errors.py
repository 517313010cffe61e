"""
Error types for Sapling schema loading and grammar compilation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class SaplingError(Exception):
    """Base exception for all Sapling errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            location = self.context.format()
            if location:
                return f"{location}: {self.message}"
        return self.message

    def with_context(self, context: "ErrorContext") -> "SaplingError":
        """Attach a location after the fact, keeping the exception type."""
        self.context = context
        self.args = (self._format_message(),)
        return self


class SchemaError(SaplingError):
    """
    Raised when a schema cannot be compiled into a grammar.

    Examples:
    - Missing or empty grammar name
    - Zero or several root (``language``) definitions
    - ``Option<Vec<T>>`` field types
    - Non-literal pattern, text or precedence values
    - Field types that cannot be resolved to a named rule
    - Two rules synthesized under the same name
    """

    pass


class TypeSyntaxError(SchemaError):
    """
    Raised when a declared field type cannot be parsed.

    Examples:
    - Unbalanced angle brackets: ``Vec<Number``
    - Empty type text
    - Trailing characters after a complete type
    """

    def __init__(self, message: str, text: str, column: int):
        self.text = text
        self.column = column
        super().__init__(f"{message} at column {column} in type '{text}'")


class ManifestError(SaplingError):
    """
    Raised when sapling.toml is missing required settings or is malformed.
    """

    pass


@dataclass
class ErrorContext:
    """
    Where in a schema an error occurred.

    Attributes:
        file: Schema file the definition was loaded from
        rule: Qualified rule path being compiled (e.g. ``Expression_Neg``)
        field: Field identity within that rule
    """

    file: Path | None = None
    rule: str | None = None
    field: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "calc.toml: Expression_Neg.0"
        """
        parts: list[str] = []
        if self.file:
            parts.append(str(self.file))
        if self.rule:
            location = self.rule
            if self.field is not None:
                location += f".{self.field}"
            parts.append(location)
        return ": ".join(parts)


def make_schema_error(
    message: str,
    rule: str | None = None,
    field: str | None = None,
    file: Path | None = None,
) -> SchemaError:
    """
    Helper to create a SchemaError with optional context.

    Args:
        message: Error description
        rule: Optional rule path being compiled
        field: Optional field identity
        file: Optional schema file path

    Returns:
        SchemaError with context if any location is provided
    """
    if rule or field is not None or file:
        return SchemaError(message, ErrorContext(file=file, rule=rule, field=field))
    return SchemaError(message)
