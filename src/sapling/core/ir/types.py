"""
Declared type references and resolved type shapes for Sapling IR.

A field's declared type is kept as written in the schema (a ``TypeRef``).
The resolver turns it into a ``TypeShape`` that tells the compiler whether
the field is a direct reference, optional, or a list.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class WrapperKind(str, Enum):
    """Type constructors with a meaning to the grammar compiler."""

    OPTIONAL = "optional"
    LIST = "list"
    INDIRECT = "indirect"  # boxed recursive reference, transparent to grammar shape


# Single-segment constructor names recognised as wrappers.
WRAPPER_NAMES: dict[str, WrapperKind] = {
    "Option": WrapperKind.OPTIONAL,
    "Optional": WrapperKind.OPTIONAL,
    "Vec": WrapperKind.LIST,
    "List": WrapperKind.LIST,
    "Box": WrapperKind.INDIRECT,
    "Indirect": WrapperKind.INDIRECT,
}


class TypeRef(BaseModel):
    """
    A declared type as written in the schema.

    Examples:
        - Number: TypeRef(path=("Number",))
        - Box<Expression>: TypeRef(path=("Box",), args=(TypeRef(path=("Expression",)),))
        - (): TypeRef(path=())
        - crate::Number: TypeRef(path=("crate", "Number"))

    An empty path denotes a tuple type whose members are ``args``; ``()`` is
    the unit type.
    """

    path: tuple[str, ...]
    args: tuple[TypeRef, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_tuple(self) -> bool:
        return not self.path

    @property
    def is_bare(self) -> bool:
        """A single-segment name without generic arguments."""
        return len(self.path) == 1 and not self.args

    @property
    def wrapper(self) -> WrapperKind | None:
        """Wrapper kind of the outer constructor, if it is one."""
        if len(self.path) != 1:
            return None
        return WRAPPER_NAMES.get(self.path[0])

    def __str__(self) -> str:
        if self.is_tuple:
            return "(" + ", ".join(str(a) for a in self.args) + ")"
        text = "::".join(self.path)
        if self.args:
            text += "<" + ", ".join(str(a) for a in self.args) + ">"
        return text


class ShapeKind(str, Enum):
    """How a field participates in its enclosing rule."""

    DIRECT = "direct"
    OPTIONAL = "optional"
    LIST = "list"


class TypeShape(BaseModel):
    """
    A classified field type.

    Attributes:
        kind: Direct reference, optional, or list
        target: The type itself for DIRECT, otherwise the wrapped element;
            indirection wrappers are always removed
    """

    kind: ShapeKind
    target: TypeRef

    model_config = ConfigDict(frozen=True)

    @property
    def is_list(self) -> bool:
        return self.kind == ShapeKind.LIST

    @property
    def is_optional(self) -> bool:
        return self.kind == ShapeKind.OPTIONAL
