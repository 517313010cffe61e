"""
Type-reference resolution.

Classifies a field's declared type as a direct reference, an optional or a
list. Indirection wrappers (``Box<T>``) only exist to make recursive types
constructible in the host language, so any number of them are stripped
around the optional/list layer.
"""

from __future__ import annotations

from . import ir
from .errors import make_schema_error


def _single_argument(type_ref: ir.TypeRef, rule: str, field: str | None) -> ir.TypeRef:
    if len(type_ref.args) != 1:
        raise make_schema_error(
            f"'{type_ref.path[0]}' takes exactly one type argument, got '{type_ref}'",
            rule=rule,
            field=field,
        )
    return type_ref.args[0]


def strip_indirection(
    type_ref: ir.TypeRef, rule: str, field: str | None = None
) -> ir.TypeRef:
    """Remove any number of outer indirection wrappers."""
    while type_ref.wrapper == ir.WrapperKind.INDIRECT:
        type_ref = _single_argument(type_ref, rule, field)
    return type_ref


def resolve_shape(type_ref: ir.TypeRef, rule: str, field: str | None = None) -> ir.TypeShape:
    """
    Classify a declared type.

    Args:
        type_ref: Declared field type
        rule: Rule path being compiled (for error context)
        field: Field identity (for error context)

    Returns:
        TypeShape whose target has no indirection wrappers

    Raises:
        SchemaError: If a wrapper has the wrong number of arguments, or a
            list is wrapped in an optional
    """
    outer = strip_indirection(type_ref, rule, field)
    wrapper = outer.wrapper

    if wrapper == ir.WrapperKind.OPTIONAL:
        inner = strip_indirection(_single_argument(outer, rule, field), rule, field)
        if inner.wrapper == ir.WrapperKind.LIST:
            raise make_schema_error(
                f"'{type_ref}' is not supported: lists encode their own emptiness, "
                "use a list field with repeat non_empty = false instead",
                rule=rule,
                field=field,
            )
        return ir.TypeShape(kind=ir.ShapeKind.OPTIONAL, target=inner)

    if wrapper == ir.WrapperKind.LIST:
        inner = strip_indirection(_single_argument(outer, rule, field), rule, field)
        return ir.TypeShape(kind=ir.ShapeKind.LIST, target=inner)

    return ir.TypeShape(kind=ir.ShapeKind.DIRECT, target=outer)


def bare_type_name(type_ref: ir.TypeRef, rule: str, field: str | None = None) -> str:
    """
    Name of the rule a type refers to.

    Only single-segment names qualify. Qualified paths (``crate::Number``)
    are rejected even when they would name a definition of the schema.

    Raises:
        SchemaError: If the type is not a bare name after stripping indirection
    """
    target = strip_indirection(type_ref, rule, field)
    if not target.is_bare:
        raise make_schema_error(
            f"Unexpected type '{type_ref}': expected a definition name, "
            "or a leaf annotation with a pattern or text",
            rule=rule,
            field=field,
        )
    return target.path[0]
