"""
Record and variant compilation.

A record (or one variant of a tagged union) becomes a single SEQ of its
fields in declaration order:

- list fields contribute their repetition fragment as-is
- other fields become FIELD(identity, fragment)
- optional fields are additionally wrapped in CHOICE[BLANK, _]

A ``prec_left`` level wraps the whole SEQ in PREC_LEFT.
"""

from __future__ import annotations

import logging

from . import ir
from .errors import make_schema_error
from .repetition import synthesize_list
from .resolver import resolve_shape
from .rule_table import RuleTable
from .terminals import synthesize_leaf

logger = logging.getLogger(__name__)


def compile_field_content(
    path: str,
    field: ir.FieldSpec,
    table: RuleTable,
    source: str,
    identity: str,
) -> tuple[ir.TypeShape, ir.Rule]:
    """
    Resolve a field's shape and build its rule fragment.

    Args:
        path: Qualified path of the field
        field: The field
        table: Rules of the grammar being compiled
        source: Rule path of the enclosing definition
        identity: Field identity

    Returns:
        (shape, fragment) where the fragment is not yet wrapped in FIELD
    """
    shape = resolve_shape(field.type, source, identity)

    if shape.is_list:
        leaf = field.leaf
        if leaf is not None and (leaf.pattern is not None or leaf.text is not None):
            raise make_schema_error(
                f"List field '{field.type}' cannot carry a leaf pattern or text; "
                "its element type must be a definition",
                rule=source,
                field=identity,
            )
        list_meta = field.list_meta
        delimiter: ir.Rule | None = None
        if list_meta.delimiter is not None:
            _, delimiter = compile_field_content(
                f"{path}_delimiter", list_meta.delimiter, table, source, f"{identity}.delimiter"
            )
        return shape, synthesize_list(identity, shape, list_meta, delimiter, source)

    if field.delimited is not None or field.repeat is not None:
        raise make_schema_error(
            f"'delimited' and 'repeat' only apply to list fields, not '{field.type}'",
            rule=source,
            field=identity,
        )
    return shape, synthesize_leaf(path, field, shape, table, source, identity)


def compile_record(
    path: str,
    fields: list[ir.FieldSpec],
    prec_left: int | None,
    table: RuleTable,
) -> ir.Rule:
    """
    Compile a record or variant and register its rule at ``path``.

    Args:
        path: Definition name, or ``{union}_{variant}``
        fields: Fields in declaration order
        prec_left: Optional left-associative precedence level
        table: Rules of the grammar being compiled

    Returns:
        The registered rule
    """
    members: list[ir.Rule] = []
    for index, field in enumerate(fields):
        identity = field.identity(index)
        shape, content = compile_field_content(f"{path}_{identity}", field, table, path, identity)

        if shape.is_list:
            members.append(content)
            continue

        core = ir.FieldRule(name=identity, content=content)
        members.append(ir.optional(core) if shape.is_optional else core)

    rule: ir.Rule = ir.Seq(members=members)
    if prec_left is not None:
        rule = ir.PrecLeft(value=prec_left, content=rule)

    logger.debug("Compiled %s: %d members", path, len(members))
    table.add(path, rule, path)
    return rule
