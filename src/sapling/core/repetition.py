"""
List repetition synthesis.

Each occurrence of a list item is wrapped in its own FIELD node named after
the list field, so the parser exposes every item under the same field name.

    no delimiter:      REPEAT(item)                 REPEAT1(item) if non_empty
    with delimiter:    CHOICE[BLANK, SEQ[item, REPEAT(SEQ[delimiter, item])]]
                       (the bare SEQ if non_empty)
"""

from __future__ import annotations

from . import ir
from .resolver import bare_type_name


def synthesize_list(
    identity: str,
    shape: ir.TypeShape,
    list_meta: ir.ListMeta,
    delimiter: ir.Rule | None,
    source: str,
) -> ir.Rule:
    """
    Rule fragment for a list field.

    Args:
        identity: Field identity; names each item's FIELD node
        shape: Resolved LIST shape of the field
        list_meta: Delimiter and repetition policy
        delimiter: Compiled delimiter fragment, if the list is delimited
        source: Rule path of the enclosing definition (for error context)

    Raises:
        SchemaError: If the element type is not a definition name
    """
    element = bare_type_name(shape.target, source, identity)
    item = ir.FieldRule(name=identity, content=ir.Symbol(name=element))

    if delimiter is not None:
        mandatory = ir.Seq(
            members=[
                item,
                ir.Repeat(content=ir.Seq(members=[delimiter, item])),
            ]
        )
        if list_meta.non_empty:
            return mandatory
        return ir.optional(mandatory)

    if list_meta.non_empty:
        return ir.Repeat1(content=item)
    return ir.Repeat(content=item)
