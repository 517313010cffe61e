"""
Leaf terminal synthesis.

A field with a ``pattern`` or ``text`` leaf annotation becomes a terminal
rule of its own, registered under the field's qualified path and referenced
by symbol. Any other field refers to another definition's rule by name.
"""

from __future__ import annotations

from . import ir
from .resolver import bare_type_name
from .rule_table import RuleTable


def synthesize_leaf(
    path: str,
    field: ir.FieldSpec,
    shape: ir.TypeShape,
    table: RuleTable,
    source: str,
    identity: str | None = None,
) -> ir.Rule:
    """
    Rule fragment for a non-list field.

    Args:
        path: Qualified path of the field (``{rule}_{identity}``)
        field: The field
        shape: Resolved shape of the field's type
        table: Rules of the grammar being compiled
        source: Rule path of the enclosing definition (for error context)
        identity: Field identity (for error context)

    Returns:
        SYMBOL referencing the new terminal, or the referenced definition
    """
    leaf = field.leaf
    if leaf is not None and leaf.pattern is not None:
        table.add(path, ir.Pattern(value=leaf.pattern), source)
        return ir.Symbol(name=path)

    if leaf is not None and leaf.text is not None:
        table.add(path, ir.StringLiteral(value=leaf.text), source)
        return ir.Symbol(name=path)

    return ir.Symbol(name=bare_type_name(shape.target, source, identity))
