"""
Grammar assembly.

Walks the definitions of one grammar in declaration order and produces the
complete Grammar: one rule per record, one rule per union variant plus a
CHOICE for the union itself, the terminals synthesized along the way, the
extras, and the ``source_file`` start rule.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from . import ir
from .errors import SchemaError
from .records import compile_record
from .rule_table import RuleTable

logger = logging.getLogger(__name__)


def find_root(definitions: Sequence[ir.Definition]) -> ir.Definition:
    """
    The single definition marked ``language``.

    Raises:
        SchemaError: If no definition, or more than one, is marked
    """
    roots = [d for d in definitions if d.language]
    if not roots:
        raise SchemaError(
            "Each grammar must mark its root definition with 'language = true'"
        )
    if len(roots) > 1:
        raise SchemaError(
            "Only one definition may be marked 'language = true', found: "
            + ", ".join(d.name for d in roots)
        )
    return roots[0]


def compile_union(union: ir.UnionSpec, table: RuleTable) -> ir.Rule:
    """Compile every variant, then register the union as a choice between them."""
    variant_paths: list[str] = []
    for variant in union.variants:
        path = f"{union.name}_{variant.name}"
        compile_record(path, variant.fields, variant.prec_left, table)
        variant_paths.append(path)

    rule = ir.Choice(members=[ir.Symbol(name=path) for path in variant_paths])
    table.add(union.name, rule, union.name)
    return rule


def compile_grammar(name: str, definitions: Sequence[ir.Definition]) -> ir.Grammar:
    """
    Compile a grammar from its definitions.

    Args:
        name: Grammar name
        definitions: Records and unions in declaration order

    Returns:
        The compiled Grammar; ``rules`` starts with ``source_file``, a copy
        of the root definition's rule

    Raises:
        SchemaError: On any schema authoring error; nothing is returned then
    """
    if not isinstance(name, str) or not name.strip():
        raise SchemaError("Each grammar must have a non-empty name")
    if not re.fullmatch(ir.GRAMMAR_NAME_PATTERN, name):
        raise SchemaError(
            f"Invalid grammar name '{name}': expected an identifier "
            "(letters, digits and underscores, not starting with a digit)"
        )

    root = find_root(definitions)
    table = RuleTable(grammar=name)
    extras: list[ir.Symbol] = []

    for definition in definitions:
        if isinstance(definition, ir.UnionSpec):
            compile_union(definition, table)
        elif isinstance(definition, ir.RecordSpec):
            compile_record(definition.name, definition.fields, definition.prec_left, table)
        else:
            raise SchemaError(f"Unsupported definition {type(definition).__name__}")

        if definition.extra:
            extras.append(ir.Symbol(name=definition.name))

    table.set_start(root.name)
    grammar = ir.Grammar(name=name, rules=table.freeze(), extras=extras)
    logger.info(
        "Compiled grammar '%s': %d rules, %d extras, root %s",
        name,
        len(grammar.rules),
        len(extras),
        root.name,
    )
    return grammar
