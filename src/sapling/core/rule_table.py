"""
Ordered accumulator for the rules of one grammar.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from . import ir
from .errors import make_schema_error

logger = logging.getLogger(__name__)


@dataclass
class RuleTable:
    """
    Named rules in insertion order.

    The start rule is reserved as the first entry on creation (the parser
    generator reads it as the grammar's entry point) and filled in last with
    a copy of the root definition's rule.
    """

    grammar: str
    _rules: dict[str, ir.Rule | None] = field(default_factory=lambda: {ir.START_RULE: None})
    # Definition that registered each rule (for error reporting)
    rule_sources: dict[str, str] = field(default_factory=dict)

    def add(self, name: str, rule: ir.Rule, source: str) -> None:
        """Register a rule, checking for duplicates."""
        if name in self._rules:
            existing = self.rule_sources.get(name, "the start rule")
            raise make_schema_error(
                f"Duplicate rule '{name}' in grammar '{self.grammar}': "
                f"already defined by {existing}",
                rule=source,
            )
        logger.debug("Registered rule %s (%s)", name, rule.type)
        self._rules[name] = rule
        self.rule_sources[name] = source

    def get(self, name: str) -> ir.Rule | None:
        return self._rules.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def set_start(self, root: str) -> None:
        """Fill the start rule with an independent copy of the root's rule."""
        rule = self._rules.get(root)
        if rule is None:
            raise make_schema_error(f"Root definition '{root}' produced no rule", rule=root)
        self._rules[ir.START_RULE] = rule.model_copy(deep=True)

    def freeze(self) -> dict[str, ir.Rule]:
        """Final rule mapping; fails if the start rule was never set."""
        if self._rules[ir.START_RULE] is None:
            raise make_schema_error(
                f"Grammar '{self.grammar}' has no start rule", rule=ir.START_RULE
            )
        return {name: rule for name, rule in self._rules.items() if rule is not None}
