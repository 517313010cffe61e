"""Shared pytest fixtures for Sapling tests."""

from pathlib import Path

import pytest

from sapling.core import ir
from sapling.core.rule_table import RuleTable


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def schemas_dir(fixtures_dir: Path) -> Path:
    """Return path to schema fixtures directory."""
    return fixtures_dir / "schemas"


@pytest.fixture
def table() -> RuleTable:
    """Return an empty rule table."""
    return RuleTable(grammar="test")


@pytest.fixture
def number_variant() -> ir.VariantSpec:
    """``Number(#[leaf(pattern = r"\\d+")] i32)``"""
    return ir.VariantSpec(
        name="Number",
        fields=[ir.FieldSpec(type="i32", leaf=ir.LeafMeta(pattern=r"\d+"))],
    )


@pytest.fixture
def expression_union(number_variant: ir.VariantSpec) -> ir.UnionSpec:
    """Root union with a number and a recursive negation."""
    return ir.UnionSpec(
        name="Expression",
        language=True,
        variants=[
            number_variant,
            ir.VariantSpec(
                name="Neg",
                fields=[
                    ir.FieldSpec(type="()", leaf=ir.LeafMeta(text="-")),
                    ir.FieldSpec(type="Box<Expression>"),
                ],
            ),
        ],
    )


@pytest.fixture
def whitespace_record() -> ir.RecordSpec:
    """Extra record matching single whitespace characters."""
    return ir.RecordSpec(
        name="Whitespace",
        extra=True,
        fields=[
            ir.FieldSpec(name="_whitespace", type="()", leaf=ir.LeafMeta(pattern=r"\s")),
        ],
    )


@pytest.fixture
def number_record() -> ir.RecordSpec:
    return ir.RecordSpec(
        name="Number",
        fields=[ir.FieldSpec(name="v", type="i32", leaf=ir.LeafMeta(pattern=r"\d+"))],
    )


@pytest.fixture
def make_number_list():
    """Factory for a root record with a comma-delimited list of numbers."""

    def make(non_empty: bool = False) -> ir.RecordSpec:
        return ir.RecordSpec(
            name="NumberList",
            language=True,
            fields=[
                ir.FieldSpec(
                    name="numbers",
                    type="Vec<Number>",
                    delimited=ir.FieldSpec(type="()", leaf=ir.LeafMeta(text=",")),
                    repeat=ir.RepeatMeta(non_empty=non_empty),
                )
            ],
        )

    return make
