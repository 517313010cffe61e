"""Tests for record and variant compilation."""

import pytest

from sapling.core import ir
from sapling.core.errors import SchemaError
from sapling.core.records import compile_field_content, compile_record
from sapling.core.rule_table import RuleTable


def test_pattern_field(table: RuleTable, number_record: ir.RecordSpec) -> None:
    rule = compile_record("Number", number_record.fields, None, table)

    assert rule == ir.Seq(members=[ir.FieldRule(name="v", content=ir.Symbol(name="Number_v"))])
    assert table.get("Number") == rule
    assert table.get("Number_v") == ir.Pattern(value=r"\d+")
    assert list(table) == [ir.START_RULE, "Number_v", "Number"]


def test_positional_fields(table: RuleTable, expression_union: ir.UnionSpec) -> None:
    neg = expression_union.variants[1]
    rule = compile_record("Expression_Neg", neg.fields, None, table)

    assert rule == ir.Seq(
        members=[
            ir.FieldRule(name="0", content=ir.Symbol(name="Expression_Neg_0")),
            ir.FieldRule(name="1", content=ir.Symbol(name="Expression")),
        ]
    )
    assert table.get("Expression_Neg_0") == ir.StringLiteral(value="-")


def test_optional_fields(table: RuleTable) -> None:
    fields = [
        ir.FieldSpec(name="v", type="Option<i32>", leaf=ir.LeafMeta(pattern=r"\d+")),
        ir.FieldSpec(name="t", type="Option<Number>"),
    ]
    rule = compile_record("Language", fields, None, table)

    assert rule == ir.Seq(
        members=[
            ir.Choice(
                members=[ir.Blank(), ir.FieldRule(name="v", content=ir.Symbol(name="Language_v"))]
            ),
            ir.Choice(
                members=[ir.Blank(), ir.FieldRule(name="t", content=ir.Symbol(name="Number"))]
            ),
        ]
    )


class TestListFields:
    def test_delimited_list_is_not_wrapped_in_field(self, table: RuleTable, make_number_list) -> None:
        record = make_number_list()
        rule = compile_record("NumberList", record.fields, None, table)

        item = ir.FieldRule(name="numbers", content=ir.Symbol(name="Number"))
        delimiter = ir.Symbol(name="NumberList_numbers_delimiter")
        assert rule == ir.Seq(
            members=[
                ir.Choice(
                    members=[
                        ir.Blank(),
                        ir.Seq(
                            members=[
                                item,
                                ir.Repeat(content=ir.Seq(members=[delimiter, item])),
                            ]
                        ),
                    ]
                )
            ]
        )
        assert table.get("NumberList_numbers_delimiter") == ir.StringLiteral(value=",")
        assert list(table) == [ir.START_RULE, "NumberList_numbers_delimiter", "NumberList"]

    def test_non_empty_drops_the_blank_choice(self, table: RuleTable, make_number_list) -> None:
        record = make_number_list(non_empty=True)
        rule = compile_record("NumberList", record.fields, None, table)

        (fragment,) = rule.members
        assert isinstance(fragment, ir.Seq)
        assert isinstance(fragment.members[1], ir.Repeat)

    def test_delimiter_referencing_a_definition(self, table: RuleTable) -> None:
        field = ir.FieldSpec(
            name="args", type="Vec<Arg>", delimited=ir.FieldSpec(type="Comma")
        )
        _, fragment = compile_field_content("Call_args", field, table, "Call", "args")

        item = ir.FieldRule(name="args", content=ir.Symbol(name="Arg"))
        assert fragment == ir.optional(
            ir.Seq(
                members=[
                    item,
                    ir.Repeat(content=ir.Seq(members=[ir.Symbol(name="Comma"), item])),
                ]
            )
        )
        assert list(table) == [ir.START_RULE]

    def test_plain_repeat(self, table: RuleTable) -> None:
        field = ir.FieldSpec(name="stmts", type="Vec<Box<Statement>>")
        shape, fragment = compile_field_content("Block_stmts", field, table, "Block", "stmts")
        assert shape.is_list
        assert fragment == ir.Repeat(
            content=ir.FieldRule(name="stmts", content=ir.Symbol(name="Statement"))
        )

    def test_list_with_leaf_text_fails(self, table: RuleTable) -> None:
        field = ir.FieldSpec(name="xs", type="Vec<X>", leaf=ir.LeafMeta(text="x"))
        with pytest.raises(SchemaError, match="cannot carry a leaf"):
            compile_record("Block", [field], None, table)

    def test_delimited_on_scalar_fails(self, table: RuleTable) -> None:
        field = ir.FieldSpec(name="x", type="X", delimited=ir.FieldSpec(type="Comma"))
        with pytest.raises(SchemaError, match="only apply to list fields"):
            compile_record("Block", [field], None, table)

    def test_optional_list_fails(self, table: RuleTable) -> None:
        field = ir.FieldSpec(name="xs", type="Option<Vec<X>>")
        with pytest.raises(SchemaError, match="Block.xs"):
            compile_record("Block", [field], None, table)


class TestPrecedence:
    def test_prec_left_wraps_the_same_seq(self, expression_union: ir.UnionSpec) -> None:
        fields = [
            ir.FieldSpec(type="Box<Expression>"),
            ir.FieldSpec(type="()", leaf=ir.LeafMeta(text="-")),
            ir.FieldSpec(type="Box<Expression>"),
        ]
        plain = compile_record("Expression_Sub", fields, None, RuleTable(grammar="a"))
        wrapped = compile_record("Expression_Sub", fields, 1, RuleTable(grammar="b"))

        assert wrapped == ir.PrecLeft(value=1, content=plain)

    def test_prec_left_zero_is_kept(self, table: RuleTable) -> None:
        rule = compile_record("Empty", [], 0, table)
        assert rule == ir.PrecLeft(value=0, content=ir.Seq(members=[]))


def test_record_rule_registered_once(table: RuleTable, number_record: ir.RecordSpec) -> None:
    compile_record("Number", number_record.fields, None, table)
    with pytest.raises(SchemaError, match="Duplicate rule"):
        compile_record("Number", number_record.fields, None, table)
