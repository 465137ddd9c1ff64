"""Tests for expression parsing: precedence, associativity, accessors."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tessera import parse
from tessera.errors import InvalidUnaryError, UnexpectedTokenError
from tessera.nodes import (
    Binary,
    BooleanLiteral,
    Expression,
    Grouped,
    Identifier,
    Member,
    NumberLiteral,
    StringLiteral,
    Ternary,
    Text,
    This,
    Unary,
)


def _expr(code: str) -> Expression:
    """Parse a single code block and return its expression."""
    children = parse("{{ " + code + " }}").children
    assert len(children) == 1
    return children[0]


def _id(name: str) -> Identifier:
    return Identifier(name)


class TestLiterals:
    """Primary literal expressions."""

    def test_integer(self) -> None:
        node = _expr("42")
        assert node == NumberLiteral(42)
        assert isinstance(node.value, int)

    def test_float(self) -> None:
        node = _expr("4.25")
        assert node == NumberLiteral(4.25)
        assert isinstance(node.value, float)

    def test_string(self) -> None:
        assert _expr('"line\\n"') == StringLiteral("line\n")

    def test_booleans(self) -> None:
        assert _expr("true") == BooleanLiteral(True)
        assert _expr("false") == BooleanLiteral(False)

    def test_this(self) -> None:
        assert _expr("this") == This()

    def test_identifier(self) -> None:
        assert _expr("name") == Identifier("name", callable=False, args=())


class TestLiteralPassthrough:
    """Text around blocks becomes Text nodes."""

    def test_text_identifier_text(self) -> None:
        program = parse("Hi {{ name }}!")
        assert program.children == (
            Text("Hi "),
            Identifier("name", callable=False),
            Text("!"),
        )

    def test_text_only(self) -> None:
        assert parse("just text").children == (Text("just text"),)

    def test_empty_source(self) -> None:
        assert parse("").children == ()

    def test_empty_block_produces_nothing(self) -> None:
        assert parse("a{{ }}b").children == (Text("a"), Text("b"))

    def test_comment_block_produces_nothing(self) -> None:
        assert parse("a{{ // note }}b").children == (Text("a"), Text("b"))

    def test_expression_with_trailing_comment(self) -> None:
        assert parse("{{ x // shown }}").children == (_id("x"),)


class TestPrecedence:
    """Binding strength: multiplicative > additive > boolean > ternary."""

    def test_multiplication_binds_tighter(self) -> None:
        assert _expr("2 + 3 * 4") == Binary(
            "+", NumberLiteral(2), Binary("*", NumberLiteral(3), NumberLiteral(4))
        )

    def test_multiplication_first(self) -> None:
        assert _expr("2 * 3 + 4") == Binary(
            "+", Binary("*", NumberLiteral(2), NumberLiteral(3)), NumberLiteral(4)
        )

    def test_additive_left_associative(self) -> None:
        assert _expr("a - b - c") == Binary("-", Binary("-", _id("a"), _id("b")), _id("c"))

    def test_division_left_associative(self) -> None:
        assert _expr("a / b * c") == Binary("*", Binary("/", _id("a"), _id("b")), _id("c"))

    def test_comparison_looser_than_arithmetic(self) -> None:
        assert _expr("a + 1 > b") == Binary(">", Binary("+", _id("a"), NumberLiteral(1)), _id("b"))

    def test_boolean_level_is_flat(self) -> None:
        """``&&`` and ``==`` share one level, evaluated left to right."""
        assert _expr("a == b && c") == Binary("&&", Binary("==", _id("a"), _id("b")), _id("c"))
        assert _expr("a && b == c") == Binary("==", Binary("&&", _id("a"), _id("b")), _id("c"))

    @pytest.mark.parametrize("op", ["&&", "||", "==", "!=", "<", "<=", ">", ">="])
    def test_boolean_operators(self, op: str) -> None:
        assert _expr(f"a {op} b") == Binary(op, _id("a"), _id("b"))

    def test_grouping_overrides_precedence(self) -> None:
        assert _expr("(1 + 2) * 3") == Binary(
            "*",
            Grouped(Binary("+", NumberLiteral(1), NumberLiteral(2))),
            NumberLiteral(3),
        )

    def test_nested_groups(self) -> None:
        assert _expr("((a))") == Grouped(Grouped(_id("a")))

    @given(st.lists(st.sampled_from(["a", "b", "c", "1", "2"]), min_size=2, max_size=8))
    @settings(max_examples=100)
    def test_addition_chains_nest_left(self, operands: list[str]) -> None:
        node = _expr(" + ".join(operands))
        for operand in reversed(operands[1:]):
            assert isinstance(node, Binary)
            assert node.operator == "+"
            right = node.right
            assert getattr(right, "name", None) == operand or str(
                getattr(right, "value", "")
            ) == operand
            node = node.left


class TestTernary:
    """``condition ? left : right``."""

    def test_simple(self) -> None:
        assert _expr("a ? b : c") == Ternary(_id("a"), _id("b"), _id("c"))

    def test_right_associative(self) -> None:
        node = _expr("a ? b : c ? d : e")
        assert node == Ternary(_id("a"), _id("b"), Ternary(_id("c"), _id("d"), _id("e")))
        assert isinstance(node.right, Ternary)
        assert node.right.condition == _id("c")

    def test_ternary_in_then_branch(self) -> None:
        assert _expr("a ? b ? c : d : e") == Ternary(
            _id("a"), Ternary(_id("b"), _id("c"), _id("d")), _id("e")
        )

    def test_condition_is_boolean_expression(self) -> None:
        assert _expr("n > 1 ? 's' : ''") == Ternary(
            Binary(">", _id("n"), NumberLiteral(1)), StringLiteral("s"), StringLiteral("")
        )

    def test_missing_colon(self) -> None:
        with pytest.raises(UnexpectedTokenError):
            parse("{{ a ? b }}")


class TestUnary:
    """Prefix operators and their constraints."""

    @pytest.mark.parametrize("op", ["!", "-", "+"])
    def test_prefix(self, op: str) -> None:
        assert _expr(f"{op}x") == Unary(op, _id("x"))

    def test_unary_binds_tighter_than_binary(self) -> None:
        assert _expr("-a + b") == Binary("+", Unary("-", _id("a")), _id("b"))
        assert _expr("!a && b") == Binary("&&", Unary("!", _id("a")), _id("b"))

    def test_unary_applies_to_member_chain(self) -> None:
        assert _expr("!user.active") == Unary("!", Member(_id("user"), _id("active")))

    def test_double_negation_allowed(self) -> None:
        assert _expr("!!x") == Unary("!", Unary("!", _id("x")))

    def test_mixed_bang_and_sign_allowed(self) -> None:
        assert _expr("!-x") == Unary("!", Unary("-", _id("x")))
        assert _expr("-!x") == Unary("-", Unary("!", _id("x")))

    def test_sign_through_group_allowed(self) -> None:
        assert _expr("-(-x)") == Unary("-", Grouped(Unary("-", _id("x"))))

    def test_binary_minus_then_unary_minus(self) -> None:
        assert _expr("a - -b") == Binary("-", _id("a"), Unary("-", _id("b")))

    @pytest.mark.parametrize("code", ["--x", "++x", "+-x", "-+x", "+++x", "---1"])
    def test_consecutive_signs_rejected(self, code: str) -> None:
        with pytest.raises(InvalidUnaryError):
            parse("{{ " + code + " }}")

    @pytest.mark.parametrize("code", ["!!!x", "!!!!x"])
    def test_triple_negation_rejected(self, code: str) -> None:
        with pytest.raises(InvalidUnaryError):
            parse("{{ " + code + " }}")


class TestCalls:
    """An identifier directly followed by ``(`` is a call."""

    def test_no_arguments(self) -> None:
        assert _expr("now()") == Identifier("now", callable=True, args=())

    def test_arguments(self) -> None:
        assert _expr("format(price, 2)") == Identifier(
            "format", callable=True, args=(_id("price"), NumberLiteral(2))
        )

    def test_expression_arguments(self) -> None:
        assert _expr("max(a + 1, b ? c : d)") == Identifier(
            "max",
            callable=True,
            args=(
                Binary("+", _id("a"), NumberLiteral(1)),
                Ternary(_id("b"), _id("c"), _id("d")),
            ),
        )

    def test_nested_calls(self) -> None:
        assert _expr("f(g(x))") == Identifier(
            "f", callable=True, args=(Identifier("g", callable=True, args=(_id("x"),)),)
        )

    def test_unclosed_call(self) -> None:
        with pytest.raises(UnexpectedTokenError):
            parse("{{ f(a, b }}")

    def test_trailing_comma_rejected(self) -> None:
        with pytest.raises(UnexpectedTokenError):
            parse("{{ f(a,) }}")


class TestMemberAccess:
    """``.name`` and ``[expression]`` accessors."""

    def test_dot(self) -> None:
        assert _expr("user.name") == Member(_id("user"), _id("name"), computed=False)

    def test_computed(self) -> None:
        assert _expr("items[i + 1]") == Member(
            _id("items"), Binary("+", _id("i"), NumberLiteral(1)), computed=True
        )

    def test_chain_is_left_associative(self) -> None:
        assert _expr("a.b[0].c") == Member(
            Member(Member(_id("a"), _id("b")), NumberLiteral(0), computed=True),
            _id("c"),
        )

    def test_method_call(self) -> None:
        assert _expr("user.name.upper()") == Member(
            Member(_id("user"), _id("name")), Identifier("upper", callable=True)
        )

    def test_number_member(self) -> None:
        assert _expr("1.round") == Member(NumberLiteral(1), _id("round"))

    def test_member_binds_tighter_than_arithmetic(self) -> None:
        assert _expr("a.x * b[1]") == Binary(
            "*",
            Member(_id("a"), _id("x")),
            Member(_id("b"), NumberLiteral(1), computed=True),
        )

    def test_access_on_group_and_this(self) -> None:
        assert _expr("(a).b") == Member(Grouped(_id("a")), _id("b"))
        assert _expr("this.name") == Member(This(), _id("name"))

    @pytest.mark.parametrize("code", ["a.1", "a.(b)", "a.", "a.end"])
    def test_dot_needs_identifier(self, code: str) -> None:
        with pytest.raises(UnexpectedTokenError):
            parse("{{ " + code + " }}")

    def test_unclosed_bracket(self) -> None:
        with pytest.raises(UnexpectedTokenError):
            parse("{{ items[0 }}")


class TestLocations:
    """Nodes carry the location of their first token."""

    def test_binary_location_is_left_operand(self) -> None:
        node = _expr("a + b")
        assert (node.location.lineno, node.location.col_offset) == (1, 4)

    def test_text_location(self) -> None:
        program = parse("x\n{{ y }}\nz", source_file="t.tmpl")
        last = program.children[-1]
        assert last.location.lineno == 2
        assert last.location.source_file == "t.tmpl"

    def test_locations_ignored_in_equality(self) -> None:
        assert parse("{{ a }}").children == parse("\n\n   {{a}}").children[1:]
