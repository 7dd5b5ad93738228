"""
Unit tests for the Bitsy recursive descent parser.
"""

import pytest
from bitsy.frontend import (
    Lexer, Parser, Token, TokenType, ParseError, LexerError,
    EmptyProgramError, MissingBeginError, UnexpectedEndOfFileError,
    ExpectedAssignError, TrailingInputError, UnexpectedTokenError,
    UnmatchedParenthesisError, NestingTooDeepError, UnclosedCommentError,
    InvalidCharacterError, InvalidNumberError, parse_source,
)
from bitsy.syntax import (
    Number, Variable, BinaryOperation, Negation, Operator,
    Assignment, Conditional, ConditionKind, Loop, Break, Print, Read, Block, Program,
)
from bitsy.utils import MAX_NESTING_DEPTH


def parse(source, **kwargs):
    return parse_source(source, **kwargs)


def body(source):
    return parse(f"BEGIN {source} END").body


def expr(source):
    """Parse a single expression through a PRINT statement."""
    [stmt] = body(f"PRINT {source}")
    return stmt.expr


class TestParserBasic:
    """Tests for basic parser functionality."""

    def test_print_number(self):
        assert parse("BEGIN PRINT 1 END") == Program([Print(Number(1))])

    def test_empty_body(self):
        assert parse("BEGIN END") == Program([])

    def test_simple_assignment(self):
        assert body("x = 42") == [Assignment("x", Number(42))]

    def test_assignments_and_nested_loops(self):
        """Test the tree of a program mixing assignments and loops."""
        program = parse("""
            BEGIN
                a = 5
                b = (2 * a) + 5

                LOOP
                END

                LOOP
                END
            END
        """)
        assert program == Program([
            Assignment("a", Number(5)),
            Assignment("b", BinaryOperation(
                BinaryOperation(Number(2), Operator.MULTIPLY, Variable("a")),
                Operator.ADD,
                Number(5),
            )),
            Loop([]),
            Loop([]),
        ])

    def test_statements_need_no_separator(self):
        assert body("a = 1 b = a PRINT b") == [
            Assignment("a", Number(1)),
            Assignment("b", Variable("a")),
            Print(Variable("b")),
        ]

    def test_accepts_hand_built_tokens(self):
        """Test that the parser only depends on the token contract."""
        tokens = [
            Token(TokenType.BEGIN),
            Token(TokenType.READ), Token(TokenType.IDENTIFIER, "n"),
            Token(TokenType.END),
        ]
        assert Parser(tokens).parse() == Program([Read("n")])


class TestParserStatements:
    """Tests for statement parsing."""

    def test_read(self):
        assert body("READ cool") == [Read("cool")]

    def test_break(self):
        assert body("LOOP BREAK END") == [Loop([Break()])]

    def test_break_outside_loop_is_accepted(self):
        assert body("BREAK") == [Break()]

    @pytest.mark.parametrize("keyword,kind", [
        ("IFP", ConditionKind.POSITIVE),
        ("IFZ", ConditionKind.ZERO),
        ("IFN", ConditionKind.NEGATIVE),
    ])
    def test_conditional_kinds(self, keyword, kind):
        assert body(f"{keyword} x PRINT x END") == [
            Conditional(kind, Variable("x"), [Print(Variable("x"))], None)
        ]

    def test_conditional_with_else(self):
        [stmt] = body("IFP my_number PRINT my_number ELSE PRINT -999 END")
        assert stmt == Conditional(
            ConditionKind.POSITIVE,
            Variable("my_number"),
            [Print(Variable("my_number"))],
            [Print(Negation(Number(999)))],
        )

    def test_empty_else_differs_from_no_else(self):
        [with_else] = body("IFZ x ELSE END")
        [without_else] = body("IFZ x END")
        assert with_else.orelse == []
        assert without_else.orelse is None

    def test_conditional_test_is_an_expression(self):
        [stmt] = body("IFN a - b * 2 END")
        assert stmt.test == BinaryOperation(
            Variable("a"), Operator.SUBTRACT,
            BinaryOperation(Variable("b"), Operator.MULTIPLY, Number(2)),
        )

    def test_nested_blocks(self):
        """Test that each END closes the innermost open block."""
        program = parse("""
            BEGIN
                current = 10
                LOOP
                    PRINT current
                    current = current - 1
                    IFZ current
                        BREAK
                    ELSE
                        LOOP
                            IFP current END
                        END
                    END
                END
                PRINT 0
            END
        """)
        assert program == Program([
            Assignment("current", Number(10)),
            Loop([
                Print(Variable("current")),
                Assignment("current", BinaryOperation(
                    Variable("current"), Operator.SUBTRACT, Number(1))),
                Conditional(
                    ConditionKind.ZERO,
                    Variable("current"),
                    [Break()],
                    [Loop([Conditional(ConditionKind.POSITIVE, Variable("current"), [], None)])],
                ),
            ]),
            Print(Number(0)),
        ])

    def test_nested_begin_block(self):
        assert body("BEGIN x = 1 END PRINT x") == [
            Block([Assignment("x", Number(1))]),
            Print(Variable("x")),
        ]


class TestParserExpressions:
    """Tests for expression parsing."""

    @pytest.mark.parametrize("symbol,operator", [
        ("+", Operator.ADD),
        ("-", Operator.SUBTRACT),
        ("*", Operator.MULTIPLY),
        ("/", Operator.DIVIDE),
        ("%", Operator.MODULO),
    ])
    def test_binary_operations(self, symbol, operator):
        assert expr(f"a {symbol} 2") == BinaryOperation(Variable("a"), operator, Number(2))

    def test_multiplication_binds_tighter_on_the_right(self):
        """Test that `a + b * c` puts the product under the sum's right."""
        tree = expr("a + b * c")
        assert tree.operator == Operator.ADD
        assert tree.left == Variable("a")
        assert tree.right == BinaryOperation(Variable("b"), Operator.MULTIPLY, Variable("c"))

    def test_multiplication_binds_tighter_on_the_left(self):
        """Test that `a * b + c` puts the product under the sum's left."""
        tree = expr("a * b + c")
        assert tree.operator == Operator.ADD
        assert tree.left == BinaryOperation(Variable("a"), Operator.MULTIPLY, Variable("b"))
        assert tree.right == Variable("c")

    def test_product_nested_on_the_left_of_sum(self):
        assert expr("2 * a + 5") == BinaryOperation(
            BinaryOperation(Number(2), Operator.MULTIPLY, Variable("a")),
            Operator.ADD,
            Number(5),
        )

    def test_additive_is_left_associative(self):
        assert expr("a - b - c") == BinaryOperation(
            BinaryOperation(Variable("a"), Operator.SUBTRACT, Variable("b")),
            Operator.SUBTRACT,
            Variable("c"),
        )

    def test_multiplicative_is_left_associative(self):
        assert expr("a / b % c * d") == BinaryOperation(
            BinaryOperation(
                BinaryOperation(Variable("a"), Operator.DIVIDE, Variable("b")),
                Operator.MODULO,
                Variable("c"),
            ),
            Operator.MULTIPLY,
            Variable("d"),
        )

    def test_parentheses_override_precedence(self):
        assert expr("(a + b) * c") == BinaryOperation(
            BinaryOperation(Variable("a"), Operator.ADD, Variable("b")),
            Operator.MULTIPLY,
            Variable("c"),
        )

    def test_redundant_parentheses(self):
        assert expr("((7))") == Number(7)

    def test_unary_minus(self):
        assert expr("-5") == Negation(Number(5))

    def test_unary_minus_binds_to_the_atom(self):
        assert expr("-a * b") == BinaryOperation(
            Negation(Variable("a")), Operator.MULTIPLY, Variable("b"))

    def test_unary_minus_after_operator(self):
        assert expr("a - -b") == BinaryOperation(
            Variable("a"), Operator.SUBTRACT, Negation(Variable("b")))

    def test_unary_minus_before_parentheses(self):
        assert expr("-(1 + 2)") == Negation(
            BinaryOperation(Number(1), Operator.ADD, Number(2)))

    def test_repeated_unary_minus(self):
        assert expr("--1") == Negation(Negation(Number(1)))

    def test_largest_literal(self):
        assert expr("2147483647") == Number(2147483647)


class TestParserErrors:
    """Tests for syntax errors."""

    def test_empty_program(self):
        with pytest.raises(EmptyProgramError, match="The program is empty."):
            parse("")

    def test_comment_only_program_is_empty(self):
        with pytest.raises(EmptyProgramError):
            parse("{nothing here}")

    def test_missing_begin(self):
        with pytest.raises(MissingBeginError, match="must start with `BEGIN`"):
            parse("END")

    def test_missing_begin_before_statement(self):
        with pytest.raises(MissingBeginError):
            parse("PRINT 1")

    def test_begin_alone(self):
        with pytest.raises(UnexpectedEndOfFileError):
            parse("BEGIN")

    def test_missing_end(self):
        with pytest.raises(UnexpectedEndOfFileError, match="Unexpected end of file."):
            parse("""
                BEGIN
                    LOOP
                    END
            """)

    def test_missing_end_in_conditional(self):
        with pytest.raises(UnexpectedEndOfFileError):
            parse("BEGIN IFP x PRINT x ELSE PRINT 0 END")

    def test_expression_cut_short(self):
        with pytest.raises(UnexpectedEndOfFileError):
            Parser([Token(TokenType.BEGIN), Token(TokenType.PRINT)]).parse()

    def test_instructions_after_end(self):
        with pytest.raises(TrailingInputError, match="after `BEGIN ... END`") as exc_info:
            parse("""
                BEGIN
                    LOOP
                    END
                END

                BEGIN
                END
            """)
        assert exc_info.value.token == Token(TokenType.BEGIN)

    def test_extra_end(self):
        with pytest.raises(TrailingInputError):
            parse("BEGIN LOOP END END END")

    def test_missing_assign(self):
        with pytest.raises(ExpectedAssignError, match="Expected `=` after identifier") as exc_info:
            parse("BEGIN a 5 END")
        assert exc_info.value.token == Token(TokenType.NUMBER, 5)

    def test_unmatched_parenthesis(self):
        with pytest.raises(UnmatchedParenthesisError) as exc_info:
            parse("BEGIN PRINT (1 + 2 END")
        assert exc_info.value.token == Token(TokenType.END)

    def test_unclosed_parenthesis_at_end_of_file(self):
        with pytest.raises(UnexpectedEndOfFileError):
            Parser([
                Token(TokenType.BEGIN), Token(TokenType.PRINT),
                Token(TokenType.LPAREN), Token(TokenType.NUMBER, 1),
            ]).parse()

    def test_stray_closing_parenthesis(self):
        with pytest.raises(UnexpectedTokenError):
            parse("BEGIN PRINT 1) END")

    @pytest.mark.parametrize("source", [
        "BEGIN 5 END",
        "BEGIN = 5 END",
        "BEGIN + END",
        "BEGIN ( END",
    ])
    def test_unexpected_statement(self, source):
        with pytest.raises(UnexpectedTokenError, match="a statement"):
            parse(source)

    @pytest.mark.parametrize("source", [
        "BEGIN PRINT END",
        "BEGIN a = * 2 END",
        "BEGIN PRINT 1 + END",
        "BEGIN a = READ END",
    ])
    def test_expected_expression(self, source):
        with pytest.raises(UnexpectedTokenError, match="an expression"):
            parse(source)

    def test_read_requires_identifier(self):
        with pytest.raises(UnexpectedTokenError, match="identifier after READ"):
            parse("BEGIN READ 5 END")

    def test_else_outside_conditional(self):
        with pytest.raises(UnexpectedTokenError, match="ELSE"):
            parse("BEGIN ELSE END")

    def test_else_in_loop(self):
        with pytest.raises(UnexpectedTokenError, match="ELSE"):
            parse("BEGIN LOOP ELSE END END")

    def test_second_else(self):
        with pytest.raises(UnexpectedTokenError, match="ELSE"):
            parse("BEGIN IFZ x ELSE ELSE END END")

    def test_all_errors_are_parse_errors(self):
        for error_class in (EmptyProgramError, MissingBeginError, UnexpectedEndOfFileError,
                            ExpectedAssignError, TrailingInputError, UnexpectedTokenError,
                            UnmatchedParenthesisError, NestingTooDeepError):
            assert issubclass(error_class, ParseError)
            assert not issubclass(error_class, LexerError)


class TestParserLexicalErrors:
    """Tests that lexer errors surface through the parser unchanged."""

    def test_unclosed_comment(self):
        with pytest.raises(UnclosedCommentError):
            parse("BEGIN {unterminated END")

    def test_invalid_character_in_first_token(self):
        with pytest.raises(InvalidCharacterError):
            parse("$")

    def test_invalid_number(self):
        with pytest.raises(InvalidNumberError):
            parse("BEGIN PRINT 2147483648 END")

    def test_lexer_error_after_last_end(self):
        with pytest.raises(InvalidCharacterError):
            parse("BEGIN END ;")


class TestParserNesting:
    """Tests for block depth tracking and nesting limits."""

    def test_outer_end_closes_the_program(self):
        """Test that END at block depth 0 ends the program, leaving trailing input."""
        with pytest.raises(TrailingInputError) as exc_info:
            parse("BEGIN LOOP END END PRINT")
        assert exc_info.value.token == Token(TokenType.PRINT)

    def test_balanced_blocks_close_the_program(self):
        program = parse("BEGIN LOOP IFP x BEGIN END ELSE IFN y END END END END")
        assert program == Program([Loop([
            Conditional(ConditionKind.POSITIVE, Variable("x"), [Block([])], [
                Conditional(ConditionKind.NEGATIVE, Variable("y"), [], None),
            ]),
        ])])

    @pytest.mark.parametrize("depth", [0, MAX_NESTING_DEPTH + 1])
    def test_rejects_out_of_range_limit(self, depth):
        with pytest.raises(ValueError, match="max_nesting_depth"):
            Parser(Lexer("BEGIN END"), max_depth=depth)

    def test_stack_exhaustion_is_reported_as_nesting(self, monkeypatch):
        def exhaust(self, allow_else):
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr(Parser, "_parse_body", exhaust)
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse("BEGIN END", max_depth=7)
        assert exc_info.value.limit == 7

    def test_blocks_within_limit(self):
        depth = 10
        source = "BEGIN " + "LOOP " * (depth - 1) + "END " * depth
        program = parse(source, max_depth=depth)
        node = program.body[0]
        for _ in range(depth - 2):
            node = node.body[0]
        assert node == Loop([])

    def test_blocks_over_limit(self):
        depth = 10
        source = "BEGIN " + "LOOP " * depth + "END " * (depth + 1)
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse(source, max_depth=depth)
        assert exc_info.value.limit == depth

    def test_parentheses_over_limit(self):
        with pytest.raises(NestingTooDeepError):
            parse("BEGIN PRINT " + "(" * 6 + "1" + ")" * 6 + " END", max_depth=5)

    def test_parentheses_within_limit(self):
        assert expr("(" * 5 + "1" + ")" * 5) == Number(1)
        assert parse("BEGIN PRINT " + "(" * 5 + "1" + ")" * 5 + " END", max_depth=5)

    def test_sibling_parentheses_do_not_accumulate(self):
        source = "BEGIN PRINT " + " + ".join(["((1))"] * 10) + " END"
        assert parse(source, max_depth=2)

    def test_unary_minus_over_limit(self):
        with pytest.raises(NestingTooDeepError):
            parse("BEGIN PRINT " + "-" * 4 + "1 END", max_depth=3)

    def test_adversarial_nesting_fails_predictably(self):
        """Test that deep input raises a parse error, not RecursionError."""
        with pytest.raises(NestingTooDeepError):
            parse("BEGIN PRINT " + "(" * 5000 + "1" + ")" * 5000 + " END")
        with pytest.raises(NestingTooDeepError):
            parse("BEGIN " + "LOOP " * 5000 + "END " * 5001)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
