"""Parser for the monkey language: recursive descent for statements, Pratt (precedence climbing) for expressions.

The parser keeps two tokens of lookahead, current and peek. Expression parsing starts with the prefix handler of the
current token, then keeps folding the expression parsed so far into the infix handler of the peek token for as long
as the peek token binds tighter than the caller. Handlers are selected by an exhaustive if/elif over TokenKind in
_parse_prefix and _parse_infix.

There is no error recovery: the first unmet expectation raises a ParseError pointing at the offending token.
"""

import enum

from monkey.core.lexical import Lexer, TokenKind
from monkey.core.syntax import (BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement, FunctionLiteral,
                                Identifier, IfExpression, InfixExpression, IntegerLiteral, LetStatement,
                                PrefixExpression, Program, ReturnStatement)
from monkey.lang.error import ParseError


class Precedence(enum.IntEnum):
    LOWEST = 1
    EQUALS = 2   # == !=
    COMPARE = 3  # < >
    SUM = 4      # + -
    PRODUCT = 5  # * /
    PREFIX = 6   # !x -x
    CALL = 7     # f(x)


PRECEDENCES = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.COMPARE,
    TokenKind.GT: Precedence.COMPARE,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}


class Parser:
    """Turns the tokens of a Lexer into a Program."""

    def __init__(self, lexer):
        if isinstance(lexer, str):
            lexer = Lexer(lexer)
        self.lexer = lexer

        self.current = self.lexer.next_token()
        self.peek = self.lexer.next_token()

    @property
    def source(self):
        return self.lexer.source

    def _advance(self):
        self.current = self.peek
        self.peek = self.lexer.next_token()

    def _error(self, msg, token, *exprs):
        """Returns a ParseError about token. msg is formatted with exprs ({0} is reserved for the source)."""
        return ParseError(msg, (self.source, *exprs), start=token.start, end=token.end)

    def _expect_peek(self, kind):
        """Advances if the peek token is of kind, raises a ParseError otherwise."""
        if self.peek.kind is not kind:
            raise self._error("expected next token to be {1}, got {2} instead", self.peek, kind, self.peek.kind)
        self._advance()

    def _peek_precedence(self):
        return PRECEDENCES.get(self.peek.kind, Precedence.LOWEST)

    def _current_precedence(self):
        return PRECEDENCES.get(self.current.kind, Precedence.LOWEST)

    def _skip_semicolon(self):
        if self.peek.kind is TokenKind.SEMICOLON:
            self._advance()

    def parse_program(self):
        """Parses statements until EOF. Raises a ParseError as soon as any statement fails to parse."""
        statements = []
        while self.current.kind is not TokenKind.EOF:
            statements.append(self.parse_statement())
            self._advance()
        return Program(tuple(statements))

    def parse_statement(self):
        if self.current.kind is TokenKind.LET:
            return self.parse_let_statement()
        elif self.current.kind is TokenKind.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        self._expect_peek(TokenKind.IDENT)
        name = Identifier(self.current.literal)

        self._expect_peek(TokenKind.ASSIGN)
        self._advance()
        value = self.parse_expression(Precedence.LOWEST)

        self._skip_semicolon()
        return LetStatement(name, value)

    def parse_return_statement(self):
        self._advance()
        value = self.parse_expression(Precedence.LOWEST)

        self._skip_semicolon()
        return ReturnStatement(value)

    def parse_expression_statement(self):
        expression = self.parse_expression(Precedence.LOWEST)

        self._skip_semicolon()
        return ExpressionStatement(expression)

    def parse_block_statement(self):
        """Parses statements until the matching "}". Expects current to be "{" and leaves current on "}"."""
        statements = []
        self._advance()

        while self.current.kind is not TokenKind.RBRACE:
            if self.current.kind is TokenKind.EOF:
                raise self._error("expected next token to be {1}, got {2} instead", self.current, TokenKind.RBRACE,
                                  TokenKind.EOF)
            statements.append(self.parse_statement())
            self._advance()

        return BlockStatement(tuple(statements))

    def parse_expression(self, precedence):
        """Parses an expression whose operators all bind tighter than precedence. Leaves current on the last token of
        the expression.
        """
        left = self._parse_prefix()

        while self.peek.kind is not TokenKind.SEMICOLON and precedence < self._peek_precedence():
            self._advance()
            left = self._parse_infix(left)

        return left

    def _parse_prefix(self):
        kind = self.current.kind

        if kind is TokenKind.IDENT:
            return Identifier(self.current.literal)
        elif kind is TokenKind.INT:
            return self.parse_integer_literal()
        elif kind is TokenKind.TRUE or kind is TokenKind.FALSE:
            return BooleanLiteral(kind is TokenKind.TRUE)
        elif kind is TokenKind.BANG or kind is TokenKind.MINUS:
            return self.parse_prefix_expression()
        elif kind is TokenKind.LPAREN:
            return self.parse_grouped_expression()
        elif kind is TokenKind.IF:
            return self.parse_if_expression()
        elif kind is TokenKind.FUNCTION:
            return self.parse_function_literal()

        raise self._error("no prefix parse function for {1} found", self.current, kind)

    def _parse_infix(self, left):
        kind = self.current.kind

        if kind is TokenKind.LPAREN:
            return self.parse_call_expression(left)
        elif kind in PRECEDENCES:
            return self.parse_infix_expression(left)

        raise self._error("no infix parse function for {1} found", self.current, kind)

    def parse_integer_literal(self):
        try:
            return IntegerLiteral(int(self.current.literal))
        except ValueError:
            raise self._error("could not parse {1} as integer", self.current, self.current.literal)

    def parse_prefix_expression(self):
        operator = self.current.literal
        self._advance()
        return PrefixExpression(operator, self.parse_expression(Precedence.PREFIX))

    def parse_infix_expression(self, left):
        operator = self.current.literal
        precedence = self._current_precedence()
        self._advance()
        return InfixExpression(operator, left, self.parse_expression(precedence))

    def parse_grouped_expression(self):
        self._advance()
        expression = self.parse_expression(Precedence.LOWEST)
        self._expect_peek(TokenKind.RPAREN)
        return expression

    def parse_if_expression(self):
        self._expect_peek(TokenKind.LPAREN)
        self._advance()
        condition = self.parse_expression(Precedence.LOWEST)
        self._expect_peek(TokenKind.RPAREN)

        self._expect_peek(TokenKind.LBRACE)
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek.kind is TokenKind.ELSE:
            self._advance()
            self._expect_peek(TokenKind.LBRACE)
            alternative = self.parse_block_statement()

        return IfExpression(condition, consequence, alternative)

    def parse_function_literal(self):
        self._expect_peek(TokenKind.LPAREN)
        parameters = self._parse_function_parameters()

        self._expect_peek(TokenKind.LBRACE)
        return FunctionLiteral(parameters, self.parse_block_statement())

    def _parse_function_parameters(self):
        """Parses "ident, ident, ... )". Expects current to be "(" and leaves current on ")"."""
        if self.peek.kind is TokenKind.RPAREN:
            self._advance()
            return ()

        self._expect_peek(TokenKind.IDENT)
        parameters = [Identifier(self.current.literal)]

        while self.peek.kind is TokenKind.COMMA:
            self._advance()
            self._expect_peek(TokenKind.IDENT)
            parameters.append(Identifier(self.current.literal))

        self._expect_peek(TokenKind.RPAREN)
        return tuple(parameters)

    def parse_call_expression(self, callee):
        return CallExpression(callee, self._parse_call_arguments())

    def _parse_call_arguments(self):
        """Parses "expr, expr, ... )". Expects current to be "(" and leaves current on ")"."""
        if self.peek.kind is TokenKind.RPAREN:
            self._advance()
            return ()

        self._advance()
        arguments = [self.parse_expression(Precedence.LOWEST)]

        while self.peek.kind is TokenKind.COMMA:
            self._advance()
            self._advance()
            arguments.append(self.parse_expression(Precedence.LOWEST))

        self._expect_peek(TokenKind.RPAREN)
        return tuple(arguments)


def parse(source):
    """Parses source into a Program. Raises a ParseError if source is not valid monkey."""
    return Parser(Lexer(source)).parse_program()
