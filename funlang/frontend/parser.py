"""Recursive-descent parser for funlang. Each precedence tier is one parse level, loosest first:

```
<program>     ::= <statement>* EOF
<statement>   ::= <declaration> | <expression> [";"]
<declaration> ::= ("let" | "const") IDENTIFIER (";" | "=" <expression> ";")   ; const requires a value

<expression>  ::= <assignment>
<assignment>  ::= <or> ["=" <assignment>]                ; right associative
<or>          ::= <and> ("||" <and>)*
<and>         ::= <equality> ("&&" <equality>)*
<equality>    ::= <comparison> (("==" | "!=") <comparison>)*
<comparison>  ::= <additive> ((">" | "<" | ">=" | "<=") <additive>)*
<additive>    ::= <mult> (("+" | "-") <mult>)*
<mult>        ::= <unary> (("*" | "/" | "%") <unary>)*
<unary>       ::= ("-" | "!") <unary> | <primary>
<primary>     ::= IDENTIFIER | NUMBER | STRING | "(" <expression> ")"
```

Every binary level is left associative: its right operand is parsed at the next tighter level, so `10 - 3 - 2` is
`(10 - 3) - 2` and `2 + 3 * 4` is `2 + (3 * 4)`.
"""

from funlang.frontend.ast import (AssignmentExpr, BinaryExpr, Identifier, LogicalExpr, NumericLiteral, Program,
                                  StringLiteral, UnaryExpr, VariableDeclaration)
from funlang.frontend.lexical import TokenKind, tokenize
from funlang.lang.error import ParseError


OPERATOR_KINDS = (TokenKind.BINARY_OPERATOR, TokenKind.UNARY_OPERATOR, TokenKind.EQUALS, TokenKind.NOT_EQUALS)
CONDITIONAL_KINDS = (TokenKind.IF, TokenKind.ELSE_IF, TokenKind.ELSE)


class Parser:
    """Produces one Program per call to produce_ast. A single Parser can be reused for any number of sources."""

    def __init__(self):
        self._tokens = []
        self._pos = 0

    def at(self):
        return self._tokens[self._pos]

    def eat(self):
        """Consumes and returns the current token. The EndOfFile token is never consumed."""
        token = self.at()
        if token.kind is not TokenKind.EOF:
            self._pos += 1
        return token

    def expect(self, kinds, msg, value=None):
        """Consumes the current token, raising ParseError (msg formatted with the token) unless it is one of kinds
        and, if given, has the exact value.
        """
        token = self.at()
        if token.kind not in kinds or (value is not None and token.value != value):
            raise ParseError(msg, token.value, token.line, token.column)
        return self.eat()

    def not_eof(self):
        return self.at().kind is not TokenKind.EOF

    def at_operator(self, *operators):
        token = self.at()
        return token.kind in OPERATOR_KINDS and token.value in operators

    def produce_ast(self, source):
        """Parses source into a Program. Raises LexicalError or ParseError."""
        self._tokens = tokenize(source)
        self._pos = 0

        body = []
        while self.not_eof():
            body.append(self.parse_statement())
        return Program(body)

    def parse_statement(self):
        token = self.at()

        if token.kind in (TokenKind.LET, TokenKind.CONST):
            return self.parse_variable_declaration()

        elif token.kind in CONDITIONAL_KINDS:
            raise ParseError("conditional statements are not supported: '{}'", token.value, token.line, token.column)

        expr = self.parse_expression()
        if self.at().kind is TokenKind.SEMICOLON:
            self.eat()
        return expr

    def parse_variable_declaration(self):
        keyword = self.eat()
        constant = keyword.kind is TokenKind.CONST

        identifier = self.expect([TokenKind.IDENTIFIER], f"expected identifier after '{keyword.value}', got '{{}}'")

        if self.at().kind is TokenKind.SEMICOLON:
            if constant:
                raise ParseError("constant '{}' must have a value", identifier.value, identifier.line,
                                 identifier.column)
            self.eat()
            return VariableDeclaration(identifier.value, None, constant, keyword.line, keyword.column,
                                       (identifier.line, identifier.column))

        self.expect([TokenKind.EQUALS], "expected '=' or ';' after identifier in declaration, got '{}'", value="=")
        value = self.parse_expression()
        self.expect([TokenKind.SEMICOLON], "expected ';' after variable declaration, got '{}'")

        return VariableDeclaration(identifier.value, value, constant, keyword.line, keyword.column,
                                   (identifier.line, identifier.column))

    def parse_expression(self):
        return self.parse_assignment_expression()

    def parse_assignment_expression(self):
        left = self.parse_or_expression()

        if self.at_operator("="):
            self.eat()
            value = self.parse_assignment_expression()
            return AssignmentExpr(left, value, left.line, left.column)

        return left

    def _parse_operator_level(self, operators, parse_operand, node_cls):
        """Parses a left-associative chain of operators, each operand parsed by parse_operand."""
        left = parse_operand()

        while self.at_operator(*operators):
            operator = self.eat()
            right = parse_operand()
            left = node_cls(left, operator.value, right, left.line, left.column, (operator.line, operator.column))

        return left

    def parse_or_expression(self):
        return self._parse_operator_level(("||",), self.parse_and_expression, LogicalExpr)

    def parse_and_expression(self):
        return self._parse_operator_level(("&&",), self.parse_equality_expression, LogicalExpr)

    def parse_equality_expression(self):
        return self._parse_operator_level(("==", "!="), self.parse_comparative_expression, LogicalExpr)

    def parse_comparative_expression(self):
        return self._parse_operator_level((">", "<", ">=", "<="), self.parse_additive_expression, LogicalExpr)

    def parse_additive_expression(self):
        return self._parse_operator_level(("+", "-"), self.parse_multiplicative_expression, BinaryExpr)

    def parse_multiplicative_expression(self):
        return self._parse_operator_level(("*", "/", "%"), self.parse_unary_expression, BinaryExpr)

    def parse_unary_expression(self):
        if self.at_operator("-", "!"):
            operator = self.eat()
            operand = self.parse_unary_expression()
            return UnaryExpr(operator.value, operand, operator.line, operator.column)

        return self.parse_primary_expression()

    def parse_primary_expression(self):
        token = self.at()

        if token.kind is TokenKind.IDENTIFIER:
            self.eat()
            return Identifier(token.value, token.line, token.column)

        elif token.kind is TokenKind.NUMBER:
            self.eat()
            return NumericLiteral(float(token.value), token.line, token.column)

        elif token.kind is TokenKind.STRING:
            self.eat()
            return StringLiteral(token.value, token.line, token.column)

        elif token.kind is TokenKind.OPEN_PAREN:
            self.eat()
            value = self.parse_expression()
            self.expect([TokenKind.CLOSE_PAREN], "expected ')' to close parenthesized expression, got '{}'")
            return value

        raise ParseError("unexpected token '{}'", token.value, token.line, token.column)
