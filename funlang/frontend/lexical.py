"""Lexical analysis for funlang: converts raw source text into an ordered sequence of tokens.

Tokens can be loosely defined as follows:

```
<number>     ::= <digit>* ["." <digit>*]       ; at least one digit, at most one "."
<string>     ::= '"' <char>* '"'               ; copied verbatim, no escape sequences
<identifier> ::= [A-Za-z_]+                    ; unless it is a keyword
<keyword>    ::= "let" | "const" | "if" | "else" | "else if"
<operator>   ::= "+" | "-" | "*" | "/" | "%" | "=" | "==" | "!" | "!="
               | "&&" | "||" | ">" | ">=" | "<" | "<="
<punct>      ::= "(" | ")" | ";"
```

Whitespace separates tokens and is otherwise ignored. `-` is always lexed as a binary operator: whether it negates or
subtracts is decided by the parser.
"""

import string
from dataclasses import dataclass
from enum import Enum

from funlang.lang.error import LexicalError


class TokenKind(Enum):
    # literals
    NUMBER = "Number"
    IDENTIFIER = "Identifier"
    STRING = "String"

    # operators and punctuation
    BINARY_OPERATOR = "BinaryOperator"
    UNARY_OPERATOR = "UnaryOperator"
    EQUALS = "Equals"
    NOT_EQUALS = "NotEquals"
    SEMICOLON = "Semicolon"
    OPEN_PAREN = "OpenParen"
    CLOSE_PAREN = "CloseParen"

    # keywords
    LET = "Let"
    CONST = "Const"
    IF = "If"
    ELSE_IF = "ElseIf"
    ELSE = "Else"

    EOF = "EndOfFile"


@dataclass(frozen=True)
class Token:
    value: str
    kind: TokenKind
    line: int
    column: int

    def __repr__(self):
        return f"{self.kind.value}({self.value!r})"


KEYWORDS = {
    "let": TokenKind.LET,
    "const": TokenKind.CONST,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
}

EOF_VALUE = "End of file"


class Lexer:
    """Single-use scanner over one source string. Use tokenize() rather than instantiating directly."""
    SKIPPABLE = " \t\r\n"
    DIGITS = string.digits
    IDENTIFIER_CHARS = string.ascii_letters + "_"

    PUNCTUATION = {
        "(": TokenKind.OPEN_PAREN,
        ")": TokenKind.CLOSE_PAREN,
        ";": TokenKind.SEMICOLON,
    }

    # longest match first
    OPERATORS = {
        "==": TokenKind.EQUALS,
        "!=": TokenKind.NOT_EQUALS,
        "&&": TokenKind.BINARY_OPERATOR,
        "||": TokenKind.BINARY_OPERATOR,
        ">=": TokenKind.BINARY_OPERATOR,
        "<=": TokenKind.BINARY_OPERATOR,
        "+": TokenKind.BINARY_OPERATOR,
        "-": TokenKind.BINARY_OPERATOR,
        "*": TokenKind.BINARY_OPERATOR,
        "/": TokenKind.BINARY_OPERATOR,
        "%": TokenKind.BINARY_OPERATOR,
        ">": TokenKind.BINARY_OPERATOR,
        "<": TokenKind.BINARY_OPERATOR,
        "=": TokenKind.EQUALS,
        "!": TokenKind.UNARY_OPERATOR,
    }

    def __init__(self, source):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens = []

    @property
    def char(self):
        return self.source[self.pos]

    def advance(self, count=1):
        """Moves count characters forward, keeping line/column up to date."""
        for __ in range(count):
            if self.source[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def emit(self, value, kind, width):
        """Appends a token starting at the current position, then skips width characters."""
        self.tokens.append(Token(value, kind, self.line, self.column))
        self.advance(width)

    def tokenize(self):
        while self.pos < len(self.source):
            char = self.char

            if char in Lexer.SKIPPABLE:
                self.advance()
            elif char in Lexer.PUNCTUATION:
                self.emit(char, Lexer.PUNCTUATION[char], 1)
            elif char == "\"":
                self.scan_string()
            elif char in Lexer.DIGITS or char == ".":
                self.scan_number()
            elif char in Lexer.IDENTIFIER_CHARS:
                self.scan_word()
            else:
                self.scan_operator()

        self.tokens.append(Token(EOF_VALUE, TokenKind.EOF, self.line, self.column))
        return self.tokens

    def scan_operator(self):
        for operator, kind in Lexer.OPERATORS.items():
            if self.source.startswith(operator, self.pos):
                self.emit(operator, kind, len(operator))
                return
        raise LexicalError("unexpected character '{}'", self.char, self.line, self.column)

    def scan_string(self):
        end = self.source.find("\"", self.pos + 1)
        if end == -1:
            raise LexicalError("unterminated string literal '{}'", self.source[self.pos:], self.line, self.column,
                               length=1)
        self.emit(self.source[self.pos + 1:end], TokenKind.STRING, end - self.pos + 1)

    def scan_number(self):
        end = self.pos
        decimal_points = 0
        while end < len(self.source) and (self.source[end] in Lexer.DIGITS or self.source[end] == "."):
            if self.source[end] == ".":
                decimal_points += 1
                if decimal_points > 1:
                    literal = self.source[self.pos:end + 1]
                    raise LexicalError("too many decimal points in number literal '{}'", literal, self.line,
                                       self.column)
            end += 1

        literal = self.source[self.pos:end]
        if literal == ".":
            raise LexicalError("number literal '{}' has no digits", literal, self.line, self.column)
        self.emit(literal, TokenKind.NUMBER, len(literal))

    def scan_word(self):
        end = self.pos
        while end < len(self.source) and self.source[end] in Lexer.IDENTIFIER_CHARS:
            end += 1
        word = self.source[self.pos:end]

        if word == "else":
            width = self._else_if_width(end)
            if width:
                self.emit("else if", TokenKind.ELSE_IF, width)
                return

        self.emit(word, KEYWORDS.get(word, TokenKind.IDENTIFIER), len(word))

    def _else_if_width(self, end):
        """If `else` ending at end is followed by whitespace and a standalone `if`, returns the width of the whole
        `else if` run, else 0.
        """
        idx = end
        while idx < len(self.source) and self.source[idx] in Lexer.SKIPPABLE:
            idx += 1

        after = idx + len("if")
        if idx == end or self.source[idx:after] != "if":
            return 0
        if after < len(self.source) and self.source[after] in Lexer.IDENTIFIER_CHARS:
            return 0
        return after - self.pos


def tokenize(source):
    """Converts source into a list of Tokens, always ending with an EndOfFile token. Raises LexicalError on characters
    outside the language, malformed number literals and unterminated strings.
    """
    return Lexer(source).tokenize()
