"""
Lexer/Tokenizer for the restricted stylesheet dialect.

Converts raw CSS text into a stream of tokens with source location tracking.
Only what the dialect needs is recognized: identifiers, hashes, at-keywords,
functions (kept whole, with their raw argument text), strings, numbers and
the punctuation of rules and declarations. Comments are dropped.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import make_parse_error


class TokenType(Enum):
    """Token types in the stylesheet dialect."""

    IDENT = "IDENT"
    HASH = "HASH"
    AT_KEYWORD = "AT_KEYWORD"
    FUNCTION = "FUNCTION"
    STRING = "STRING"
    NUMBER = "NUMBER"
    PERCENTAGE = "PERCENTAGE"
    DIMENSION = "DIMENSION"

    COLON = ":"
    SEMICOLON = ";"
    COMMA = ","
    LBRACE = "{"
    RBRACE = "}"
    DELIM = "DELIM"

    WHITESPACE = "WHITESPACE"
    EOF = "EOF"


@dataclass
class Token:
    """A single token with location information.

    For FUNCTION tokens ``value`` is the function name and ``argument`` holds
    the raw text between the parentheses.
    """

    type: TokenType
    value: str
    line: int
    column: int
    argument: str = ""

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


_PUNCTUATION = {
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}


class Lexer:
    """
    Lexer for the stylesheet dialect.
    """

    def __init__(self, text: str, file: Path | None = None):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def error(self, message: str, line: int, column: int):
        return make_parse_error(message, self.file, line, column, self.text)

    def skip_comment(self) -> None:
        """Skip a ``/* ... */`` comment."""
        start_line, start_col = self.line, self.column
        self.advance()
        self.advance()
        while self.current_char() is not None:
            if self.current_char() == "*" and self.peek_char() == "/":
                self.advance()
                self.advance()
                return
            self.advance()
        raise self.error("Unterminated comment", start_line, start_col)

    def is_name_char(self, ch: str | None) -> bool:
        return ch is not None and (ch.isalnum() or ch in "-_" or ord(ch) > 127)

    def starts_identifier(self) -> bool:
        """Check whether an identifier starts at the current position."""
        ch = self.current_char()
        if ch is None:
            return False
        if ch.isalpha() or ch == "_" or ord(ch) > 127:
            return True
        if ch == "-":
            nxt = self.peek_char()
            return nxt is not None and (nxt.isalpha() or nxt in "-_" or ord(nxt) > 127)
        return False

    def read_name(self) -> str:
        """Read a run of name characters."""
        chars = []
        while self.is_name_char(self.current_char()):
            chars.append(self.current_char())
            self.advance()
        return "".join(chars)

    def read_string(self) -> str:
        """Read a quoted string."""
        start_line = self.line
        start_col = self.column
        quote = self.current_char()
        self.advance()

        chars = []
        while True:
            current = self.current_char()
            if current is None or current == "\n":
                raise self.error("Unterminated string literal", start_line, start_col)
            if current == quote:
                break
            if current == "\\":
                self.advance()
                escaped = self.current_char()
                if escaped is not None and escaped != "\n":
                    chars.append(escaped)
                self.advance()
                continue
            chars.append(current)
            self.advance()

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_number(self) -> tuple[TokenType, str]:
        """Read a number with an optional ``%`` or unit suffix."""
        chars = []
        if self.current_char() in ("+", "-"):
            chars.append(self.current_char())
            self.advance()
        while self.current_char() is not None and (
            self.current_char().isdigit() or self.current_char() == "."
        ):
            chars.append(self.current_char())
            self.advance()

        number = "".join(chars)
        if self.current_char() == "%":
            self.advance()
            return TokenType.PERCENTAGE, number + "%"
        if self.starts_identifier():
            return TokenType.DIMENSION, number + self.read_name()
        return TokenType.NUMBER, number

    def read_function_arguments(self, start_line: int, start_col: int) -> str:
        """Read raw text up to the matching ``)``."""
        depth = 1
        chars = []
        while True:
            ch = self.current_char()
            if ch is None:
                raise self.error("Unterminated function", start_line, start_col)
            if ch == "/" and self.peek_char() == "*":
                self.skip_comment()
                chars.append(" ")
                continue
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
                if depth == 0:
                    self.advance()
                    return "".join(chars)
            chars.append(ch)
            self.advance()

    def starts_number(self) -> bool:
        ch = self.current_char()
        nxt = self.peek_char()
        if ch is None:
            return False
        if ch.isdigit():
            return True
        if ch == "." and nxt is not None and nxt.isdigit():
            return True
        if ch in "+-" and nxt is not None:
            return nxt.isdigit() or (nxt == "." and (self.peek_char(2) or "").isdigit())
        return False

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            ParseError: If syntax error encountered
        """
        while self.pos < len(self.text):
            ch = self.current_char()
            token_line = self.line
            token_col = self.column

            if ch == "/" and self.peek_char() == "*":
                self.skip_comment()

            elif ch in (" ", "\t", "\r", "\n", "\f"):
                while self.current_char() in (" ", "\t", "\r", "\n", "\f"):
                    self.advance()
                self.tokens.append(Token(TokenType.WHITESPACE, " ", token_line, token_col))

            elif ch in ('"', "'"):
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))

            elif ch == "@":
                self.advance()
                if not self.starts_identifier():
                    raise self.error("Expected a name after '@'", token_line, token_col)
                name = self.read_name()
                self.tokens.append(Token(TokenType.AT_KEYWORD, name, token_line, token_col))

            elif ch == "#":
                self.advance()
                name = self.read_name()
                if not name:
                    raise self.error("Expected a name or hex digits after '#'", token_line, token_col)
                self.tokens.append(Token(TokenType.HASH, name, token_line, token_col))

            elif self.starts_number():
                token_type, value = self.read_number()
                self.tokens.append(Token(token_type, value, token_line, token_col))

            elif self.starts_identifier():
                name = self.read_name()
                if self.current_char() == "(":
                    self.advance()
                    argument = self.read_function_arguments(token_line, token_col)
                    self.tokens.append(
                        Token(TokenType.FUNCTION, name, token_line, token_col, argument=argument)
                    )
                else:
                    self.tokens.append(Token(TokenType.IDENT, name, token_line, token_col))

            elif ch in _PUNCTUATION:
                self.advance()
                self.tokens.append(Token(_PUNCTUATION[ch], ch, token_line, token_col))

            else:
                self.advance()
                self.tokens.append(Token(TokenType.DELIM, ch, token_line, token_col))

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return self.tokens


def tokenize(text: str, file: Path | None = None) -> list[Token]:
    """
    Convenience function to tokenize stylesheet text.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
