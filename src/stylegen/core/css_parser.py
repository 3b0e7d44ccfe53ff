"""
Recursive descent parser for the restricted stylesheet dialect.

    @meta {
        author: "Jane";
        icon-set: "light";
    }

    :root {
        --accent: #1e90ff;
    }

    .tabs {
        divider: #333;
        @nest selected {
            background: var(--accent);
        }
    }

The root selector holds custom-property variables, the meta at-rule holds
theme metadata and ``@nest <target> { ... }`` stands in for native CSS
nesting. Selectors are limited to chains of ``.class``, ``#id`` and type
names separated by whitespace or ``>``; every link becomes a path segment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .colors import parse_color
from .css_lexer import Token, TokenType, tokenize
from .errors import (
    InvalidColorLiteral,
    InvalidVariableValue,
    ParseError,
    make_context,
    make_parse_error,
)
from .ir.stylesheet import ColorValue, Declaration, Rule, Stylesheet, ThemeMeta, VarRef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StylesheetSettings:
    """Reserved names of the dialect."""

    root_selector: str = ":root"
    nest_keyword: str = "nest"
    meta_keyword: str = "meta"


_META_KEYS = {"author": "author", "icon-set": "icon_set", "iconset": "icon_set"}


class BaseParser:
    """
    Base parser class with token manipulation utilities.
    """

    def __init__(self, tokens: list[Token], file: Path | None, text: str):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            text: Source text (for error snippets)
        """
        self.tokens = tokens
        self.file = file
        self.text = text
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def skip_whitespace(self) -> None:
        while self.match(TokenType.WHITESPACE):
            self.advance()

    def error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self.current_token()
        return make_parse_error(message, self.file, token.line, token.column, self.text)

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            if token.type == TokenType.EOF:
                raise self.error(f"Unexpected end of input, expected '{token_type.value}'")
            raise self.error(f"Expected '{token_type.value}', got '{token.value}'")
        return self.advance()


class StylesheetParser(BaseParser):
    """Builds a Stylesheet from tokens."""

    def __init__(
        self,
        tokens: list[Token],
        file: Path | None,
        text: str,
        settings: StylesheetSettings | None = None,
    ):
        super().__init__(tokens, file, text)
        self.settings = settings or StylesheetSettings()
        self.meta: ThemeMeta | None = None
        self.variables: list[Declaration] | None = None
        self.rules: list[Rule] = []

    def parse(self) -> Stylesheet:
        """Parse the whole stylesheet."""
        while True:
            self.skip_whitespace()
            token = self.current_token()

            if token.type == TokenType.EOF:
                break
            if token.type == TokenType.AT_KEYWORD:
                self.parse_top_level_at_rule()
            elif token.type == TokenType.SEMICOLON:
                self.advance()
            else:
                self.parse_qualified_rule()

        logger.debug(
            f"Parsed stylesheet: {len(self.rules)} rule(s), "
            f"{len(self.variables or [])} variable(s)"
        )
        return Stylesheet(meta=self.meta, variables=self.variables or [], rules=self.rules)

    # -------------------------------------------------------------------------
    # Top level
    # -------------------------------------------------------------------------

    def parse_top_level_at_rule(self) -> None:
        token = self.advance()
        if token.value.lower() != self.settings.meta_keyword.lower():
            raise self.error(f"Invalid @-rule ({token.value})", token)
        if self.meta is not None:
            raise self.error(f"Found duplicate @{token.value} metadata block", token)

        self.skip_whitespace()
        self.expect(TokenType.LBRACE)
        values: dict[str, str] = {}
        while True:
            self.skip_block_separators()
            if self.match(TokenType.RBRACE):
                self.advance()
                break
            name_token = self.expect_declaration_name()
            key = _META_KEYS.get(name_token.value.lower())
            if key is None:
                raise self.error(f"Unexpected '{name_token.value}' in metadata", name_token)
            value_tokens = self.read_declaration_value()
            if len(value_tokens) != 1 or value_tokens[0].type not in (
                TokenType.STRING,
                TokenType.IDENT,
            ):
                raise self.error(f"Expected a string for '{name_token.value}'", name_token)
            values[key] = value_tokens[0].value

        self.meta = ThemeMeta(**values)

    def parse_qualified_rule(self) -> None:
        start = self.current_token()
        prelude = self.read_prelude()

        if _prelude_text(prelude) == self.settings.root_selector:
            self.parse_root_block(start)
            return

        path = self.parse_selector(prelude, start)
        rule = Rule(path=path, line=start.line, column=start.column)
        self.parse_rule_block(rule)
        self.rules.append(rule)

    def parse_root_block(self, start: Token) -> None:
        if self.variables is not None:
            raise self.error(f"Found duplicate {self.settings.root_selector} block", start)
        self.variables = []
        plain = Rule(path=[], line=start.line, column=start.column)

        self.expect(TokenType.LBRACE)
        while True:
            self.skip_block_separators()
            token = self.current_token()
            if token.type == TokenType.RBRACE:
                self.advance()
                break
            if token.type == TokenType.AT_KEYWORD:
                raise self.error(
                    f"@-rules aren't allowed in {self.settings.root_selector}", token
                )

            name_token = self.expect_declaration_name()
            value_tokens = self.read_declaration_value()
            if name_token.value.startswith("--"):
                try:
                    value = self.parse_value(value_tokens, name_token)
                except InvalidColorLiteral as e:
                    raise InvalidVariableValue(name_token.value, e.context) from e
                self.variables.append(
                    Declaration(
                        property=name_token.value,
                        value=value,
                        line=name_token.line,
                        column=name_token.column,
                    )
                )
            else:
                plain.declarations.append(self.make_declaration(name_token, value_tokens))

        if plain.declarations:
            self.rules.append(plain)

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def parse_rule_block(self, rule: Rule) -> None:
        """Parse ``{ ... }`` of a rule or nesting directive into *rule*."""
        self.expect(TokenType.LBRACE)
        while True:
            self.skip_block_separators()
            token = self.current_token()

            if token.type == TokenType.RBRACE:
                self.advance()
                return
            if token.type == TokenType.AT_KEYWORD:
                rule.nested.append(self.parse_nest_directive())
                continue

            name_token = self.expect_declaration_name()
            value_tokens = self.read_declaration_value()
            if name_token.value.startswith("--"):
                logger.warning(
                    f"Ignoring custom property '{name_token.value}' outside "
                    f"{self.settings.root_selector} (line {name_token.line})"
                )
                continue
            rule.declarations.append(self.make_declaration(name_token, value_tokens))

    def parse_nest_directive(self) -> Rule:
        token = self.advance()
        if token.value.lower() != self.settings.nest_keyword.lower():
            raise self.error(f"Invalid @-rule ({token.value})", token)

        prelude = self.read_prelude()
        if not prelude:
            raise self.error(f"Expected a target after @{token.value}", token)
        path = self.parse_selector(prelude, token)

        nested = Rule(path=path, line=token.line, column=token.column)
        self.parse_rule_block(nested)
        return nested

    def skip_block_separators(self) -> None:
        while self.match(TokenType.WHITESPACE, TokenType.SEMICOLON):
            self.advance()

    # -------------------------------------------------------------------------
    # Selectors
    # -------------------------------------------------------------------------

    def read_prelude(self) -> list[Token]:
        """Collect tokens up to (not including) ``{``."""
        tokens = []
        while not self.match(TokenType.LBRACE):
            token = self.current_token()
            if token.type == TokenType.EOF:
                raise self.error("Unexpected end of input, expected '{'")
            if token.type in (TokenType.RBRACE, TokenType.SEMICOLON):
                raise self.error(f"Unexpected '{token.value}' in selector")
            tokens.append(self.advance())
        return _strip_whitespace(tokens)

    def parse_selector(self, prelude: list[Token], start: Token) -> list[str]:
        """Turn ``.a .b > c`` or ``.a.b`` into ``["a", "b", "c"]``."""
        path: list[str] = []
        i = 0
        while i < len(prelude):
            token = prelude[i]
            if token.type == TokenType.WHITESPACE:
                i += 1
            elif token.type == TokenType.DELIM and token.value == ">":
                i += 1
            elif token.type == TokenType.DELIM and token.value == ".":
                nxt = prelude[i + 1] if i + 1 < len(prelude) else None
                if nxt is None or nxt.type != TokenType.IDENT:
                    raise self.error("Expected a class name after '.'", token)
                path.append(nxt.value)
                i += 2
            elif token.type in (TokenType.HASH, TokenType.IDENT):
                path.append(token.value)
                i += 1
            else:
                raise self.error(f"Unsupported selector syntax '{token.value}'", token)

        if not path:
            raise self.error("Expected a selector", start)
        return path

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def expect_declaration_name(self) -> Token:
        token = self.current_token()
        if token.type != TokenType.IDENT:
            if token.type == TokenType.EOF:
                raise self.error("Unexpected end of input, expected '}'")
            raise self.error(f"Expected a property name, got '{token.value}'")
        self.advance()
        self.skip_whitespace()
        self.expect(TokenType.COLON)
        return token

    def read_declaration_value(self) -> list[Token]:
        """Collect value tokens up to ``;`` or ``}``."""
        tokens = []
        while not self.match(TokenType.SEMICOLON, TokenType.RBRACE):
            token = self.current_token()
            if token.type == TokenType.EOF:
                raise self.error("Unexpected end of input, expected ';' or '}'")
            if token.type in (TokenType.LBRACE, TokenType.AT_KEYWORD):
                raise self.error(f"Unexpected '{token.value}' in declaration value")
            tokens.append(self.advance())
        if self.match(TokenType.SEMICOLON):
            self.advance()
        return _strip_whitespace(tokens)

    def make_declaration(self, name_token: Token, value_tokens: list[Token]) -> Declaration:
        return Declaration(
            property=name_token.value,
            value=self.parse_value(value_tokens, name_token),
            line=name_token.line,
            column=name_token.column,
        )

    def parse_value(self, tokens: list[Token], name_token: Token) -> ColorValue | VarRef:
        """Parse a declaration value: a color literal or ``var(--name)``."""
        if not tokens:
            raise self.error(f"Missing value for '{name_token.value}'", name_token)

        first = tokens[0]
        if len(tokens) == 1 and first.type == TokenType.FUNCTION and first.value.lower() == "var":
            name = first.argument.strip()
            if not name.startswith("--") or any(ch in name for ch in ", \t\n"):
                raise self.error(f"Expected var(--name), got var({first.argument})", first)
            return VarRef(name=name, line=first.line, column=first.column)

        literal = "".join(_token_text(t) for t in tokens)
        try:
            return parse_color(literal)
        except InvalidColorLiteral as e:
            raise InvalidColorLiteral(
                e.value, make_context(self.file, first.line, first.column, self.text)
            ) from e


def _strip_whitespace(tokens: list[Token]) -> list[Token]:
    start, end = 0, len(tokens)
    while start < end and tokens[start].type == TokenType.WHITESPACE:
        start += 1
    while end > start and tokens[end - 1].type == TokenType.WHITESPACE:
        end -= 1
    return tokens[start:end]


def _token_text(token: Token) -> str:
    if token.type == TokenType.HASH:
        return f"#{token.value}"
    if token.type == TokenType.FUNCTION:
        return f"{token.value}({token.argument})"
    if token.type == TokenType.STRING:
        return f'"{token.value}"'
    return token.value


def _prelude_text(prelude: list[Token]) -> str:
    return "".join(_token_text(t) for t in prelude if t.type != TokenType.WHITESPACE)


def parse_stylesheet(
    text: str,
    settings: StylesheetSettings | None = None,
    source: Path | str | None = None,
) -> Stylesheet:
    """
    Parse stylesheet text into a Stylesheet.

    Args:
        text: CSS source
        settings: Reserved names (root selector, nest and meta keywords)
        source: Source file path for error messages

    Returns:
        Parsed Stylesheet

    Raises:
        StyleError: On syntax errors or invalid color values
    """
    file = Path(source) if source else None
    tokens = tokenize(text, file)
    return StylesheetParser(tokens, file, text, settings).parse()
