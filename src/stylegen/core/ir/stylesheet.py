"""
Stylesheet IR types.

A parsed Stylesheet keeps the rule tree as written: rules carry their
nesting directives in ``nested``. The stylesheet resolver flattens it into a
ResolvedTheme keyed by normalized dotted path.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Values
# =============================================================================


class ColorValue(BaseModel):
    """An RGBA color with 8-bit channels."""

    model_config = ConfigDict(frozen=True)

    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)
    alpha: int = Field(default=255, ge=0, le=255)

    def to_hex(self) -> str:
        """``#rrggbb``, or ``#rrggbbaa`` when not fully opaque."""
        rgb = f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
        if self.alpha != 255:
            return f"{rgb}{self.alpha:02x}"
        return rgb

    def to_argb_hex(self) -> str:
        """``#aarrggbb`` as used by c2theme files."""
        return f"#{self.alpha:02x}{self.red:02x}{self.green:02x}{self.blue:02x}"

    @classmethod
    def from_hex(cls, text: str) -> ColorValue:
        from ..colors import parse_hex

        return parse_hex(text)

    def __str__(self) -> str:
        return self.to_hex()


class VarRef(BaseModel):
    """A ``var(--name)`` reference waiting for substitution."""

    model_config = ConfigDict(frozen=True)

    name: str
    line: int = 0
    column: int = 0


class Declaration(BaseModel):
    """``property: value`` inside a rule or the root scope."""

    model_config = ConfigDict(frozen=True)

    property: str
    value: ColorValue | VarRef
    line: int = 0
    column: int = 0


# =============================================================================
# Rules
# =============================================================================


class Rule(BaseModel):
    """A selector path with declarations and nesting directives.

    Not frozen: the parser builds rules incrementally.
    """

    path: list[str] = Field(default_factory=list)
    declarations: list[Declaration] = Field(default_factory=list)
    nested: list[Rule] = Field(default_factory=list)
    line: int = 0
    column: int = 0


Rule.model_rebuild()


class ThemeMeta(BaseModel):
    """Contents of the meta at-rule."""

    model_config = ConfigDict(frozen=True)

    author: str | None = None
    icon_set: str | None = None


class Stylesheet(BaseModel):
    """A parsed stylesheet before variable resolution and flattening."""

    meta: ThemeMeta | None = None
    variables: list[Declaration] = Field(default_factory=list)
    rules: list[Rule] = Field(default_factory=list)


# =============================================================================
# Resolved theme
# =============================================================================


class ResolvedTheme(BaseModel):
    """Dotted path -> color, in source order with last write winning."""

    model_config = ConfigDict(frozen=True)

    meta: ThemeMeta | None = None
    colors: dict[str, ColorValue] = Field(default_factory=dict)
    variables: dict[str, ColorValue] = Field(default_factory=dict)

    def get(self, path: str) -> ColorValue | None:
        return self.colors.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self.colors
