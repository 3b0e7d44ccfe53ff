"""
Bound tree IR: the resolved layout with a color attached to every leaf.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .layout import ResolvedLayout
from .stylesheet import ColorValue


class BindingSource(StrEnum):
    """Where a leaf's color came from."""

    THEME = "theme"
    DEFAULT = "default"


class BoundField(BaseModel):
    """A color leaf with its slot index and bound value."""

    model_config = ConfigDict(frozen=True)

    path: str
    members: list[str]
    slot: int
    value: ColorValue
    source: BindingSource = BindingSource.THEME


class BoundTree(BaseModel):
    """Output of the binder."""

    model_config = ConfigDict(frozen=True)

    layout: ResolvedLayout
    fields: list[BoundField] = Field(default_factory=list)
    unused_paths: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def get(self, path: str) -> BoundField | None:
        for field in self.fields:
            if field.path == path:
                return field
        return None

    def as_mapping(self) -> dict[str, ColorValue]:
        return {f.path: f.value for f in self.fields}

    def from_default_count(self) -> int:
        return sum(1 for f in self.fields if f.source == BindingSource.DEFAULT)
