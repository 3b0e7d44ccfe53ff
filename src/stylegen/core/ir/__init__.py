"""
stylegen Intermediate Representation (IR) types.

Types are organized into submodules by pipeline stage and re-exported here.
"""

# Bound tree
from .bound import (
    BindingSource,
    BoundField,
    BoundTree,
)

# Layout
from .layout import (
    ColorType,
    Definition,
    FieldKind,
    FieldSpec,
    LayoutSchema,
    ResolvedField,
    ResolvedFieldType,
    ResolvedLayout,
    ResolvedStruct,
    StructRef,
)

# Stylesheet
from .stylesheet import (
    ColorValue,
    Declaration,
    ResolvedTheme,
    Rule,
    Stylesheet,
    ThemeMeta,
    VarRef,
)

__all__ = [
    # Layout
    "FieldKind",
    "FieldSpec",
    "Definition",
    "LayoutSchema",
    "ColorType",
    "StructRef",
    "ResolvedFieldType",
    "ResolvedField",
    "ResolvedStruct",
    "ResolvedLayout",
    # Stylesheet
    "ColorValue",
    "VarRef",
    "Declaration",
    "Rule",
    "ThemeMeta",
    "Stylesheet",
    "ResolvedTheme",
    # Bound tree
    "BindingSource",
    "BoundField",
    "BoundTree",
]
