"""
Layout IR types.

The schema side (FieldSpec, Definition, LayoutSchema) is what the YAML
loader produces. The resolved side (ResolvedStruct, ResolvedLayout) is what
the layout resolver produces: a flat, cycle-free set of uniquely named
struct types in dependency order.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..paths import combine_path

# =============================================================================
# Schema
# =============================================================================


class FieldKind(StrEnum):
    """The three shapes a layout field can take."""

    LEAF = "leaf"
    NESTED = "nested"
    REFERENCE = "reference"


class FieldSpec(BaseModel):
    """One field of a struct-in-progress."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: FieldKind
    fields: list[FieldSpec] = Field(default_factory=list)
    ref: str | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> FieldSpec:
        if self.kind == FieldKind.REFERENCE and not self.ref:
            raise ValueError(f"Reference field '{self.name}' needs a definition name")
        if self.kind != FieldKind.REFERENCE and self.ref is not None:
            raise ValueError(f"Field '{self.name}' has a ref but isn't a reference")
        if self.kind != FieldKind.NESTED and self.fields:
            raise ValueError(f"Field '{self.name}' has fields but isn't a nested struct")
        return self

    @classmethod
    def leaf(cls, name: str) -> FieldSpec:
        return cls(name=name, kind=FieldKind.LEAF)

    @classmethod
    def nested(cls, name: str, fields: list[FieldSpec]) -> FieldSpec:
        return cls(name=name, kind=FieldKind.NESTED, fields=fields)

    @classmethod
    def reference(cls, name: str, ref: str) -> FieldSpec:
        return cls(name=name, kind=FieldKind.REFERENCE, ref=ref)


FieldSpec.model_rebuild()


class Definition(BaseModel):
    """A named, reusable struct template."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[FieldSpec] = Field(default_factory=list)


class LayoutSchema(BaseModel):
    """Typed form of a layout YAML file."""

    model_config = ConfigDict(frozen=True)

    definitions: list[Definition] = Field(default_factory=list)
    layout: list[FieldSpec] = Field(default_factory=list)

    def definition_names(self) -> list[str]:
        return [d.name for d in self.definitions]


# =============================================================================
# Resolved layout
# =============================================================================


class ColorType(BaseModel):
    """A leaf holding one color."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["color"] = "color"


class StructRef(BaseModel):
    """A field whose type is another resolved struct."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["struct"] = "struct"
    type_name: str


ResolvedFieldType = Annotated[ColorType | StructRef, Field(discriminator="kind")]


class ResolvedField(BaseModel):
    """A named field of a resolved struct."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ResolvedFieldType

    @property
    def is_color(self) -> bool:
        return isinstance(self.type, ColorType)


class ResolvedStruct(BaseModel):
    """A uniquely named struct type with ordered fields."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    fields: list[ResolvedField] = Field(default_factory=list)
    is_definition: bool = False
    is_root: bool = False


class ResolvedLayout(BaseModel):
    """All resolved structs in dependency order, root last."""

    model_config = ConfigDict(frozen=True)

    structs: list[ResolvedStruct]

    @property
    def root(self) -> ResolvedStruct:
        for struct in self.structs:
            if struct.is_root:
                return struct
        raise LookupError("Resolved layout has no root struct")

    def get(self, type_name: str) -> ResolvedStruct | None:
        for struct in self.structs:
            if struct.type_name == type_name:
                return struct
        return None

    def walk_leaves(self) -> list[tuple[str, list[str]]]:
        """Return ``(dotted_path, field_names)`` for every color leaf, depth-first.

        ``dotted_path`` is normalized for lookups; ``field_names`` are the raw
        member names from the root, as needed for code generation.
        """
        by_name = {s.type_name: s for s in self.structs}
        leaves: list[tuple[str, list[str]]] = []

        def visit(struct: ResolvedStruct, prefix: str, names: list[str]) -> None:
            for field in struct.fields:
                path = combine_path(prefix, field.name)
                member = [*names, field.name]
                if isinstance(field.type, StructRef):
                    visit(by_name[field.type.type_name], path, member)
                else:
                    leaves.append((path, member))

        visit(self.root, "", [])
        return leaves

    def leaf_paths(self) -> list[str]:
        return [path for path, _ in self.walk_leaves()]

    def leaf_count(self) -> int:
        return len(self.walk_leaves())
