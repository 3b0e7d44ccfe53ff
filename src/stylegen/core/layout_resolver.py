"""
Layout resolver.

Expands definition references and nested struct literals into a flat set of
uniquely named struct types. Structs are contained by value in the generated
code, so a definition that (transitively) contains itself would expand
forever; the resolver tracks the definitions on the active expansion path
and fails with CyclicReference instead.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .errors import (
    CyclicReference,
    DuplicateDefinitionName,
    LayoutSchemaError,
    UndefinedReference,
)
from .ir.layout import (
    ColorType,
    Definition,
    FieldKind,
    FieldSpec,
    LayoutSchema,
    ResolvedField,
    ResolvedLayout,
    ResolvedStruct,
    StructRef,
)
from .paths import normalize_segment, to_pascal_case

logger = logging.getLogger(__name__)

DEFAULT_ROOT_NAME = "GeneratedTheme"


@dataclass
class _Arena:
    """Resolved structs keyed by type name, in emission order."""

    definitions: dict[str, Definition]
    structs: dict[str, ResolvedStruct] = field(default_factory=dict)
    visiting: list[str] = field(default_factory=list)
    reserved: set[str] = field(default_factory=set)

    def emit(self, struct: ResolvedStruct) -> None:
        self.structs[struct.type_name] = struct

    def unique_name(self, base: str) -> str:
        """Return *base*, or *base* with a numeric suffix if it's already taken."""
        name = base
        counter = 2
        while name in self.reserved:
            name = f"{base}{counter}"
            counter += 1
        self.reserved.add(name)
        return name


def resolve_schema(schema: LayoutSchema, *, root_name: str = DEFAULT_ROOT_NAME) -> ResolvedLayout:
    """Resolve a loaded LayoutSchema."""
    return resolve_layout(schema.definitions, schema.layout, root_name=root_name)


def resolve_layout(
    definitions: Sequence[Definition],
    layout_root: Sequence[FieldSpec],
    *,
    root_name: str = DEFAULT_ROOT_NAME,
) -> ResolvedLayout:
    """
    Resolve definitions and the root layout body into ResolvedStructs.

    Args:
        definitions: Named struct templates
        layout_root: Fields of the root struct
        root_name: Type name of the root struct

    Returns:
        ResolvedLayout with every struct emitted after the structs it uses,
        and the root struct last

    Raises:
        DuplicateDefinitionName: If two definitions share a name
        UndefinedReference: If a ref names a missing definition
        CyclicReference: If a definition contains itself
    """
    by_name: dict[str, Definition] = {}
    for definition in definitions:
        if definition.name in by_name:
            raise DuplicateDefinitionName(definition.name)
        by_name[definition.name] = definition
    if root_name in by_name:
        raise LayoutSchemaError(f"Definition '{root_name}' clashes with the root type name")

    arena = _Arena(definitions=by_name, reserved=set(by_name) | {root_name})

    root_fields = _resolve_fields(arena, layout_root, prefix="")
    for definition in definitions:
        # Unreferenced definitions are still validated and emitted
        if definition.name not in arena.structs:
            _resolve_definition(arena, definition.name)

    arena.emit(ResolvedStruct(type_name=root_name, fields=root_fields, is_root=True))

    logger.debug(
        f"Resolved layout into {len(arena.structs)} struct(s) "
        f"({len(by_name)} definition(s))"
    )
    return ResolvedLayout(structs=list(arena.structs.values()))


def _resolve_definition(arena: _Arena, name: str) -> str:
    if name in arena.structs:
        return name

    if name in arena.visiting:
        cycle_start = arena.visiting.index(name)
        raise CyclicReference(arena.visiting[cycle_start:] + [name])

    definition = arena.definitions.get(name)
    if definition is None:
        raise UndefinedReference(name)

    arena.visiting.append(name)
    try:
        fields = _resolve_fields(arena, definition.fields, prefix=name)
    finally:
        arena.visiting.pop()

    arena.emit(ResolvedStruct(type_name=name, fields=fields, is_definition=True))
    return name


def _resolve_fields(
    arena: _Arena, specs: Sequence[FieldSpec], prefix: str
) -> list[ResolvedField]:
    fields: list[ResolvedField] = []
    seen: dict[str, str] = {}
    for spec in specs:
        key = normalize_segment(spec.name)
        if not key or not to_pascal_case(spec.name):
            raise LayoutSchemaError(
                f"Field name '{spec.name}' of '{prefix or 'layout'}' has no letters or digits"
            )
        if key in seen:
            raise LayoutSchemaError(
                f"Fields '{seen[key]}' and '{spec.name}' of '{prefix or 'layout'}' "
                f"map to the same key '{key}'"
            )
        seen[key] = spec.name

        if spec.kind == FieldKind.LEAF:
            fields.append(ResolvedField(name=spec.name, type=ColorType()))

        elif spec.kind == FieldKind.REFERENCE:
            type_name = _resolve_definition(arena, spec.ref or "")
            fields.append(ResolvedField(name=spec.name, type=StructRef(type_name=type_name)))

        else:
            type_name = arena.unique_name(prefix + to_pascal_case(spec.name))
            nested = _resolve_fields(arena, spec.fields, prefix=type_name)
            arena.emit(ResolvedStruct(type_name=type_name, fields=nested))
            fields.append(ResolvedField(name=spec.name, type=StructRef(type_name=type_name)))
    return fields
