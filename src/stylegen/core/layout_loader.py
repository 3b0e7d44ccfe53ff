"""
Layout YAML loader.

Reads ``layout.yml`` into a LayoutSchema. The YAML shape is duck-typed
(an empty value is a leaf, ``fields`` is a nested struct, ``ref`` names a
definition); this module turns it into explicit FieldSpec variants and
rejects anything else.

    definitions:
      Tab:
        fields: [background, text]
    layout:
      tabs:
        fields:
          regular: { ref: Tab }
          selected: { ref: Tab }
          divider:
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import (
    DuplicateDefinitionName,
    LayoutSchemaError,
    StylegenIOError,
    make_context,
)
from .ir.layout import Definition, FieldSpec, LayoutSchema

logger = logging.getLogger(__name__)

_TOP_LEVEL_KEYS = {"definitions", "layout"}


class _DuplicateKey(yaml.YAMLError):
    def __init__(self, key: str, mark: yaml.Mark | None):
        self.key = key
        self.mark = mark
        super().__init__(f"duplicate key '{key}'")


class _StrictLoader(yaml.SafeLoader):
    """SafeLoader that refuses duplicate mapping keys instead of keeping the last."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise _DuplicateKey(str(key), key_node.start_mark)
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


# YAML 1.1 reads on/off/yes/no as booleans; layout field names need them as
# strings, so only true/false keep the bool tag.
_StrictLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_StrictLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


# =============================================================================
# Loading
# =============================================================================


def load_layout(path: Path | str) -> LayoutSchema:
    """Load a LayoutSchema from a YAML file.

    Raises:
        StylegenIOError: If the file can't be read.
        LayoutError: If the YAML doesn't describe a valid layout.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StylegenIOError(f"Failed to read layout {path}: {e}") from e
    return parse_layout(content, source=path)


def parse_layout(text: str, source: Path | str | None = None) -> LayoutSchema:
    """Parse layout YAML text into a LayoutSchema."""
    data = _load_yaml(text, source)

    if not isinstance(data, dict):
        raise LayoutSchemaError(f"Layout must be a mapping with a 'layout' key ({source or '<input>'})")

    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise LayoutSchemaError(f"Unknown top-level layout keys: {sorted(map(str, unknown))}")
    if "layout" not in data:
        raise LayoutSchemaError("Layout file has no 'layout' key")

    definitions = _parse_definitions(data.get("definitions") or {})
    root = data["layout"]
    if not isinstance(root, dict):
        raise LayoutSchemaError("'layout' must be a mapping of field names")
    layout_fields = _parse_body(root, "")

    logger.debug(
        f"Loaded layout with {len(definitions)} definition(s) and "
        f"{len(layout_fields)} top-level field(s)"
    )
    try:
        return LayoutSchema(definitions=definitions, layout=layout_fields)
    except ValidationError as e:
        raise LayoutSchemaError(f"Invalid layout schema: {e}") from e


def _load_yaml(text: str, source: Path | str | None) -> Any:
    loader = _StrictLoader(text)
    try:
        node = loader.get_single_node()
        if node is None:
            return None
        _check_definition_names(node, source, text)
        return loader.construct_document(node)
    except _DuplicateKey as e:
        context = _mark_context(e.mark, source, text)
        raise LayoutSchemaError(f"Duplicate key '{e.key}' in layout", context) from e
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        raise LayoutSchemaError(f"Invalid YAML: {e}", _mark_context(mark, source, text)) from e
    finally:
        loader.dispose()


def _check_definition_names(root: yaml.Node, source: Path | str | None, text: str) -> None:
    """Report a repeated definition name before the generic duplicate-key check does."""
    if not isinstance(root, yaml.MappingNode):
        return
    for key_node, value_node in root.value:
        if key_node.value != "definitions" or not isinstance(value_node, yaml.MappingNode):
            continue
        seen: set[str] = set()
        for name_node, _ in value_node.value:
            if name_node.value in seen:
                context = _mark_context(name_node.start_mark, source, text)
                raise DuplicateDefinitionName(str(name_node.value), context)
            seen.add(name_node.value)


def _mark_context(mark: yaml.Mark | None, source: Path | str | None, text: str):
    if mark is None:
        return None
    return make_context(source, mark.line + 1, mark.column + 1, text)


# =============================================================================
# Conversion
# =============================================================================


def _parse_definitions(data: Any) -> list[Definition]:
    if not isinstance(data, dict):
        raise LayoutSchemaError("'definitions' must be a mapping of definition names")

    definitions: list[Definition] = []
    for name, body in data.items():
        name = str(name)
        if not isinstance(body, dict) or "fields" not in body:
            raise LayoutSchemaError(f"Definition of '{name}' isn't a struct (expected 'fields')")
        spec = _parse_field(name, body, name)
        definitions.append(Definition(name=name, fields=spec.fields))
    return definitions


def _parse_body(body: dict[Any, Any], prefix: str) -> list[FieldSpec]:
    """Parse a struct body: a mapping from field name to field spec."""
    for name in body:
        if not isinstance(name, str):
            raise LayoutSchemaError(
                f"Field names in '{prefix or 'layout'}' must be strings, got {name!r}"
            )
    return [
        _parse_field(str(name), value, _join(prefix, str(name))) for name, value in body.items()
    ]


def _parse_field(name: str, value: Any, where: str) -> FieldSpec:
    if value is None:
        return FieldSpec.leaf(name)

    if not isinstance(value, dict):
        raise LayoutSchemaError(
            f"Field '{where}' must be empty, a mapping with 'fields', or a mapping with 'ref'"
        )

    keys = set(value)
    if keys == {"ref"}:
        ref = value["ref"]
        if not isinstance(ref, str) or not ref:
            raise LayoutSchemaError(f"'ref' of '{where}' must be a definition name")
        return FieldSpec.reference(name, ref)

    if keys == {"fields"}:
        return FieldSpec.nested(name, _parse_fields(value["fields"], where))

    if {"ref", "fields"} <= keys:
        raise LayoutSchemaError(f"Found struct with both 'ref' and 'fields' in '{where}'")
    raise LayoutSchemaError(f"Unexpected keys {sorted(map(str, keys))} in field '{where}'")


def _parse_fields(fields: Any, where: str) -> list[FieldSpec]:
    """Parse a ``fields`` value: a list of leaf names or a struct body."""
    if isinstance(fields, list):
        specs: list[FieldSpec] = []
        seen: set[str] = set()
        for item in fields:
            if not isinstance(item, str):
                raise LayoutSchemaError(
                    f"'fields' list of '{where}' may only contain leaf names, got {item!r}"
                )
            if item in seen:
                raise LayoutSchemaError(f"Duplicate field '{item}' in '{where}'")
            seen.add(item)
            specs.append(FieldSpec.leaf(item))
        return specs

    if isinstance(fields, dict):
        return _parse_body(fields, where)

    if fields is None:
        return []

    raise LayoutSchemaError(f"'fields' of '{where}' must be a list or a mapping")


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name
