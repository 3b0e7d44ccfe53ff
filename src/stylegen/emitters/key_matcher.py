"""
Key matcher generation.

Emits a C++ function that maps a dotted theme key to its color slot without
hashing or allocating: it switches on the key length, then walks a decision
tree over the characters. Runs of characters shared by every remaining
candidate are checked with a single ``memcmp``.

    switch (size) {
    case 12: {
        if (std::memcmp(data + 0, "tabs.", 5) == 0) {
            switch (data[5]) {
            case 'd': { ... }
            ...

The tree is built first (``build_matcher``) so it can also be evaluated in
Python with ``match_key``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from itertools import groupby

from .base import CodeWriter

_Entry = tuple[bytes, int]


# =============================================================================
# Decision tree
# =============================================================================


@dataclass
class Leaf:
    """One candidate left: compare the remaining bytes, then return its slot."""

    position: int
    rest: bytes
    slot: int


@dataclass
class Prefix:
    """All candidates share ``run`` at ``position``."""

    position: int
    run: bytes
    child: Node


@dataclass
class Switch:
    """Candidates differ at ``position``."""

    position: int
    branches: dict[int, Node] = field(default_factory=dict)


Node = Leaf | Prefix | Switch


def build_matcher(keys: Mapping[str, int]) -> dict[int, Node]:
    """Build one decision tree per key length."""
    entries = sorted((key.encode("utf-8"), slot) for key, slot in keys.items())
    by_length = groupby(sorted(entries, key=lambda e: len(e[0])), key=lambda e: len(e[0]))
    return {length: _build(list(group), 0) for length, group in by_length}


def _build(entries: list[_Entry], position: int) -> Node:
    if len(entries) == 1:
        key, slot = entries[0]
        return Leaf(position=position, rest=key[position:], slot=slot)

    common = _common_prefix([key[position:] for key, _ in entries])
    if common:
        return Prefix(position=position, run=common, child=_build(entries, position + len(common)))

    switch = Switch(position=position)
    for byte, group in groupby(entries, key=lambda e: e[0][position]):
        switch.branches[byte] = _build(list(group), position + 1)
    return switch


def match_key(matcher: dict[int, Node], key: str) -> int:
    """Evaluate the decision tree the same way the generated code does."""
    data = key.encode("utf-8")
    node: Node | None = matcher.get(len(data))
    while node is not None:
        if isinstance(node, Leaf):
            if data[node.position :] == node.rest:
                return node.slot
            return -1
        if isinstance(node, Prefix):
            if data[node.position : node.position + len(node.run)] != node.run:
                return -1
            node = node.child
        else:
            node = node.branches.get(data[node.position])
    return -1


def _common_prefix(values: list[bytes]) -> bytes:
    shortest = min(values, key=len)
    for i, byte in enumerate(shortest):
        if any(v[i] != byte for v in values):
            return shortest[:i]
    return shortest


# =============================================================================
# C++ output
# =============================================================================


def generate_key_matcher(keys: Mapping[str, int], function_name: str = "getDataIndex") -> str:
    """
    Generate the lookup function.

    Args:
        keys: Dotted path -> slot index
        function_name: Name of the generated function

    Returns:
        C++ source of ``int <function_name>(const QLatin1String &name)``
    """
    writer = CodeWriter()
    write_key_matcher(writer, keys, function_name)
    return writer.getvalue()


def write_key_matcher(
    writer: CodeWriter, keys: Mapping[str, int], function_name: str = "getDataIndex"
) -> None:
    matcher = build_matcher(keys)

    with writer.block(f"int {function_name}(const QLatin1String &name) {{"):
        writer.line("auto size = name.size();")
        writer.line("auto data = name.data();")
        if matcher:
            with writer.block("switch (size) {"):
                for length, node in matcher.items():
                    with writer.block(f"case {length}: {{"):
                        _write_node(writer, node)
                        writer.line("break;")
        writer.line("return -1;")


def _write_node(writer: CodeWriter, node: Node) -> None:
    if isinstance(node, Leaf):
        if node.rest:
            writer.line(f"if ({_compare(node.rest, node.position)}) return {node.slot};")
        else:
            writer.line(f"return {node.slot};")
    elif isinstance(node, Prefix):
        with writer.block(f"if ({_compare(node.run, node.position)}) {{"):
            _write_node(writer, node.child)
    else:
        with writer.block(f"switch (data[{node.position}]) {{"):
            for byte, child in node.branches.items():
                with writer.block(f"case {_char_literal(byte)}: {{"):
                    _write_node(writer, child)
                    writer.line("break;")


def _compare(run: bytes, position: int) -> str:
    if len(run) == 1:
        return f"data[{position}] == {_char_literal(run[0])}"
    return f'std::memcmp(data + {position}, "{_escape(run, quote=34)}", {len(run)}) == 0'


def _char_literal(byte: int) -> str:
    return f"'{_escape(bytes([byte]), quote=39)}'"


def _escape(data: bytes, quote: int) -> str:
    """Escape bytes for a C string/char literal (octal escapes for non-printables)."""
    out = []
    for byte in data:
        if byte == quote or byte == 92:
            out.append("\\" + chr(byte))
        elif 32 <= byte < 127:
            out.append(chr(byte))
        else:
            out.append(f"\\{byte:03o}")
    return "".join(out)
