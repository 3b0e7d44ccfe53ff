"""
C++ source generation.

``reset()`` writes every slot's default color, ``applyChanges()`` copies the
slots into the public fields and ``setColor()`` looks a dotted key up with
the generated key matcher, so a theme loaded at runtime addresses fields by
the same paths used for binding.
"""

from __future__ import annotations

from ..core.config import CodeConfig
from ..core.ir.bound import BoundTree
from .base import CodeWriter
from .key_matcher import write_key_matcher


def generate_impl(bound: BoundTree, config: CodeConfig | None = None) -> str:
    """
    Generate ``<class_name>.cpp``.

    Args:
        bound: Layout bound against the default style
        config: Namespace/class settings

    Returns:
        Source file contents
    """
    config = config or CodeConfig()
    cls = config.class_name
    writer = CodeWriter()

    writer.line(f'#include "{cls}.hpp"')
    writer.line()
    writer.line("#include <cstring>")
    writer.line()
    writer.line("namespace {")
    writer.line()
    writer.line("int getDataIndex(const QLatin1String &name);")
    writer.line()
    writer.line("}  // namespace")
    writer.line()
    writer.line(f"namespace {config.namespace} {{")
    writer.line()

    with writer.block(f"{cls}::{cls}()\n{{"):
        writer.line("this->reset();")
        writer.line("this->applyChanges();")
    writer.line()

    with writer.block(f"void {cls}::applyChanges()\n{{"):
        for field in bound.fields:
            member = ".".join(field.members)
            writer.line(f"this->{member} = this->colors_[{field.slot}];")
    writer.line()

    with writer.block(f"void {cls}::reset()\n{{"):
        for field in bound.fields:
            c = field.value
            writer.line(
                f"this->colors_[{field.slot}] = QColor({c.red}, {c.green}, {c.blue}, {c.alpha});"
                f"  // {field.path}"
            )
    writer.line()

    with writer.block(f"bool {cls}::setColor(const QLatin1String &name, QColor color)\n{{"):
        writer.line("auto idx = getDataIndex(name);")
        with writer.block("if (idx < 0) {"):
            writer.line("return false;")
        writer.line("this->colors_[idx] = color;")
        writer.line("return true;")
    writer.line()

    writer.line(f"}}  // namespace {config.namespace}")
    writer.line()
    writer.line("namespace {")
    writer.line()
    write_key_matcher(writer, {field.path: field.slot for field in bound.fields})
    writer.line()
    writer.line("}  // namespace")

    return writer.getvalue()
