"""
C++ header generation.

One ``struct`` per resolved struct in dependency order (so no forward
declarations are needed), then the theme class holding the root fields and
the flat ``colors_`` slot array.
"""

from __future__ import annotations

from ..core.config import CodeConfig
from ..core.ir.layout import ResolvedLayout, ResolvedStruct
from .base import CodeWriter


def generate_header(layout: ResolvedLayout, config: CodeConfig | None = None) -> str:
    """
    Generate ``<class_name>.hpp``.

    Args:
        layout: Resolved layout (root struct becomes the theme class)
        config: Namespace/class settings

    Returns:
        Header source
    """
    config = config or CodeConfig()
    writer = CodeWriter()

    writer.line("#pragma once")
    writer.line()
    if config.include_qt_headers:
        writer.line("#include <QColor>")
        writer.line("#include <QLatin1String>")
        writer.line()

    writer.line(f"namespace {config.namespace} {{")
    writer.line()

    for struct in layout.structs:
        if struct.is_root:
            continue
        with writer.block(f"struct {struct.type_name} {{", "};"):
            _write_fields(writer, struct)
        writer.line()

    writer.line(f"class {config.class_name}")
    writer.line("{")
    writer.line("public:")
    writer.indent()
    _write_fields(writer, layout.root)
    if layout.root.fields:
        writer.line()
    writer.line(f"{config.class_name}();")
    writer.dedent()
    writer.line()
    writer.line("protected:")
    writer.indent()
    writer.line("bool setColor(const QLatin1String &name, QColor color);")
    writer.line("void reset();")
    writer.line("void applyChanges();")
    writer.dedent()
    writer.line()
    writer.line("private:")
    writer.indent()
    writer.line(f"QColor colors_[{max(layout.leaf_count(), 1)}];")
    writer.dedent()
    writer.line("};")
    writer.line()
    writer.line(f"}}  // namespace {config.namespace}")

    return writer.getvalue()


def _write_fields(writer: CodeWriter, struct: ResolvedStruct) -> None:
    for field in struct.fields:
        if field.is_color:
            writer.line(f"QColor {field.name};")
        else:
            writer.line(f"{field.type.type_name} {field.name};")
