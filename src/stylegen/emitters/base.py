"""
Shared emitter helpers.

CodeWriter builds indented source text line by line; GeneratorResult
collects what an emit run wrote.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class GeneratorResult:
    """
    Result from a generator execution.

    Attributes:
        files_created: List of file paths that were created/modified
        warnings: Any warnings to display to user
    """

    files_created: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_file(self, path: Path) -> None:
        """Record a file that was created."""
        self.files_created.append(path)

    def add_warning(self, warning: str) -> None:
        """Record a warning."""
        self.warnings.append(warning)


class CodeWriter:
    """Accumulates lines of text with tab indentation."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._indent = 0

    def indent(self) -> None:
        self._indent += 1

    def dedent(self) -> None:
        if self._indent == 0:
            raise ValueError("Cannot dedent - indent is 0")
        self._indent -= 1

    def line(self, text: str = "") -> None:
        """Write one line at the current indentation (blank lines stay empty)."""
        if text:
            self._lines.append("\t" * self._indent + text)
        else:
            self._lines.append("")

    def block(self, opener: str, closer: str = "}") -> _Block:
        """Context manager writing *opener*, an indented body, then *closer*."""
        return _Block(self, opener, closer)

    def getvalue(self) -> str:
        return "\n".join(self._lines) + "\n"


class _Block:
    def __init__(self, writer: CodeWriter, opener: str, closer: str):
        self.writer = writer
        self.opener = opener
        self.closer = closer

    def __enter__(self) -> CodeWriter:
        self.writer.line(self.opener)
        self.writer.indent()
        return self.writer

    def __exit__(self, *exc: object) -> None:
        self.writer.dedent()
        self.writer.line(self.closer)
