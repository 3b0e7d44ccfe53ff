"""
Error types for stylegen layout loading, stylesheet resolution and binding.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class StylegenError(Exception):
    """Base exception for all stylegen errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


# =============================================================================
# Layout errors
# =============================================================================


class LayoutError(StylegenError):
    """
    Raised when a layout schema cannot be loaded or resolved.

    Examples:
    - Field spec that is neither a leaf, a nested struct nor a reference
    - Reference to a definition that does not exist
    - Definitions that (transitively) contain themselves
    """

    pass


class LayoutSchemaError(LayoutError):
    """Raised when the YAML layout does not match the struct/definition/ref schema."""

    pass


class UndefinedReference(LayoutError):
    """Raised when a ``ref`` names a definition that was never declared."""

    def __init__(self, name: str, context: Optional["ErrorContext"] = None):
        self.name = name
        super().__init__(f"Couldn't find definition for '{name}'", context)


class CyclicReference(LayoutError):
    """Raised when a definition contains itself through a chain of references."""

    def __init__(self, path: list[str], context: Optional["ErrorContext"] = None):
        self.path = list(path)
        super().__init__(
            f"Circular definition reference detected: {' -> '.join(self.path)}", context
        )


class DuplicateDefinitionName(LayoutError):
    """Raised when two definitions share a name."""

    def __init__(self, name: str, context: Optional["ErrorContext"] = None):
        self.name = name
        super().__init__(f"Duplicate definition name '{name}'", context)


# =============================================================================
# Stylesheet errors
# =============================================================================


class StyleError(StylegenError):
    """
    Raised when a stylesheet cannot be parsed or resolved.

    Examples:
    - Unexpected tokens or unsupported selectors
    - Values that are not colors
    - var() references to variables missing from the root scope
    """

    pass


class ParseError(StyleError):
    """Raised when stylesheet syntax cannot be parsed."""

    pass


class InvalidColorLiteral(StyleError):
    """Raised when a declaration value is not a supported color."""

    def __init__(self, value: str, context: Optional["ErrorContext"] = None):
        self.value = value
        super().__init__(f"Expected a color or var(..), got '{value}'", context)


class InvalidVariableValue(StyleError):
    """Raised when a root variable is not a plain color literal."""

    def __init__(self, name: str, context: Optional["ErrorContext"] = None):
        self.name = name
        super().__init__(
            f"Variable '{name}' must be a plain color (variables can't reference variables)",
            context,
        )


class UndefinedVariable(StyleError):
    """Raised when var() names a variable that isn't declared in the root scope."""

    def __init__(self, name: str, context: Optional["ErrorContext"] = None):
        self.name = name
        super().__init__(f"'{name}' was used but never defined in the root scope", context)


class CyclicNesting(StyleError):
    """Raised when a nesting directive chain revisits itself."""

    def __init__(self, path: list[str], context: Optional["ErrorContext"] = None):
        self.path = list(path)
        super().__init__(f"Cyclic nesting directive at '{'.'.join(self.path)}'", context)


# =============================================================================
# Binding errors
# =============================================================================


class BindError(StylegenError):
    """Raised when layout leaves cannot be matched to colors."""

    def __init__(self, message: str, paths: list[str]):
        self.paths = list(paths)
        listing = "\n".join(f"  - {p}" for p in self.paths)
        super().__init__(f"{message} ({len(self.paths)}):\n{listing}")


class IncompleteTheme(BindError):
    """Raised in theme mode when layout fields have no color in the stylesheet."""

    def __init__(self, paths: list[str]):
        super().__init__("Theme is missing colors for layout fields", paths)


class MissingDefault(BindError):
    """Raised in code mode when neither the stylesheet nor the default style has a color."""

    def __init__(self, paths: list[str]):
        super().__init__("Default style has no color for layout fields", paths)


# =============================================================================
# Collaborator errors
# =============================================================================


class ConfigError(StylegenError):
    """Raised when stylegen configuration is invalid."""

    pass


class StylegenIOError(StylegenError):
    """Raised when an input can't be read or an output can't be written."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source snippet showing the error location
    """

    file: Path | None
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "Dark.css:10:5"
        """
        source = str(self.file) if self.file else "<input>"
        location = f"{source}:{self.line}:{self.column}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format source snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts one line before the error line
        start_line = max(1, self.line - 1)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def source_snippet(text: str, line: int) -> str:
    """Return the error line and the line before it from *text*."""
    lines = text.splitlines()
    if not lines or line < 1 or line > len(lines):
        return ""
    start = max(1, line - 1)
    return "\n".join(lines[start - 1 : line])


def make_context(
    file: Path | str | None,
    line: int | None,
    column: int | None,
    text: str | None = None,
) -> ErrorContext | None:
    """
    Build an ErrorContext when a location is known.

    Args:
        file: Optional source file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        text: Full source text, used to attach a snippet

    Returns:
        ErrorContext, or None if no line/column is available
    """
    if not line or not column:
        return None
    snippet = source_snippet(text, line) if text else None
    return ErrorContext(
        file=Path(file) if file else None,
        line=line,
        column=column,
        snippet=snippet or None,
    )


def make_parse_error(
    message: str,
    file: Path | str | None,
    line: int,
    column: int,
    text: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        file: Source file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        text: Optional full source text for a snippet

    Returns:
        ParseError with context attached
    """
    return ParseError(message, make_context(file, line, column, text))
