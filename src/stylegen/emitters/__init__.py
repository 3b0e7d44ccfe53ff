"""Output generators: C++ header/source and resolved theme files."""

from .base import CodeWriter, GeneratorResult
from .header import generate_header
from .impl import generate_impl
from .key_matcher import generate_key_matcher
from .theme import generate_c2theme, generate_json

__all__ = [
    "CodeWriter",
    "GeneratorResult",
    "generate_header",
    "generate_impl",
    "generate_key_matcher",
    "generate_c2theme",
    "generate_json",
]
