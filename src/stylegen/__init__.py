"""
stylegen: compile-time theme scaffolding from a YAML layout and a CSS stylesheet.

- ``stylegen.core``: layout and stylesheet resolution, binding
- ``stylegen.emitters``: C++ header/source and theme file output
- ``stylegen.pipeline``: file-level entry points used by the CLI
"""

from ._version import __version__

__all__ = ["__version__"]
