"""G-code parsing, arc expansion, toolpath segments and table models."""

__version__ = "0.1.0"

__all__ = [
    "arcs",
    "codes",
    "geometry",
    "interpolation",
    "parser",
    "profile",
    "segments",
    "tables",
    "viewparse",
]