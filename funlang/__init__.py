"""funlang: a small tree-walking expression language."""

__version__ = "0.0.1"
