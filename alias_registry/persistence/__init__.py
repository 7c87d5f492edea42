"""Persistence layer – each store owns its file path, data format, and I/O."""

from .aliases import AliasContext, AliasDefinition, AliasDict

__all__ = [
    "AliasContext",
    "AliasDefinition",
    "AliasDict",
]
