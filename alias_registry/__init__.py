"""Local, file-backed registry of command aliases grouped into contexts."""

from .errors import AliasError, AliasFileError, InvalidWorkingDirectoryError
from .persistence import AliasContext, AliasDefinition, AliasDict
from .terminal import Terminal

__version__ = "0.1.0"

__all__ = [
    "AliasContext",
    "AliasDefinition",
    "AliasDict",
    "AliasError",
    "AliasFileError",
    "InvalidWorkingDirectoryError",
    "Terminal",
]
