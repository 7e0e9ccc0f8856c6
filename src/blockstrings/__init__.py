"""Identifier registry and name synthesis for block-programming workspaces."""

__version__ = "0.1.0"

from .core.errors import (
    BlockstringsError,
    ConfigError,
    InvalidRootError,
    WorkspaceFormatError,
)
from .core.strings import all_strings, generate_unique_name, rename_string
from .flyout import flyout_category

__all__ = [
    "__version__",
    "BlockstringsError",
    "ConfigError",
    "InvalidRootError",
    "WorkspaceFormatError",
    "all_strings",
    "flyout_category",
    "generate_unique_name",
    "rename_string",
]
