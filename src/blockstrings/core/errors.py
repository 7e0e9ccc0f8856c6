class BlockstringsError(Exception):
    """Base class for errors raised by blockstrings."""


class InvalidRootError(BlockstringsError, TypeError):
    """Root passed to the collector is neither a block nor a workspace."""

    def __init__(self, root: object):
        super().__init__(f"Not Block or Workspace: {root!r}")
        self.root = root


class WorkspaceFormatError(BlockstringsError, ValueError):
    """A workspace document could not be decoded."""


class ConfigError(BlockstringsError, ValueError):
    """blockstrings.toml could not be read or holds an invalid value."""
