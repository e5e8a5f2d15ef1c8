"""Exceptions raised by the block-stack identifier.

Nothing here is raised for a frame in which no stack is found; that outcome is
an empty result. Only caller mistakes (bad frame, bad configuration) and
failures of the surrounding glue are exceptions.
"""


class BlockStackError(Exception):
    """Base class for all errors raised by this package."""


class InvalidFrameError(BlockStackError, ValueError):
    """The input frame is not a 3-channel image."""


class ConfigError(BlockStackError, ValueError):
    """The option file or in-memory configuration is unusable."""


class EmptyPaletteError(ConfigError):
    """No reference colors are configured, so nothing can be classified."""


class UnmappedBlockError(BlockStackError, KeyError):
    """A detected block has no entry in the block-instruction map."""

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"no instruction mapped for block {self.key}"


class EmptyStackError(BlockStackError):
    """Orders were requested for a stack with no blocks."""
