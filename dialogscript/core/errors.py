"""
Error types.

The compiler itself is lenient and never raises for malformed scripts.
These are raised by the surrounding resource layer only.
"""


class DialogScriptError(Exception):
    """Base class for all dialogscript errors."""


class GraphFormatError(DialogScriptError):
    """A serialized dialogue graph does not match the expected format."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
