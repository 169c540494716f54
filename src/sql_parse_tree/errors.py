"""Exception types raised by sql-parse-tree."""

from typing import List


class SqlParseTreeError(Exception):
    """Base class for every fatal error raised by this package."""


class SqlSyntaxError(SqlParseTreeError):
    """Raised when the SQL input cannot be parsed.

    Attributes:
        errors: One ``line,col: message`` entry per error reported by the parser.
    """

    def __init__(self, errors: List[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors) if errors else "SQL could not be parsed")


class HookRegistrationError(SqlParseTreeError):
    """Raised when a visitation hook cannot be installed for a node type."""


class CaptureSetupError(SqlParseTreeError):
    """Raised when the capture visitor cannot hook every node type in the catalog."""


class CaptureDepthError(SqlParseTreeError):
    """Raised when sqlglot runs out of recursion printing a node back to SQL text."""


class RenderDepthError(SqlParseTreeError):
    """Raised when a rendered document nests deeper than the configured ceiling."""


class UnknownFormatError(SqlParseTreeError):
    """Raised when rendering is requested for a format that does not exist."""
