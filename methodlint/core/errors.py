"""Exceptions raised by methodlint."""

from typing import Any, Optional


class MethodLintError(Exception):
    """Base class for methodlint errors."""


class MalformedTreeError(MethodLintError):
    """
    A syntax tree violates the shape the rules rely on.

    This is a defect in whatever built the tree, not a finding about the
    analysed code, so it is never turned into a diagnostic.
    """

    def __init__(self, message: str, node: Optional[Any] = None):
        super().__init__(message)
        self.node = node


class ParseError(MethodLintError):
    """Source text could not be turned into a syntax tree."""

    def __init__(self, message: str, file_path: str = "<unknown>"):
        super().__init__(message)
        self.file_path = file_path


class ConfigError(MethodLintError):
    """A configuration file is missing or invalid."""


def malformed_method_invocation(node: Any) -> MalformedTreeError:
    """Build the error for a call whose target carries no method name."""
    return MalformedTreeError(f"Method name {node!r} is malformed.", node)
