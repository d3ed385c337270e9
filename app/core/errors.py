"""
Error kinds raised while serving a romanization request.
"""


class IchiranError(Exception):
    """Base class for failures that end a request."""


class ValidationError(IchiranError):
    """Missing or empty required input."""


class EngineTimeoutError(IchiranError):
    """ichiran-cli did not finish within the configured timeout."""


class ProcessError(IchiranError):
    """ichiran-cli failed to spawn, exited non-zero or overflowed its output ceiling."""


class ParseError(IchiranError):
    """Full-mode output was not valid JSON."""
