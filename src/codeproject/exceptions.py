"""Exception hierarchy for codeproject.

All exceptions inherit from :class:`CodeProjectError`. Only failures the
caller cannot sensibly ignore are raised: invalid configuration, invalid
tokens, transport failures and unparseable response bodies. A rejected
token request or a non-2xx data request is *not* an exception; those
return ``None`` and leave the status on the client for inspection.

Subclass hierarchy::

    CodeProjectError
    +-- ConfigError          (also ValueError)
    +-- InvalidTokenError    (also RuntimeError)
    +-- ConnectionError_
    +-- ResponseParseError
"""


class CodeProjectError(Exception):
    """Base exception for all codeproject errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(CodeProjectError, ValueError):
    """Raised for missing or blank client credentials and bad configuration values."""


class InvalidTokenError(CodeProjectError, RuntimeError):
    """Raised when a client is given a missing or blank bearer token."""


class ConnectionError_(CodeProjectError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``. The originating :mod:`httpx` exception is kept
    as ``__cause__``.
    """


class ResponseParseError(CodeProjectError):
    """Raised when a response body is not valid JSON or does not fit the expected model."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body
