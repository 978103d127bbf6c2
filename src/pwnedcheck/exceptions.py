"""
Exception hierarchy for pwnedcheck.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class PwnedCheckError(Exception):
    """Base class for all pwnedcheck errors."""


class ConfigurationError(PwnedCheckError):
    """The runtime environment or configuration cannot support a check.

    Raised when the SHA-1 primitive is unavailable or a configuration
    value is invalid. Not recoverable.
    """


class NetworkError(PwnedCheckError):
    """A range query failed in transport or returned a non-200 status."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ProtocolError(PwnedCheckError):
    """A range response body could not be read as a record list."""


class RecordParseError(PwnedCheckError):
    """A single SUFFIX:COUNT record carried an unparsable count.

    Only ever logged by the response parser; the record is kept with an
    unknown count.
    """

    def __init__(self, line: str, reason: str):
        super().__init__(f"Bad count in range record {line[:12]}...: {reason}")
        self.line = line
        self.reason = reason


class InvalidDigestError(PwnedCheckError, ValueError):
    """A digest or digest prefix is not well-formed hex of the right length."""
