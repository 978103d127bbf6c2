"""
Password digests in the format the Pwned Passwords API expects.

The range API is keyed on unsalted SHA-1 rendered as 40 uppercase hex
characters, so that is exactly what is computed here. Do not swap this
for a slow password hash; the service would not recognise the result.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import hashlib
import string

from pwnedcheck.exceptions import ConfigurationError, InvalidDigestError

DIGEST_LENGTH = 40
PREFIX_LENGTH = 5
SUFFIX_LENGTH = DIGEST_LENGTH - PREFIX_LENGTH

_HEX_DIGITS = frozenset(string.hexdigits)


def is_hex(value: str) -> bool:
    """True if every character is a hex digit (either case)."""
    return all(c in _HEX_DIGITS for c in value)


def digest(password: bytes) -> str:
    """Compute the SHA-1 digest of a password.

    Args:
        password: Raw password bytes (encode text as UTF-8 first)

    Returns:
        40 uppercase hex characters

    Raises:
        ConfigurationError: SHA-1 is not available in this runtime
    """
    if not isinstance(password, (bytes, bytearray, memoryview)):
        raise TypeError("password must be bytes, not %s" % type(password).__name__)

    try:
        # Not used for security here: the format is fixed by the remote API
        sha1 = hashlib.sha1(password, usedforsecurity=False)
    except (ValueError, AttributeError) as e:
        raise ConfigurationError(f"SHA-1 is unavailable: {e}") from e

    return sha1.hexdigest().upper()


def normalize_digest(value: str) -> str:
    """Strip and uppercase a digest, checking it is 40 hex characters."""
    normalized = value.strip().upper()
    if len(normalized) != DIGEST_LENGTH or not is_hex(normalized):
        raise InvalidDigestError(
            f"Expected a {DIGEST_LENGTH}-character hex SHA-1 digest, got {len(normalized)} characters"
        )
    return normalized


def validate_prefix(value: str) -> str:
    """Uppercase a digest prefix, checking it is 5 hex characters."""
    normalized = value.upper()
    if len(normalized) != PREFIX_LENGTH or not is_hex(normalized):
        raise InvalidDigestError(f"Range prefix must be {PREFIX_LENGTH} hex characters: {value!r}")
    return normalized


def prefix(password_digest: str) -> str:
    """First five characters of a digest; the only part ever sent."""
    return password_digest[:PREFIX_LENGTH]


def suffix(password_digest: str) -> str:
    """Remaining 35 characters of a digest; compared locally only."""
    return password_digest[PREFIX_LENGTH:]


def split_digest(password_digest: str) -> tuple[str, str]:
    """Split a digest into (prefix, suffix)."""
    return prefix(password_digest), suffix(password_digest)
