"""
Password checking pipeline: digest, range query, local match.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Iterable

from pwnedcheck.config import CheckerConfig
from pwnedcheck.exceptions import InvalidDigestError, NetworkError, ProtocolError
from pwnedcheck.hashfile import iter_hash_file
from pwnedcheck.hibp.client import PwnedPasswordsClient
from pwnedcheck.hashing import digest, normalize_digest, split_digest
from pwnedcheck.hibp.models import BatchItem, CheckResult
from pwnedcheck.hibp.resolver import resolve
from pwnedcheck.sources import PasswordSource

logger = logging.getLogger(__name__)


class PasswordChecker:
    """Checks passwords and digests against Pwned Passwords.

    Single checks raise on failure. Batch checks report each line's
    failure on its BatchItem and move on to the next line.
    """

    def __init__(self, client: PwnedPasswordsClient):
        self.client = client

    async def _check_normalized(self, password_digest: str) -> CheckResult:
        prefix, suffix = split_digest(password_digest)
        candidates = await self.client.query(prefix)
        return resolve(suffix, candidates, hash_prefix=prefix)

    async def check_password(self, password: bytes) -> CheckResult:
        """Check if a password has been exposed in data breaches.

        Only the first 5 characters of its SHA-1 digest are sent.

        Args:
            password: Password bytes (NOT stored or logged)
        """
        return await self._check_normalized(digest(password))

    async def check_digest(self, password_digest: str) -> CheckResult:
        """Check a pre-computed SHA-1 digest.

        Raises:
            InvalidDigestError: Not a 40-character hex digest
        """
        return await self._check_normalized(normalize_digest(password_digest))

    async def check_source(self, source: PasswordSource) -> CheckResult:
        """Read one password from a source and check it."""
        return await self.check_password(source.read())

    async def check_digests(self, lines: Iterable[str]) -> AsyncIterator[BatchItem]:
        """Check digests one at a time, isolating failures per line.

        Args:
            lines: Digests, typically lines of a hash file; blank lines are skipped

        Yields:
            BatchItem for each non-blank line
        """
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue

            item = BatchItem(line_number=line_number, digest=line)
            try:
                item.result = await self.check_digest(line)
            except InvalidDigestError as e:
                item.error = str(e)
                logger.warning(f"Line {line_number}: {e}")
            except (NetworkError, ProtocolError) as e:
                item.error = str(e)
                logger.error(f"Line {line_number} ({item.hash_prefix}): {e}")
            yield item

    async def check_hash_file(self, path: str | Path) -> AsyncIterator[BatchItem]:
        """Check every digest in a hash file."""
        async for item in self.check_digests(iter_hash_file(path)):
            yield item


# Convenience functions for synchronous usage
def check_password_sync(password: bytes, config: CheckerConfig | None = None) -> CheckResult:
    """Synchronous wrapper for checking a password.

    Args:
        password: Password bytes
        config: Endpoint settings

    Returns:
        CheckResult
    """
    async def _check():
        async with PwnedPasswordsClient(config) as client:
            return await PasswordChecker(client).check_password(password)

    return asyncio.run(_check())


def check_digest_sync(password_digest: str, config: CheckerConfig | None = None) -> CheckResult:
    """Synchronous wrapper for checking a pre-computed digest."""
    async def _check():
        async with PwnedPasswordsClient(config) as client:
            return await PasswordChecker(client).check_digest(password_digest)

    return asyncio.run(_check())
