"""
Pwned Passwords range API client.

Implements the k-anonymity range query: only the first 5 characters of
a SHA-1 digest are sent, and the service answers with every known
suffix sharing that prefix. Matching happens locally.

- Exactly one request per query, no retries and no caching
- Finite per-request timeout
- Tolerant parsing of individual records

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging

import aiohttp

from pwnedcheck.config import CheckerConfig
from pwnedcheck.exceptions import NetworkError, ProtocolError, RecordParseError
from pwnedcheck.hashing import SUFFIX_LENGTH, is_hex, validate_prefix
from pwnedcheck.hibp.models import Candidate

logger = logging.getLogger(__name__)


def _parse_count(line: str, raw: str) -> int | None:
    """Parse a record count, logging and returning None if it is unusable."""
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        logger.warning(RecordParseError(line, f"count is not a decimal integer: {raw[:12]!r}"))
        return None

    return int(raw)


def parse_range_response(body: str) -> list[Candidate]:
    """Parse a range response body into candidates.

    The body is CRLF-delimited ``SUFFIX:COUNT`` records. A record whose
    count cannot be parsed is kept with count 0 and ``count_known`` False,
    so its suffix can still be matched. Records without a usable suffix
    are skipped.

    Args:
        body: Decoded response text

    Returns:
        Candidates in response order

    Raises:
        ProtocolError: The body has content but not a single valid record
    """
    candidates: list[Candidate] = []
    skipped = 0

    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue

        hash_suffix, sep, raw_count = line.partition(":")
        hash_suffix = hash_suffix.strip().upper()

        if not sep or len(hash_suffix) != SUFFIX_LENGTH or not is_hex(hash_suffix):
            skipped += 1
            logger.warning(f"Skipping malformed range record: {line[:12]}...")
            continue

        count = _parse_count(line, raw_count)
        if count is None:
            candidates.append(Candidate(hash_suffix, 0, count_known=False))
        else:
            candidates.append(Candidate(hash_suffix, count))

    if skipped and not candidates:
        raise ProtocolError(f"Range response contained no valid records ({skipped} malformed lines)")

    return candidates


class PwnedPasswordsClient:
    """Client for the Pwned Passwords range endpoint."""

    def __init__(
        self,
        config: CheckerConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize range client.

        Args:
            config: Endpoint, timeout and User-Agent settings
            session: Existing session to use; it is not closed by this client
        """
        self.config = config or CheckerConfig()
        self._session = session
        self._owns_session = session is None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session exists."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "PwnedPasswordsClient":
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def fetch_range(self, prefix: str) -> str:
        """Fetch the raw range body for a prefix.

        Raises:
            NetworkError: Transport failure, timeout or non-200 status
            ProtocolError: Body is not UTF-8 text
        """
        prefix = validate_prefix(prefix)
        url = f"{self.config.range_url}/{prefix}"
        session = await self._ensure_session()

        # The prefix is the only request-specific value sent
        headers = {"User-Agent": self.config.user_agent}

        logger.debug(f"Querying range {prefix}")
        try:
            async with session.get(
                url,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            ) as response:
                status = response.status
                if status != 200:
                    text = await response.text(errors="replace")
                    raise NetworkError(f"HTTP {status} for range {prefix}: {text[:200]}", status=status)
                body = await response.read()

        except asyncio.TimeoutError:
            raise NetworkError(
                f"Request timeout after {self.config.timeout:g}s for range {prefix}"
            ) from None
        except aiohttp.ClientError as e:
            raise NetworkError(f"Request failed for range {prefix}: {e}") from e

        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtocolError(f"Range response for {prefix} is not text: {e}") from e

    async def query(self, prefix: str) -> list[Candidate]:
        """Return every candidate suffix the service knows for a prefix.

        Args:
            prefix: 5 hex characters of a SHA-1 digest

        Returns:
            Candidates in response order
        """
        body = await self.fetch_range(prefix)
        candidates = parse_range_response(body)
        logger.debug(f"Range {prefix.upper()} returned {len(candidates)} candidates")
        return candidates
