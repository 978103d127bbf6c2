"""
Local matching of a digest suffix against a range response.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from typing import Iterable

from pwnedcheck.hibp.models import Candidate, CheckResult

logger = logging.getLogger(__name__)


def resolve(suffix: str, candidates: Iterable[Candidate], hash_prefix: str = "") -> CheckResult:
    """Find the candidate matching a digest suffix.

    Comparison is case-insensitive. If the service returns the same
    suffix more than once, the first record in response order wins.

    Args:
        suffix: 35-character digest suffix
        candidates: Records returned for the suffix's prefix
        hash_prefix: Queried prefix, carried into the result for reporting

    Returns:
        CheckResult; found=False and occurrences=0 when nothing matches
    """
    wanted = suffix.upper()
    match: Candidate | None = None

    for candidate in candidates:
        if candidate.suffix.upper() != wanted:
            continue
        if match is None:
            match = candidate
        else:
            logger.debug(f"Duplicate range record for prefix {hash_prefix}, keeping the first")

    if match is None:
        return CheckResult(found=False, occurrences=0, hash_prefix=hash_prefix)

    return CheckResult(
        found=True,
        occurrences=match.count,
        count_known=match.count_known,
        hash_prefix=hash_prefix,
    )
