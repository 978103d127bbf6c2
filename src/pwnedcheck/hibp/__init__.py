"""
Pwned Passwords integration module.

Checks passwords and SHA-1 digests against the Pwned Passwords corpus
using k-anonymity range queries.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from pwnedcheck.hibp.models import (
    BatchItem,
    Candidate,
    CheckResult,
    RiskLevel,
)
from pwnedcheck.hibp.client import PwnedPasswordsClient, parse_range_response
from pwnedcheck.hibp.checker import PasswordChecker, check_digest_sync, check_password_sync
from pwnedcheck.hibp.resolver import resolve

__all__ = [
    "PwnedPasswordsClient",
    "PasswordChecker",
    "BatchItem",
    "Candidate",
    "CheckResult",
    "RiskLevel",
    "check_digest_sync",
    "check_password_sync",
    "parse_range_response",
    "resolve",
]
