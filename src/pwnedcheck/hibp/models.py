"""
Data models for Pwned Passwords range queries.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from enum import Enum


class RiskLevel(str, Enum):
    """Exposure bucket based on how often a password was seen."""

    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Candidate:
    """One SUFFIX:COUNT record returned for a queried prefix."""

    suffix: str
    count: int = 0
    # False when the record's count could not be parsed
    count_known: bool = True


@dataclass
class CheckResult:
    """Result of checking a password or digest against Pwned Passwords."""

    found: bool = False
    occurrences: int = 0
    count_known: bool = True
    checked_at: datetime = field(default_factory=datetime.now)
    # Never store the password or the full digest
    hash_prefix: str = ""

    @property
    def risk_level(self) -> RiskLevel:
        """Determine risk level based on occurrences."""
        if not self.found:
            return RiskLevel.SAFE
        elif self.occurrences < 10:
            return RiskLevel.LOW
        elif self.occurrences < 100:
            return RiskLevel.MEDIUM
        elif self.occurrences < 10000:
            return RiskLevel.HIGH
        else:
            return RiskLevel.CRITICAL

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "found": self.found,
            "occurrences": self.occurrences,
            "count_known": self.count_known,
            "risk_level": self.risk_level.value,
            "hash_prefix": self.hash_prefix,
            "checked_at": self.checked_at.isoformat(),
        }


@dataclass
class BatchItem:
    """Outcome of checking one line of a hash file."""

    line_number: int
    digest: str
    result: CheckResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def leaked(self) -> bool:
        return self.result is not None and self.result.found

    @property
    def hash_prefix(self) -> str:
        return self.digest.strip()[:5].upper()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (reports the prefix only)."""
        return {
            "line": self.line_number,
            "hash_prefix": self.hash_prefix,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error,
        }
