"""
pwnedcheck - check passwords against the Pwned Passwords corpus.

Only the first five characters of a password's SHA-1 digest are ever
sent to the lookup service (k-anonymity range queries).

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "1.0.0"
