"""
Hash list files: one uppercase SHA-1 digest per line.

Writes are staged in a temporary file beside the target and only land
on the target through an atomic rename, so an aborted session leaves
the existing file untouched.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterator

from pwnedcheck.hashing import digest

logger = logging.getLogger(__name__)

STAGING_PREFIX = ".tmphash"


def iter_hash_file(path: str | Path) -> Iterator[str]:
    """Yield each non-blank line of a hash file, stripped.

    Undecodable bytes are replaced rather than raised, so a corrupt line
    fails digest validation on its own instead of ending the read.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            line = line.strip()
            if line:
                yield line


class HashFileBuilder:
    """Stage password digests and append them to a hash file on commit.

    Example:
        with HashFileBuilder("hashes.txt") as builder:
            builder.add(b"hunter2")
            builder.commit()
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.directory = self.path.parent
        self._staged: list[str] = []
        self._staging_path: Path | None = None
        self.committed = False

    def __enter__(self) -> "HashFileBuilder":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if not self.committed:
            self.discard()

    @property
    def staged(self) -> list[str]:
        """Digests added so far and not yet written."""
        return list(self._staged)

    def open(self) -> None:
        """Create the staging file next to the target."""
        if self._staging_path is not None:
            return
        fd, name = tempfile.mkstemp(prefix=STAGING_PREFIX, dir=self.directory)
        os.close(fd)
        self._staging_path = Path(name)
        logger.debug(f"Staging hash file changes in {self._staging_path}")

    def add(self, password: bytes) -> str:
        """Stage the digest of a password and return it."""
        self.open()
        password_digest = digest(password)
        with open(self._staging_path, "a", encoding="utf-8") as f:
            f.write(f"{password_digest}\n")
        self._staged.append(password_digest)
        return password_digest

    def commit(self) -> int:
        """Append staged digests to the target file atomically.

        Returns:
            Number of digests written
        """
        self.open()

        fd, name = tempfile.mkstemp(prefix=STAGING_PREFIX, dir=self.directory)
        tmp_path = Path(name)
        try:
            with os.fdopen(fd, "wb") as out:
                # Existing content is copied byte for byte, never decoded
                if self.path.exists():
                    with open(self.path, "rb") as existing:
                        shutil.copyfileobj(existing, out)
                    if out.tell() and not self._ends_with_newline():
                        out.write(b"\n")
                with open(self._staging_path, "rb") as staged:
                    shutil.copyfileobj(staged, out)
                out.flush()
                os.fsync(out.fileno())

            if self.path.exists():
                os.chmod(tmp_path, self.path.stat().st_mode & 0o777)
            else:
                os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        written = len(self._staged)
        self.committed = True
        self._remove_staging()
        logger.info(f"Wrote {written} digest(s) to {self.path}")
        return written

    def discard(self) -> None:
        """Drop everything staged without touching the target."""
        if self._staged:
            logger.info(f"Discarded {len(self._staged)} staged digest(s)")
        self._staged.clear()
        self._remove_staging()

    def _ends_with_newline(self) -> bool:
        with open(self.path, "rb") as f:
            f.seek(-1, os.SEEK_END)
            return f.read(1) == b"\n"

    def _remove_staging(self) -> None:
        if self._staging_path is not None:
            self._staging_path.unlink(missing_ok=True)
            self._staging_path = None
