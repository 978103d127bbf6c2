"""Tests for the password checking pipeline."""

import pytest

from pwnedcheck.exceptions import InvalidDigestError, NetworkError
from pwnedcheck.hashing import digest
from pwnedcheck.hibp.checker import PasswordChecker
from pwnedcheck.hibp.client import PwnedPasswordsClient, parse_range_response
from pwnedcheck.sources import StaticPasswordSource
from tests.conftest import (
    PASSWORD_COUNT,
    PASSWORD_DIGEST,
    PASSWORD_PREFIX,
    PASSWORD_RANGE_BODY,
)

pytestmark = pytest.mark.asyncio

# Digests that the fake service knows nothing about
UNSEEN_DIGEST_1 = "0123456789ABCDEF0123456789ABCDEF01234567"
UNSEEN_DIGEST_2 = "FEDCBA9876543210FEDCBA9876543210FEDCBA98"


class StubClient:
    """Range client that serves canned bodies and fails on chosen prefixes."""

    def __init__(self, failing: set[str] | None = None):
        self.failing = failing or set()
        self.prefixes: list[str] = []

    async def query(self, prefix):
        self.prefixes.append(prefix)
        if prefix in self.failing:
            raise NetworkError(f"Request failed for range {prefix}: connection reset")
        if prefix == PASSWORD_PREFIX:
            return parse_range_response(PASSWORD_RANGE_BODY)
        return []


class TestSingleChecks:
    async def test_password_found(self, range_service, service_config):
        async with PwnedPasswordsClient(service_config) as client:
            result = await PasswordChecker(client).check_password(b"password")

        assert result.found is True
        assert result.occurrences == PASSWORD_COUNT
        assert result.hash_prefix == PASSWORD_PREFIX
        assert range_service.requests[0]["path"] == f"/range/{PASSWORD_PREFIX}"

    async def test_password_not_found(self, range_service, service_config):
        async with PwnedPasswordsClient(service_config) as client:
            result = await PasswordChecker(client).check_password(b"a much better passphrase")

        assert result.found is False
        assert result.occurrences == 0

    async def test_digest_skips_hashing(self):
        client = StubClient()
        result = await PasswordChecker(client).check_digest(PASSWORD_DIGEST.lower())

        assert result.found is True
        assert client.prefixes == [PASSWORD_PREFIX]

    async def test_invalid_digest_raises(self):
        client = StubClient()
        with pytest.raises(InvalidDigestError):
            await PasswordChecker(client).check_digest("not-a-digest")
        assert client.prefixes == []

    async def test_network_error_propagates(self):
        client = StubClient(failing={PASSWORD_PREFIX})
        with pytest.raises(NetworkError):
            await PasswordChecker(client).check_password(b"password")

    async def test_check_source(self):
        result = await PasswordChecker(StubClient()).check_source(StaticPasswordSource("password"))
        assert result.occurrences == PASSWORD_COUNT


class TestBatch:
    async def test_one_leaked_two_unseen_with_second_failing(self):
        client = StubClient(failing={UNSEEN_DIGEST_1[:5]})
        lines = [PASSWORD_DIGEST, UNSEEN_DIGEST_1, UNSEEN_DIGEST_2]

        items = [item async for item in PasswordChecker(client).check_digests(lines)]

        assert [i.line_number for i in items] == [1, 2, 3]
        assert [i.leaked for i in items] == [True, False, False]
        assert items[0].result.occurrences == PASSWORD_COUNT
        assert "connection reset" in items[1].error
        assert items[1].result is None
        assert items[2].ok and items[2].result.found is False
        assert client.prefixes == [PASSWORD_PREFIX, UNSEEN_DIGEST_1[:5], UNSEEN_DIGEST_2[:5]]

    async def test_malformed_line_reported_and_skipped(self):
        client = StubClient()
        lines = ["nonsense", PASSWORD_DIGEST]

        items = [item async for item in PasswordChecker(client).check_digests(lines)]

        assert not items[0].ok
        assert items[1].leaked
        assert client.prefixes == [PASSWORD_PREFIX]

    async def test_blank_lines_skipped_but_counted(self):
        lines = ["", PASSWORD_DIGEST, "   "]
        items = [item async for item in PasswordChecker(StubClient()).check_digests(lines)]

        assert len(items) == 1
        assert items[0].line_number == 2

    async def test_report_never_contains_full_digest(self):
        items = [item async for item in PasswordChecker(StubClient()).check_digests([PASSWORD_DIGEST])]
        report = items[0].to_dict()

        assert report["hash_prefix"] == PASSWORD_PREFIX
        assert PASSWORD_DIGEST not in str(report)

    async def test_hash_file_against_service(self, range_service, service_config, tmp_path):
        range_service.statuses[UNSEEN_DIGEST_1[:5]] = 502
        hash_file = tmp_path / "hashes.txt"
        hash_file.write_text(f"{PASSWORD_DIGEST}\n{UNSEEN_DIGEST_1}\n{UNSEEN_DIGEST_2}\n")

        async with PwnedPasswordsClient(service_config) as client:
            items = [item async for item in PasswordChecker(client).check_hash_file(hash_file)]

        assert len(items) == 3
        assert sum(1 for i in items if i.leaked) == 1
        assert items[1].error is not None
        assert items[2].ok
        assert len(range_service.requests) == 3


    async def test_undecodable_line_in_hash_file(self, tmp_path):
        client = StubClient()
        hash_file = tmp_path / "hashes.txt"
        hash_file.write_bytes(
            PASSWORD_DIGEST.encode() + b"\n\xff\xfe bad line\n" + UNSEEN_DIGEST_1.encode() + b"\n"
        )

        items = [item async for item in PasswordChecker(client).check_hash_file(hash_file)]

        assert len(items) == 3
        assert items[0].leaked
        assert items[1].line_number == 2
        assert items[1].error is not None
        assert items[2].ok and not items[2].leaked
        assert client.prefixes == [PASSWORD_PREFIX, UNSEEN_DIGEST_1[:5]]


class TestEndToEnd:
    async def test_password_digest_and_prefix(self, range_service, service_config):
        assert digest(b"password") == PASSWORD_DIGEST

        async with PwnedPasswordsClient(service_config) as client:
            result = await PasswordChecker(client).check_password(b"password")

        assert result.found is True
        assert result.occurrences > 1000
        assert [r["path"] for r in range_service.requests] == ["/range/5BAA6"]
