"""
pwnedcheck CLI - Main entry point for the command-line interface.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from pwnedcheck import __version__
from pwnedcheck.config import CheckerConfig, RunMode
from pwnedcheck.exceptions import ConfigurationError
from pwnedcheck.hibp.cli import (
    fail,
    run_digest_check,
    run_hash_file_builder,
    run_hash_file_check,
    run_password_check,
)


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.command()
@click.version_option(version=__version__, prog_name="pwnedcheck")
@click.option("--generate", "-g", "generate", type=click.Path(dir_okay=False),
              help="Generate (or append to) a password hash file.")
@click.option("--file", "-f", "hash_file", type=click.Path(exists=True, dir_okay=False),
              help="Check a password hash file.")
@click.option("--hash", "password_hash", help="SHA-1 digest to check instead of a password")
@click.option("--all", "show_all", is_flag=True, help="Also list digests that were not found")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Save hash file results as JSON")
@click.option("--api-url", help="Pwned Passwords API base URL")
@click.option("--timeout", type=float, help="Per-request timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    generate: str | None,
    hash_file: str | None,
    password_hash: str | None,
    show_all: bool,
    json_output: bool,
    output: str | None,
    api_url: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Check passwords against the Pwned Passwords breach corpus.

    Only the first 5 characters of each password's SHA-1 hash are sent
    to the API. With no options, prompts for a password.

    Example:
        pwnedcheck
        pwnedcheck -g hashes.txt
        pwnedcheck -f hashes.txt --all
        pwnedcheck --hash 5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8
    """
    setup_logging(verbose)

    selected = [opt for opt, value in (("-g", generate), ("-f", hash_file), ("--hash", password_hash)) if value]
    if len(selected) > 1:
        raise click.UsageError(f"cannot specify {' and '.join(selected)} options together.")

    try:
        config = CheckerConfig.from_env()
        if api_url:
            config.api_base = api_url
        if timeout is not None:
            config.timeout = timeout

        if generate:
            config.mode, config.target = RunMode.BUILD_HASH_FILE, generate
        elif hash_file:
            config.mode, config.target = RunMode.CHECK_HASH_FILE, hash_file
        elif password_hash:
            config.mode, config.target = RunMode.CHECK_DIGEST, password_hash

        config.check()
    except ConfigurationError as e:
        fail(str(e))

    if config.mode == RunMode.BUILD_HASH_FILE:
        run_hash_file_builder(config)
    elif config.mode == RunMode.CHECK_HASH_FILE:
        run_hash_file_check(config, show_all=show_all, json_output=json_output, output=output)
    elif config.mode == RunMode.CHECK_DIGEST:
        run_digest_check(config, json_output=json_output)
    else:
        run_password_check(config, json_output=json_output)


if __name__ == "__main__":
    main()
