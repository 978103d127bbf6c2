"""
CLI commands for Pwned Passwords checks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn

from pwnedcheck.config import CheckerConfig
from pwnedcheck.exceptions import PwnedCheckError
from pwnedcheck.hashfile import HashFileBuilder, iter_hash_file
from pwnedcheck.hibp.checker import PasswordChecker
from pwnedcheck.hibp.client import PwnedPasswordsClient
from pwnedcheck.hibp.models import BatchItem, CheckResult, RiskLevel
from pwnedcheck.sources import PasswordSource, PromptPasswordSource

console = Console()
err_console = Console(stderr=True)


def risk_color(risk: RiskLevel) -> str:
    """Get color for risk level."""
    colors = {
        RiskLevel.SAFE: "green",
        RiskLevel.LOW: "yellow",
        RiskLevel.MEDIUM: "orange3",
        RiskLevel.HIGH: "red",
        RiskLevel.CRITICAL: "bold red",
    }
    return colors.get(risk, "white")


def fail(message: str) -> None:
    """Print an error on stderr and exit non-zero."""
    err_console.print(f"[red]Error: {message}[/red]")
    raise SystemExit(1)


def show_result(result: CheckResult, json_output: bool = False) -> None:
    """Print the verdict for a single check."""
    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2, default=str))
        return

    color = risk_color(result.risk_level)

    if not result.found:
        console.print(Panel(
            "[green]This password was not found in any leak database.[/green]",
            title="Password Check Result"
        ))
        return

    if result.count_known:
        seen = f"leaked [bold]{result.occurrences:,}[/bold] times!"
    else:
        seen = "leaked (count unavailable)!"

    console.print(Panel(
        f"[red]This password has been {seen}[/red]\n\n"
        f"Risk Level: [{color}]{result.risk_level.value.upper()}[/{color}]\n\n"
        "It is HIGHLY recommended that you change it immediately!",
        title="Password Check Result"
    ))


def run_password_check(
    config: CheckerConfig,
    source: PasswordSource | None = None,
    json_output: bool = False,
) -> None:
    """Prompt for one password and check it."""
    source = source or PromptPasswordSource()
    password = source.read()

    async def _check():
        async with PwnedPasswordsClient(config) as client:
            return await PasswordChecker(client).check_password(password)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Checking password...", total=None)
            result = asyncio.run(_check())
    except PwnedCheckError as e:
        fail(str(e))

    show_result(result, json_output)


def run_digest_check(config: CheckerConfig, json_output: bool = False) -> None:
    """Check the single pre-computed digest in config.target."""
    async def _check():
        async with PwnedPasswordsClient(config) as client:
            return await PasswordChecker(client).check_digest(str(config.target))

    try:
        result = asyncio.run(_check())
    except PwnedCheckError as e:
        fail(str(e))

    show_result(result, json_output)


def report_item(item: BatchItem, show_all: bool) -> None:
    """Print one hash file line's outcome."""
    if not item.ok:
        console.print(f"[yellow]Line {item.line_number}: {item.error}[/yellow]")
    elif item.leaked:
        if item.result.count_known:
            console.print(
                f"[red]{item.hash_prefix} has been leaked {item.result.occurrences:,} times![/red]"
            )
        else:
            console.print(f"[red]{item.hash_prefix} has been leaked (count unavailable)![/red]")
    elif show_all:
        console.print(f"[green]{item.hash_prefix} not found[/green]")


def run_hash_file_check(
    config: CheckerConfig,
    show_all: bool = False,
    json_output: bool = False,
    output: str | None = None,
) -> None:
    """Check every digest in the hash file at config.target.

    Failing lines are reported and skipped; the exit status is 1 if any
    line failed, once the whole file has been processed.
    """
    try:
        digests = list(iter_hash_file(config.target))
    except OSError as e:
        fail(f"Cannot read hash file {config.target}: {e}")

    if not digests:
        console.print("[yellow]No digests found in file[/yellow]")
        return

    async def _check_batch():
        items = []
        async with PwnedPasswordsClient(config) as client:
            checker = PasswordChecker(client)
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("{task.completed}/{task.total}"),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task("Checking...", total=len(digests))

                async for item in checker.check_digests(digests):
                    items.append(item)
                    if not json_output:
                        report_item(item, show_all)
                    progress.advance(task)

        return items

    items = asyncio.run(_check_batch())

    leaked = [i for i in items if i.leaked]
    failed = [i for i in items if not i.ok]

    if json_output:
        click.echo(json.dumps([i.to_dict() for i in items], indent=2, default=str))
    else:
        console.print(
            f"\n[bold]Results:[/bold] {len(leaked)}/{len(items)} digests found in breaches"
        )
        if failed:
            console.print(f"[yellow]{len(failed)} line(s) could not be checked[/yellow]")

    if output:
        Path(output).write_text(json.dumps([i.to_dict() for i in items], indent=2, default=str))
        console.print(f"\n[green]Results saved to {output}[/green]")

    if failed:
        raise SystemExit(1)


def run_hash_file_builder(config: CheckerConfig, source: PasswordSource | None = None) -> None:
    """Interactively add password digests to the hash file at config.target."""
    source = source or PromptPasswordSource()

    console.print("Create/Edit a hash file. No changes will be saved until a write.\n")
    console.print("Commands:")
    console.print("a - add a password to the hash file.")
    console.print("w - write changes to the hash file.")
    console.print("anything else - abort all changes.\n")

    try:
        builder = HashFileBuilder(config.target)
        builder.open()
    except OSError as e:
        fail(f"Cannot stage changes for {config.target}: {e}")

    with builder:
        while True:
            command = click.prompt(">>", default="", show_default=False, prompt_suffix=" ").strip()

            if command == "a":
                try:
                    click.echo(builder.add(source.read()))
                except PwnedCheckError as e:
                    fail(str(e))
            elif command == "w":
                try:
                    written = builder.commit()
                except OSError as e:
                    fail(f"Cannot write hash file {config.target}: {e}")
                console.print(f"Hash file modified ({written} digest(s) added).")
                return
            else:
                console.print("No changes made. Exiting.")
                return
