#!/usr/bin/env python3
"""
odoo.do CLI

Query an Odoo server over XML-RPC from the command line.

Usage:
    odoo-do login                      - Authenticate and print the user id
    odoo-do version                    - Show the server version
    odoo-do search MODEL [--domain]    - List ids of matching records
    odoo-do count MODEL [--domain]     - Count matching records
    odoo-do read MODEL IDS... [--field]
    odoo-do call MODEL METHOD [ARGS]   - Call any model method

Connection settings come from --url/--db/--username/--password or from the
ODOO_URL, ODOO_DB, ODOO_USERNAME and ODOO_PASSWORD environment variables.
Results are printed as JSON.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

import click

from .client import OdooClient, connect
from .config import configure, configure_from_env, get_config
from .domain import Domain
from .errors import OdooError


# Color codes for terminal output
class Colors:
    RESET = "\x1b[0m"
    BRIGHT = "\x1b[1m"
    DIM = "\x1b[2m"
    GREEN = "\x1b[32m"
    RED = "\x1b[31m"
    CYAN = "\x1b[36m"


def print_error(message: str, error: Exception | None = None) -> None:
    """Print error message."""
    click.echo(f"{Colors.RED}Error:{Colors.RESET} {message}", err=True)
    if error and str(error):
        click.echo(str(error), err=True)


def print_success(message: str) -> None:
    """Print success message."""
    click.echo(f"{Colors.GREEN}[ok]{Colors.RESET} {message}")


def print_json(value: Any) -> None:
    click.echo(json.dumps(value, indent=2, default=str))


def run_async(coro: Any) -> Any:
    """Run an async function synchronously."""
    return asyncio.run(coro)


def parse_json(value: str | None, what: str) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{what} is not valid JSON: {e}") from e


def parse_domain(value: str | None) -> Domain:
    terms = parse_json(value, "domain")
    if terms is None:
        return Domain()
    if not isinstance(terms, list):
        raise click.BadParameter("domain must be a JSON list")
    try:
        return Domain(terms).validate()
    except OdooError as e:
        raise click.BadParameter(e.message) from e


@click.group()
@click.option("--url", envvar="ODOO_URL", help="Odoo server URL")
@click.option("--db", envvar="ODOO_DB", help="Database name")
@click.option("--username", envvar="ODOO_USERNAME", help="Login")
@click.option("--password", envvar="ODOO_PASSWORD", help="Password or API key")
@click.option("--debug", is_flag=True, help="Log every XML-RPC call")
@click.pass_context
def cli(
    ctx: click.Context,
    url: str | None,
    db: str | None,
    username: str | None,
    password: str | None,
    debug: bool,
) -> None:
    """
    odoo.do CLI - Talk to an Odoo server over XML-RPC
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    configure_from_env()
    configure(url=url, db=db, username=username, password=password)

    ctx.ensure_object(dict)
    ctx.obj["config"] = get_config()
    ctx.obj.setdefault("options", {})


async def _open(ctx: click.Context) -> OdooClient:
    return await connect(ctx.obj["config"], **ctx.obj["options"])


def _run(action: str, command: Any) -> None:
    try:
        run_async(command)
    except OdooError as e:
        print_error(f"{action} failed", e)
        sys.exit(1)


@cli.command()
@click.pass_context
def login(ctx: click.Context) -> None:
    """Authenticate and print the user id."""

    async def command() -> None:
        client = await _open(ctx)
        try:
            config = client.config
            print_success(f"Authenticated as {config.username} on {config.db}")
            click.echo(f"  {Colors.DIM}uid:{Colors.RESET} {client.uid}")
        finally:
            await client.close()

    _run("Login", command())


@cli.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show the server version (no login needed)."""

    async def command() -> None:
        client = OdooClient(ctx.obj["config"], **ctx.obj["options"])
        try:
            print_json(await client.version())
        finally:
            await client.close()

    _run("Version", command())


@cli.command()
@click.argument("model")
@click.option("--domain", help='JSON domain, e.g. \'[["active", "=", true]]\'')
@click.pass_context
def search(ctx: click.Context, model: str, domain: str | None) -> None:
    """List the ids of MODEL records matching a domain."""
    terms = parse_domain(domain)

    async def command() -> None:
        async with await _open(ctx) as client:
            print_json(await client.search(model, terms))

    _run("Search", command())


@cli.command()
@click.argument("model")
@click.option("--domain", help="JSON domain")
@click.pass_context
def count(ctx: click.Context, model: str, domain: str | None) -> None:
    """Count MODEL records matching a domain."""
    terms = parse_domain(domain)

    async def command() -> None:
        async with await _open(ctx) as client:
            print_json(await client.search_count(model, terms))

    _run("Count", command())


@cli.command()
@click.argument("model")
@click.argument("ids", nargs=-1, type=int, required=True)
@click.option("--field", "fields", multiple=True, help="Field to read (repeatable)")
@click.pass_context
def read(ctx: click.Context, model: str, ids: tuple[int, ...], fields: tuple[str, ...]) -> None:
    """Read MODEL records by id."""

    async def command() -> None:
        async with await _open(ctx) as client:
            print_json(await client.read(model, list(ids), list(fields)))

    _run("Read", command())


@cli.command()
@click.argument("model")
@click.argument("method")
@click.argument("args", required=False)
@click.option("--context", "context", help="JSON keyword map sent after the arguments")
@click.pass_context
def call(
    ctx: click.Context,
    model: str,
    method: str,
    args: str | None,
    context: str | None,
) -> None:
    """Call METHOD on MODEL with a JSON list of ARGS."""
    positional = parse_json(args, "args")
    if positional is None:
        positional = []
    if not isinstance(positional, list):
        raise click.BadParameter("args must be a JSON list")
    keywords = parse_json(context, "context")
    if keywords is not None and not isinstance(keywords, dict):
        raise click.BadParameter("context must be a JSON object")

    async def command() -> None:
        async with await _open(ctx) as client:
            extra = (keywords,) if keywords is not None else ()
            print_json(await client.execute_kw(method, model, positional, *extra))

    _run("Call", command())


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
