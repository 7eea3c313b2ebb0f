"""CLI entry point for neofeeder package."""
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional, Tuple

import click
from pydantic import ValidationError

from .client import FeederClient, dumps
from .config import FeederSettings
from .envelope import Envelope
from .queries import QUERIES

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
HANDLER_NAME = "neofeeder-cli"


def _setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("neofeeder")
    for old in [h for h in logger.handlers if h.get_name() == HANDLER_NAME]:
        logger.removeHandler(old)
    h = logging.StreamHandler(sys.stderr)
    h.set_name(HANDLER_NAME)
    h.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(h)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _echo(result: Envelope) -> None:
    click.echo(dumps(result))
    if not result.ok:
        sys.exit(1)


def _record(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise click.BadParameter(f"not valid JSON: {e}")


def _key(text: str) -> Any:
    """Keys may be JSON objects (`{"id_dosen": "..."}`) or bare strings."""
    if text.lstrip().startswith("{"):
        return _record(text)
    return text


@click.group()
@click.option("--url", help="Feeder web-service URL [env: NEOFEEDER_URL]")
@click.option("--username", "-u", help="Feeder username [env: NEOFEEDER_USERNAME]")
@click.option("--password", "-p", help="Feeder password [env: NEOFEEDER_PASSWORD]")
@click.option("--timeout", type=int, help="HTTP timeout in seconds [env: NEOFEEDER_TIMEOUT]")
@click.option("--env-file", type=click.Path(dir_okay=False), help="Read settings from this .env file.")
@click.option("--verbose", "-v", is_flag=True, help="Log every request.")
@click.pass_context
def main(
    ctx: click.Context,
    url: Optional[str],
    username: Optional[str],
    password: Optional[str],
    timeout: Optional[int],
    env_file: Optional[str],
    verbose: bool,
) -> None:
    """NeoFeeder (PDDikti feeder) command-line client."""
    _setup_logging(verbose)
    if ctx.invoked_subcommand == "queries":
        return
    try:
        settings = FeederSettings.from_env(
            env_file=env_file, url=url, username=username, password=password, timeout=timeout
        )
    except ValidationError as e:
        raise click.UsageError(f"invalid feeder settings: {e}")
    ctx.obj = FeederClient(settings)


@main.command("token")
@click.pass_obj
def token_cmd(client: FeederClient) -> None:
    """Fetch a token (checks URL and credentials)."""
    _echo(client.get_token())


@main.command("run")
@click.argument("act")
@click.option("--filter", "filter_", default="", help="Raw filter expression.")
@click.option("--limit", default="", help="Maximum rows.")
@click.option("--offset", default="", help="Rows to skip.")
@click.option("--order", default="", help="Order clause, e.g. 'nim asc'.")
@click.pass_obj
def run_cmd(client: FeederClient, act: str, filter_: str, limit: str, offset: str, order: str) -> None:
    """Run feeder action ACT with a raw filter."""
    _echo(client.run_ws(act, filter_, limit, offset, order))


@main.command("query")
@click.argument("name")
@click.argument("args", nargs=-1)
@click.pass_obj
def query_cmd(client: FeederClient, name: str, args: Tuple[str, ...]) -> None:
    """Run named query NAME with positional ARGS (see `queries`)."""
    if name not in QUERIES:
        raise click.BadParameter(f"unknown query {name!r}", param_hint="NAME")
    try:
        result = client.query(name, *args)
    except TypeError as e:
        raise click.UsageError(str(e))
    _echo(result)


@main.command("queries")
def queries_cmd() -> None:
    """List the named queries."""
    for q in QUERIES.values():
        click.echo(f"{q.name:<36} {q.act:<40} {' '.join(q.args)}")
    click.echo(f"\nTotal: {len(QUERIES)}")


@main.command("prodi")
@click.pass_obj
def prodi_cmd(client: FeederClient) -> None:
    """List all study programs of the institution."""
    _echo(client.get_all_prodi())


@main.command("insert")
@click.argument("act")
@click.argument("record")
@click.pass_obj
def insert_cmd(client: FeederClient, act: str, record: str) -> None:
    """Insert RECORD (a JSON object) with action ACT."""
    _echo(client.insert_ws(act, _record(record)))


@main.command("update")
@click.argument("act")
@click.argument("key")
@click.argument("record")
@click.pass_obj
def update_cmd(client: FeederClient, act: str, key: str, record: str) -> None:
    """Update the record KEY (JSON object or plain string) with RECORD."""
    _echo(client.update_ws(act, _key(key), _record(record)))


@main.command("delete")
@click.argument("act")
@click.argument("key")
@click.pass_obj
def delete_cmd(client: FeederClient, act: str, key: str) -> None:
    """Delete the record KEY (JSON object or plain string) with action ACT."""
    _echo(client.delete_ws(act, _key(key)))


if __name__ == "__main__":
    main()
