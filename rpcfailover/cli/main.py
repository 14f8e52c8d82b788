"""Main CLI command group for rpcfailover."""

import asyncio
import json
import sys
from typing import Any, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from rpcfailover import __version__
from rpcfailover.core.config_manager import ConfigManager
from rpcfailover.core.endpoints import EndpointRegistry
from rpcfailover.core.provider import FailoverProvider
from rpcfailover.models.config import FailoverConfig
from rpcfailover.utils.exceptions import ErrorHandler, RpcFailoverError
from rpcfailover.utils.logging import configure_logging

console = Console()


def main():
    """Program entry point."""
    cli()


class JsonType(click.ParamType):
    """JSON request body parameter."""
    name = "json"

    def convert(self, value, param, ctx):
        if not isinstance(value, str):
            return value
        try:
            return json.loads(value)
        except ValueError as e:
            self.fail(f"Invalid JSON payload: {e}", param, ctx)


def _load_config(ctx: click.Context, endpoint: Tuple[str, ...], config_file: Optional[str],
                 **overrides: Any) -> FailoverConfig:
    manager = ConfigManager(config_file)
    try:
        return manager.load_config(cli_overrides={"endpoints": endpoint, **overrides})
    except RpcFailoverError as e:
        ErrorHandler(verbose=ctx.obj["verbose"]).handle_error(e)
        sys.exit(1)


endpoint_option = click.option(
    "--endpoint", "-e",
    multiple=True,
    help="Endpoint base address, repeat for a failover pool (default: RPCFAILOVER_ENDPOINTS)"
)
config_option = click.option(
    "--config", "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML configuration file"
)


@click.group()
@click.version_option(version=__version__, prog_name="rpcfailover")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (shows DEBUG level)"
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Quiet mode - only show warnings and errors"
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Emit logs as JSON lines"
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, json_logs: bool) -> None:
    """rpcfailover: call RPC APIs through a pool of failover endpoints."""
    ctx.ensure_object(dict)

    if verbose and quiet:
        console.print("[yellow]Warning: Both --verbose and --quiet specified. Using verbose mode.[/yellow]")
        quiet = False

    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    if quiet:
        log_level = "WARNING"
    elif verbose:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    configure_logging(log_level=log_level, structured=json_logs)


@cli.command()
@click.argument("path")
@endpoint_option
@config_option
@click.option("--data", "-d", "payload", type=JsonType(), default=None, help="JSON request body")
@click.option("--mode", type=str, default=None, help="Failover mode (failover, fail_fast)")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds")
@click.pass_context
def call(ctx: click.Context, path: str, endpoint: Tuple[str, ...], config_file: Optional[str],
         payload: Any, mode: Optional[str], timeout: Optional[float]) -> None:
    """Send PATH with a JSON body and print the response.

    \b
    rpcfailover call /v1/chain/get_info -e https://a.example.com -e https://b.example.com
    rpcfailover call /v1/chain/get_account -d '{"account_name": "eosio"}'
    """
    config = _load_config(ctx, endpoint, config_file, mode=mode, timeout=timeout)

    async def _run() -> Any:
        async with FailoverProvider.from_config(config) as provider:
            return await provider.call(path, payload)

    try:
        result = asyncio.run(_run())
    except RpcFailoverError as e:
        ErrorHandler(verbose=ctx.obj["verbose"]).handle_error(e, {"path": path})
        sys.exit(1)

    console.print_json(json.dumps(result))


@cli.command()
@endpoint_option
@config_option
@click.pass_context
def endpoints(ctx: click.Context, endpoint: Tuple[str, ...], config_file: Optional[str]) -> None:
    """Show the normalized endpoint pool in failover order."""
    config = _load_config(ctx, endpoint, config_file)

    try:
        registry = EndpointRegistry(config.endpoints)
    except RpcFailoverError as e:
        ErrorHandler(verbose=ctx.obj["verbose"]).handle_error(e)
        sys.exit(1)

    table = Table(title="Endpoint Pool", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Endpoint", style="cyan")
    table.add_column("Role")

    for index, address in enumerate(registry, 1):
        table.add_row(str(index), address, "active" if index == 1 else "fallback")

    console.print(table)


if __name__ == "__main__":
    main()
