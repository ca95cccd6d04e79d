"""CLI for querying a sequencer node."""

import logging
from enum import StrEnum
from pathlib import Path

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.traceback import install

from seq_client.core.units import format_balance, parse_balance
from seq_client.data import ClientConfig, load_config
from seq_client.rpc import AssetNotFoundError, Deadline, JSONRPCClient, SeqClientError

# Install rich traceback handler
install(show_locals=True)

app = typer.Typer(
    name="seq-client",
    help="Query a sequencer chain node over JSON-RPC",
    add_completion=False,
)

console = Console()


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


class State:
    """Options shared by all commands."""

    def __init__(self, config: ClientConfig, debug: bool) -> None:
        self.config = config
        self.debug = debug


def _build_client(config: ClientConfig) -> JSONRPCClient:
    """
    Create a client for the configured node.

    Parameters
    ----------
    config : ClientConfig
        Loaded configuration

    Returns
    -------
    JSONRPCClient
        Client writing wait progress to the CLI console

    """
    return JSONRPCClient.from_config(config, console=console)


def _deadline(timeout: float | None) -> Deadline | None:
    return Deadline(timeout) if timeout is not None else None


def _fail(state: State, error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    if state.debug:
        # Rich traceback will render this
        raise error
    raise typer.Exit(1)


def _output_model(model: BaseModel) -> None:
    """Output a reply model as JSON."""
    console.print_json(data=model.model_dump(mode="json"))


@app.callback()
def main(
    ctx: typer.Context,
    uri: str | None = typer.Option(None, "--uri", "-u", help="Base URI of the node"),
    network_id: int | None = typer.Option(None, "--network-id", "-n", help="Network identifier"),
    chain_id: str | None = typer.Option(None, "--chain-id", help="Chain identifier"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """Query a sequencer chain node over JSON-RPC."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        )

    try:
        config = load_config(config_path, uri=uri, network_id=network_id, chain_id=chain_id)
    except SeqClientError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    ctx.obj = State(config, debug)
    if debug:
        console.print(f"[dim]Using node {config.uri} (network {config.network_id})[/dim]")


@app.command()
def genesis(
    ctx: typer.Context,
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
) -> None:
    """Show the chain genesis."""
    state: State = ctx.obj
    with _build_client(state.config) as client:
        try:
            value = client.genesis()
        except SeqClientError as e:
            _fail(state, e)

    if format == OutputFormat.JSON:
        _output_model(value)
        return

    table = Table(title="Genesis", show_header=True, header_style="bold magenta")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")
    for name, field_value in value.model_dump().items():
        table.add_row(name, str(field_value))
    console.print(table)


@app.command()
def tx(
    ctx: typer.Context,
    tx_id: str = typer.Argument(..., help="Transaction ID"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
) -> None:
    """Show the status of a transaction."""
    state: State = ctx.obj
    with _build_client(state.config) as client:
        try:
            status = client.tx(tx_id)
        except SeqClientError as e:
            _fail(state, e)

    if format == OutputFormat.JSON:
        _output_model(status)
        return
    if not status.found:
        console.print(f"[yellow]{tx_id} not found[/yellow]")
        return

    table = Table(title=f"Transaction {tx_id}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", style="green")
    table.add_row("Success", "✓" if status.success else "✗")
    table.add_row("Timestamp", str(status.timestamp))
    table.add_row("Fee", str(status.fee))
    console.print(table)


@app.command()
def asset(
    ctx: typer.Context,
    asset_id: str = typer.Argument(..., help="Asset ID"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Always query the node"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
) -> None:
    """Show asset metadata."""
    state: State = ctx.obj
    with _build_client(state.config) as client:
        try:
            lookup = client.asset(asset_id, use_cache=not no_cache)
        except SeqClientError as e:
            _fail(state, e)

    if format == OutputFormat.JSON:
        _output_model(lookup)
        return
    if not lookup.found:
        console.print(f"[yellow]{asset_id} does not exist[/yellow]")
        return

    record = lookup.record
    table = Table(title=f"Asset {asset_id}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", style="green")
    table.add_row("Symbol", record.symbol_text)
    table.add_row("Decimals", str(record.decimals))
    table.add_row("Metadata", record.metadata.decode("utf-8", errors="replace"))
    table.add_row("Supply", format_balance(record.supply, record.decimals))
    table.add_row("Owner", record.owner)
    table.add_row("Warp", "✓" if record.is_warp else "✗")
    console.print(table)


@app.command()
def balance(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Account address"),
    asset_id: str = typer.Argument(..., help="Asset ID"),
) -> None:
    """Show the balance of an address."""
    state: State = ctx.obj
    with _build_client(state.config) as client:
        try:
            lookup = client.asset(asset_id)
            if not lookup.found:
                raise AssetNotFoundError(asset_id)
            amount = client.balance(address, asset_id)
        except SeqClientError as e:
            _fail(state, e)

    record = lookup.record
    console.print(f"[bold green]{format_balance(amount, record.decimals)}[/bold green] {record.symbol_text}")


@app.command()
def headers(
    ctx: typer.Context,
    height: int = typer.Argument(..., help="First block height"),
    end: int = typer.Option(-1, "--end", "-e", help="End timestamp in milliseconds (-1 for latest)"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
) -> None:
    """Show block headers starting at a height."""
    state: State = ctx.obj
    with _build_client(state.config) as client:
        try:
            response = client.get_block_headers_by_height(height, end)
        except SeqClientError as e:
            _fail(state, e)

    if format == OutputFormat.JSON:
        _output_model(response)
        return
    if not response.blocks:
        console.print("\n[yellow]No blocks found[/yellow]")
        return

    table = Table(title="Block Headers", show_header=True, header_style="bold magenta")
    table.add_column("Height", style="cyan", justify="right")
    table.add_column("ID", style="blue")
    table.add_column("Timestamp", style="yellow", justify="right")
    table.add_column("L1 Head", style="green", justify="right")
    for block in response.blocks:
        table.add_row(str(block.height), block.id, str(block.timestamp), str(block.l1_head))
    console.print(table)


@app.command()
def window(ctx: typer.Context) -> None:
    """Show the accepted block window of the node."""
    state: State = ctx.obj
    with _build_client(state.config) as client:
        try:
            size = client.get_accepted_block_window()
        except SeqClientError as e:
            _fail(state, e)
    console.print(f"Accepted block window: [bold green]{size}[/bold green]")


@app.command("wait-balance")
def wait_balance(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Account address"),
    asset_id: str = typer.Argument(..., help="Asset ID"),
    amount: str = typer.Argument(..., help="Amount to wait for, in whole units (e.g., 1.5)"),
    timeout: float | None = typer.Option(None, "--timeout", "-t", help="Give up after this many seconds"),
) -> None:
    """Wait until an address holds at least an amount of an asset."""
    state: State = ctx.obj
    with _build_client(state.config) as client:
        try:
            lookup = client.asset(asset_id)
            if not lookup.found:
                raise AssetNotFoundError(asset_id)
            minimum = parse_balance(amount, lookup.record.decimals)
            client.wait_for_balance(address, asset_id, minimum, deadline=_deadline(timeout))
        except (SeqClientError, ValueError) as e:
            _fail(state, e)
    console.print(f"[bold green]✓[/bold green] {address} holds {amount} {lookup.record.symbol_text}")


@app.command("wait-tx")
def wait_tx(
    ctx: typer.Context,
    tx_id: str = typer.Argument(..., help="Transaction ID"),
    timeout: float | None = typer.Option(None, "--timeout", "-t", help="Give up after this many seconds"),
) -> None:
    """Wait until a transaction is accepted."""
    state: State = ctx.obj
    with _build_client(state.config) as client:
        try:
            success, fee = client.wait_for_transaction(tx_id, deadline=_deadline(timeout))
        except SeqClientError as e:
            _fail(state, e)

    if success:
        console.print(f"[bold green]✓[/bold green] {tx_id} succeeded (fee {fee})")
    else:
        console.print(f"[bold red]✗[/bold red] {tx_id} failed (fee {fee})")
        raise typer.Exit(2)


if __name__ == "__main__":
    app()
