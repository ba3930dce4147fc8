"""Typer-based CLI for inspecting module types and deployed instances."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ConnectionSettings, load_config
from .connection import ChainConnection
from .logging_utils import configure_logging
from .modules import ModuleClient
from .registry import get_client_class, get_module, list_modules

app = typer.Typer(help="Inspect Hats eligibility module types and instances")
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write JSON lines to this file"),
) -> None:
    configure_logging(log_level, log_file=log_file)


def _connect(rpc_url: Optional[str]) -> ChainConnection:
    try:
        settings = ConnectionSettings.from_env(rpc_url)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2) from exc
    return ChainConnection.connect(settings)


def _client(module: str, rpc_url: Optional[str], config_path: Optional[str]) -> ModuleClient:
    try:
        client_class = get_client_class(module)
    except KeyError as exc:
        console.print(f"[red]{exc.args[0]}[/red]")
        raise typer.Exit(code=2) from exc
    config = load_config(config_path) if config_path else None
    return client_class(_connect(rpc_url), config=config)


@app.command("modules")
def modules_command() -> None:
    """List the supported module types."""

    table = Table(title="Hats eligibility modules")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Repository")
    for descriptor in list_modules():
        table.add_row(descriptor.key, descriptor.info.name, descriptor.info.repository_url)
    console.print(table)


@app.command()
def info(
    module: str = typer.Argument(..., help="Module key, see `modules`"),
    abi: bool = typer.Option(False, "--abi", help="Include the contract ABI"),
) -> None:
    """Show the metadata of a module type."""

    try:
        descriptor = get_module(module)
    except KeyError as exc:
        console.print(f"[red]{exc.args[0]}[/red]")
        raise typer.Exit(code=2) from exc
    console.print_json(data=descriptor.as_dict(include_abi=abi))


@app.command()
def parameters(
    module: str = typer.Argument(...),
    instance: str = typer.Argument(..., help="Address of the deployed instance"),
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="JSON-RPC endpoint (defaults to HATS_RPC_URL)"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Configuration file"),
) -> None:
    """Read the current parameters of an instance."""

    client = _client(module, rpc_url, config_path)
    console.print_json(data=client.read_parameters(instance))


@app.command("wearer-status")
def wearer_status(
    module: str = typer.Argument(...),
    instance: str = typer.Argument(..., help="Address of the deployed instance"),
    wearer: str = typer.Argument(..., help="Address of the wearer"),
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="JSON-RPC endpoint (defaults to HATS_RPC_URL)"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Configuration file"),
) -> None:
    """Show whether a wearer is eligible and in good standing."""

    client = _client(module, rpc_url, config_path)
    status = client.get_wearer_status(instance=instance, wearer=wearer)  # type: ignore[attr-defined]
    console.print_json(data=status.as_dict())


__all__ = ["app"]
