"""CLI: nwc connect|status|disconnect"""

import click
from rich.console import Console

from nwc_client.errors import InvalidArgumentError
from nwc_client.uri import ConnectionURI

console = Console()


def _load_config() -> dict:
    from nwc_client.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from nwc_client.cli.main import _save_config
    _save_config(cfg)


@click.command("connect")
@click.argument("uri")
def connect(uri: str):
    """Save a nostr+walletconnect:// connection URI."""
    try:
        parsed = ConnectionURI.parse(uri)
    except InvalidArgumentError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    _save_config({**_load_config(), "uri": str(parsed)})
    console.print(f"[green]Connected to wallet {parsed.wallet_pubkey[:16]}… via {parsed.relay}[/green]")
    console.print("[dim]Connection saved to ~/.nwc/config.json[/dim]")


@click.command("status")
def status():
    """Show the saved connection."""
    cfg = _load_config()
    if not cfg.get("uri"):
        console.print("[yellow]No wallet connection. Run `nwc connect <uri>`.[/yellow]")
        return
    parsed = ConnectionURI.parse(cfg["uri"])
    console.print(f"[green]Wallet[/green] {parsed.wallet_pubkey}")
    for relay in parsed.relays:
        console.print(f"  relay {relay}")
    if parsed.lud16:
        console.print(f"  lud16 {parsed.lud16}")


@click.command("disconnect")
def disconnect():
    """Forget the saved connection."""
    cfg = _load_config()
    cfg.pop("uri", None)
    _save_config(cfg)
    console.print("[green]Disconnected.[/green]")
