"""
Wallet Connect CLI — `nwc` command.

Commands:
  nwc connect <uri>          Save a nostr+walletconnect:// connection
  nwc status | disconnect    Show or clear the saved connection
  nwc request <method> ...   Print a signed request event to publish
  nwc decode <file>          Decode a reply event
"""

import asyncio
import json
from pathlib import Path

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install nwc-client[cli]")

from nwc_client.client import AsyncWalletConnect
from nwc_client.errors import NWCError

console = Console()
CONFIG_FILE = Path.home() / ".nwc" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncWalletConnect:
    cfg = _load_config()
    if not cfg.get("uri"):
        console.print("[red]No wallet connection. Run `nwc connect <uri>` first.[/red]")
        raise SystemExit(1)
    try:
        return AsyncWalletConnect(cfg["uri"])
    except NWCError as e:
        console.print(f"[red]Saved connection is invalid: {e}[/red]")
        raise SystemExit(1)


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
def main():
    """Wallet Connect CLI — talk to a remote Lightning wallet over nostr relays."""


# Register subcommands from separate modules
from nwc_client.cli.connect import connect, status, disconnect
from nwc_client.cli.request import request
from nwc_client.cli.decode import decode

main.add_command(connect)
main.add_command(status)
main.add_command(disconnect)
main.add_command(request)
main.add_command(decode)


if __name__ == "__main__":
    main()
