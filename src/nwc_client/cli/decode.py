"""CLI: nwc decode <file|->"""

import json

import click
from rich.console import Console
from rich.table import Table

from nwc_client.errors import NWCError
from nwc_client.models.envelope import Envelope

console = Console()


def _get_client():
    from nwc_client.cli.main import _get_client
    return _get_client()


def _run(coro):
    from nwc_client.cli.main import _run
    return _run(coro)


@click.command("decode")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--json-output", "--json", is_flag=True)
def decode(source, json_output):
    """Decode a reply event (JSON) read from SOURCE or stdin."""

    client = _get_client()
    try:
        event = Envelope.from_dict(json.loads(source.read()))
        response = _run(client.decode(event))
    except json.JSONDecodeError as e:
        console.print(f"[red]Not valid JSON: {e}[/red]")
        raise SystemExit(1)
    except NWCError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if response is None:
        console.print("[yellow]Not a wallet reply addressed to this connection.[/yellow]")
        raise SystemExit(2)
    if json_output:
        click.echo(json.dumps(response.model_dump(), indent=2))
        return
    if not response.is_success:
        console.print(f"[red]Error {response.error_code}: {response.error_message}[/red] (request {response.request_id})")
        return

    try:
        transactions = response.typed_transactions
    except NWCError as e:
        console.print(f"[yellow]Unreadable transactions ({e}); showing raw result.[/yellow]")
        transactions = None
    if transactions is not None:
        table = Table(title=f"Transactions ({len(transactions)})")
        table.add_column("Type", style="bold")
        table.add_column("State")
        table.add_column("Amount (msat)", justify="right")
        table.add_column("Payment hash")
        table.add_column("Created")
        for t in transactions:
            table.add_row(t.type, t.state, str(t.amount), t.payment_hash[:16], str(t.created_at))
        console.print(table)
        return

    table = Table(title=f"Result for {response.request_id}")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in (response.result or {}).items():
        table.add_row(key, value if isinstance(value, str) else json.dumps(value))
    console.print(table)
