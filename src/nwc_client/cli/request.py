"""CLI: nwc request pay-invoice|make-invoice|lookup-invoice|list-transactions|get-balance|get-info"""

import json
from typing import Optional

import click
from rich.console import Console

from nwc_client.errors import NWCError
from nwc_client.models.envelope import EventKind

console = Console(stderr=True)


def _get_client():
    from nwc_client.cli.main import _get_client
    return _get_client()


def _run(coro):
    from nwc_client.cli.main import _run
    return _run(coro)


def _emit(make_request) -> None:
    """Build the request with a fresh client and print it as event JSON on stdout."""

    client = _get_client()
    try:
        event = _run(make_request(client))
    except NWCError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    click.echo(json.dumps(event.to_dict()))
    console.print(f"[dim]Publish to the relay and wait for a kind {int(EventKind(event.kind).response_kind)} reply tagged e={event.id}[/dim]")


@click.group()
def request():
    """Build signed wallet requests."""


@request.command("pay-invoice")
@click.argument("invoice")
@click.option("--amount", type=int, default=None, help="Amount in msats, for zero-amount invoices")
def pay_invoice(invoice: str, amount: Optional[int]):
    """Pay a bolt11 invoice."""
    _emit(lambda c: c.pay_invoice(invoice, amount=amount))


@request.command("make-invoice")
@click.argument("amount", type=int)
@click.option("--description", default=None)
@click.option("--description-hash", default=None)
@click.option("--expiry", type=int, default=None, help="Seconds until the invoice expires")
def make_invoice(amount: int, description: Optional[str], description_hash: Optional[str], expiry: Optional[int]):
    """Create an invoice for AMOUNT msats."""
    _emit(lambda c: c.make_invoice(amount, description=description, description_hash=description_hash, expiry=expiry))


@request.command("lookup-invoice")
@click.option("--payment-hash", default=None)
@click.option("--invoice", default=None)
def lookup_invoice(payment_hash: Optional[str], invoice: Optional[str]):
    """Look up an invoice by payment hash or bolt11 string."""
    _emit(lambda c: c.lookup_invoice(payment_hash=payment_hash, invoice=invoice))


@request.command("list-transactions")
@click.option("--from", "from_", type=int, default=None, help="Start unix timestamp (inclusive)")
@click.option("--until", type=int, default=None, help="End unix timestamp (inclusive)")
@click.option("--limit", type=int, default=None)
@click.option("--offset", type=int, default=None)
@click.option("--unpaid/--no-unpaid", default=None, help="Include or exclude unpaid invoices")
@click.option("--type", "type_", type=click.Choice(["incoming", "outgoing"]), default=None)
def list_transactions(from_, until, limit, offset, unpaid, type_):
    """List invoices and payments."""
    _emit(lambda c: c.list_transactions(
        from_=from_, until=until, limit=limit, offset=offset, unpaid=unpaid, type=type_,
    ))


@request.command("get-balance")
def get_balance():
    """Query the wallet balance."""
    _emit(lambda c: c.get_balance())


@request.command("get-info")
def get_info():
    """Query wallet node info."""
    _emit(lambda c: c.get_info())
