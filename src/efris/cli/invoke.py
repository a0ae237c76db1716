"""CLI: efris handshake | send | invoice get | taxpayer"""

import json
from typing import Optional

import click
from rich.console import Console

from efris.errors import EFRISError

console = Console()


def _get_client():
    from efris.cli.main import _get_client
    return _get_client()


def _run(coro):
    from efris.cli.main import _run
    return _run(coro)


def _print_result(result, json_output=False):
    from efris.cli.main import _print_result
    _print_result(result, json_output)


def _call(make_coro, json_output: bool = False) -> None:
    async def _go():
        client = _get_client()
        try:
            return await make_coro(client)
        finally:
            await client.close()

    try:
        result = _run(_go())
    except EFRISError as e:
        console.print(f"[red]{e.code}:[/red] {e}")
        raise SystemExit(1)
    _print_result(result, json_output)


@click.command("handshake")
def handshake():
    """Run the T104 key exchange and confirm a session key is issued."""

    async def _go():
        client = _get_client()
        try:
            with console.status("Exchanging keys..."):
                return await client.obtain_key()
        finally:
            await client.close()

    try:
        key = _run(_go())
    except EFRISError as e:
        console.print(f"[red]{e.code}:[/red] {e}")
        raise SystemExit(1)
    console.print(f"[green]Session key issued[/green] ({len(key) * 8}-bit AES)")


@click.command("send")
@click.argument("interface_code")
@click.option("--data", "data", default=None, help="JSON payload")
@click.option("--no-encrypt", is_flag=True, help="Send over the unencrypted channel")
@click.option("--json-output", "--json", is_flag=True)
def send_cmd(interface_code: str, data: Optional[str], no_encrypt: bool, json_output: bool):
    """Send a raw payload to INTERFACE_CODE (e.g. T101)."""
    try:
        content = json.loads(data) if data else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--data")
    _call(lambda c: c.send(interface_code, content, encrypt=not no_encrypt), json_output)


@click.group()
def invoice():
    """Invoice lookups."""


@invoice.command("get")
@click.argument("invoice_no")
@click.option("--json-output", "--json", is_flag=True)
def invoice_get(invoice_no: str, json_output: bool):
    """Fetch invoice details (T108)."""
    _call(lambda c: c.invoices.retrieve(invoice_no), json_output)


@click.command("taxpayer")
@click.argument("tin")
@click.option("--json-output", "--json", is_flag=True)
def taxpayer(tin: str, json_output: bool):
    """Look up a taxpayer by TIN (T119)."""
    _call(lambda c: c.taxpayer_info(tin), json_output)
