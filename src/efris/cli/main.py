"""
EFRIS CLI: `efris` command.

Commands:
  efris config init|show       Taxpayer, device and key settings
  efris handshake              Run the T104 key exchange
  efris send <interface>       Send a raw payload to any interface code
  efris invoice get <no>       Invoice details (T108)
  efris taxpayer <tin>         Taxpayer lookup (T119)
"""

import asyncio
import json
import logging
from typing import Any

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install efris-client[cli]")

from efris.client import AsyncEFRIS
from efris.config import load_config
from efris.models.result import Result

console = Console()


def _get_client() -> AsyncEFRIS:
    cfg = load_config()
    if cfg is None:
        console.print("[red]Not configured. Run `efris config init` first.[/red]")
        raise SystemExit(1)
    if not cfg.private_key_path:
        console.print("[red]No private key configured. Run `efris config init`.[/red]")
        raise SystemExit(1)
    return AsyncEFRIS(cfg)


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


def _print_result(result: Result, json_output: bool = False) -> None:
    if json_output:
        click.echo(result.model_dump_json(indent=2))
        return
    state = result.return_state
    if result.ok:
        console.print(f"[green]{state.return_code if state else 'OK'}[/green] {state.return_message if state else ''}")
    else:
        console.print(f"[red]{result.code}[/red] {result.message or ''}")
    if result.data not in (None, ""):
        data = result.data.model_dump() if hasattr(result.data, "model_dump") else result.data
        console.print_json(json.dumps(data, default=str))


@click.group()
@click.version_option("0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Log protocol traffic at DEBUG level")
def main(verbose: bool):
    """EFRIS CLI: talk to the URA EFRIS web service."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")


# Register subcommands from separate modules
from efris.cli.config import config
from efris.cli.invoke import handshake, send_cmd, invoice, taxpayer

main.add_command(config)
main.add_command(handshake)
main.add_command(send_cmd)
main.add_command(invoice)
main.add_command(taxpayer)


if __name__ == "__main__":
    main()
