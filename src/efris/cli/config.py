"""CLI: efris config init|show"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from efris.config import CONFIG_FILE, PRODUCTION_URL, SANDBOX_URL, ClientConfig, load_config, save_config

console = Console()


@click.group()
def config():
    """Client configuration."""


@config.command("init")
@click.option("--sandbox", is_flag=True, help="Use the EFRIS test environment")
@click.option("--url", default=None, help="Override the endpoint URL")
def config_init(sandbox: bool, url: Optional[str]):
    """Create or update ~/.efris/config.json."""
    current = load_config()
    defaults = current.model_dump() if current else {}

    tin = click.prompt("TIN", default=defaults.get("tin"))
    device_no = click.prompt("Device number", default=defaults.get("device_no"))
    key_path = click.prompt("Private key (.pem / .pfx)", default=defaults.get("private_key_path"),
                            type=click.Path(exists=True, dir_okay=False))
    key_password = click.prompt("Key password (blank for none)", default="", hide_input=True,
                                show_default=False)

    cfg = ClientConfig(
        **{**defaults,
           "tin": tin,
           "device_no": device_no,
           "private_key_path": key_path,
           "private_key_password": key_password or None,
           "url": url or (SANDBOX_URL if sandbox else defaults.get("url", PRODUCTION_URL))},
    )
    save_config(cfg)
    console.print(f"[dim]Saved to {CONFIG_FILE}[/dim]")


@config.command("show")
def config_show():
    """Show the current configuration."""
    cfg = load_config()
    if cfg is None:
        console.print("[yellow]Not configured. Run `efris config init`.[/yellow]")
        return
    table = Table(title=str(CONFIG_FILE))
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for name, value in cfg.model_dump().items():
        if name == "private_key_password" and value:
            value = "********"
        table.add_row(name, "" if value is None else str(value))
    console.print(table)
