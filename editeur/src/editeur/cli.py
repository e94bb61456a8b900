"""
Editeur CLI.

Usage:
    editeur serve [--config CONFIG] [--host HOST] [--port PORT]
    editeur info [--config CONFIG]
"""

import os
import sys

import click
from pydantic import ValidationError

from editeur.config.settings import Settings, load_config


def _load(config: str) -> Settings:
    try:
        return load_config(config_file=config)
    except ValidationError as e:
        click.echo(f"Invalid configuration:\n{e}", err=True)
        sys.exit(1)


@click.group()
def cli():
    """Editeur - Prepaid cross-chain publishing."""


@cli.command()
@click.option("--config", "-c", default=None, help="Config file")
@click.option("--host", default=None, help="Bind host (default from config)")
@click.option("--port", "-p", type=int, default=None, help="Listen port")
def serve(config, host, port):
    """Start the HTTP API."""
    import uvicorn

    if config:
        os.environ["EDITEUR_CONFIG"] = config

    settings = _load(config)

    host = host or settings.API_HOST
    port = port or settings.PORT

    click.echo(f"Starting Editeur on {host}:{port}")
    uvicorn.run("editeur.main:get_app", factory=True, host=host, port=port)


@cli.command()
@click.option("--config", "-c", default=None, help="Config file")
def info(config):
    """Show custodial addresses, fee and networks."""
    from editeur.infrastructure.blockchain import (
        SuiKeypair,
        derive_publisher_address,
    )

    settings = _load(config)

    try:
        publisher = derive_publisher_address(settings.EVM_PRIVATE_KEY)
        sui_owner = SuiKeypair.from_secret(settings.SUI_PRIVATE_KEY).address
    except ValueError as e:
        click.echo(f"Invalid key: {e}", err=True)
        sys.exit(1)

    click.echo(f"Publisher EVM address: {publisher}")
    click.echo(f"Sui owner address:     {sui_owner}")
    click.echo(f"Store fee (wei):       {settings.STORE_FEE_WEI}")
    click.echo(f"EVM RPC:               {settings.EVM_RPC_URL}")
    click.echo(f"Sui network:           {settings.SUI_NETWORK}")
    click.echo(f"Storage bridge:        {settings.STORAGE_BRIDGE_URL}")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
