#!/usr/bin/env python3
"""
X-Cash Token CLI

Command-line interface for bootstrapping the X-Cash token.

Usage:
    xcash-token deploy --deployer ADDRESS [--nonce N] [--network NAME] [--config FILE]
    xcash-token config [--config FILE]
"""

import json
from pathlib import Path
from typing import Optional

import click

from xcash import __version__
from xcash.config import load_config
from xcash.deploy import deploy_token, format_deployment, should_announce
from xcash.exceptions import XCashError
from xcash.logger import configure_logging


def _load(config_path: Optional[str]):
    try:
        cfg = load_config(config_path)
        cfg.validate()
    except XCashError as e:
        raise click.ClickException(f"Invalid configuration: {e}")
    configure_logging(
        log_level=cfg.logging.level,
        file_output=cfg.logging.file_output,
        log_file=Path(cfg.logging.log_file) if cfg.logging.log_file else None,
    )
    return cfg


@click.group()
@click.version_option(version=__version__, prog_name="xcash-token")
def cli():
    """X-Cash Token Command Line Interface

    Deploy the capped, mintable X-Cash token ledger.
    """
    pass


@cli.command("deploy")
@click.option("--deployer", "-d", required=True, help="Deploying account; becomes the owner")
@click.option("--nonce", "-n", type=int, default=None, help="Deployer nonce (default: from config)")
@click.option("--network", default=None, help="Network name; 'test' suppresses the summary")
@click.option("--config", "-c", "config_path", type=click.Path(), default=None,
              help="Path to config.toml (default: $XCASH_CONFIG or ./config.toml)")
def deploy_cmd(deployer: str, nonce: Optional[int], network: Optional[str], config_path: Optional[str]):
    """Deploy the token and print its address and metadata.

    Examples:

        xcash-token deploy --deployer 0x5B38Da6a701c568545dCfcB03FcB875f56beddC4

        xcash-token deploy -d 0x5B38Da6a701c568545dCfcB03FcB875f56beddC4 --nonce 3
    """
    cfg = _load(config_path)
    if nonce is not None and nonce < 0:
        raise click.BadParameter("nonce cannot be negative", param_hint="--nonce")

    try:
        deployment = deploy_token(deployer, cfg, nonce=nonce, network=network)
    except XCashError as e:
        raise click.ClickException(f"Deployment failed: {e}")

    if should_announce(deployment.network):
        click.echo(format_deployment(deployment))


@cli.command("config")
@click.option("--config", "-c", "config_path", type=click.Path(), default=None,
              help="Path to config.toml (default: $XCASH_CONFIG or ./config.toml)")
def config_cmd(config_path: Optional[str]):
    """Print the effective configuration as JSON."""
    cfg = _load(config_path)
    click.echo(json.dumps(cfg.to_dict(), indent=2))


if __name__ == "__main__":
    cli()
