#!/usr/bin/env python3

import os

import click
from ape_accounts import import_account_from_private_key

from deployment.config import load_environment
from deployment.errors import ConfigurationError


@click.command()
@click.option(
    "--alias",
    "-a",
    help="Keystore alias to import the deployer key under",
    default="deployer",
    show_default=True,
)
def cli(alias):
    """Imports PRIVATE_KEY into the ape keystore, encrypted with DEPLOYER_PASSPHRASE."""
    load_environment()
    try:
        passphrase = os.environ["DEPLOYER_PASSPHRASE"]
        private_key = os.environ["PRIVATE_KEY"]
    except KeyError:
        raise ConfigurationError(
            "There are missing environment variables. "
            "Please set DEPLOYER_PASSPHRASE and PRIVATE_KEY."
        )
    account = import_account_from_private_key(alias, passphrase, private_key)
    print(f"Account imported: {account.address}")


if __name__ == "__main__":
    cli()
