#!/usr/bin/python3

import os

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, network_option

from deployment.balance import query_token_balance
from deployment.config import TokenBalanceConfig, load_environment
from deployment.options import contract_address_option, decimals_option, wallet_address_option


@click.command(cls=ConnectedProviderCommand, name="token-balance")
@network_option(required=True)
@contract_address_option
@wallet_address_option
@decimals_option
def cli(network, contract_address, wallet_address, decimals):
    """Prints the token balance of WALLET_ADDRESS held in the CONTRACT_ADDRESS token."""
    load_environment()

    environ = dict(os.environ)
    if contract_address:
        environ["CONTRACT_ADDRESS"] = contract_address
    if wallet_address:
        environ["WALLET_ADDRESS"] = wallet_address

    try:
        config = TokenBalanceConfig.from_environ(environ)
        query_token_balance(config, provider=networks.provider, decimals=decimals)
    except Exception as e:
        click.secho(f"(!) Error: {e}", fg="red", err=True)
        raise SystemExit(1) from e


if __name__ == "__main__":
    cli()
