#!/usr/bin/python3

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, account_option, network_option

from deployment.config import load_environment
from deployment.networks import is_local_network
from deployment.options import params_file_option, registry_filepath_option, verify_option
from deployment.orchestrator import main
from deployment.proxy import ProxyDeployer
from deployment.utils import default_params_filepath, default_registry_filepath


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@account_option()
@params_file_option
@registry_filepath_option
@verify_option
def cli(network, account, params_file, registry_filepath, verify):
    """
    Deploys the token behind a UUPS proxy.

    Token parameters come from the environment (or a .env file):
    TOKEN_NAME, MINING_REWARD, STAKING_APY, TAX_PERCENT and optionally
    MINING_DIFFICULTY, TOKEN_SUPPLY and NATIVE_CURRENCY. Networks with a file in
    deployment/constructor_params use it for values the environment leaves unset.

    ape run deploy_token --network bsc:testnet:node --account <ALIAS> --verify
    """
    load_environment()

    provider = networks.provider
    ecosystem_name = provider.network.ecosystem.name
    network_name = provider.network.name
    if verify and is_local_network(network_name):
        click.secho("(i) Skipping verification on a local network", fg="yellow")
        verify = False

    params_file = params_file or default_params_filepath(
        ecosystem=ecosystem_name, network_name=network_name
    )
    registry_filepath = registry_filepath or default_registry_filepath(
        ecosystem=ecosystem_name, network_name=network_name
    )
    main(
        account=account,
        provider=provider,
        proxy_deployer=ProxyDeployer(account=account, publish=verify, provider=provider),
        network_name=network_name,
        ecosystem_name=ecosystem_name,
        params_file=params_file,
        registry_filepath=registry_filepath,
        verify=verify,
    )


if __name__ == "__main__":
    cli()
