from pathlib import Path

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, network_option
from ape.contracts import ContractInstance

from deployment.registry import contracts_from_registry
from deployment.utils import (
    check_plugins,
    default_registry_filepath,
    get_contract_container,
    verify_contracts,
)


def _with_implementation(instance: ContractInstance) -> list:
    """Returns the proxy followed by its implementation, or just the instance if not proxied."""
    proxy_info = networks.provider.network.ecosystem.get_proxy_info(instance.address)
    if not proxy_info:
        return [instance]
    print(f"(i) {instance.contract_type.name} is proxied; implementation at {proxy_info.target}")
    container = get_contract_container(instance.contract_type.name)
    return [container.at(proxy_info.target), instance]


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@click.option(
    "--contract-name",
    "-c",
    "contract_names",
    help="Registry name of the contract to verify; may be repeated.",
    type=click.STRING,
    required=True,
    multiple=True,
)
@click.option(
    "--registry-filepath",
    "-f",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    help="Registry file; defaults to the network's artifact file.",
    required=False,
)
def cli(network, contract_names, registry_filepath):
    """Publish already deployed contracts to the block explorer."""
    check_plugins()

    provider_network = networks.provider.network
    registry_filepath = registry_filepath or default_registry_filepath(
        ecosystem=provider_network.ecosystem.name, network_name=provider_network.name
    )
    chain_id = networks.provider.chain_id
    deployments = contracts_from_registry(registry_filepath, chain_id=chain_id)

    missing = [name for name in contract_names if name not in deployments]
    if missing:
        raise click.BadParameter(
            f"{', '.join(missing)} not found in {registry_filepath} for chain {chain_id}",
            param_hint="--contract-name",
        )

    to_verify = []
    for name in contract_names:
        to_verify.extend(_with_implementation(deployments[name]))
    verify_contracts(to_verify)


if __name__ == "__main__":
    cli()
