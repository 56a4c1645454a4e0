from decimal import Decimal
from pathlib import Path
from typing import Callable, Mapping, NamedTuple, Optional

import click
from ape.api import AccountAPI, ProviderAPI
from ape.contracts import ContractContainer, ContractInstance
from web3 import Web3

from deployment.config import TokenDeploymentConfig, load_params_file
from deployment.constants import (
    DEPLOYMENT_GAS_LIMIT,
    DEPLOYMENT_TIMEOUT,
    INITIALIZER,
    MIN_DEPLOYER_BALANCE,
    UUPS,
)
from deployment.errors import DeploymentError, NetworkError, PreflightError
from deployment.gas import get_deployment_gas_price
from deployment.networks import ETHEREUM, get_native_currency
from deployment.proxy import ProxyDeployer
from deployment.registry import registry_from_deployment
from deployment.utils import check_plugins, get_contract_container


class DeploymentResult(NamedTuple):
    """Outcome of a successful token deployment."""

    address: str
    txn_hash: str
    gas_used: int
    gas_price: int
    cost: int
    block_number: int
    deployer: str
    contract: ContractInstance
    implementation: ContractInstance


def format_amount(amount: int) -> Decimal:
    """Converts a wei amount into whole native currency units."""
    return Web3.from_wei(amount, "ether")


def check_deployer_balance(provider: ProviderAPI, address: str, currency: str) -> int:
    """Returns the deployer balance, failing if it cannot pay for the deployment."""
    try:
        balance = provider.get_balance(address)
    except Exception as e:
        raise NetworkError(f"Unable to fetch balance of {address}: {e}") from e

    print(f"(i) Account balance: {format_amount(balance)} {currency}")
    if balance < MIN_DEPLOYER_BALANCE:
        raise PreflightError(
            f"Insufficient {currency}. Need at least "
            f"{format_amount(MIN_DEPLOYER_BALANCE)} {currency} for deployment"
        )
    return balance


def run_deployment(
    config: TokenDeploymentConfig,
    account: AccountAPI,
    provider: ProviderAPI,
    proxy_deployer: ProxyDeployer,
    network_name: str,
    ecosystem_name: str = ETHEREUM,
    get_container: Callable[[str], ContractContainer] = get_contract_container,
) -> DeploymentResult:
    """
    Deploys the token behind a UUPS proxy:
    balance preflight, gas pricing, proxy deployment, then confirmation.
    """
    currency = get_native_currency(ecosystem_name, network_name, override=config.currency)
    deployer_address = account.address
    print(f"(i) Deploying with address: {deployer_address}")

    check_deployer_balance(provider, deployer_address, currency)

    gas_price = get_deployment_gas_price(network_name, provider)
    print(f"(i) Gas price: {Web3.from_wei(gas_price, 'gwei')} gwei")

    print(f"\nDeploying {config.token_name} proxy...")
    container = get_container(config.token_name)
    try:
        deployment = proxy_deployer.deploy_proxy(
            container,
            config.constructor_args(deployer_address),
            initializer=INITIALIZER,
            kind=UUPS,
            timeout=DEPLOYMENT_TIMEOUT,
            gas_price=gas_price,
            gas_limit=DEPLOYMENT_GAS_LIMIT,
        )
    except Exception as e:
        raise DeploymentError(f"Proxy deployment of {config.token_name} failed: {e}") from e

    print("\nWaiting for deployment confirmations...")
    try:
        receipt = proxy_deployer.wait_for_deployment(deployment)
    except Exception as e:
        raise NetworkError(
            f"Deployment transaction {deployment.txn_hash} not confirmed: {e}"
        ) from e

    gas_used = int(receipt.gas_used)
    cost = gas_used * gas_price

    print("\nDeployment successful")
    print(f"(i) Contract address: {deployment.address}")
    print(f"(i) Transaction hash: {deployment.txn_hash}")
    print(f"(i) Gas used: {gas_used}")
    print(f"(i) Deployment cost: {format_amount(cost)} {currency}")

    return DeploymentResult(
        address=deployment.address,
        txn_hash=deployment.txn_hash,
        gas_used=gas_used,
        gas_price=gas_price,
        cost=cost,
        block_number=receipt.block_number,
        deployer=deployer_address,
        contract=deployment.instance,
        implementation=deployment.implementation,
    )


def finalize_deployment(
    result: DeploymentResult, chain_id: int, registry_filepath: Optional[Path] = None
) -> None:
    """Records the deployment in the registry."""
    if registry_filepath is not None:
        registry_from_deployment(
            contract=result.contract,
            chain_id=chain_id,
            txn_hash=result.txn_hash,
            block_number=result.block_number,
            deployer=result.deployer,
            output_filepath=registry_filepath,
        )


def main(
    account: AccountAPI,
    provider: ProviderAPI,
    proxy_deployer: ProxyDeployer,
    network_name: str,
    ecosystem_name: str = ETHEREUM,
    environ: Optional[Mapping[str, str]] = None,
    params_file: Optional[Path] = None,
    registry_filepath: Optional[Path] = None,
    verify: bool = False,
    get_container: Callable[[str], ContractContainer] = get_contract_container,
) -> DeploymentResult:
    """
    Runs a single deployment attempt.
    Any failure up to the mined deployment is reported on stderr and terminates
    the process with status 1. Recording the result in the registry is best effort.
    """
    try:
        params = load_params_file(params_file)
        config = TokenDeploymentConfig.from_environ(environ, params=params)
        if verify:
            check_plugins(network_name=network_name, ecosystem_name=ecosystem_name)
        result = run_deployment(
            config=config,
            account=account,
            provider=provider,
            proxy_deployer=proxy_deployer,
            network_name=network_name,
            ecosystem_name=ecosystem_name,
            get_container=get_container,
        )
    except Exception as e:
        click.secho("\n(!) Deployment failed", fg="red", err=True)
        click.secho(f"(!) Reason: {e}", fg="red", err=True)
        raise SystemExit(1) from e

    # the token is live at this point; a registry problem must not fail the run
    try:
        finalize_deployment(
            result,
            chain_id=provider.chain_id,
            registry_filepath=registry_filepath,
        )
    except Exception as e:
        click.secho(
            f"(!) Deployment succeeded but was not recorded in the registry: {e}",
            fg="yellow",
            err=True,
        )
    return result
