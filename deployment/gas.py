from ape.api import ProviderAPI
from web3 import Web3

from deployment.constants import DEFAULT_GAS_PRICE, GAS_PRICE_BUMP_PERCENT
from deployment.networks import is_local_network


def bump_gas_price(gas_price: int) -> int:
    """Inflates an observed gas price so the deployment is less likely to sit pending."""
    return int(gas_price) * GAS_PRICE_BUMP_PERCENT // 100


def get_deployment_gas_price(network_name: str, provider: ProviderAPI) -> int:
    """
    Returns the gas price (in wei) to deploy with.

    Local networks always use the fixed default price. Live networks use the
    current network price plus a 10% bump, or the default price when the
    provider cannot report one.
    """
    if is_local_network(network_name):
        return DEFAULT_GAS_PRICE

    try:
        current_gas_price = provider.gas_price
    except Exception as e:
        print(
            f"(i) Unable to fetch gas price ({e}); "
            f"using {Web3.from_wei(DEFAULT_GAS_PRICE, 'gwei')} gwei"
        )
        return DEFAULT_GAS_PRICE

    return bump_gas_price(current_gas_price)
