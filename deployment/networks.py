from typing import NamedTuple, Optional

from ape import networks

from deployment.constants import LOCAL_NETWORKS

BSC = "bsc"
POLYGON = "polygon"
ETHEREUM = "ethereum"


class NetworkInfo(NamedTuple):
    """Static facts about a network the token can be deployed to."""

    ecosystem: str
    name: str
    chain_id: int
    currency: str


SUPPORTED_NETWORKS = [
    NetworkInfo(BSC, "mainnet", 56, "BNB"),
    NetworkInfo(BSC, "testnet", 97, "tBNB"),
    NetworkInfo(POLYGON, "mainnet", 137, "POL"),
    NetworkInfo(POLYGON, "amoy", 80002, "POL"),
    NetworkInfo(ETHEREUM, "local", 31337, "ETH"),
]

DEFAULT_CURRENCY = {
    BSC: "BNB",
    POLYGON: "POL",
    ETHEREUM: "ETH",
}


def is_local_network(network_name: Optional[str] = None) -> bool:
    """Returns True for development networks that need no fee market or explorer."""
    if network_name is None:
        network_name = networks.provider.network.name
    return network_name in LOCAL_NETWORKS


def get_network_info(ecosystem: str, network_name: str) -> Optional[NetworkInfo]:
    for info in SUPPORTED_NETWORKS:
        if info.ecosystem == ecosystem and info.name == network_name:
            return info
    return None


def get_native_currency(
    ecosystem: str, network_name: str, override: Optional[str] = None
) -> str:
    """
    Returns the display label of the native currency.
    An explicit override always wins over the network table.
    """
    if override:
        return override
    info = get_network_info(ecosystem, network_name)
    if info:
        return info.currency
    return DEFAULT_CURRENCY.get(ecosystem, "ETH")
