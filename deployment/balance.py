from decimal import Decimal, localcontext
from typing import Callable

from ape.api import ProviderAPI
from ape.contracts import ContractContainer
from hexbytes import HexBytes

from deployment.config import TokenBalanceConfig
from deployment.constants import TOKEN_DECIMALS
from deployment.errors import NoContractError
from deployment.utils import get_contract_container


def format_units(amount: int, decimals: int = TOKEN_DECIMALS) -> Decimal:
    """Scales a raw token amount down by the token's decimals."""
    with localcontext() as context:
        context.prec = 999
        return Decimal(int(amount)) / (Decimal(10) ** decimals)


def has_code(provider: ProviderAPI, address: str) -> bool:
    code = provider.get_code(address)
    return len(HexBytes(code or b"")) > 0


def query_token_balance(
    config: TokenBalanceConfig,
    provider: ProviderAPI,
    decimals: int = TOKEN_DECIMALS,
    get_container: Callable[[str], ContractContainer] = get_contract_container,
) -> Decimal:
    """Reads the token balance of the configured wallet."""
    if not has_code(provider, config.contract_address):
        raise NoContractError(f"No contract deployed at address: {config.contract_address}")

    token = get_container(config.token_name).at(config.contract_address)
    balance = format_units(token.balanceOf(config.wallet_address), decimals=decimals)
    print(f"(i) Balance of {config.wallet_address}: {balance}")
    return balance
