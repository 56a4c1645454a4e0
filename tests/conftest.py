from types import SimpleNamespace
from typing import NamedTuple

import pytest
from web3 import Web3

from deployment.proxy import ProxyDeployment

# Common constants
DEPLOYER = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"
WALLET = "0xFFcf8FDEE72ac11b5c542428B35EEF5769C409f0"
PROXY_ADDRESS = "0xAbC0000000000000000000000000000000000001"
IMPLEMENTATION_ADDRESS = "0x1230000000000000000000000000000000000002"
TXN_HASH = "0xdef0000000000000000000000000000000000000000000000000000000000003"
GAS_USED = 2_000_000
ONE_ETHER = Web3.to_wei(1, "ether")

TOKEN_ENVIRON = {
    "TOKEN_NAME": "MiningToken",
    "MINING_REWARD": "50",
    "STAKING_APY": "12",
    "TAX_PERCENT": "2",
    "MINING_DIFFICULTY": "1000000",
}


class FakeReceipt(NamedTuple):
    txn_hash: str
    gas_used: int
    block_number: int = 7


class FakeAbiEntry:
    def __init__(self, **fields):
        self.fields = fields

    def model_dump(self, **kwargs):
        return dict(self.fields)


TOKEN_ABI = [
    FakeAbiEntry(type="function", name="initialize", inputs=[], outputs=[]),
    FakeAbiEntry(type="function", name="balanceOf", inputs=[], outputs=[]),
    FakeAbiEntry(type="constructor", inputs=[]),
]


class FakeMethod:
    def __init__(self, name):
        self.name = name
        self.calls = []

    def encode_input(self, *args):
        self.calls.append(args)
        return b"\xca\xfe" + repr(args).encode()


class FakeInstance:
    def __init__(self, address, contract_type, txn_hash=None, balances=None):
        self.address = address
        self.contract_type = contract_type
        self.txn_hash = txn_hash
        self.balances = balances or {}
        self.initialize = FakeMethod("initialize")

    def balanceOf(self, address):
        return self.balances.get(address, 0)


class FakeContainer:
    def __init__(self, name, abi=None, balances=None):
        self.contract_type = SimpleNamespace(name=name, abi=abi or TOKEN_ABI)
        self.balances = balances or {}

    def at(self, address):
        return FakeInstance(address, self.contract_type, balances=self.balances)


class FakeAccount:
    """Deploys fake containers at predictable addresses."""

    def __init__(self, address=DEPLOYER, addresses=None):
        self.address = address
        self.deployments = []
        self._addresses = list(addresses or [IMPLEMENTATION_ADDRESS, PROXY_ADDRESS])

    def deploy(self, container, *args, **kwargs):
        self.deployments.append((container, args, kwargs))
        address = self._addresses.pop(0)
        txn_hash = f"0x{len(self.deployments):064x}"
        return FakeInstance(address, container.contract_type, txn_hash=txn_hash)


class FakeProvider:
    """Records every chain query it answers."""

    def __init__(
        self,
        balance=ONE_ETHER,
        gas_price=Web3.to_wei(20, "gwei"),
        gas_used=GAS_USED,
        chain_id=31337,
        code=b"\x60\x80",
        gas_price_error=None,
        balance_error=None,
    ):
        self.balance = balance
        self._gas_price = gas_price
        self.gas_used = gas_used
        self.chain_id = chain_id
        self.code = code
        self.gas_price_error = gas_price_error
        self.balance_error = balance_error
        self.calls = []

    @property
    def gas_price(self):
        self.calls.append("gas_price")
        if self.gas_price_error:
            raise self.gas_price_error
        return self._gas_price

    def get_balance(self, address):
        self.calls.append(("get_balance", address))
        if self.balance_error:
            raise self.balance_error
        return self.balance

    def get_receipt(self, txn_hash, timeout=None):
        self.calls.append(("get_receipt", txn_hash, timeout))
        return FakeReceipt(txn_hash=txn_hash, gas_used=self.gas_used)

    def get_code(self, address):
        self.calls.append(("get_code", address))
        return self.code


class FakeProxyDeployer:
    """Stands in for the proxy deployer; returns a fixed proxy deployment."""

    def __init__(self, provider, address=PROXY_ADDRESS, txn_hash=TXN_HASH, error=None):
        self.provider = provider
        self.address = address
        self.txn_hash = txn_hash
        self.error = error
        self.calls = []

    def deploy_proxy(self, container, args, **kwargs):
        self.calls.append((container, list(args), kwargs))
        if self.error:
            raise self.error
        return ProxyDeployment(
            address=self.address,
            txn_hash=self.txn_hash,
            implementation=FakeInstance(IMPLEMENTATION_ADDRESS, container.contract_type),
            instance=container.at(self.address),
            timeout=kwargs.get("timeout"),
        )

    def wait_for_deployment(self, deployment):
        return self.provider.get_receipt(deployment.txn_hash, timeout=deployment.timeout)


# Fixtures
@pytest.fixture
def environ():
    return dict(TOKEN_ENVIRON)


@pytest.fixture
def token_container():
    return FakeContainer("MiningToken")


@pytest.fixture
def account():
    return FakeAccount()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def proxy_deployer(provider):
    return FakeProxyDeployer(provider)
