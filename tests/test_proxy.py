from types import SimpleNamespace

import pytest
from tests.conftest import (
    DEPLOYER,
    IMPLEMENTATION_ADDRESS,
    PROXY_ADDRESS,
    FakeAccount,
    FakeContainer,
    FakeProvider,
)

from deployment.constants import DEPLOYMENT_TIMEOUT
from deployment.proxy import ProxyDeployer

INIT_ARGS = [1000, DEPLOYER, 50, 0, 12, DEPLOYER, 2]


@pytest.fixture
def oz_dependency():
    return SimpleNamespace(
        ERC1967Proxy=FakeContainer("ERC1967Proxy"),
        TransparentUpgradeableProxy=FakeContainer("TransparentUpgradeableProxy"),
    )


@pytest.fixture
def deployer_account():
    return FakeAccount()


@pytest.fixture
def proxy_deployer(deployer_account, provider, oz_dependency):
    return ProxyDeployer(deployer_account, provider=provider, oz_dependency=oz_dependency)


def test_uups_proxy_deployment(proxy_deployer, deployer_account, token_container, oz_dependency):
    deployment = proxy_deployer.deploy_proxy(
        token_container, INIT_ARGS, gas_price=10, gas_limit=5_000_000
    )

    assert len(deployer_account.deployments) == 2
    (impl_container, impl_args, impl_kwargs), (proxy_container, proxy_args, proxy_kwargs) = (
        deployer_account.deployments
    )

    # implementation first, without constructor arguments
    assert impl_container is token_container
    assert impl_args == ()
    assert impl_kwargs == {"publish": False, "gas_price": 10, "gas_limit": 5_000_000}

    # then the ERC1967 proxy pointing at it, carrying the encoded initializer call
    assert proxy_container is oz_dependency.ERC1967Proxy
    logic_address, data = proxy_args
    assert logic_address == IMPLEMENTATION_ADDRESS
    assert data == deployment.implementation.initialize.encode_input(*INIT_ARGS)
    assert proxy_kwargs == impl_kwargs

    assert deployment.implementation.address == IMPLEMENTATION_ADDRESS
    assert deployment.address == PROXY_ADDRESS
    assert deployment.instance.address == PROXY_ADDRESS
    assert deployment.instance.contract_type.name == "MiningToken"
    assert deployment.txn_hash == f"0x{2:064x}"
    assert deployment.timeout == DEPLOYMENT_TIMEOUT


def test_transparent_proxy_is_owned_by_deployer(
    proxy_deployer, deployer_account, token_container, oz_dependency
):
    proxy_deployer.deploy_proxy(token_container, INIT_ARGS, kind="transparent")

    proxy_container, proxy_args, _ = deployer_account.deployments[1]
    assert proxy_container is oz_dependency.TransparentUpgradeableProxy
    assert proxy_args[:2] == (IMPLEMENTATION_ADDRESS, DEPLOYER)


def test_unsupported_proxy_kind(proxy_deployer, deployer_account, token_container):
    with pytest.raises(ValueError, match="Unsupported proxy kind 'beacon'"):
        proxy_deployer.deploy_proxy(token_container, INIT_ARGS, kind="beacon")
    assert deployer_account.deployments == []


def test_gas_overrides_are_optional(proxy_deployer, deployer_account, token_container):
    proxy_deployer.deploy_proxy(token_container, INIT_ARGS)

    _, _, kwargs = deployer_account.deployments[0]
    assert kwargs == {"publish": False}


def test_publish_flag_is_forwarded(deployer_account, provider, oz_dependency, token_container):
    proxy_deployer = ProxyDeployer(
        deployer_account, publish=True, provider=provider, oz_dependency=oz_dependency
    )
    proxy_deployer.deploy_proxy(token_container, INIT_ARGS)

    assert all(kwargs["publish"] for _, _, kwargs in deployer_account.deployments)


def test_wait_for_deployment_uses_timeout(proxy_deployer, token_container):
    provider = FakeProvider(gas_used=1234)
    proxy_deployer.provider = provider
    deployment = proxy_deployer.deploy_proxy(token_container, INIT_ARGS, timeout=30)

    receipt = proxy_deployer.wait_for_deployment(deployment)

    assert receipt.gas_used == 1234
    assert provider.calls == [("get_receipt", deployment.txn_hash, 30)]
