from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from ape import project
from ape.api import AccountAPI, ProviderAPI, ReceiptAPI
from ape.contracts import ContractContainer, ContractInstance

from deployment.constants import (
    DEPLOYMENT_TIMEOUT,
    INITIALIZER,
    OZ_DEPENDENCY_NAME,
    OZ_DEPENDENCY_VERSION,
    PROXY_KINDS,
    TRANSPARENT,
    UUPS,
)


def get_oz_dependency():
    """Returns the OpenZeppelin contracts dependency declared in ape-config.yaml."""
    return project.dependencies[OZ_DEPENDENCY_NAME][OZ_DEPENDENCY_VERSION]


class ProxyDeployment(NamedTuple):
    """A proxy wrapping a freshly deployed implementation."""

    address: str
    txn_hash: str
    implementation: ContractInstance
    instance: ContractInstance
    timeout: int = DEPLOYMENT_TIMEOUT


class ProxyDeployer:
    """
    Deploys an implementation contract behind an OpenZeppelin proxy
    and runs its initializer through the proxy constructor.
    """

    def __init__(
        self,
        account: AccountAPI,
        publish: bool = False,
        provider: Optional[ProviderAPI] = None,
        oz_dependency=None,
    ):
        self.account = account
        self.publish = publish
        self.provider = provider if provider is not None else account.provider
        self._oz_dependency = oz_dependency

    @property
    def oz_dependency(self):
        if self._oz_dependency is None:
            self._oz_dependency = get_oz_dependency()
        return self._oz_dependency

    def _get_kwargs(
        self, gas_price: Optional[int] = None, gas_limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """Returns the transaction kwargs shared by every deployment transaction."""
        kwargs = {"publish": self.publish}
        if gas_price is not None:
            kwargs["gas_price"] = gas_price
        if gas_limit is not None:
            kwargs["gas_limit"] = gas_limit
        return kwargs

    def _get_proxy_constructor(
        self, kind: str, logic_address: str, data: bytes
    ) -> Tuple[ContractContainer, List[Any]]:
        if kind == UUPS:
            return self.oz_dependency.ERC1967Proxy, [logic_address, data]
        elif kind == TRANSPARENT:
            return (
                self.oz_dependency.TransparentUpgradeableProxy,
                [logic_address, self.account.address, data],
            )
        raise ValueError(f"Unsupported proxy kind '{kind}'; expected one of {PROXY_KINDS}")

    def deploy_proxy(
        self,
        container: ContractContainer,
        args: Sequence[Any],
        initializer: str = INITIALIZER,
        kind: str = UUPS,
        timeout: int = DEPLOYMENT_TIMEOUT,
        gas_price: Optional[int] = None,
        gas_limit: Optional[int] = None,
    ) -> ProxyDeployment:
        if kind not in PROXY_KINDS:
            raise ValueError(f"Unsupported proxy kind '{kind}'; expected one of {PROXY_KINDS}")

        contract_name = container.contract_type.name
        kwargs = self._get_kwargs(gas_price=gas_price, gas_limit=gas_limit)

        print(f"\nDeploying {contract_name} implementation...")
        implementation = self.account.deploy(container, **kwargs)

        initializer_handler = getattr(implementation, initializer)
        data = initializer_handler.encode_input(*args)

        proxy_container, proxy_args = self._get_proxy_constructor(
            kind=kind, logic_address=implementation.address, data=data
        )
        print(
            f"\nDeploying {proxy_container.contract_type.name} ({kind}) "
            f"to proxy {contract_name} at {implementation.address}."
        )
        proxy_contract = self.account.deploy(proxy_container, *proxy_args, **kwargs)

        print(
            f"\nWrapping {contract_name} into {proxy_contract.contract_type.name} "
            f"at {proxy_contract.address}."
        )
        instance = container.at(proxy_contract.address)
        return ProxyDeployment(
            address=proxy_contract.address,
            txn_hash=proxy_contract.txn_hash,
            implementation=implementation,
            instance=instance,
            timeout=timeout,
        )

    def wait_for_deployment(self, deployment: ProxyDeployment) -> ReceiptAPI:
        """Blocks until the proxy deployment transaction is mined and returns its receipt."""
        return self.provider.get_receipt(deployment.txn_hash, timeout=deployment.timeout)
