import json
import os
from pathlib import Path
from typing import List, Optional

import yaml
from ape import networks, project
from ape.contracts import ContractContainer, ContractInstance

from deployment.constants import ARTIFACTS_DIR, CONSTRUCTOR_PARAMS_DIR
from deployment.networks import is_local_network


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def check_etherscan_plugin(
    network_name: Optional[str] = None, ecosystem_name: Optional[str] = None
) -> None:
    """
    Checks that the ape-etherscan plugin is installed and that
    the appropriate API key environment variable is set.
    Defaults to the connected network when no names are given.
    """
    if is_local_network(network_name):
        # unnecessary for local deployment
        return
    try:
        from ape_etherscan.utils import API_KEY_ENV_KEY_MAP
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to use this script.")
    ecosystem_name = ecosystem_name or networks.provider.network.ecosystem.name
    explorer_envvar = API_KEY_ENV_KEY_MAP.get(ecosystem_name)
    if explorer_envvar is None:
        raise ValueError(f"No block explorer configured for the {ecosystem_name} ecosystem.")
    api_key = os.environ.get(explorer_envvar)
    if not api_key:
        raise ValueError(f"{explorer_envvar} is not set.")


def check_plugins(
    network_name: Optional[str] = None, ecosystem_name: Optional[str] = None
) -> None:
    print("Checking plugins...")
    check_etherscan_plugin(network_name=network_name, ecosystem_name=ecosystem_name)


def verify_contracts(contracts: List[ContractInstance]) -> None:
    explorer = networks.provider.network.explorer
    for instance in contracts:
        print(f"(i) Verifying {instance.contract_type.name}...")
        explorer.publish_contract(instance.address)


def _get_dependency_contract_container(contract: str) -> ContractContainer:
    for dependency_name, dependency_versions in project.dependencies.items():
        if len(dependency_versions) > 1:
            raise ValueError(f"Ambiguous {dependency_name} dependency for {contract}")
        try:
            dependency_api = list(dependency_versions.values())[0]
            contract_container = getattr(dependency_api, contract)
            return contract_container
        except AttributeError:
            continue
    raise ValueError(f"No contract found with name '{contract}'.")


def get_contract_container(contract: str) -> ContractContainer:
    try:
        contract_container = getattr(project, contract)
    except AttributeError:
        # not in root project; check dependencies
        contract_container = _get_dependency_contract_container(contract)

    return contract_container


def default_registry_filepath(ecosystem: str, network_name: str) -> Path:
    return ARTIFACTS_DIR / f"{ecosystem}-{network_name}.json"


def default_params_filepath(ecosystem: str, network_name: str) -> Optional[Path]:
    """Returns the bundled token parameters for a network, if there are any."""
    filepath = CONSTRUCTOR_PARAMS_DIR / f"{ecosystem}-{network_name}.yml"
    if not filepath.exists():
        return None
    return filepath
