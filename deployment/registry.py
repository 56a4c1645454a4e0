import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, NamedTuple

from ape.contracts import ContractInstance
from eth_typing import ABI, ChecksumAddress
from eth_utils import to_checksum_address

from deployment.utils import _load_json, get_contract_container

ChainId = int
ContractName = str


STANDARD_REGISTRY_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}


class RegistryEntry(NamedTuple):
    """Represents a single deployed contract in a registry file."""

    chain_id: ChainId
    name: ContractName
    address: ChecksumAddress
    abi: ABI
    tx_hash: str
    block_number: int
    deployer: str


def _get_abi(contract_instance: ContractInstance) -> ABI:
    """Returns the ABI of a contract instance."""
    contract_abi = list()
    for entry in contract_instance.contract_type.abi:
        contract_abi.append(entry.model_dump(mode="json", by_alias=True))
    return contract_abi


def _entry_to_json(entry: RegistryEntry) -> dict:
    # stable abi order keeps registry diffs small
    abi = sorted(entry.abi, key=lambda item: (item["type"], item.get("name", "")))
    return {
        "address": entry.address,
        "abi": abi,
        "tx_hash": entry.tx_hash,
        "block_number": int(entry.block_number),
        "deployer": entry.deployer,
    }


def read_registry(filepath: Path) -> List[RegistryEntry]:
    """Reads every entry of a registry file, across all chains."""
    data = _load_json(filepath)
    return [
        RegistryEntry(
            chain_id=int(chain_id),
            name=name,
            address=artifacts["address"],
            abi=artifacts["abi"],
            tx_hash=artifacts["tx_hash"],
            block_number=artifacts["block_number"],
            deployer=artifacts["deployer"],
        )
        for chain_id, contracts in data.items()
        for name, artifacts in contracts.items()
    ]


def write_registry(entries: List[RegistryEntry], filepath: Path) -> Path:
    """
    Writes registry entries to a file, keeping the entries of other chains.
    A chain that is already recorded is never overwritten; its new entries go
    to a `.unmerged.json` file next to the registry.
    """
    data = defaultdict(dict)
    for entry in entries:
        data[str(entry.chain_id)][entry.name] = _entry_to_json(entry)

    filepath.parent.mkdir(parents=True, exist_ok=True)
    if filepath.exists():
        existing_data = _load_json(filepath)
        if existing_data.keys() & data.keys():
            filepath = filepath.with_suffix(".unmerged.json")
            print(f"(i) Chain already recorded; writing to {filepath} instead")
        else:
            existing_data.update(data)
            data = existing_data

    with open(filepath, "w") as file:
        json.dump(data, file, **STANDARD_REGISTRY_JSON_FORMAT)
    return filepath


def registry_from_deployment(
    contract: ContractInstance,
    chain_id: ChainId,
    txn_hash: str,
    block_number: int,
    deployer: str,
    output_filepath: Path,
) -> Path:
    """Records a proxied deployment under the implementation's contract name."""
    entry = RegistryEntry(
        chain_id=chain_id,
        name=contract.contract_type.name,
        address=to_checksum_address(contract.address),
        abi=_get_abi(contract),
        tx_hash=txn_hash,
        block_number=block_number,
        deployer=deployer,
    )
    output_filepath = write_registry(entries=[entry], filepath=output_filepath)
    print(f"(i) Registry written to {output_filepath}!")
    return output_filepath


def contracts_from_registry(filepath: Path, chain_id: ChainId) -> Dict[str, ContractInstance]:
    """Returns a dictionary of contract instances from a registry file."""
    registry_entries = read_registry(filepath=filepath)
    deployments = dict()
    for registry_entry in registry_entries:
        if registry_entry.chain_id != chain_id:
            continue
        contract_type = registry_entry.name
        contract_container = get_contract_container(contract_type)
        contract_instance = contract_container.at(registry_entry.address)
        deployments[contract_type] = contract_instance
    return deployments
