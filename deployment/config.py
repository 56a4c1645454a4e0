import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from dotenv import find_dotenv, load_dotenv
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.constants import DEFAULT_TOKEN_SUPPLY
from deployment.errors import ConfigurationError
from deployment.utils import _load_yaml

TOKEN_PARAMS_KEY = "token"

# values that mean "not set" for optional integers
UNSET_VALUES = ("", "null", "none")


def load_environment(dotenv_path: Optional[Path] = None) -> bool:
    """
    Loads a .env file into the process environment.
    Variables that are already set are left untouched.
    """
    if dotenv_path is None:
        dotenv_path = find_dotenv(usecwd=True)
    return load_dotenv(dotenv_path=dotenv_path, override=False)


def load_params_file(filepath: Optional[Path]) -> Dict[str, Any]:
    """Returns the token section of a YAML params file, if one is given."""
    if filepath is None:
        return dict()
    config = _load_yaml(filepath) or dict()
    params = config.get(TOKEN_PARAMS_KEY)
    if params is None:
        raise ConfigurationError(f"'{TOKEN_PARAMS_KEY}' is not set in params file {filepath}.")
    if not isinstance(params, dict):
        raise ConfigurationError(f"Malformed '{TOKEN_PARAMS_KEY}' section in {filepath}.")
    return {str(k).upper(): v for k, v in params.items()}


def _merge_sources(environ: Optional[Mapping[str, str]], params: Optional[Mapping[str, Any]]):
    if environ is None:
        environ = os.environ
    merged = dict(params or {})
    for key, value in environ.items():
        if value is not None and str(value).strip() != "":
            merged[key] = value
    return merged


def _get_required(values: Mapping[str, Any], key: str) -> str:
    value = values.get(key)
    if value is None or str(value).strip() == "":
        raise ConfigurationError(f"{key} is not set.")
    return str(value).strip()


def _to_int(key: str, value: Any) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{value}'.")


def _get_required_int(values: Mapping[str, Any], key: str) -> int:
    return _to_int(key, _get_required(values, key))


def _get_optional_int(values: Mapping[str, Any], key: str, default: int) -> int:
    value = values.get(key)
    if value is None or str(value).strip().lower() in UNSET_VALUES:
        return default
    return _to_int(key, value)


def _get_address(values: Mapping[str, Any], key: str) -> ChecksumAddress:
    value = _get_required(values, key)
    try:
        return to_checksum_address(value)
    except ValueError:
        raise ConfigurationError(f"{key} is not a valid address: '{value}'.")


class TokenDeploymentConfig(NamedTuple):
    """Everything the deployment needs that is not read from the chain."""

    token_name: str
    mining_reward: int
    staking_apy: int
    tax_percent: int
    mining_difficulty: int = 0
    initial_supply: int = DEFAULT_TOKEN_SUPPLY
    currency: Optional[str] = None

    @classmethod
    def from_environ(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> "TokenDeploymentConfig":
        values = _merge_sources(environ, params)
        return cls(
            token_name=_get_required(values, "TOKEN_NAME"),
            mining_reward=_get_required_int(values, "MINING_REWARD"),
            staking_apy=_get_required_int(values, "STAKING_APY"),
            tax_percent=_get_required_int(values, "TAX_PERCENT"),
            mining_difficulty=_get_optional_int(values, "MINING_DIFFICULTY", default=0),
            initial_supply=_get_optional_int(
                values, "TOKEN_SUPPLY", default=DEFAULT_TOKEN_SUPPLY
            ),
            currency=values.get("NATIVE_CURRENCY") or None,
        )

    def constructor_args(self, deployer_address: str) -> List[Any]:
        """Initializer arguments, in the order the token's initialize() expects them."""
        return [
            self.initial_supply,
            deployer_address,  # owner
            self.mining_reward,
            self.mining_difficulty,
            self.staking_apy,
            deployer_address,  # tax recipient
            self.tax_percent,
        ]


class TokenBalanceConfig(NamedTuple):
    token_name: str
    contract_address: ChecksumAddress
    wallet_address: ChecksumAddress

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "TokenBalanceConfig":
        values = _merge_sources(environ, None)
        return cls(
            token_name=_get_required(values, "TOKEN_NAME"),
            contract_address=_get_address(values, "CONTRACT_ADDRESS"),
            wallet_address=_get_address(values, "WALLET_ADDRESS"),
        )
