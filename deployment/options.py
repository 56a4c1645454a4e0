from pathlib import Path

import click

from deployment.constants import TOKEN_DECIMALS
from deployment.types import ChecksumAddress

params_file_option = click.option(
    "--params-file",
    "-p",
    help=(
        "YAML file with a 'token' section; environment variables take precedence. "
        "Defaults to the network's file in deployment/constructor_params, if any."
    ),
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=False,
)

registry_filepath_option = click.option(
    "--registry-filepath",
    "-f",
    help="Registry file to record the deployment in; defaults to the network's artifact file.",
    type=click.Path(dir_okay=False, path_type=Path),
    required=False,
)

verify_option = click.option(
    "--verify/--no-verify",
    help="Publish the deployed contracts to the block explorer.",
    default=False,
)

decimals_option = click.option(
    "--decimals",
    help="Token decimals used to format balances.",
    type=click.IntRange(min=0),
    default=TOKEN_DECIMALS,
    show_default=True,
)

contract_address_option = click.option(
    "--contract-address",
    "-c",
    help="Token address; overrides CONTRACT_ADDRESS.",
    type=ChecksumAddress(),
    required=False,
)

wallet_address_option = click.option(
    "--wallet-address",
    "-w",
    help="Holder address; overrides WALLET_ADDRESS.",
    type=ChecksumAddress(),
    required=False,
)
