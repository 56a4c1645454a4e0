from pathlib import Path

from web3 import Web3

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"
ARTIFACTS_DIR = DEPLOYMENT_DIR / "artifacts"

#
# Networks
#

LOCAL_NETWORKS = ["local", "localhost", "hardhat"]

#
# Preflight
#

MIN_DEPLOYER_BALANCE = Web3.to_wei("0.1", "ether")

#
# Gas
#

DEFAULT_GAS_PRICE = Web3.to_wei(10, "gwei")

# observed gas price is bumped by 10% on live networks
GAS_PRICE_BUMP_PERCENT = 110

DEPLOYMENT_GAS_LIMIT = 5_000_000

# seconds
DEPLOYMENT_TIMEOUT = 120

#
# Token
#

DEFAULT_TOKEN_SUPPLY = 11_000_000_000
TOKEN_DECIMALS = 18

#
# Proxies
#

INITIALIZER = "initialize"

UUPS = "uups"
TRANSPARENT = "transparent"
PROXY_KINDS = [UUPS, TRANSPARENT]

OZ_DEPENDENCY_NAME = "openzeppelin"
OZ_DEPENDENCY_VERSION = "5.0.0"
