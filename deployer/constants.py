"""
Static deployment settings
"""

from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_FILE = BASE_DIR / ".config.json"
ARTIFACTS_DIR = BASE_DIR / "artifacts"
ABI_DIR = BASE_DIR / "abis"
LOG_DIR = "logs"

LOGGER_NAME = 'chain_deployer'

# Token contract deployed once per symbol, in this order
TOKEN_ARTIFACT = "ExBasisToken"
TOKEN_SYMBOLS = ("USDT", "TEXB")

# Used for both the initial supply and the cap
TOKEN_TOTAL_SUPPLY = 100000000000000000000000000
DEFAULT_DECIMALS = 18
TOKEN_DECIMALS = {
    "USDT": 6,
}

# Business contracts deployed after the tokens (no constructor arguments)
BUSINESS_CONTRACTS: tuple = ()

# Contracts whose ABI is written to ABI_DIR
ABI_EXPORT_CONTRACTS: tuple = ()

# Receipt polling, in seconds
POLL_INTERVAL = 0.1
SETTLE_DELAY = 0.2
