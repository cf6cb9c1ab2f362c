# flasharb/config.py
"""
Flash-Swap Arbitrage Configuration
BSC stablecoin round trips: PancakeSwap v2 <-> DODO, funded by flash swap
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from web3 import Web3

# -----------------------------
# Paths
# -----------------------------
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / "config" / ".env"
LOG_DIR = BASE_DIR / "logs"

# -----------------------------
# Chain Configuration
# -----------------------------
CHAIN_ID = 56  # BNB Smart Chain

# Private relay (bloXroute). The auth key is appended at load time.
RELAY_URL_TEMPLATE = "https://bsc.api.blxrbdn.com?authHeader={key}"
RPC_TIMEOUT_SECONDS = 10

# -----------------------------
# Loan Sizes (18-decimal base units)
# -----------------------------
LOAN_SIZES = [Web3.to_wei(x, "ether") for x in (10_000, 50_000, 100_000)]

# -----------------------------
# Profit & Liquidity
# -----------------------------
MIN_PROFIT = Web3.to_wei(25, "ether")  # $25 floor on stablecoin pairs
LIQUIDITY_MULTIPLIER = 2               # pool depth must cover 2x the loan
GAS_COST_SAFETY_MULTIPLIER = 2         # profit must cover 2x the gas cost

# -----------------------------
# Gas Configuration
# -----------------------------
GAS_LIMIT = 600_000
MAX_GAS_PRICE_WEI = Web3.to_wei(15, "gwei")
DEFAULT_GAS_PRICE_WEI = Web3.to_wei(5, "gwei")  # used when fee data is missing

# -----------------------------
# Throttle & Schedule
# -----------------------------
COOLDOWN_SECONDS = 30.0
SCAN_INTERVAL_SECONDS = 20.0

# -----------------------------
# Logging
# -----------------------------
LOG_LEVEL = "INFO"
TRADE_LOG_PATH = BASE_DIR / "profit-log.txt"

# Deployment mode default; .env can override with DRY_RUN_MODE=false
DRY_RUN_MODE = True


@dataclass(frozen=True)
class Settings:
    """Secrets and endpoints loaded once at startup"""
    bsc_rpc: str
    bloxroute_key: str
    private_key: str
    flash_receiver: str
    dry_run: bool = DRY_RUN_MODE
    trade_log_path: Path = TRADE_LOG_PATH
    log_level: str = LOG_LEVEL

    @property
    def relay_url(self) -> str:
        return RELAY_URL_TEMPLATE.format(key=self.bloxroute_key)


def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"{name} not set in .env")
    return value


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """
    Read .env and the process environment into Settings.

    Raises RuntimeError when a required variable is missing. This is the
    only failure that is allowed to stop the bot.
    """
    env_path = Path(env_path or os.getenv("ENV_PATH") or ENV_PATH)
    if env_path.exists():
        load_dotenv(env_path)

    flash_receiver = _require("FLASH_RECEIVER")
    if not Web3.is_address(flash_receiver):
        raise RuntimeError(f"FLASH_RECEIVER is not a valid address: {flash_receiver}")

    return Settings(
        bsc_rpc=_require("BSC_RPC"),
        bloxroute_key=_require("BLOXROUTE_KEY"),
        private_key=_require("PRIVATE_KEY"),
        flash_receiver=Web3.to_checksum_address(flash_receiver),
        dry_run=_as_bool(os.getenv("DRY_RUN_MODE"), DRY_RUN_MODE),
        trade_log_path=Path(os.getenv("TRADE_LOG_PATH") or TRADE_LOG_PATH),
        log_level=os.getenv("LOG_LEVEL", LOG_LEVEL).upper(),
    )
