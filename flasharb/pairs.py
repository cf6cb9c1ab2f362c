# flasharb/pairs.py
"""
Token, Venue & Pair Registry for BSC
Stablecoin pairs quoted on PancakeSwap v2 and on a matching DODO pool
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from web3 import Web3

# =============================================================================
# TOKEN ADDRESSES (BSC Mainnet - All Checksummed)
# =============================================================================

USDT = Web3.to_checksum_address("0x55d398326f99059fF775485246999027B3197955")
USDC = Web3.to_checksum_address("0x8ac76a51cc950d9822d68b83fe1ad97b32cd580d")
BUSD = Web3.to_checksum_address("0xe9e7cea3dedca5984780bafc599bd69add087d56")
VAI = Web3.to_checksum_address("0x4BD17003473389A42DAF6a0a729f6Fdb328BbBd7")
HAY = Web3.to_checksum_address("0x0782B6d8c4551b9760e74c0545A9bCD90bdc41E5")
TUSD = Web3.to_checksum_address("0x14016e85a25aeb13065688cafb43044c2ef86784")
USDD = Web3.to_checksum_address("0xd17479997F34dd9156Deef8F95A52D81D265be9c")

SYMBOL_BY_ADDRESS: Dict[str, str] = {
    USDT: "USDT",
    USDC: "USDC",
    BUSD: "BUSD",
    VAI: "VAI",
    HAY: "HAY",
    TUSD: "TUSD",
    USDD: "USDD",
}

# =============================================================================
# VENUES
# =============================================================================

# PancakeSwap v2 (primary AMM: quotes, reserve depth, swap routing)
PANCAKE_V2_ROUTER = Web3.to_checksum_address("0x10ED43C718714eb63d5aA57B78B54704E256024E")
PANCAKE_V2_FACTORY = Web3.to_checksum_address("0xBCfCcbde45cE874adCB698cC183deBcF17952812")

# DODO single pools (secondary venue)
DODO_POOLS: Dict[str, str] = {
    "VAI_USDT": Web3.to_checksum_address("0x9e0B3fF9b65E962fCb632c96AcaCf0F44C7266a5"),
    "HAY_BUSD": Web3.to_checksum_address("0xD1ba9BAC957322D6e8c07a160a3A8dA11A0d2867"),
    "TUSD_USDT": Web3.to_checksum_address("0xD4E2EC4D5C285D910208272dDA48a80b1dC36D7F"),
    "USDD_BUSD": Web3.to_checksum_address("0x2289dB32464da04a821aF16D4351F7e02e32cAd3"),
}

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# =============================================================================
# TRADING PAIRS CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class PairConfig:
    """A scanned pair: token_a is what gets borrowed on the forward leg"""
    name: str
    token_a: str
    token_b: str
    dodo_pool: str


SCAN_PAIRS: List[PairConfig] = [
    PairConfig("VAI/USDT", USDT, VAI, DODO_POOLS["VAI_USDT"]),
    PairConfig("HAY/BUSD", BUSD, HAY, DODO_POOLS["HAY_BUSD"]),
    PairConfig("TUSD/USDT", USDT, TUSD, DODO_POOLS["TUSD_USDT"]),
    PairConfig("USDD/BUSD", BUSD, USDD, DODO_POOLS["USDD_BUSD"]),
]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_symbol(address: str) -> str:
    """Get token symbol (checksummed or not)"""
    try:
        addr = Web3.to_checksum_address(address)
    except ValueError:
        return "UNKNOWN"
    return SYMBOL_BY_ADDRESS.get(addr, "UNKNOWN")


def format_units(amount: int, decimals: int = 18) -> Decimal:
    """Base units -> human units. All scanned tokens use 18 decimals on BSC"""
    return Decimal(amount) / Decimal(10 ** decimals)
