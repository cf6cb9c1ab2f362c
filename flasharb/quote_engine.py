# flasharb/quote_engine.py
"""
Venue Quote Adapters
PancakeSwap v2 router quotes (multi-hop path) and DODO direct-pool quotes.

Both adapters never raise: any revert, transport error or malformed
response comes back as QuoteResult.unavailable(...). A venue answering
exactly zero is treated the same way, zero is never a real price.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from web3 import Web3

from flasharb.pairs import PANCAKE_V2_ROUTER

logger = logging.getLogger(__name__)

# =============================================================================
# ABI DEFINITIONS
# =============================================================================

ROUTER_V2_ABI = [
    {
        "name": "getAmountsOut",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "amountIn", "type": "uint256"},
            {"name": "path", "type": "address[]"},
        ],
        "outputs": [{"name": "amounts", "type": "uint256[]"}],
    },
]

DODO_POOL_ABI = [
    {
        "name": "querySellQuoteToken",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "payAmount", "type": "uint256"}],
        "outputs": [{"name": "receiveAmount", "type": "uint256"}],
    },
]


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class QuoteResult:
    """Either a positive output amount or 'unavailable' with the cause"""
    amount: int = 0
    error: str = ""

    @classmethod
    def value(cls, amount: int) -> "QuoteResult":
        if amount <= 0:
            return cls.unavailable("venue returned zero output")
        return cls(amount=amount)

    @classmethod
    def unavailable(cls, reason: str) -> "QuoteResult":
        return cls(amount=0, error=reason or "unavailable")

    @property
    def is_valid(self) -> bool:
        return self.amount > 0 and not self.error


# =============================================================================
# VENUE ADAPTERS
# =============================================================================

class RouterVenue:
    """
    AMM router venue (Uniswap v2 style getAmountsOut).
    quote(path, amount_in) -> output of the last hop
    """

    def __init__(self, w3: Web3, router: str = PANCAKE_V2_ROUTER, name: str = "Pancake"):
        self.w3 = w3
        self.name = name
        self.address = Web3.to_checksum_address(router)
        self.router = w3.eth.contract(address=self.address, abi=ROUTER_V2_ABI)

    def quote(self, path: Sequence[str], amount_in: int) -> QuoteResult:
        if len(path) < 2:
            return QuoteResult.unavailable(f"path needs 2+ tokens, got {len(path)}")

        try:
            checksum_path = [Web3.to_checksum_address(t) for t in path]
            amounts = self.router.functions.getAmountsOut(int(amount_in), checksum_path).call()
            return QuoteResult.value(int(amounts[-1]))
        except Exception as e:
            logger.debug(f"{self.name} quote failed for {amount_in}: {e}")
            return QuoteResult.unavailable(str(e))


class DodoPoolVenue:
    """
    Single-pool venue (DODO v1/v2 style querySellQuoteToken).
    quote(pool, amount_in) -> amount received for selling into the pool
    """

    def __init__(self, w3: Web3, name: str = "DODO"):
        self.w3 = w3
        self.name = name
        self._pool_cache = {}

    def _get_pool(self, pool: str):
        """Get cached pool contract"""
        pool = Web3.to_checksum_address(pool)
        if pool not in self._pool_cache:
            self._pool_cache[pool] = self.w3.eth.contract(address=pool, abi=DODO_POOL_ABI)
        return self._pool_cache[pool]

    def quote(self, pool: str, amount_in: int) -> QuoteResult:
        try:
            contract = self._get_pool(pool)
            received = contract.functions.querySellQuoteToken(int(amount_in)).call()
            return QuoteResult.value(int(received))
        except Exception as e:
            logger.debug(f"{self.name} quote failed on {pool} for {amount_in}: {e}")
            return QuoteResult.unavailable(str(e))
