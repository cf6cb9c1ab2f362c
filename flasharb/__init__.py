# flasharb/__init__.py
"""
BSC Flash-Swap Arbitrage Bot
Round trips between PancakeSwap v2 and DODO pools, funded by a flash swap

Modules:
- config: Constants and .env settings
- pairs: Token, venue and pair registry
- quote_engine: Router and DODO pool quote adapters
- reserves: Primary AMM pool depth
- arbitrage_scanner: Route evaluation and scan plan
- decision: Fee/gas guard and cooldown
- throttle: Shared execution cooldown
- executor: Flash swap submission
- trade_log: Append-only profit-log.txt record
- main: Entry point
"""

__version__ = "1.0.0"
__author__ = "TradeBot"

from flasharb.config import (
    CHAIN_ID,
    COOLDOWN_SECONDS,
    GAS_LIMIT,
    LOAN_SIZES,
    MAX_GAS_PRICE_WEI,
    MIN_PROFIT,
)

from flasharb.pairs import (
    USDT,
    BUSD,
    PANCAKE_V2_ROUTER,
    DODO_POOLS,
    SCAN_PAIRS,
)

__all__ = [
    "CHAIN_ID",
    "COOLDOWN_SECONDS",
    "GAS_LIMIT",
    "LOAN_SIZES",
    "MAX_GAS_PRICE_WEI",
    "MIN_PROFIT",
    "USDT",
    "BUSD",
    "PANCAKE_V2_ROUTER",
    "DODO_POOLS",
    "SCAN_PAIRS",
]
