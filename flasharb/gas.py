# flasharb/gas.py

import logging
from dataclasses import dataclass

from web3 import Web3

from flasharb.config import DEFAULT_GAS_PRICE_WEI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeSnapshot:
    gas_price_wei: int
    is_default: bool = False

    @property
    def gas_price_gwei(self):
        return Web3.from_wei(self.gas_price_wei, "gwei")


def fetch_fee_snapshot(
    w3: Web3,
    default_gas_price_wei: int = DEFAULT_GAS_PRICE_WEI,
) -> FeeSnapshot:
    """Current gas price; falls back to the conservative default on any failure"""
    try:
        gas_price = w3.eth.gas_price
        if gas_price:
            return FeeSnapshot(gas_price_wei=int(gas_price))
    except Exception as e:
        logger.debug(f"Gas price read failed, using default: {e}")

    return FeeSnapshot(gas_price_wei=default_gas_price_wei, is_default=True)


def estimate_execution_cost(gas_price_wei: int, gas_limit: int) -> int:
    """Native-token cost (wei) of one execution call at the given budget"""
    return gas_price_wei * gas_limit
