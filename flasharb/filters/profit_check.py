# flasharb/filters/profit_check.py

from dataclasses import dataclass

from web3 import Web3

from flasharb.config import (
    GAS_COST_SAFETY_MULTIPLIER,
    GAS_LIMIT,
    MAX_GAS_PRICE_WEI,
    MIN_PROFIT,
)
from flasharb.gas import estimate_execution_cost


@dataclass
class ProfitResult:
    ok: bool
    profit: int
    gas_price_wei: int
    gas_cost: int
    required_profit: int
    reason: str = ""


def profit_guard(
    *,
    profit: int,
    gas_price_wei: int,
    gas_limit: int = GAS_LIMIT,
    min_profit: int = MIN_PROFIT,
    max_gas_price_wei: int = MAX_GAS_PRICE_WEI,
    safety_multiplier: int = GAS_COST_SAFETY_MULTIPLIER,
) -> ProfitResult:
    """
    profit = final output - loan size (base units)

    Rejects when gas price is above the ceiling, whatever the profit.
    Otherwise requires profit > safety_multiplier * gas cost + min_profit.
    """
    gas_cost = estimate_execution_cost(gas_price_wei, gas_limit)
    required = gas_cost * safety_multiplier + min_profit

    if gas_price_wei > max_gas_price_wei:
        return ProfitResult(
            ok=False,
            profit=profit,
            gas_price_wei=gas_price_wei,
            gas_cost=gas_cost,
            required_profit=required,
            reason=(
                f"Gas too high: {Web3.from_wei(gas_price_wei, 'gwei')} gwei "
                f"> {Web3.from_wei(max_gas_price_wei, 'gwei')} gwei"
            ),
        )

    if profit <= required:
        return ProfitResult(
            ok=False,
            profit=profit,
            gas_price_wei=gas_price_wei,
            gas_cost=gas_cost,
            required_profit=required,
            reason=f"Profit {profit} <= required {required}",
        )

    return ProfitResult(
        ok=True,
        profit=profit,
        gas_price_wei=gas_price_wei,
        gas_cost=gas_cost,
        required_profit=required,
    )
