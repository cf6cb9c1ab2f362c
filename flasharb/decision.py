# flasharb/decision.py
"""
Unified Decision Engine
Fee/gas guard, then the execution cooldown.

This module is the GATEKEEPER - no flash swap is sent without passing both.
Rejections are console-only: nothing here writes to the trade log, and a
fee/gas rejection never touches the cooldown.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from web3 import Web3

from flasharb.arbitrage_scanner import ProfitEstimate
from flasharb.config import GAS_LIMIT, MAX_GAS_PRICE_WEI, MIN_PROFIT
from flasharb.filters.profit_check import ProfitResult, profit_guard
from flasharb.gas import FeeSnapshot, fetch_fee_snapshot
from flasharb.throttle import ExecutionGate

logger = logging.getLogger(__name__)


@dataclass
class Decision:
    """Decision result from the evaluation engine"""
    allowed: bool
    reason: str
    fee: Optional[FeeSnapshot] = None
    profit_check: Optional[ProfitResult] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        status = "✅ ALLOWED" if self.allowed else "❌ REJECTED"
        return f"{status}: {self.reason}"


class TradeDecider:
    """
    Holds the thresholds and the shared ExecutionGate.
    One fee snapshot is fetched per evaluate() call and reused by the caller
    for the transaction gas price.
    """

    def __init__(
        self,
        relay_w3: Web3,
        gate: ExecutionGate,
        *,
        gas_limit: int = GAS_LIMIT,
        min_profit: int = MIN_PROFIT,
        max_gas_price_wei: int = MAX_GAS_PRICE_WEI,
    ):
        self.relay_w3 = relay_w3
        self.gate = gate
        self.gas_limit = gas_limit
        self.min_profit = min_profit
        self.max_gas_price_wei = max_gas_price_wei

    def check_fees(self, estimate: ProfitEstimate, fee: FeeSnapshot) -> Decision:
        """Fee/gas guard only; no network and no cooldown side effect"""
        profit = profit_guard(
            profit=estimate.profit,
            gas_price_wei=fee.gas_price_wei,
            gas_limit=self.gas_limit,
            min_profit=self.min_profit,
            max_gas_price_wei=self.max_gas_price_wei,
        )

        if not profit.ok:
            return Decision(
                allowed=False,
                reason=f"Profit guard failed: {profit.reason}",
                fee=fee,
                profit_check=profit,
            )

        return Decision(
            allowed=True,
            reason="Profit covers 2x gas plus floor",
            fee=fee,
            profit_check=profit,
        )

    def evaluate(self, estimate: ProfitEstimate) -> Decision:
        """
        Checks:
        1. Gas price ceiling
        2. Profit > 2x gas cost + floor
        3. Cooldown (claimed atomically when it passes)
        """
        label = estimate.route.label

        # =========================================================
        # 1️⃣ + 2️⃣ Fee/gas guard
        # =========================================================
        fee = fetch_fee_snapshot(self.relay_w3)
        decision = self.check_fees(estimate, fee)

        if not decision.allowed:
            logger.info(f"⏸ [{label}] {decision.reason}")
            return decision

        # =========================================================
        # 3️⃣ Cooldown
        # =========================================================
        if not self.gate.try_acquire():
            logger.info(
                f"⏸ [{label}] Skipping trade due to cooldown "
                f"({self.gate.remaining():.1f}s left)"
            )
            return Decision(
                allowed=False,
                reason="Cooldown active",
                fee=fee,
                profit_check=decision.profit_check,
            )

        # =========================================================
        # ✅ ALL GUARDS PASSED
        # =========================================================
        return Decision(
            allowed=True,
            reason="All guards passed (profitable)",
            fee=fee,
            profit_check=decision.profit_check,
            details={"gas_price_gwei": str(fee.gas_price_gwei), "default_fee": fee.is_default},
        )
