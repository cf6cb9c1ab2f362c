# flasharb/executor.py
"""
Flash-Swap Execution Trigger
Signs and sends one flashSwap transaction through the private relay.

Fire-and-forget: no receipt wait, no retry. A failed send is reported and
the scan moves on; the cooldown already claimed stays claimed.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from web3 import Web3

from flasharb.arbitrage_scanner import ProfitEstimate
from flasharb.config import CHAIN_ID, GAS_LIMIT
from flasharb.flash_loan import FLASH_RECEIVER_ABI, encode_route
from flasharb.gas import FeeSnapshot
from flasharb.pairs import format_units
from flasharb.trade_log import TradeLog

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS & DATA CLASSES
# =============================================================================

class ExecutionStatus(Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ExecutionResult:
    """Result of one submission attempt"""
    status: ExecutionStatus
    label: str
    tx_hash: Optional[str] = None
    payload: bytes = b""
    error: str = ""
    execution_time_ms: float = 0


# =============================================================================
# EXECUTION ENGINE
# =============================================================================

class ExecutionEngine:
    """
    Builds the flashSwap call for a route and submits it.

    In dry-run mode the payload is built and logged but never signed.
    """

    def __init__(
        self,
        relay_w3: Web3,
        receiver: str,
        private_key: str,
        trade_log: TradeLog,
        *,
        dry_run: bool = True,
        gas_limit: int = GAS_LIMIT,
        chain_id: int = CHAIN_ID,
    ):
        self.w3 = relay_w3
        self.receiver = relay_w3.eth.contract(
            address=Web3.to_checksum_address(receiver),
            abi=FLASH_RECEIVER_ABI,
        )
        self.account = relay_w3.eth.account.from_key(private_key)
        self.address = self.account.address
        self.trade_log = trade_log
        self.dry_run = dry_run
        self.gas_limit = gas_limit
        self.chain_id = chain_id

        # Execution statistics
        self.total_attempts = 0
        self.sent = 0
        self.failed = 0

    def _get_nonce(self) -> int:
        """Get current nonce (pending)"""
        return self.w3.eth.get_transaction_count(self.address, "pending")

    def execute(self, estimate: ProfitEstimate, fee: FeeSnapshot) -> ExecutionResult:
        start_time = time.time()
        route = estimate.route
        label = route.label

        prefix = "DRY RUN " if self.dry_run else ""
        self.trade_log.record(
            f"{prefix}✅ {label} | Loan: {format_units(route.loan_size)} | "
            f"Profit: {format_units(estimate.profit)} | "
            f"GasPrice: {fee.gas_price_gwei} gwei"
        )

        payload = encode_route(route)

        if self.dry_run:
            logger.info(f"[{label}] DRY RUN - payload built, not sending")
            return ExecutionResult(
                status=ExecutionStatus.SKIPPED,
                label=label,
                payload=payload,
                error="Dry run mode enabled",
            )

        self.total_attempts += 1

        try:
            tx = self.receiver.functions.flashSwap(
                Web3.to_checksum_address(route.token_in),
                route.loan_size,
                payload,
            ).build_transaction({
                "from": self.address,
                "nonce": self._get_nonce(),
                "gas": self.gas_limit,
                "gasPrice": fee.gas_price_wei,
                "chainId": self.chain_id,
            })

            signed = self.account.sign_transaction(tx)
            tx_hash = Web3.to_hex(self.w3.eth.send_raw_transaction(signed.raw_transaction))

        except Exception as e:
            self.failed += 1
            reason = getattr(e, "message", None) or str(e)
            elapsed_ms = (time.time() - start_time) * 1000
            logger.error(f"❌ [{label}] Tx failed after {elapsed_ms:.0f}ms: {reason}")
            self.trade_log.record(f"Tx failed: {reason}")
            return ExecutionResult(
                status=ExecutionStatus.FAILED,
                label=label,
                payload=payload,
                error=reason,
                execution_time_ms=elapsed_ms,
            )

        self.sent += 1
        result = ExecutionResult(
            status=ExecutionStatus.SENT,
            label=label,
            tx_hash=tx_hash,
            payload=payload,
            execution_time_ms=(time.time() - start_time) * 1000,
        )
        logger.info(f"🚀 [{label}] Sent tx: {tx_hash} ({result.execution_time_ms:.0f}ms)")
        self.trade_log.record(f"Tx Hash: {tx_hash}")

        return result

    def get_statistics(self) -> dict:
        """Get execution statistics"""
        return {
            "total_attempts": self.total_attempts,
            "sent": self.sent,
            "failed": self.failed,
        }
