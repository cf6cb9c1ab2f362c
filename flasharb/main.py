# flasharb/main.py
"""
Flash-Swap Arbitrage Bot Main Loop

THIS IS THE ENTRY POINT - Run with: python -m flasharb.main

MODES:
1. scan: full pipeline, payloads built but never sent (safe)
2. execute: real flash swaps (also requires DRY_RUN_MODE=false in .env)
3. test: one scan cycle in dry run, then exit
"""

import logging
import signal
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence

from web3 import Web3

from flasharb.arbitrage_scanner import RouteEvaluator, build_scan_plan, format_estimate, routes_for
from flasharb.config import (
    CHAIN_ID,
    COOLDOWN_SECONDS,
    LOAN_SIZES,
    LOG_DIR,
    MAX_GAS_PRICE_WEI,
    SCAN_INTERVAL_SECONDS,
    Settings,
    load_settings,
)
from flasharb.decision import TradeDecider
from flasharb.executor import ExecutionEngine, ExecutionResult, ExecutionStatus
from flasharb.filters.liquidity_check import liquidity_guard
from flasharb.pairs import SCAN_PAIRS, PairConfig, format_units
from flasharb.quote_engine import DodoPoolVenue, RouterVenue
from flasharb.reserves import ReserveReader
from flasharb.rpc_health import RPCHealth, make_web3
from flasharb.throttle import ExecutionGate
from flasharb.trade_log import TradeLog

logger = logging.getLogger(__name__)


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(level: str = "INFO") -> None:
    LOG_DIR.mkdir(exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s | %(levelname)-8s | %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(LOG_DIR / f"bot_{datetime.now().strftime('%Y%m%d')}.log"),
        ]
    )


# =============================================================================
# STATISTICS TRACKER
# =============================================================================

class StatisticsTracker:
    """Track bot performance statistics (safe to update from worker threads)"""

    def __init__(self):
        self._lock = threading.Lock()
        self.start_time = datetime.now()
        self.scan_count = 0
        self.items_scanned = 0
        self.liquidity_skips = 0
        self.candidates = 0
        self.executions_sent = 0
        self.executions_failed = 0
        self.executions_dry_run = 0
        self.errors = 0
        self.best_profit = 0

    def record_scan(self, items: int):
        with self._lock:
            self.scan_count += 1
            self.items_scanned += items

    def record_liquidity_skip(self):
        with self._lock:
            self.liquidity_skips += 1

    def record_candidate(self, profit: int):
        with self._lock:
            self.candidates += 1
            self.best_profit = max(self.best_profit, profit)

    def record_execution(self, result: ExecutionResult):
        with self._lock:
            if result.status == ExecutionStatus.SENT:
                self.executions_sent += 1
            elif result.status == ExecutionStatus.FAILED:
                self.executions_failed += 1
            else:
                self.executions_dry_run += 1

    def record_error(self):
        with self._lock:
            self.errors += 1

    def get_summary(self) -> str:
        runtime = datetime.now() - self.start_time

        return (
            f"\n{'='*60}\n"
            f"📊 BOT STATISTICS\n"
            f"{'='*60}\n"
            f"Runtime: {runtime}\n"
            f"Scans: {self.scan_count} ({self.items_scanned} pair/loan items)\n"
            f"Skipped for liquidity: {self.liquidity_skips}\n"
            f"Candidates (out > loan): {self.candidates}\n"
            f"Sent: {self.executions_sent} | Failed: {self.executions_failed} | "
            f"Dry run: {self.executions_dry_run}\n"
            f"Best gross profit: {format_units(self.best_profit)}\n"
            f"Errors: {self.errors}\n"
            f"{'='*60}\n"
        )


# =============================================================================
# BOT MODES
# =============================================================================

class BotMode:
    SCAN_ONLY = "scan_only"      # Full pipeline, never sends
    EXECUTE = "execute"          # Real execution (requires DRY_RUN_MODE=False)


# =============================================================================
# MAIN BOT CLASS
# =============================================================================

class ArbitrageBot:
    """
    Scan orchestrator.

    Every cycle walks the scan plan (loan sizes x pairs). For each item:
    liquidity gate -> forward and reverse route -> fee/gas guard ->
    cooldown -> flash swap. Nothing survives between cycles except the
    ExecutionGate held by the decider.
    """

    def __init__(
        self,
        *,
        reserves: ReserveReader,
        evaluator: RouteEvaluator,
        decider: TradeDecider,
        executor: ExecutionEngine,
        pairs: Sequence[PairConfig] = SCAN_PAIRS,
        loan_sizes: Sequence[int] = LOAN_SIZES,
        scan_interval: float = SCAN_INTERVAL_SECONDS,
        max_workers: int = 1,
        scan_w3: Optional[Web3] = None,
        relay_w3: Optional[Web3] = None,
        mode: str = BotMode.SCAN_ONLY,
    ):
        self.reserves = reserves
        self.evaluator = evaluator
        self.decider = decider
        self.executor = executor
        self.pairs = list(pairs)
        self.loan_sizes = list(loan_sizes)
        self.scan_interval = scan_interval
        self.max_workers = max(1, max_workers)
        self.scan_w3 = scan_w3
        self.relay_w3 = relay_w3
        self.mode = mode
        self.running = False
        self.stats = StatisticsTracker()

    def install_signal_handlers(self):
        signal.signal(signal.SIGINT, self._handle_shutdown)
        signal.signal(signal.SIGTERM, self._handle_shutdown)

    def _handle_shutdown(self, signum, frame):
        """Handle shutdown signals gracefully"""
        logger.info("\n🛑 Shutdown signal received...")
        self.running = False

    def check_prerequisites(self) -> bool:
        """Check RPC health and wallet before starting"""
        logger.info("Checking prerequisites...")

        # 1. Scan RPC health
        if self.scan_w3 is not None:
            rpc = RPCHealth(self.scan_w3, "scan")
            ok, status = rpc.check()
            if not ok:
                logger.error(f"❌ Scan RPC unhealthy: {status}")
                return False
            logger.info(f"✅ Scan RPC healthy: {status}")

            try:
                chain_id = rpc.get_chain_id()
                if chain_id != CHAIN_ID:
                    logger.error(f"❌ Wrong chain: {chain_id} (expected {CHAIN_ID})")
                    return False
            except Exception as e:
                logger.warning(f"⚠️ Chain id check failed: {e}")

        # 2. Relay fee data and wallet balance
        if self.relay_w3 is not None:
            try:
                gas_gwei = RPCHealth(self.relay_w3, "relay").get_gas_price_gwei()
                logger.info(f"Current gas price (relay): {gas_gwei:.1f} gwei")
                if gas_gwei > MAX_GAS_PRICE_WEI / 10**9:
                    logger.warning(f"⚠️ Gas price {gas_gwei} gwei above ceiling, trades will be held")
            except Exception as e:
                logger.warning(f"⚠️ Relay gas price check failed: {e}")

        if self.scan_w3 is not None:
            try:
                balance = self.scan_w3.eth.get_balance(self.executor.address)
                bnb = Decimal(balance) / Decimal(10**18)
                logger.info(f"BNB balance: {bnb:.4f}")
                if bnb < Decimal("0.01"):
                    logger.warning("⚠️ Low BNB balance for gas!")
            except Exception as e:
                logger.warning(f"⚠️ Balance check failed: {e}")

        logger.info("✅ All prerequisites checked")
        return True

    def scan_item(self, loan_size: int, pair: PairConfig) -> List[ExecutionResult]:
        """Liquidity gate, then both directions through the decision pipeline"""
        results = []

        depth = self.reserves.liquidity_depth(pair.token_a, pair.token_b)
        liquidity = liquidity_guard(depth, loan_size)
        if not liquidity.ok:
            logger.info(f"❌ [{pair.name}] Skipped - not enough liquidity ({liquidity.reason})")
            self.stats.record_liquidity_skip()
            return results

        for route in routes_for(pair, loan_size):
            estimate = self.evaluator.evaluate(route)
            if estimate is None:
                continue

            self.stats.record_candidate(estimate.profit)
            logger.info(f"💰 Candidate {format_estimate(estimate)}")

            decision = self.decider.evaluate(estimate)
            if not decision.allowed:
                continue

            result = self.executor.execute(estimate, decision.fee)
            self.stats.record_execution(result)
            results.append(result)

        return results

    def _safe_scan_item(self, loan_size: int, pair: PairConfig) -> List[ExecutionResult]:
        try:
            return self.scan_item(loan_size, pair)
        except Exception as e:
            logger.error(f"Error scanning {pair.name} @ {format_units(loan_size)}: {e}")
            self.stats.record_error()
            return []

    def run_single_scan(self) -> List[ExecutionResult]:
        """Run a single scan cycle"""
        plan = build_scan_plan(self.pairs, self.loan_sizes)
        start = time.time()
        results = []

        if self.max_workers == 1:
            for loan_size, pair in plan:
                results.extend(self._safe_scan_item(loan_size, pair))
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                futures = [
                    pool.submit(self._safe_scan_item, loan_size, pair)
                    for loan_size, pair in plan
                ]
                for future in as_completed(futures):
                    results.extend(future.result())

        self.stats.record_scan(len(plan))
        logger.info(
            f"Scan done: {len(plan)} items, {len(results)} execution attempts "
            f"({(time.time() - start) * 1000:.0f}ms)"
        )
        return results

    def run(self, max_cycles: Optional[int] = None):
        """
        Main bot loop
        Runs until stopped (or max_cycles, when given)
        """
        logger.info("=" * 60)
        logger.info("🚀 FLASH-SWAP ARBITRAGE BOT STARTING")
        logger.info(f"Mode: {self.mode} | Dry run: {self.executor.dry_run}")
        logger.info(f"Pairs: {', '.join(p.name for p in self.pairs)}")
        logger.info(f"Loan sizes: {', '.join(str(format_units(x)) for x in self.loan_sizes)}")
        logger.info("=" * 60)

        self.running = True
        cycles = 0

        try:
            while self.running:
                try:
                    self.run_single_scan()
                except Exception as e:
                    logger.error(f"Loop error: {e}")
                    self.stats.record_error()

                cycles += 1
                if max_cycles is not None and cycles >= max_cycles:
                    break

                time.sleep(self.scan_interval)

        except KeyboardInterrupt:
            logger.info("\nKeyboard interrupt received")

        finally:
            self.running = False
            logger.info(self.stats.get_summary())
            logger.info("Bot stopped.")


# =============================================================================
# WIRING
# =============================================================================

def build_bot(settings: Settings, mode: str = BotMode.SCAN_ONLY, max_workers: int = 1) -> ArbitrageBot:
    """Create providers and components from loaded settings"""
    logger.info(f"Connecting to RPC: {settings.bsc_rpc}")
    scan_w3 = make_web3(settings.bsc_rpc)
    relay_w3 = make_web3(settings.relay_url)

    if not scan_w3.is_connected():
        raise RuntimeError("Failed to connect to RPC")

    dry_run = settings.dry_run or mode != BotMode.EXECUTE
    gate = ExecutionGate(COOLDOWN_SECONDS)

    return ArbitrageBot(
        reserves=ReserveReader(scan_w3),
        evaluator=RouteEvaluator(RouterVenue(scan_w3), DodoPoolVenue(scan_w3)),
        decider=TradeDecider(relay_w3, gate),
        executor=ExecutionEngine(
            relay_w3,
            settings.flash_receiver,
            settings.private_key,
            TradeLog(settings.trade_log_path),
            dry_run=dry_run,
        ),
        max_workers=max_workers,
        scan_w3=scan_w3,
        relay_w3=relay_w3,
        mode=mode,
    )


# =============================================================================
# ENTRY POINT
# =============================================================================

def main(argv=None):
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="BSC Flash-Swap Arbitrage Bot")
    parser.add_argument(
        "--mode",
        choices=["scan", "execute", "test"],
        default="scan",
        help="Bot mode: scan (never sends), execute (real trades), test (one scan, then exit)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Parallel scan workers (default: 1, sequential)"
    )

    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level)

    mode = BotMode.EXECUTE if args.mode == "execute" else BotMode.SCAN_ONLY
    bot = build_bot(settings, mode=mode, max_workers=args.workers)

    if not bot.check_prerequisites():
        logger.error("Prerequisites check failed. Exiting.")
        sys.exit(1)

    if args.mode == "test":
        logger.info("🧪 QUICK TEST MODE")
        bot.run(max_cycles=1)
        return

    bot.install_signal_handlers()
    bot.run()


if __name__ == "__main__":
    main()
