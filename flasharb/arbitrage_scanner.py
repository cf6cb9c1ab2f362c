# flasharb/arbitrage_scanner.py
"""
Round-Trip Route Evaluator
Borrow -> leg 1 -> leg 2 -> repay, across the AMM router and a DODO pool
"""

import logging
from dataclasses import dataclass
from enum import Enum
from itertools import product
from typing import Iterable, List, Optional, Tuple

from flasharb.pairs import PairConfig, format_units, get_symbol
from flasharb.quote_engine import DodoPoolVenue, QuoteResult, RouterVenue

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

class Direction(Enum):
    FORWARD = "Pancake→DODO"   # router first, pool second
    REVERSE = "DODO→Pancake"   # pool first, router second


@dataclass(frozen=True)
class Route:
    """Transient (pair, loan size, direction) triple"""
    pair: PairConfig
    loan_size: int
    direction: Direction

    @property
    def token_in(self) -> str:
        """Token borrowed by the flash swap"""
        if self.direction is Direction.FORWARD:
            return self.pair.token_a
        return self.pair.token_b

    @property
    def token_out(self) -> str:
        if self.direction is Direction.FORWARD:
            return self.pair.token_b
        return self.pair.token_a

    @property
    def label(self) -> str:
        return f"{self.direction.value} {self.pair.name}"


@dataclass(frozen=True)
class ProfitEstimate:
    """Only built when both legs quoted and final output exceeds the loan"""
    route: Route
    intermediate: int
    final_output: int

    @property
    def profit(self) -> int:
        return self.final_output - self.route.loan_size


@dataclass(frozen=True)
class RouteLegs:
    """Raw leg quotes for one route, kept for inspection and logging"""
    route: Route
    first: QuoteResult
    second: QuoteResult

    @property
    def final_output(self) -> int:
        if not (self.first.is_valid and self.second.is_valid):
            return 0
        return self.second.amount


# =============================================================================
# SCAN PLAN
# =============================================================================

def build_scan_plan(
    pairs: Iterable[PairConfig],
    loan_sizes: Iterable[int],
) -> List[Tuple[int, PairConfig]]:
    """
    Loan size major, pair minor: every pair is tried at the smallest
    loan before any pair is tried at the next size.
    """
    return list(product(loan_sizes, pairs))


# =============================================================================
# ROUTE EVALUATOR
# =============================================================================

class RouteEvaluator:
    """
    Composes two venue quotes into a round-trip estimate.

    Both legs are always requested, even when the first leg is
    unavailable; the shared final_output > loan_size check discards it.
    """

    def __init__(self, router_venue: RouterVenue, pool_venue: DodoPoolVenue):
        self.router_venue = router_venue
        self.pool_venue = pool_venue

    def quote_legs(self, route: Route) -> RouteLegs:
        pair = route.pair

        if route.direction is Direction.FORWARD:
            first = self.router_venue.quote([pair.token_a, pair.token_b], route.loan_size)
            second = self.pool_venue.quote(pair.dodo_pool, first.amount)
        else:
            first = self.pool_venue.quote(pair.dodo_pool, route.loan_size)
            second = self.router_venue.quote([pair.token_b, pair.token_a], first.amount)

        return RouteLegs(route=route, first=first, second=second)

    def evaluate(self, route: Route) -> Optional[ProfitEstimate]:
        legs = self.quote_legs(route)
        final_output = legs.final_output

        if final_output <= route.loan_size:
            logger.debug(
                f"[{route.label}] no opportunity "
                f"(loan={format_units(route.loan_size)}, out={format_units(final_output)})"
            )
            return None

        return ProfitEstimate(
            route=route,
            intermediate=legs.first.amount,
            final_output=final_output,
        )


def routes_for(pair: PairConfig, loan_size: int) -> List[Route]:
    """Forward first, then reverse"""
    return [Route(pair=pair, loan_size=loan_size, direction=d) for d in Direction]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def format_estimate(estimate: ProfitEstimate) -> str:
    """Format a candidate for logging"""
    route = estimate.route
    return (
        f"[{route.label}] "
        f"{get_symbol(route.token_in)} → {get_symbol(route.token_out)} → {get_symbol(route.token_in)} | "
        f"Loan: {format_units(route.loan_size)} | "
        f"Out: {format_units(estimate.final_output)} | "
        f"Profit: {format_units(estimate.profit)}"
    )
