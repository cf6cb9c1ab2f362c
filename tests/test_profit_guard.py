"""Fee/gas guard and fee snapshot fallback."""

from unittest.mock import MagicMock, PropertyMock

import pytest

from flasharb.config import DEFAULT_GAS_PRICE_WEI
from flasharb.filters.profit_check import profit_guard
from flasharb.gas import FeeSnapshot, estimate_execution_cost, fetch_fee_snapshot

from tests.fakes import GWEI, WEI

FLOOR = 25 * WEI
CEILING = 15 * GWEI
GAS_LIMIT = 600_000


def guard(profit, gas_price_wei):
    return profit_guard(
        profit=profit,
        gas_price_wei=gas_price_wei,
        gas_limit=GAS_LIMIT,
        min_profit=FLOOR,
        max_gas_price_wei=CEILING,
    )


class TestProfitGuard:
    def test_required_profit_at_five_gwei(self):
        result = guard(30 * WEI, 5 * GWEI)

        assert result.gas_cost == 3 * 10**15  # 0.003 BNB
        assert result.required_profit == FLOOR + 6 * 10**15

    def test_positive_profit_below_floor_is_rejected(self):
        result = guard(25 * WEI, 5 * GWEI)

        assert not result.ok
        assert "required" in result.reason

    def test_profit_above_required_is_accepted(self):
        assert guard(30 * WEI, 5 * GWEI).ok

    def test_required_profit_is_a_strict_bound(self):
        required = FLOOR + 2 * estimate_execution_cost(5 * GWEI, GAS_LIMIT)

        assert not guard(required, 5 * GWEI).ok
        assert guard(required + 1, 5 * GWEI).ok

    @pytest.mark.parametrize("profit", [0, 30 * WEI, 10**30])
    def test_gas_above_ceiling_rejected_whatever_the_profit(self, profit):
        result = guard(profit, 20 * GWEI)

        assert not result.ok
        assert "Gas too high" in result.reason

    def test_gas_at_ceiling_is_allowed(self):
        assert guard(100 * WEI, CEILING).ok

    def test_safety_multiplier_scales_gas_cost(self):
        result = profit_guard(
            profit=FLOOR + 10**16,
            gas_price_wei=10 * GWEI,
            gas_limit=GAS_LIMIT,
            min_profit=FLOOR,
            max_gas_price_wei=CEILING,
            safety_multiplier=1,
        )

        # 10 gwei * 600k = 0.006 BNB < 0.01 margin with multiplier 1
        assert result.ok


class TestFeeSnapshot:
    def test_reads_gas_price(self):
        w3 = MagicMock()
        w3.eth.gas_price = 7 * GWEI

        fee = fetch_fee_snapshot(w3)

        assert fee.gas_price_wei == 7 * GWEI
        assert not fee.is_default
        assert fee.gas_price_gwei == 7

    def test_missing_fee_data_uses_default(self):
        w3 = MagicMock()
        w3.eth.gas_price = None

        fee = fetch_fee_snapshot(w3)

        assert fee == FeeSnapshot(gas_price_wei=DEFAULT_GAS_PRICE_WEI, is_default=True)

    def test_rpc_error_uses_default(self):
        w3 = MagicMock()
        type(w3.eth).gas_price = PropertyMock(side_effect=ConnectionError("relay down"))

        fee = fetch_fee_snapshot(w3, default_gas_price_wei=3 * GWEI)

        assert fee.gas_price_wei == 3 * GWEI
        assert fee.is_default
