"""Liquidity gate and Pancake reserve reads."""

from unittest.mock import MagicMock

import pytest

from flasharb.filters.liquidity_check import liquidity_guard
from flasharb.pairs import USDT, VAI, ZERO_ADDRESS
from flasharb.reserves import ReserveReader

from tests.fakes import WEI

PAIR_ADDRESS = "0x" + "44" * 20


def _reserve_w3(pair_address=PAIR_ADDRESS, reserves=(0, 0, 0), side_effect=None):
    # factory and pair contracts share one mock; each ABI call is configured separately
    w3 = MagicMock()
    functions = w3.eth.contract.return_value.functions
    if side_effect is not None:
        functions.getPair.return_value.call.side_effect = side_effect
    else:
        functions.getPair.return_value.call.return_value = pair_address
    functions.getReserves.return_value.call.return_value = reserves
    return w3


class TestLiquidityGuard:
    def test_depth_three_times_loan_passes(self):
        result = liquidity_guard(30_000 * WEI, 10_000 * WEI)

        assert result.ok
        assert result.required == 20_000 * WEI

    @pytest.mark.parametrize(
        "depth, loan, expected",
        [
            (20_000, 10_000, True),
            (19_999, 10_000, False),
            (1, 0, True),
            (100, 51, False),
        ],
    )
    def test_passes_iff_depth_covers_twice_the_loan(self, depth, loan, expected):
        assert liquidity_guard(depth, loan).ok is expected

    def test_zero_depth_always_fails(self):
        result = liquidity_guard(0, 0)

        assert not result.ok
        assert "No pool" in result.reason

    def test_custom_multiplier(self):
        assert liquidity_guard(25, 10, multiplier=3).ok is False
        assert liquidity_guard(30, 10, multiplier=3).ok is True


class TestReserveReader:
    def test_depth_is_sum_of_reserves(self):
        w3 = _reserve_w3(reserves=(12_000 * WEI, 18_000 * WEI, 1700000000))
        reader = ReserveReader(w3)

        assert reader.liquidity_depth(USDT, VAI) == 30_000 * WEI

    def test_missing_pair_is_zero_depth(self):
        w3 = _reserve_w3(pair_address=ZERO_ADDRESS, reserves=(5, 5, 0))
        reader = ReserveReader(w3)

        assert reader.liquidity_depth(USDT, VAI) == 0
        w3.eth.contract.return_value.functions.getReserves.assert_not_called()

    def test_lookup_error_is_zero_depth(self):
        reader = ReserveReader(_reserve_w3(side_effect=Exception("connection reset")))

        assert reader.liquidity_depth(USDT, VAI) == 0

    def test_scenario_depth_feeds_gate(self):
        w3 = _reserve_w3(reserves=(15_000 * WEI, 15_000 * WEI, 0))
        depth = ReserveReader(w3).liquidity_depth(USDT, VAI)

        assert liquidity_guard(depth, 10_000 * WEI).ok
        assert not liquidity_guard(depth, 50_000 * WEI).ok
