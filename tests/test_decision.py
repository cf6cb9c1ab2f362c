"""Fee/gas guard followed by the cooldown claim."""

from unittest.mock import MagicMock

import pytest

from flasharb.decision import TradeDecider
from flasharb.gas import FeeSnapshot
from flasharb.throttle import ExecutionGate

from tests.fakes import GWEI, WEI


@pytest.fixture
def gate(clock):
    return ExecutionGate(30, clock=clock)


@pytest.fixture
def decider(relay_w3, gate):
    return TradeDecider(
        relay_w3,
        gate,
        gas_limit=600_000,
        min_profit=25 * WEI,
        max_gas_price_wei=15 * GWEI,
    )


class TestCheckFees:
    def test_pure_check_does_not_claim_cooldown(self, decider, gate, make_estimate):
        decision = decider.check_fees(make_estimate(40 * WEI), FeeSnapshot(5 * GWEI))

        assert decision.allowed
        assert gate.last_trade_timestamp is None

    def test_below_floor(self, decider, make_estimate):
        decision = decider.check_fees(make_estimate(10 * WEI), FeeSnapshot(5 * GWEI))

        assert not decision.allowed
        assert decision.reason.startswith("Profit guard failed")
        assert "REJECTED" in str(decision)


class TestEvaluate:
    def test_profitable_route_claims_cooldown(self, decider, gate, clock, make_estimate):
        decision = decider.evaluate(make_estimate(40 * WEI))

        assert decision.allowed
        assert decision.fee.gas_price_wei == 5 * GWEI
        assert gate.last_trade_timestamp == clock.now

    def test_fee_rejection_leaves_cooldown_untouched(self, decider, relay_w3, gate, make_estimate):
        relay_w3.eth.gas_price = 20 * GWEI

        decision = decider.evaluate(make_estimate(10_000 * WEI))

        assert not decision.allowed
        assert "Gas too high" in decision.reason
        assert gate.last_trade_timestamp is None

    def test_second_route_five_seconds_later_is_held(self, decider, clock, make_estimate):
        assert decider.evaluate(make_estimate(40 * WEI)).allowed

        clock.advance(5)
        second = decider.evaluate(make_estimate(80 * WEI))

        assert not second.allowed
        assert second.reason == "Cooldown active"

    def test_route_after_cooldown_may_execute(self, decider, clock, make_estimate):
        assert decider.evaluate(make_estimate(40 * WEI)).allowed

        clock.advance(30)

        assert decider.evaluate(make_estimate(40 * WEI)).allowed

    def test_default_fee_is_used_when_relay_has_none(self, gate, make_estimate):
        relay = MagicMock()
        relay.eth.gas_price = 0
        decider = TradeDecider(relay, gate)

        decision = decider.evaluate(make_estimate(40 * WEI))

        assert decision.allowed
        assert decision.fee.is_default
        assert decision.details["default_fee"] is True
