"""Shared fixtures: a controllable clock, sample estimates and a mocked relay."""

from unittest.mock import MagicMock

import pytest
from web3 import Web3

from flasharb.arbitrage_scanner import Direction, ProfitEstimate, Route
from flasharb.pairs import SCAN_PAIRS
from flasharb.trade_log import TradeLog

from tests.fakes import GWEI, WEI, FakeClock

RECEIVER = Web3.to_checksum_address("0x" + "33" * 20)
WALLET = Web3.to_checksum_address("0x" + "11" * 20)
TX_HASH = bytes.fromhex("ab" * 32)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pair():
    return SCAN_PAIRS[0]


@pytest.fixture
def make_estimate(pair):
    def _make(profit: int, loan_size: int = 10_000 * WEI, direction=Direction.FORWARD, pair=pair):
        route = Route(pair=pair, loan_size=loan_size, direction=direction)
        return ProfitEstimate(route=route, intermediate=loan_size, final_output=loan_size + profit)
    return _make


@pytest.fixture
def relay_w3():
    w3 = MagicMock()
    w3.eth.gas_price = 5 * GWEI
    account = MagicMock()
    account.address = WALLET
    account.sign_transaction.return_value.raw_transaction = b"\x01\x02"
    w3.eth.account.from_key.return_value = account
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.contract.return_value.functions.flashSwap.return_value.build_transaction.return_value = {
        "to": RECEIVER,
        "data": "0x",
    }
    return w3


@pytest.fixture
def trade_log(tmp_path):
    log = TradeLog(tmp_path / "profit-log.txt")
    yield log
    log.close()
