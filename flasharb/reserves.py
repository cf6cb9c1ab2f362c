# flasharb/reserves.py
"""
Pool depth reads on the primary AMM (PancakeSwap v2 factory + pair).
Only this venue is inspected; the DODO pool depth is not read.
"""

import logging

from web3 import Web3

from flasharb.pairs import PANCAKE_V2_FACTORY, ZERO_ADDRESS

logger = logging.getLogger(__name__)

FACTORY_ABI = [
    {
        "name": "getPair",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "tokenA", "type": "address"},
            {"name": "tokenB", "type": "address"},
        ],
        "outputs": [{"name": "pair", "type": "address"}],
    },
]

PAIR_ABI = [
    {
        "name": "getReserves",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "reserve0", "type": "uint112"},
            {"name": "reserve1", "type": "uint112"},
            {"name": "blockTimestampLast", "type": "uint32"},
        ],
    },
]


class ReserveReader:
    """Reads combined reserve depth (reserve0 + reserve1) for a token pair"""

    def __init__(self, w3: Web3, factory: str = PANCAKE_V2_FACTORY):
        self.w3 = w3
        self.factory = w3.eth.contract(
            address=Web3.to_checksum_address(factory),
            abi=FACTORY_ABI,
        )

    def liquidity_depth(self, token_a: str, token_b: str) -> int:
        """
        Returns 0 when no pair exists or on any lookup error.
        Never raises.
        """
        try:
            pair_addr = self.factory.functions.getPair(
                Web3.to_checksum_address(token_a),
                Web3.to_checksum_address(token_b),
            ).call()

            if not pair_addr or pair_addr == ZERO_ADDRESS:
                return 0

            pair = self.w3.eth.contract(address=pair_addr, abi=PAIR_ABI)
            r0, r1, _ = pair.functions.getReserves().call()
            return int(r0) + int(r1)

        except Exception as e:
            logger.debug(f"Reserve read failed for {token_a}/{token_b}: {e}")
            return 0
