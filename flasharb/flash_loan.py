# flasharb/flash_loan.py
"""
Flash-Swap Receiver Integration
Builds the calldata the receiver contract decodes in its callback
"""

from typing import List

from eth_abi import encode
from web3 import Web3

from flasharb.arbitrage_scanner import Route
from flasharb.pairs import PANCAKE_V2_ROUTER

# =============================================================================
# RECEIVER ABI
# =============================================================================

FLASH_RECEIVER_ABI = [
    {
        "name": "flashSwap",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "tokenBorrow", "type": "address"},
            {"name": "amount", "type": "uint256"},
            {"name": "data", "type": "bytes"},
        ],
        "outputs": [],
    },
]

# Decode order on the receiver side. Must not change.
PARAMS_TYPES = ["address[]", "address[]", "address[]", "address[]"]


def _checksum(addresses: List[str]) -> List[str]:
    return [Web3.to_checksum_address(a) for a in addresses]


def encode_arbitrage_params(
    forward_path: List[str],
    return_path: List[str],
    routers: List[str],
    reserved: List[str] = None,
) -> bytes:
    """
    (forward path, return path, reserved - always empty today, routers)
    """
    return encode(
        PARAMS_TYPES,
        [
            _checksum(forward_path),
            _checksum(return_path),
            _checksum(reserved or []),
            _checksum(routers),
        ],
    )


def encode_route(route: Route, router: str = PANCAKE_V2_ROUTER) -> bytes:
    """Payload for one route: sell token_in for token_out, then back"""
    return encode_arbitrage_params(
        forward_path=[route.token_in, route.token_out],
        return_path=[route.token_out, route.token_in],
        routers=[router],
    )
