# flasharb/rpc_health.py
"""
RPC Health Monitoring
Builds the scan/relay providers and checks latency and block sync at startup
"""

import time

from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from flasharb.config import RPC_TIMEOUT_SECONDS

MAX_RPC_LATENCY = 2.0  # seconds
MAX_BLOCK_LAG = 5      # blocks


def make_web3(rpc_url: str, timeout: float = RPC_TIMEOUT_SECONDS) -> Web3:
    """HTTP provider with a transport timeout; BSC needs the POA middleware"""
    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


class RPCHealth:
    """
    Check an already-built provider
    """

    def __init__(self, w3: Web3, name: str = "rpc"):
        self.w3 = w3
        self.name = name

    def check(self) -> tuple:
        """
        Check RPC health
        Returns (is_healthy: bool, status_message: str)
        """
        try:
            start = time.time()
            latest = self.w3.eth.block_number
            latency = time.time() - start

            block = self.w3.eth.get_block("latest").number
            lag = abs(latest - block)

            if latency > MAX_RPC_LATENCY:
                return False, f"High latency {latency:.2f}s"

            if lag > MAX_BLOCK_LAG:
                return False, f"Block lag {lag}"

            return True, f"OK (latency={latency:.2f}s, block={latest})"

        except Exception as e:
            return False, str(e)

    def get_chain_id(self) -> int:
        """Get chain ID"""
        return self.w3.eth.chain_id

    def get_gas_price_gwei(self) -> float:
        """Get current gas price in gwei"""
        return self.w3.eth.gas_price / 10**9
