"""
RPC Manager
Connects to the configured network endpoint and verifies the chain
"""

from typing import Optional
from web3 import Web3
from loguru import logger


class RPCConnectionError(ConnectionError):
    """Raised when the network endpoint is unreachable or on the wrong chain"""


class RPCManager:
    """
    Single-endpoint RPC connection for a deployment run
    """

    def __init__(self, rpc_url: str, expected_chain_id: Optional[int] = None, timeout: int = 30):
        """
        Initialize RPC Manager

        Args:
            rpc_url: HTTP(S) endpoint of the node
            expected_chain_id: Chain id the endpoint must report (None = any)
            timeout: HTTP request timeout in seconds
        """
        self.rpc_url = rpc_url
        self.expected_chain_id = expected_chain_id
        self.timeout = timeout
        self.w3 = None

    def connect(self) -> Web3:
        """
        Create the Web3 instance and check it

        Returns:
            Connected Web3 instance

        Raises:
            RPCConnectionError: If the node is unreachable or reports another chain
        """
        w3 = Web3(Web3.HTTPProvider(self.rpc_url, request_kwargs={'timeout': self.timeout}))

        if not w3.is_connected():
            raise RPCConnectionError(f"Failed to connect to network at {self.rpc_url}")

        chain_id = w3.eth.chain_id

        if self.expected_chain_id is not None and chain_id != self.expected_chain_id:
            raise RPCConnectionError(
                f"Endpoint reports chain id {chain_id}, expected {self.expected_chain_id}"
            )

        logger.debug(f"Connected to {self.rpc_url} (chain id {chain_id})")

        self.w3 = w3
        return w3

    def get_web3(self) -> Web3:
        """Get the Web3 instance, connecting on first use"""
        if self.w3 is None:
            return self.connect()

        return self.w3

