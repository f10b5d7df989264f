"""
Transaction Builder
Constructs contract creation transactions
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger


class TransactionBuilder:
    """
    Fills in gas, gas price, nonce and chain id for deployment transactions
    """

    def __init__(
        self,
        w3: Web3,
        gas_limit_buffer: float = 1.2,
        default_gas_limit: int = 3_000_000,
        chain_id: Optional[int] = None
    ):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            gas_limit_buffer: Multiplier applied to the gas estimate
            default_gas_limit: Gas limit used when estimation fails
            chain_id: Chain id (None = ask the node)
        """
        self.w3 = w3
        self.gas_limit_buffer = gas_limit_buffer
        self.default_gas_limit = default_gas_limit
        self.chain_id = chain_id

    def estimate_gas_limit(self, constructor, from_address: str) -> int:
        """
        Estimate gas for a constructor call with a safety buffer

        Args:
            constructor: Bound web3 ContractConstructor
            from_address: Deployer address

        Returns:
            Gas limit
        """
        try:
            gas_estimate = constructor.estimate_gas({'from': from_address})
            gas_limit = int(gas_estimate * self.gas_limit_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            gas_limit = self.default_gas_limit

        logger.debug(f"Gas limit: {gas_limit}")
        return gas_limit

    def build_deployment_tx(self, constructor, from_address: str) -> Dict:
        """
        Build a contract creation transaction

        Args:
            constructor: Bound web3 ContractConstructor
            from_address: Deployer address

        Returns:
            Transaction dict ready for signing
        """
        from_address = Web3.to_checksum_address(from_address)

        nonce = self.w3.eth.get_transaction_count(from_address, 'pending')
        gas_price = self.w3.eth.gas_price
        chain_id = self.chain_id if self.chain_id is not None else self.w3.eth.chain_id

        tx_params = {
            'from': from_address,
            'nonce': nonce,
            'gas': self.estimate_gas_limit(constructor, from_address),
            'gasPrice': gas_price,
            'chainId': chain_id
        }

        transaction = constructor.build_transaction(tx_params)

        logger.debug(
            f"Deployment tx: nonce={nonce} gas={tx_params['gas']} "
            f"gasPrice={Web3.from_wei(gas_price, 'gwei')} gwei chainId={chain_id}"
        )

        return transaction
