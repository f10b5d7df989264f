"""
Contract Factory
Submits contract creation transactions and waits for them to be mined
"""

from typing import Any, Optional
from web3 import Web3
from loguru import logger

from .exceptions import DeploymentError
from .transaction_builder import TransactionBuilder


class DeployedContract:
    """
    Handle for a submitted deployment

    The address is only known once the transaction has been confirmed.
    """

    def __init__(self, w3: Web3, contract_name: str, tx_hash, abi):
        self.w3 = w3
        self.contract_name = contract_name
        self.tx_hash = tx_hash
        self.abi = abi
        self.receipt = None
        self.address: Optional[str] = None

    @property
    def tx_hash_hex(self) -> str:
        return Web3.to_hex(self.tx_hash)

    def wait_for_deployment(self, timeout: float = 120, poll_latency: float = 0.5) -> 'DeployedContract':
        """
        Block until the deployment transaction is mined

        Args:
            timeout: Seconds to wait before giving up
            poll_latency: Seconds between receipt polls

        Returns:
            self, with receipt and address set

        Raises:
            web3.exceptions.TimeExhausted: If no receipt within timeout
            DeploymentError: If the constructor reverted
        """
        logger.debug(f"Waiting for confirmation of {self.tx_hash_hex}...")

        receipt = self.w3.eth.wait_for_transaction_receipt(
            self.tx_hash,
            timeout=timeout,
            poll_latency=poll_latency
        )

        if receipt['status'] != 1:
            raise DeploymentError(
                f"{self.contract_name} deployment reverted (tx {self.tx_hash_hex})"
            )

        contract_address = receipt.get('contractAddress')

        if not contract_address:
            raise DeploymentError(
                f"Receipt for {self.tx_hash_hex} has no contract address"
            )

        self.receipt = receipt
        self.address = Web3.to_checksum_address(contract_address)

        logger.debug(f"Gas used: {receipt.get('gasUsed')}, block: {receipt.get('blockNumber')}")
        return self


class ContractFactory:
    """
    Deploys one compiled contract
    """

    def __init__(self, w3: Web3, artifact, transaction_builder: Optional[TransactionBuilder] = None):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance
            artifact: ContractArtifact with abi and bytecode
            transaction_builder: Builder for gas/nonce/chain id
        """
        self.w3 = w3
        self.artifact = artifact
        self.transaction_builder = transaction_builder or TransactionBuilder(w3)
        self.contract = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    @property
    def contract_name(self) -> str:
        return self.artifact.contract_name

    def check_constructor_args(self, args: tuple):
        """
        Check argument count against the ABI constructor

        Raises:
            DeploymentError: On mismatch
        """
        expected = self.artifact.constructor_inputs

        if len(args) != len(expected):
            signature = ', '.join(f"{i.get('type')} {i.get('name')}".strip() for i in expected)
            raise DeploymentError(
                f"{self.contract_name} constructor({signature}) expects "
                f"{len(expected)} arguments, got {len(args)}"
            )

    def deploy(self, *args: Any, signer) -> DeployedContract:
        """
        Submit the deployment transaction

        Args:
            *args: Constructor arguments
            signer: Signer that pays for and authorizes the deployment

        Returns:
            DeployedContract (not yet confirmed)
        """
        self.check_constructor_args(args)

        constructor = self.contract.constructor(*args)
        transaction = self.transaction_builder.build_deployment_tx(
            constructor,
            signer.address
        )

        tx_hash = signer.send_transaction(self.w3, transaction)

        logger.debug(f"{self.contract_name} deployment sent: {Web3.to_hex(tx_hash)}")

        return DeployedContract(self.w3, self.contract_name, tx_hash, self.artifact.abi)
