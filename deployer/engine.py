"""
Deployer Engine
Deploys the FortuneWheel contract and reports the outcome as a result
"""

from dataclasses import dataclass
from typing import Optional
from web3 import Web3
from loguru import logger

from blockchain.artifacts import ArtifactRegistry
from blockchain.exceptions import DeploymentError
from blockchain.transaction_builder import TransactionBuilder
from utils.rpc_manager import RPCManager
from utils.settings import DeployConfig

from .records import build_record, write_record
from .wallet_manager import WalletManager


@dataclass
class DeploymentResult:
    """Outcome of one deployment run"""

    success: bool
    contract_name: str
    deployer: Optional[str] = None
    address: Optional[str] = None
    tx_hash: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1


def deploy_fortune_wheel(
    config: DeployConfig,
    w3: Optional[Web3] = None,
    wallet_manager: Optional[WalletManager] = None,
    artifact_registry: Optional[ArtifactRegistry] = None
) -> DeploymentResult:
    """
    Deploy the contract named in the config with its two constructor arguments

    Steps: pick the first available signer, load the factory, send exactly one
    deployment transaction and wait once for its confirmation. Any failure
    ends the run; nothing is retried.

    Args:
        config: Deployment configuration
        w3: Connected Web3 (None = connect to config.rpc_url)
        wallet_manager: Signer source (None = built from config)
        artifact_registry: Artifact source (None = config.artifacts_dir)

    Returns:
        DeploymentResult; never raises for deployment failures
    """
    contract_name = config.contract_name
    deployer_address = None
    tx_hash = None

    try:
        if w3 is None:
            w3 = RPCManager(config.rpc_url, expected_chain_id=config.chain_id).connect()

        if wallet_manager is None:
            wallet_manager = WalletManager(
                w3,
                private_keys=config.private_keys,
                mnemonic=config.mnemonic,
                mnemonic_account_count=config.mnemonic_account_count
            )

        signers = wallet_manager.get_signers()

        if not signers:
            raise DeploymentError(
                "No signers available: set DEPLOYER_PRIVATE_KEY or MNEMONIC, "
                "or use a node with unlocked accounts"
            )

        deployer = signers[0]
        deployer_address = deployer.address
        logger.info(f"Deploying with: {deployer_address}")

        if artifact_registry is None:
            artifact_registry = ArtifactRegistry(config.artifacts_dir)

        factory = artifact_registry.get_contract_factory(
            contract_name,
            w3,
            transaction_builder=TransactionBuilder(
                w3,
                gas_limit_buffer=config.gas_limit_buffer,
                default_gas_limit=config.default_gas_limit,
                chain_id=config.chain_id
            )
        )

        spin_cost_wei, house_fee_percent = config.constructor_args
        deployed = factory.deploy(spin_cost_wei, house_fee_percent, signer=deployer)
        tx_hash = Web3.to_hex(deployed.tx_hash)

        deployed.wait_for_deployment(
            timeout=config.confirmation_timeout,
            poll_latency=config.poll_latency
        )

        logger.info(f"{contract_name} deployed to: {deployed.address}")

    except Exception as e:
        logger.exception(f"{contract_name} deployment failed: {e}")
        return DeploymentResult(
            success=False,
            contract_name=contract_name,
            deployer=deployer_address,
            tx_hash=tx_hash,
            error=e
        )

    if config.deployment_output_file:
        save_deployment_record(config, w3, deployed, deployer_address)

    return DeploymentResult(
        success=True,
        contract_name=contract_name,
        deployer=deployer_address,
        address=deployed.address,
        tx_hash=tx_hash
    )


def save_deployment_record(config: DeployConfig, w3: Web3, deployed, deployer_address: str):
    """Write the deployment record; failures are logged, not raised"""
    try:
        chain_id = config.chain_id if config.chain_id is not None else w3.eth.chain_id

        record = build_record(
            deployed,
            deployer_address,
            network=config.network,
            chain_id=chain_id,
            constructor_args=config.constructor_args
        )
        path = write_record(record, config.deployment_output_file)

        logger.debug(f"Deployment record written to {path}")

    except Exception as e:
        # the contract exists on chain regardless; report and keep the success
        logger.warning(f"Could not write deployment record: {e}")
