"""
System Check Script
Verifies configuration, connection, signer and artifact before deploying

Run from the project root: python -m scripts.check_system
"""

import sys
from loguru import logger

from blockchain.artifacts import ArtifactRegistry
from deployer.wallet_manager import WalletManager
from utils.rpc_manager import RPCManager
from utils.settings import ConfigError, DeployConfig, load_config
from utils.units import format_ether, parse_ether


def check_configuration(config: DeployConfig) -> bool:
    """Report the resolved configuration"""
    logger.info("Checking configuration...")

    logger.info(f"  Network: {config.network} ({config.rpc_url})")
    logger.info(f"  Contract: {config.contract_name}")
    logger.info(f"  Spin cost: {config.spin_cost_ether} ETH ({config.spin_cost_wei} wei)")
    logger.info(f"  House fee: {config.house_fee_percent}%")

    if config.private_keys:
        logger.info(f"  Signer source: {len(config.private_keys)} private key(s)")
    elif config.mnemonic:
        logger.info(f"  Signer source: mnemonic ({config.mnemonic_account_count} account(s))")
    else:
        logger.warning("  Signer source: node-managed accounts (no key configured)")

    logger.success("  ✓ Configuration valid")
    return True


def check_rpc_connection(rpc_manager: RPCManager) -> bool:
    """Check the RPC endpoint and chain id"""
    logger.info("Checking RPC connection...")

    try:
        w3 = rpc_manager.connect()
        block = w3.eth.block_number
        logger.success(f"  ✓ Connected (chain id {w3.eth.chain_id}, block {block})")
        return True
    except Exception as e:
        logger.error(f"  ✗ {e}")
        return False


def check_deployer_balance(wallet_manager: WalletManager, min_balance_ether: str) -> bool:
    """Check that the first signer exists and can pay for the deployment"""
    logger.info("Checking deployer balance...")

    try:
        signers = wallet_manager.get_signers()
    except Exception as e:
        logger.error(f"  ✗ Could not load signers: {e}")
        return False

    if not signers:
        logger.error("  ✗ No signers available")
        return False

    deployer = signers[0]

    try:
        balance = wallet_manager.get_balance(deployer)
    except Exception as e:
        logger.error(f"  ✗ Error checking balance of {deployer.address}: {e}")
        return False

    logger.info(f"  Deployer {deployer.address}: {format_ether(balance)} ETH")

    if balance < parse_ether(min_balance_ether):
        logger.error(f"  ✗ Balance below {min_balance_ether} ETH")
        return False

    logger.success("  ✓ Deployer balance sufficient")
    return True


def check_artifact(registry: ArtifactRegistry, contract_name: str, expected_args: int) -> bool:
    """Check the compiled artifact exists and its constructor arity"""
    logger.info("Checking contract artifact...")

    try:
        artifact = registry.get_artifact(contract_name)
    except Exception as e:
        logger.error(f"  ✗ {e}")
        return False

    inputs = artifact.constructor_inputs

    if len(inputs) != expected_args:
        logger.error(
            f"  ✗ {contract_name} constructor takes {len(inputs)} arguments, "
            f"deployment passes {expected_args}"
        )
        return False

    logger.success(f"  ✓ {artifact.source_path}")
    return True


def run_checks(
    config: DeployConfig,
    rpc_manager: RPCManager = None,
    wallet_manager: WalletManager = None,
    registry: ArtifactRegistry = None
) -> int:
    """
    Run all checks; no transaction is sent

    Returns:
        0 if every check passed, else 1
    """
    rpc_manager = rpc_manager or RPCManager(config.rpc_url, expected_chain_id=config.chain_id)
    registry = registry or ArtifactRegistry(config.artifacts_dir)

    results = [
        ("Configuration", check_configuration(config)),
        ("Contract Artifact", check_artifact(registry, config.contract_name, len(config.constructor_args))),
        ("RPC Connection", check_rpc_connection(rpc_manager))
    ]

    if results[-1][1]:
        wallet_manager = wallet_manager or WalletManager(
            rpc_manager.get_web3(),
            private_keys=config.private_keys,
            mnemonic=config.mnemonic,
            mnemonic_account_count=config.mnemonic_account_count
        )
        results.append(
            ("Deployer Balance", check_deployer_balance(wallet_manager, config.min_deployer_balance_ether))
        )
    else:
        results.append(("Deployer Balance", False))

    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info(f"Total: {passed}/{len(results)} checks passed")

    if passed == len(results):
        logger.success("✅ Ready to deploy: python main.py")
        return 0

    logger.error("❌ Not ready - fix issues above")
    return 1


def main() -> int:
    """Load configuration and run all system checks"""
    try:
        config = load_config()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    return run_checks(config)


if __name__ == "__main__":
    sys.exit(main())
