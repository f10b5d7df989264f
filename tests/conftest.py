"""
Shared fixtures for deployer tests
"""

import json
import pytest
from unittest.mock import MagicMock
from eth_account import Account
from hexbytes import HexBytes
from loguru import logger

from utils.settings import DeployConfig


# Well-known test keys (Hardhat default accounts #0 and #1)
DEPLOYER_KEY = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'
SECOND_KEY = '0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d'

HARDHAT_MNEMONIC = 'test test test test test test test test test test test junk'

DEPLOYED_ADDRESS = '0x' + 'b' * 40
TX_HASH = HexBytes('0x' + 'ab' * 32)

FORTUNE_WHEEL_ABI = [
    {
        "inputs": [
            {"internalType": "uint256", "name": "_spinCost", "type": "uint256"},
            {"internalType": "uint256", "name": "_houseFeePercent", "type": "uint256"}
        ],
        "stateMutability": "nonpayable",
        "type": "constructor"
    },
    {
        "inputs": [],
        "name": "spin",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function"
    }
]


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks added during a test (they may point at captured streams)"""
    yield
    logger.remove()


@pytest.fixture
def deployer_account():
    return Account.from_key(DEPLOYER_KEY)


@pytest.fixture
def config():
    """Deployment configuration for a local node"""
    return DeployConfig(
        network='localhost',
        rpc_url='http://127.0.0.1:8545',
        chain_id=31337,
        private_keys=(DEPLOYER_KEY,),
        confirmation_timeout=30,
        poll_latency=0.1
    )


@pytest.fixture
def artifacts_dir(tmp_path):
    """Hardhat-style artifacts tree with a FortuneWheel build"""
    contract_dir = tmp_path / 'artifacts' / 'contracts' / 'FortuneWheel.sol'
    contract_dir.mkdir(parents=True)

    with open(contract_dir / 'FortuneWheel.json', 'w') as f:
        json.dump({
            "_format": "hh-sol-artifact-1",
            "contractName": "FortuneWheel",
            "sourceName": "contracts/FortuneWheel.sol",
            "abi": FORTUNE_WHEEL_ABI,
            "bytecode": "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"
        }, f)

    return tmp_path / 'artifacts'


@pytest.fixture
def w3():
    """Mock Web3 instance for a chain that accepts everything"""
    w3 = MagicMock()
    w3.eth.chain_id = 31337
    w3.eth.gas_price = 1_000_000_000
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.send_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        'status': 1,
        'contractAddress': DEPLOYED_ADDRESS,
        'blockNumber': 12,
        'gasUsed': 450000
    }
    return w3
