"""
Deployment Records
Writes the details of a confirmed deployment to a JSON file
"""

import json
import time
from pathlib import Path
from typing import Dict, Sequence
from web3 import Web3


def build_record(
    deployed,
    deployer_address: str,
    network: str,
    chain_id: int,
    constructor_args: Sequence
) -> Dict:
    """
    Build the JSON-serializable record of a deployment

    Args:
        deployed: Confirmed DeployedContract
        deployer_address: Address that sent the transaction
        network: Network name
        chain_id: Chain id
        constructor_args: Arguments passed to the constructor

    Returns:
        Record dict
    """
    receipt = deployed.receipt or {}

    return {
        'contract': deployed.contract_name,
        'address': deployed.address,
        'transaction_hash': Web3.to_hex(deployed.tx_hash),
        'deployer': deployer_address,
        'network': network,
        'chain_id': chain_id,
        # uint256 values exceed JSON number precision in most consumers
        'constructor_args': [str(arg) if isinstance(arg, int) else arg for arg in constructor_args],
        'block_number': receipt.get('blockNumber'),
        'gas_used': receipt.get('gasUsed'),
        'deployed_at': int(time.time()),
        'abi': deployed.abi
    }


def write_record(record: Dict, output_file: str) -> Path:
    """
    Write a deployment record, creating parent directories

    Returns:
        Path written
    """
    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(record, f, indent=4)

    return path
