"""
Artifact Registry
Loads compiled Hardhat artifacts and hands out contract factories
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from .contract_factory import ContractFactory
from .exceptions import DeploymentError
from .transaction_builder import TransactionBuilder


@dataclass(frozen=True)
class ContractArtifact:
    """Compiler output for one contract"""

    contract_name: str
    abi: List[Dict]
    bytecode: str
    source_path: Optional[str] = None

    @property
    def constructor_inputs(self) -> List[Dict]:
        """Constructor inputs declared in the ABI (empty if no constructor)"""
        for entry in self.abi:
            if entry.get('type') == 'constructor':
                return list(entry.get('inputs', []))

        return []

    @classmethod
    def from_json(cls, data: Dict, contract_name: str, source_path: Optional[str] = None) -> 'ContractArtifact':
        """
        Build an artifact from parsed Hardhat JSON

        Raises:
            DeploymentError: If abi or bytecode is missing
        """
        abi = data.get('abi')
        bytecode = data.get('bytecode')

        # solc standard JSON nests bytecode under evm.bytecode.object
        if isinstance(bytecode, dict):
            bytecode = bytecode.get('object')

        if not isinstance(abi, list):
            raise DeploymentError(f"Artifact for {contract_name} has no ABI")

        if not bytecode or bytecode in ('0x', '0x0'):
            raise DeploymentError(
                f"Artifact for {contract_name} has no bytecode (abstract contract or interface?)"
            )

        if not bytecode.startswith('0x'):
            bytecode = '0x' + bytecode

        return cls(
            contract_name=data.get('contractName', contract_name),
            abi=abi,
            bytecode=bytecode,
            source_path=source_path
        )


class ArtifactRegistry:
    """
    Looks up build artifacts by contract name

    Follows the Hardhat layout: artifacts/contracts/<Name>.sol/<Name>.json
    """

    def __init__(self, artifacts_dir: str = 'artifacts'):
        """
        Initialize Artifact Registry

        Args:
            artifacts_dir: Root of the compiler output
        """
        self.artifacts_dir = Path(artifacts_dir)
        self._cache: Dict[str, ContractArtifact] = {}

    def find_artifact_path(self, contract_name: str) -> Path:
        """
        Locate the artifact file for a contract

        Raises:
            DeploymentError: If no artifact exists
        """
        default_path = self.artifacts_dir / 'contracts' / f'{contract_name}.sol' / f'{contract_name}.json'

        if default_path.exists():
            return default_path

        if self.artifacts_dir.is_dir():
            # contract declared in a differently named source file
            for candidate in sorted(self.artifacts_dir.rglob(f'{contract_name}.json')):
                if candidate.parent.name != 'build-info' and not candidate.name.endswith('.dbg.json'):
                    return candidate

        raise DeploymentError(
            f"Contract artifact not found: {default_path}. Run 'npx hardhat compile' first"
        )

    def get_artifact(self, contract_name: str) -> ContractArtifact:
        """
        Load a contract artifact (cached)

        Args:
            contract_name: Contract name, e.g. 'FortuneWheel'

        Returns:
            ContractArtifact
        """
        if contract_name in self._cache:
            return self._cache[contract_name]

        path = self.find_artifact_path(contract_name)

        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DeploymentError(f"Invalid artifact JSON at {path}: {e}") from e

        artifact = ContractArtifact.from_json(data, contract_name, source_path=str(path))
        self._cache[contract_name] = artifact

        logger.debug(f"Loaded {contract_name} artifact from {path}")
        return artifact

    def get_contract_factory(
        self,
        contract_name: str,
        w3: Web3,
        transaction_builder: Optional[TransactionBuilder] = None
    ) -> ContractFactory:
        """
        Get a deployment factory for a named contract

        Args:
            contract_name: Contract name
            w3: Connected Web3 instance
            transaction_builder: Gas/nonce settings (None = defaults)

        Returns:
            ContractFactory
        """
        return ContractFactory(w3, self.get_artifact(contract_name), transaction_builder)
