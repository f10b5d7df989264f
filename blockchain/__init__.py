"""
Blockchain Interaction Package
Handles build artifacts, contract factories and deployment transactions
"""

from .exceptions import DeploymentError
from .transaction_builder import TransactionBuilder
from .contract_factory import ContractFactory, DeployedContract
from .artifacts import ArtifactRegistry, ContractArtifact

__all__ = [
    'DeploymentError',
    'TransactionBuilder',
    'ContractFactory',
    'DeployedContract',
    'ArtifactRegistry',
    'ContractArtifact'
]
