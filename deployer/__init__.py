"""
Deployer Package
Deployment procedure, signer resolution and deployment records
"""

from .engine import DeploymentResult, deploy_fortune_wheel
from .wallet_manager import Signer, WalletManager

__all__ = ['DeploymentResult', 'deploy_fortune_wheel', 'Signer', 'WalletManager']
