"""
Utilities Package
Configuration, RPC connection and unit conversion
"""

from .rpc_manager import RPCManager, RPCConnectionError
from .settings import ConfigError, DeployConfig, load_config
from .units import format_ether, parse_ether, parse_units

__all__ = [
    'RPCManager',
    'RPCConnectionError',
    'ConfigError',
    'DeployConfig',
    'load_config',
    'format_ether',
    'parse_ether',
    'parse_units'
]
