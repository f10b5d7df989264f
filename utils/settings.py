"""
Deployment Settings
Loads .env and the network registry into an explicit DeployConfig
"""

import os
import math
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple
from dotenv import find_dotenv, load_dotenv

from .units import parse_ether


NETWORKS_CONFIG_PATH = Path(__file__).resolve().parent.parent / 'config' / 'networks.json'

CONTRACT_NAME = 'FortuneWheel'
DEFAULT_SPIN_COST_ETHER = '0.001'
DEFAULT_HOUSE_FEE_PERCENT = 5

LOG_LEVELS = ('TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigError(ValueError):
    """Raised when the deployment configuration is missing or invalid"""


@dataclass(frozen=True)
class DeployConfig:
    """Everything a deployment run needs, resolved before the run starts"""

    network: str
    rpc_url: str
    chain_id: Optional[int] = None
    private_keys: Tuple[str, ...] = ()
    mnemonic: Optional[str] = None
    mnemonic_account_count: int = 1
    artifacts_dir: str = 'artifacts'
    contract_name: str = CONTRACT_NAME
    spin_cost_ether: str = DEFAULT_SPIN_COST_ETHER
    house_fee_percent: int = DEFAULT_HOUSE_FEE_PERCENT
    confirmation_timeout: float = 120.0
    poll_latency: float = 0.5
    gas_limit_buffer: float = 1.2
    default_gas_limit: int = 3_000_000
    deployment_output_file: Optional[str] = None
    min_deployer_balance_ether: str = '0.01'
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def __post_init__(self):
        validate_constructor_args(self.spin_cost_ether, self.house_fee_percent)

        for name, value in (('CONFIRMATION_TIMEOUT', self.confirmation_timeout),
                            ('POLL_LATENCY', self.poll_latency),
                            ('GAS_LIMIT_BUFFER', self.gas_limit_buffer)):
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number")

        if self.confirmation_timeout <= 0:
            raise ConfigError("CONFIRMATION_TIMEOUT must be positive")

        if self.poll_latency <= 0:
            raise ConfigError("POLL_LATENCY must be positive")

        if self.gas_limit_buffer < 1:
            raise ConfigError("GAS_LIMIT_BUFFER must be at least 1.0")

        if self.mnemonic_account_count < 1:
            raise ConfigError("MNEMONIC_ACCOUNT_COUNT must be at least 1")

        try:
            parse_ether(self.min_deployer_balance_ether)
        except ValueError as e:
            raise ConfigError(f"Invalid MIN_DEPLOYER_BALANCE: {e}") from e

        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

    # private keys are credentials; keep them out of logs and tracebacks
    def __repr__(self) -> str:
        return (
            f"DeployConfig(network={self.network!r}, rpc_url={self.rpc_url!r}, "
            f"chain_id={self.chain_id!r}, contract_name={self.contract_name!r}, "
            f"spin_cost_ether={self.spin_cost_ether!r}, "
            f"house_fee_percent={self.house_fee_percent!r})"
        )

    @property
    def spin_cost_wei(self) -> int:
        return parse_ether(self.spin_cost_ether)

    @property
    def constructor_args(self) -> Tuple[int, int]:
        """FortuneWheel constructor arguments: (spin cost in wei, house fee %)"""
        return (self.spin_cost_wei, self.house_fee_percent)


def validate_constructor_args(spin_cost_ether: str, house_fee_percent: int):
    """
    Validate the FortuneWheel constructor literals

    Raises:
        ConfigError: If the spin cost is not a positive ether amount or the
            fee is not an integer percentage
    """
    try:
        spin_cost_wei = parse_ether(spin_cost_ether)
    except ValueError as e:
        raise ConfigError(f"Invalid spin cost: {e}") from e

    if spin_cost_wei == 0:
        raise ConfigError("Spin cost must be greater than zero")

    if isinstance(house_fee_percent, bool) or not isinstance(house_fee_percent, int):
        raise ConfigError(f"House fee must be an integer percentage, got {house_fee_percent!r}")

    if not 0 <= house_fee_percent <= 100:
        raise ConfigError(f"House fee must be between 0 and 100, got {house_fee_percent}")


def load_networks(path: Optional[Path] = None) -> Dict:
    """
    Load the network registry

    Args:
        path: JSON file path (defaults to config/networks.json)

    Returns:
        Parsed registry dict
    """
    networks_path = Path(path) if path else NETWORKS_CONFIG_PATH

    if not networks_path.exists():
        return {'networks': {}}

    try:
        with open(networks_path, 'r') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read network registry {networks_path}: {e}") from e


def load_config(
    env: Optional[Mapping[str, str]] = None,
    networks_path: Optional[Path] = None,
    dotenv: bool = True
) -> DeployConfig:
    """
    Build a DeployConfig from the environment

    Args:
        env: Variables to read (defaults to os.environ)
        networks_path: Network registry file
        dotenv: Populate os.environ from .env first

    Returns:
        DeployConfig

    Raises:
        ConfigError: On missing or invalid values
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    if env is None:
        env = os.environ

    registry = load_networks(networks_path)
    network = env.get('DEPLOY_NETWORK') or registry.get('default_network', 'localhost')
    network_config = registry.get('networks', {}).get(network, {})

    rpc_url = env.get('RPC_URL') or network_config.get('rpc_url')

    if not rpc_url and network_config.get('rpc_url_env'):
        rpc_url = env.get(network_config['rpc_url_env'])

    if not rpc_url:
        if network_config.get('rpc_url_env'):
            raise ConfigError(f"{network_config['rpc_url_env']} or RPC_URL must be set for network '{network}'")
        raise ConfigError(f"Unknown network '{network}' and RPC_URL not set")

    private_keys = tuple(
        key.strip() for key in env.get('DEPLOYER_PRIVATE_KEY', '').split(',') if key.strip()
    )

    return DeployConfig(
        network=network,
        rpc_url=rpc_url,
        chain_id=_get_int(env, 'CHAIN_ID', network_config.get('chain_id')),
        private_keys=private_keys,
        mnemonic=env.get('MNEMONIC') or None,
        mnemonic_account_count=_get_int(env, 'MNEMONIC_ACCOUNT_COUNT', 1),
        artifacts_dir=env.get('ARTIFACTS_DIR') or 'artifacts',
        spin_cost_ether=env.get('SPIN_COST_ETHER') or DEFAULT_SPIN_COST_ETHER,
        house_fee_percent=_get_int(env, 'HOUSE_FEE_PERCENT', DEFAULT_HOUSE_FEE_PERCENT),
        confirmation_timeout=_get_float(env, 'CONFIRMATION_TIMEOUT', 120.0),
        poll_latency=_get_float(env, 'POLL_LATENCY', 0.5),
        gas_limit_buffer=_get_float(env, 'GAS_LIMIT_BUFFER', 1.2),
        default_gas_limit=_get_int(env, 'DEFAULT_GAS_LIMIT', 3_000_000),
        deployment_output_file=env.get('DEPLOYMENT_OUTPUT_FILE') or None,
        min_deployer_balance_ether=env.get('MIN_DEPLOYER_BALANCE') or '0.01',
        log_level=(env.get('LOG_LEVEL') or 'INFO').upper(),
        log_file=env.get('LOG_FILE') or None
    )


def _get_int(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(name)

    if raw is None or raw.strip() == '':
        return default

    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)

    if raw is None or raw.strip() == '':
        return default

    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")

    if not math.isfinite(value):
        raise ConfigError(f"{name} must be a finite number, got {raw!r}")

    return value
