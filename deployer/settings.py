"""
Deployment Settings
Explicit configuration for the target network, signer and artifacts
"""

import os
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from loguru import logger
from dotenv import load_dotenv

from blockchain.errors import ConfigurationError

load_dotenv()

DEFAULT_CONFIG_PATH = "config/deploy_config.json"
DEFAULT_CONTRACT_NAME = "ExceptionExample"
DEFAULT_NETWORK = "hardhat"

# Structure: NETWORKS[network] = {http_url_env, default_url?, chain_id?}
NETWORKS: Dict[str, Dict[str, Any]] = {
    "hardhat": {
        "http_url_env": "HARDHAT_RPC_URL",
        "default_url": "http://127.0.0.1:8545",
        "chain_id": 31337,
    },
    "localhost": {
        "http_url_env": "LOCALHOST_RPC_URL",
        "default_url": "http://127.0.0.1:8545",
    },
    "sepolia": {
        "http_url_env": "SEPOLIA_RPC_URL",
        "chain_id": 11155111,
    },
    "polygon": {
        "http_url_env": "POLYGON_RPC_URL",
        "chain_id": 137,
    },
    "amoy": {
        "http_url_env": "AMOY_RPC_URL",
        "chain_id": 80002,
    },
}


@dataclass
class DeployConfig:
    """Everything one deployment run needs"""

    network: str = DEFAULT_NETWORK
    rpc_url: str = "http://127.0.0.1:8545"
    chain_id: Optional[int] = None
    account: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    artifact_path: str = "artifacts"
    contract_name: str = DEFAULT_CONTRACT_NAME
    constructor_args: List[Any] = field(default_factory=list)
    confirmation_timeout: Optional[float] = 300.0
    poll_latency: float = 1.0
    gas_multiplier: float = 1.2


def _load_file_config(config_path: str) -> Dict[str, Any]:
    if not config_path or not os.path.exists(config_path):
        return {}

    try:
        with open(config_path, 'r') as f:
            file_config = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}", cause=e) from e

    if not isinstance(file_config, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a JSON object")

    logger.debug(f"Loaded config file {config_path}")
    return file_config


def _parse_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")

    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}", cause=e) from e

    if number <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")

    return number


def _parse_timeout(value: Any) -> Optional[float]:
    """None, "none" or 0 mean: wait for confirmation without a limit"""
    if value is None or str(value).strip().lower() in ("", "none"):
        return None

    if isinstance(value, bool):
        raise ConfigurationError(f"DEPLOY_CONFIRMATION_TIMEOUT must be a number or 'none', got {value!r}")

    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"DEPLOY_CONFIRMATION_TIMEOUT must be a number or 'none', got {value!r}",
            cause=e
        ) from e

    if timeout < 0:
        raise ConfigurationError(f"DEPLOY_CONFIRMATION_TIMEOUT must not be negative, got {value!r}")

    return timeout or None


def _parse_chain_id(network: str, value: Any) -> Optional[int]:
    if value is None:
        return None

    if isinstance(value, bool):
        raise ConfigurationError(f"chain_id of network {network} must be an integer, got {value!r}")

    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"chain_id of network {network} must be an integer, got {value!r}", cause=e
        ) from e


def _merge_networks(file_networks: Any) -> Dict[str, Dict[str, Any]]:
    """Built-in network table with per-key overrides from the config file"""
    if not isinstance(file_networks, dict):
        raise ConfigurationError(f"'networks' must be a JSON object, got {file_networks!r}")

    networks = {name: dict(entry) for name, entry in NETWORKS.items()}
    for name, overrides in file_networks.items():
        if not isinstance(overrides, dict):
            raise ConfigurationError(f"Network {name} must be a JSON object, got {overrides!r}")
        networks[name] = {**networks.get(name, {}), **overrides}

    return networks


def _parse_args(value: Any) -> List[Any]:
    if isinstance(value, str):
        try:
            value = json.loads(value) if value.strip() else []
        except ValueError as e:
            raise ConfigurationError(
                f"DEPLOY_CONSTRUCTOR_ARGS must be a JSON list: {e}", cause=e
            ) from e

    if not isinstance(value, list):
        raise ConfigurationError(f"Constructor arguments must be a list, got {value!r}")

    return value


def load_config(
    config_path: str = DEFAULT_CONFIG_PATH,
    env: Optional[Mapping[str, str]] = None
) -> DeployConfig:
    """
    Build the deployment configuration

    Precedence (lowest to highest): defaults, JSON config file,
    environment variables.

    Args:
        config_path: Optional JSON config file
        env: Environment mapping (default: os.environ)

    Returns:
        DeployConfig
    """
    if env is None:
        env = os.environ

    file_config = _load_file_config(config_path)

    def setting(env_key: str, file_key: str, default: Any = None) -> Any:
        if env.get(env_key) not in (None, ""):
            return env[env_key]
        return file_config.get(file_key, default)

    networks = _merge_networks(file_config.get('networks', {}))

    network = setting('DEPLOY_NETWORK', 'network', DEFAULT_NETWORK)
    if network not in networks:
        raise ConfigurationError(
            f"Unknown network: {network} (available: {', '.join(sorted(networks))})"
        )

    network_config = networks[network]
    url_env = network_config.get('http_url_env')

    rpc_url = (
        env.get('DEPLOY_RPC_URL')
        or (env.get(url_env) if url_env else None)
        or network_config.get('default_url')
    )
    if not rpc_url:
        raise ConfigurationError(f"RPC URL not configured for {network} (set {url_env or 'DEPLOY_RPC_URL'})")

    config = DeployConfig(
        network=network,
        rpc_url=rpc_url,
        chain_id=_parse_chain_id(network, network_config.get('chain_id')),
        account=setting('DEPLOY_ACCOUNT', 'account'),
        private_key=env.get('DEPLOYER_PRIVATE_KEY') or None,
        artifact_path=setting('DEPLOY_ARTIFACT_PATH', 'artifact_path', "artifacts"),
        contract_name=setting('DEPLOY_CONTRACT', 'contract_name', DEFAULT_CONTRACT_NAME),
        constructor_args=_parse_args(setting('DEPLOY_CONSTRUCTOR_ARGS', 'constructor_args', [])),
        confirmation_timeout=_parse_timeout(
            setting('DEPLOY_CONFIRMATION_TIMEOUT', 'confirmation_timeout', 300)
        ),
        poll_latency=_parse_float(
            'DEPLOY_POLL_LATENCY', setting('DEPLOY_POLL_LATENCY', 'poll_latency', 1.0)
        ),
        gas_multiplier=_parse_float(
            'DEPLOY_GAS_MULTIPLIER', setting('DEPLOY_GAS_MULTIPLIER', 'gas_multiplier', 1.2)
        ),
    )

    if config.account is not None:
        config.account = str(config.account)

    logger.debug(f"Deployment config: {config}")
    return config
