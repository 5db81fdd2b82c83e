"""
Configuration Loader
Loads network endpoints, deployer credentials and compiler settings
"""

import os
import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from loguru import logger
from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_CONFIG_PATH = "config/network_config.json"


@dataclass
class NetworkConfig:
    """Connection and signing settings for one network"""
    name: str
    url: str
    private_keys: List[Optional[str]]
    accounts_env: List[str] = field(default_factory=list)
    chain_id: Optional[int] = None
    timeout: int = 60


@dataclass
class DeploymentSettings:
    """Transaction parameters shared by all deployments"""
    confirmation_timeout: int = 300
    gas_buffer: float = 1.2
    default_gas_limit: int = 3_000_000


@dataclass
class HarnessConfig:
    """Toolchain configuration, read once at process start"""
    solidity_version: str
    default_network: str
    artifacts_path: str
    networks: Dict[str, Dict]
    explorer_api_keys: Dict[str, str] = field(default_factory=dict)
    deployment: DeploymentSettings = field(default_factory=DeploymentSettings)

    def get_network(self, name: Optional[str] = None) -> NetworkConfig:
        """
        Resolve a network by name against the current environment

        Args:
            name: Network name (None = default network)

        Returns:
            NetworkConfig with URL and keys resolved
        """
        network_name = name or self.default_network

        if network_name not in self.networks:
            known = ', '.join(sorted(self.networks))
            raise ConfigurationError(
                f"Unknown network '{network_name}' (configured: {known})"
            )

        raw = self.networks[network_name]

        url = raw.get('url')
        if not url and raw.get('url_env'):
            url = os.getenv(raw['url_env'])
            if not url:
                raise ConfigurationError(
                    f"{raw['url_env']} must be set to use network '{network_name}'"
                )
        if not url:
            raise ConfigurationError(f"Network '{network_name}' has no RPC url")

        accounts_env = raw.get('accounts_env', [])

        return NetworkConfig(
            name=network_name,
            url=url,
            private_keys=[os.getenv(var) for var in accounts_env],
            accounts_env=list(accounts_env),
            chain_id=raw.get('chain_id'),
            timeout=raw.get('timeout', 60)
        )

    def get_explorer_api_key(self, name: str) -> Optional[str]:
        """Block explorer API key for a network, if configured"""
        return self.explorer_api_keys.get(name)


def load_config(path: Optional[str] = None) -> HarnessConfig:
    """
    Load harness configuration

    Args:
        path: Config file (None = $DEPLOY_CONFIG or config/network_config.json)

    Returns:
        HarnessConfig
    """
    load_dotenv()

    config_path = path or os.getenv('DEPLOY_CONFIG') or DEFAULT_CONFIG_PATH

    try:
        with open(config_path, 'r') as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {config_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

    networks = raw.get('networks') or {}
    if not networks:
        raise ConfigurationError(f"No networks defined in {config_path}")

    deployment = raw.get('deployment', {})

    config = HarnessConfig(
        solidity_version=_solidity_version(raw.get('solidity', {}), config_path),
        default_network=raw.get('default_network', next(iter(networks))),
        artifacts_path=raw.get('paths', {}).get('artifacts', 'artifacts'),
        networks=networks,
        explorer_api_keys=raw.get('etherscan', {}).get('api_key', {}),
        deployment=DeploymentSettings(
            confirmation_timeout=deployment.get('confirmation_timeout', 300),
            gas_buffer=deployment.get('gas_buffer', 1.2),
            default_gas_limit=deployment.get('default_gas_limit', 3_000_000)
        )
    )

    logger.debug(
        f"Loaded {config_path}: solc {config.solidity_version}, "
        f"networks {list(networks)}"
    )
    return config


def _solidity_version(solidity, config_path: str) -> str:
    """Compiler version from either "0.8.22" or {"version": "0.8.22"}"""
    if isinstance(solidity, str):
        return solidity

    if isinstance(solidity, dict):
        return solidity.get('version', '')

    raise ConfigurationError(
        f"Invalid 'solidity' entry in {config_path}: expected a version string or object"
    )
