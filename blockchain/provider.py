"""
Network Provider
Opens the JSON-RPC connection used for a deployment
"""

from web3 import Web3
from loguru import logger

from utils.config_loader import NetworkConfig
from utils.errors import DeploymentError


def connect(network: NetworkConfig) -> Web3:
    """
    Connect to a network and verify the node answers

    Args:
        network: Resolved network configuration

    Returns:
        Connected Web3 instance
    """
    provider = Web3.HTTPProvider(
        network.url,
        request_kwargs={'timeout': network.timeout},
        exception_retry_configuration=None
    )
    w3 = Web3(provider)

    try:
        chain_id = w3.eth.chain_id
    except Exception as e:
        raise DeploymentError(
            f"Could not connect to network '{network.name}' at {network.url}: {e}"
        ) from e

    if network.chain_id is not None and chain_id != network.chain_id:
        raise DeploymentError(
            f"Network '{network.name}' expects chain id {network.chain_id}, "
            f"node reports {chain_id}"
        )

    logger.success(f"Connected to {network.name} (Chain ID: {chain_id})")
    return w3
