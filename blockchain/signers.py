"""
Signer Resolution
Turns configured private keys into accounts that can sign deployments
"""

from typing import List
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from utils.config_loader import NetworkConfig
from utils.errors import ConfigurationError


def get_signers(network: NetworkConfig) -> List[LocalAccount]:
    """
    Resolve signing accounts for a network

    Keys are validated locally; nothing here touches the network.

    Args:
        network: Resolved network configuration

    Returns:
        Accounts in configuration order (first one deploys)
    """
    if not network.private_keys:
        raise ConfigurationError(f"No accounts configured for network '{network.name}'")

    signers = []

    for index, private_key in enumerate(network.private_keys):
        source = (
            network.accounts_env[index]
            if index < len(network.accounts_env)
            else f"account #{index}"
        )

        if not private_key:
            raise ConfigurationError(f"{source} must be set in .env")

        try:
            account = Account.from_key(private_key.strip())
        except Exception:
            # never chain: the original message may contain the key
            raise ConfigurationError(f"{source} is not a valid private key") from None

        signers.append(account)
        logger.debug(f"Signer {index}: {account.address}")

    return signers
