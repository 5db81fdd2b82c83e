"""
MachineRegistry Deployment Script
Deploys MachineRegistry to the selected network

Run through the toolchain runner:
    python deploy.py --network polygonAmoy
"""

import os
import sys
from typing import Optional
from loguru import logger

from blockchain.contract_factory import get_contract_factory
from blockchain.models import DeploymentRequest
from blockchain.provider import connect
from blockchain.signers import get_signers
from utils.config_loader import HarnessConfig, load_config
from utils.errors import DeploymentError
from utils.logging_setup import configure_logging

CONTRACT_NAME = "MachineRegistry"


def main(network_name: Optional[str] = None, config: Optional[HarnessConfig] = None) -> str:
    """Deploy MachineRegistry and return its address"""
    config = config or load_config()
    network = config.get_network(network_name or os.getenv('DEPLOY_NETWORK'))

    # Credentials are checked before any RPC traffic
    deployer = get_signers(network)[0]
    request = DeploymentRequest(
        network=network.name,
        signer=deployer,
        contract_name=CONTRACT_NAME
    )
    logger.info(f"Deploying contracts with the account: {deployer.address}")

    w3 = connect(network)

    factory = get_contract_factory(request.contract_name, w3, request.signer, config)
    contract = factory.deploy(*request.constructor_args)
    request.contract_address = contract.wait_for_deployment()

    logger.success(f"{CONTRACT_NAME} deployed at: {request.contract_address}")
    return request.contract_address


def run() -> int:
    """Run the deployment, mapping any failure to exit code 1"""
    try:
        address = main()
    except DeploymentError as e:
        logger.error(f"Deployment failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Deployment failed: {type(e).__name__}: {e}")
        return 1

    # Result goes to stdout, logs to stderr
    print(f"{CONTRACT_NAME} deployed at: {address}")
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(run())
