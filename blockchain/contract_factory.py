"""
Contract Factory
Loads compiled artifacts and deploys new contract instances
"""

import os
import glob
import json
from typing import Optional
from web3 import Web3
from web3.exceptions import TimeExhausted
from eth_account.signers.local import LocalAccount
from loguru import logger

from utils.config_loader import HarnessConfig, DeploymentSettings
from utils.errors import DeploymentError
from .models import ContractArtifact


def load_artifact(contract_name: str, artifacts_path: str = "artifacts") -> ContractArtifact:
    """
    Load a compiled contract artifact by name

    Args:
        contract_name: Contract name, e.g. "MachineRegistry"
        artifacts_path: Root of the compiler's artifacts directory

    Returns:
        ContractArtifact
    """
    pattern = os.path.join(artifacts_path, 'contracts', '**', f'{contract_name}.json')
    matches = sorted(glob.glob(pattern, recursive=True))

    if not matches:
        raise DeploymentError(
            f"Artifact for contract {contract_name} not found under {artifacts_path}. "
            f"Compile the contracts first"
        )

    if len(matches) > 1:
        raise DeploymentError(
            f"Multiple artifacts named {contract_name}: {', '.join(matches)}"
        )

    artifact_path = matches[0]

    with open(artifact_path, 'r') as f:
        contract_json = json.load(f)

    abi = contract_json.get('abi')
    bytecode = contract_json.get('bytecode', '')

    if abi is None:
        raise DeploymentError(f"Artifact {artifact_path} has no ABI")

    if not bytecode or bytecode == '0x':
        raise DeploymentError(
            f"{contract_name} has no bytecode (abstract contract or interface?)"
        )

    return ContractArtifact(
        contract_name=contract_json.get('contractName', contract_name),
        source_name=contract_json.get('sourceName', ''),
        abi=abi,
        bytecode=bytecode,
        path=artifact_path,
        solc_version=_read_solc_version(artifact_path)
    )


def _read_solc_version(artifact_path: str) -> Optional[str]:
    """Compiler version recorded in the build-info linked from <name>.dbg.json"""
    dbg_path = artifact_path[:-len('.json')] + '.dbg.json'

    if not os.path.exists(dbg_path):
        return None

    with open(dbg_path, 'r') as f:
        build_info_ref = json.load(f).get('buildInfo')

    if not build_info_ref:
        return None

    build_info_path = os.path.normpath(
        os.path.join(os.path.dirname(dbg_path), build_info_ref)
    )

    if not os.path.exists(build_info_path):
        logger.debug(f"Build info missing: {build_info_path}")
        return None

    with open(build_info_path, 'r') as f:
        return json.load(f).get('solcVersion')


class DeployedContract:
    """
    A contract whose deployment transaction has been sent
    """

    def __init__(
        self,
        w3: Web3,
        artifact: ContractArtifact,
        tx_hash: bytes,
        confirmation_timeout: int = 300
    ):
        self.w3 = w3
        self.artifact = artifact
        self.tx_hash = tx_hash
        self.confirmation_timeout = confirmation_timeout

        self.address: Optional[str] = None
        self.receipt = None

    @property
    def tx_hash_hex(self) -> str:
        return Web3.to_hex(self.tx_hash)

    def wait_for_deployment(self) -> str:
        """
        Block until the deployment transaction is mined

        Returns:
            Checksummed contract address
        """
        if self.address:
            return self.address

        logger.info(f"Waiting for confirmation of {self.tx_hash_hex}...")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                self.tx_hash,
                timeout=self.confirmation_timeout
            )
        except TimeExhausted as e:
            raise DeploymentError(
                f"Deployment transaction {self.tx_hash_hex} not confirmed "
                f"within {self.confirmation_timeout}s"
            ) from e

        if receipt['status'] != 1:
            raise DeploymentError(
                f"Deployment of {self.artifact.contract_name} reverted "
                f"(tx {self.tx_hash_hex})"
            )

        self.receipt = receipt
        self.address = Web3.to_checksum_address(receipt['contractAddress'])

        logger.debug(f"Gas used: {receipt['gasUsed']}")
        return self.address


class ContractFactory:
    """
    Produces new instances of a compiled contract, signed by one account
    """

    def __init__(
        self,
        w3: Web3,
        artifact: ContractArtifact,
        signer: LocalAccount,
        settings: Optional[DeploymentSettings] = None
    ):
        """
        Initialize Contract Factory

        Args:
            w3: Connected Web3 instance
            artifact: Compiled contract
            signer: Deploying account
            settings: Gas and confirmation parameters
        """
        self.w3 = w3
        self.artifact = artifact
        self.signer = signer
        self.settings = settings or DeploymentSettings()

    def deploy(self, *args) -> DeployedContract:
        """
        Build, sign and submit the deployment transaction

        Args:
            *args: Constructor arguments

        Returns:
            DeployedContract (not yet confirmed)
        """
        deployer = self.signer.address

        contract = self.w3.eth.contract(
            abi=self.artifact.abi,
            bytecode=self.artifact.bytecode
        )
        constructor = contract.constructor(*args)

        try:
            gas_estimate = constructor.estimate_gas({'from': deployer})
            gas_limit = int(gas_estimate * self.settings.gas_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            gas_limit = self.settings.default_gas_limit

        gas_price = self.w3.eth.gas_price
        balance = self.w3.eth.get_balance(deployer)
        max_cost = gas_limit * gas_price

        logger.info(f"Gas limit: {gas_limit}")
        logger.info(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")

        if balance < max_cost:
            raise DeploymentError(
                f"Insufficient funds in {deployer}: balance "
                f"{self.w3.from_wei(balance, 'ether')}, deployment may cost up to "
                f"{self.w3.from_wei(max_cost, 'ether')}"
            )

        transaction = constructor.build_transaction({
            'from': deployer,
            'nonce': self.w3.eth.get_transaction_count(deployer, 'pending'),
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': self.w3.eth.chain_id
        })

        signed_tx = self.signer.sign_transaction(transaction)
        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        deployed = DeployedContract(
            self.w3,
            self.artifact,
            tx_hash,
            confirmation_timeout=self.settings.confirmation_timeout
        )
        logger.info(f"Transaction sent: {deployed.tx_hash_hex}")
        return deployed


def get_contract_factory(
    contract_name: str,
    w3: Web3,
    signer: LocalAccount,
    config: HarnessConfig
) -> ContractFactory:
    """
    Factory for a compiled contract, checked against the configured compiler

    Args:
        contract_name: Contract name
        w3: Connected Web3 instance
        signer: Deploying account
        config: Harness configuration

    Returns:
        ContractFactory
    """
    artifact = load_artifact(contract_name, config.artifacts_path)

    if (
        artifact.solc_version
        and config.solidity_version
        and artifact.solc_version != config.solidity_version
    ):
        raise DeploymentError(
            f"{contract_name} was compiled with solc {artifact.solc_version}, "
            f"configuration requires {config.solidity_version}. Recompile first"
        )

    return ContractFactory(w3, artifact, signer, config.deployment)
