"""
Deployment data models
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from eth_account.signers.local import LocalAccount


@dataclass
class ContractArtifact:
    """Compiled contract as emitted by the compiler toolchain"""
    contract_name: str
    source_name: str
    abi: List[Dict]
    bytecode: str
    path: str
    solc_version: Optional[str] = None  # From build-info, when available


@dataclass
class DeploymentRequest:
    """One deployment: which contract, where, and who signs"""
    network: str
    signer: LocalAccount
    contract_name: str
    constructor_args: List = field(default_factory=list)
    contract_address: Optional[str] = None
