"""
Blockchain Interaction Package
Handles signer resolution, network connection and contract deployment
"""

from .contract_factory import ContractFactory, DeployedContract, get_contract_factory, load_artifact
from .models import ContractArtifact, DeploymentRequest
from .provider import connect
from .signers import get_signers

__all__ = [
    'ContractFactory',
    'DeployedContract',
    'get_contract_factory',
    'load_artifact',
    'ContractArtifact',
    'DeploymentRequest',
    'connect',
    'get_signers'
]
