"""
Blockchain Interaction Package
Handles network connection, signers, artifacts and contract deployment
"""

from .artifacts import ArtifactStore, ContractArtifact
from .contract_factory import ContractFactory, get_deployable_contract
from .deployment import DeploymentHandle
from .errors import (
    DeploymentError,
    ConfigurationError,
    ArtifactNotFoundError,
    SubmissionError,
    ConfirmationError,
    InternalInvariantError,
)
from .network import connect_network
from .signer import Signer, get_active_signer

__all__ = [
    'ArtifactStore',
    'ContractArtifact',
    'ContractFactory',
    'get_deployable_contract',
    'DeploymentHandle',
    'DeploymentError',
    'ConfigurationError',
    'ArtifactNotFoundError',
    'SubmissionError',
    'ConfirmationError',
    'InternalInvariantError',
    'connect_network',
    'Signer',
    'get_active_signer',
]
