"""
Deployment Errors
Failure taxonomy for every step of the deployment pipeline
"""

from typing import Optional


class DeploymentError(Exception):
    """
    Base class for all deployment failures

    Every failure is unrecoverable for the current run. The original
    exception (RPC error, signer rejection, ...) is kept in ``cause``.
    """

    step = "deployment"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(DeploymentError):
    """No usable signer, network or setting"""

    step = "configuration"


class ArtifactNotFoundError(DeploymentError):
    """Named contract is missing from the build output"""

    step = "artifact"


class SubmissionError(DeploymentError):
    """Network or signer rejected the deployment transaction"""

    step = "submission"


class ConfirmationError(DeploymentError):
    """Deployment transaction reverted or was not confirmed in time"""

    step = "confirmation"


class InternalInvariantError(DeploymentError):
    """Confirmed deployment without a resolvable contract address"""

    step = "address"
