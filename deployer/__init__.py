"""
Deployer Package
Deployment workflow, its configuration and its result type
"""

from .deployer import Deployer, deploy
from .result import DeploymentResult
from .settings import DeployConfig, load_config

__all__ = ['Deployer', 'deploy', 'DeploymentResult', 'DeployConfig', 'load_config']
