"""
Deployer
Runs the deployment pipeline: signer -> factory -> submit -> confirm -> report
"""

import sys
from typing import Optional, TextIO
from web3 import AsyncWeb3
from loguru import logger

from blockchain.artifacts import ArtifactStore
from blockchain.contract_factory import get_deployable_contract
from blockchain.errors import DeploymentError, InternalInvariantError
from blockchain.network import connect_network
from blockchain.signer import get_active_signer
from .result import DeploymentResult
from .settings import DeployConfig


class Deployer:
    """
    Deploys one contract and reports its address

    Steps run strictly one after another; the first failure ends the run
    and is returned inside the DeploymentResult.
    """

    def __init__(
        self,
        config: DeployConfig,
        w3: Optional[AsyncWeb3] = None,
        artifact_store: Optional[ArtifactStore] = None,
        stdout: Optional[TextIO] = None
    ):
        """
        Initialize Deployer

        Args:
            config: Deployment configuration
            w3: Already connected AsyncWeb3 (None = connect to config.rpc_url)
            artifact_store: Artifact lookup (None = config.artifact_path)
            stdout: Stream for the report lines (None = sys.stdout)
        """
        self.config = config
        self.w3 = w3
        self.artifact_store = artifact_store or ArtifactStore(config.artifact_path)
        self.stdout = stdout

    def _report(self, line: str):
        print(line, file=self.stdout or sys.stdout, flush=True)

    async def run(self) -> DeploymentResult:
        """
        Execute the deployment

        Returns:
            DeploymentResult (address on success, error on failure)
        """
        name = self.config.contract_name
        signer = None
        handle = None

        try:
            w3 = self.w3
            if w3 is None:
                w3 = await connect_network(self.config.rpc_url, self.config.chain_id)

            signer = await get_active_signer(
                w3,
                account=self.config.account,
                private_key=self.config.private_key
            )
            self._report(f"Deploying with account: {signer.address}")

            factory = get_deployable_contract(
                w3,
                name,
                signer,
                self.artifact_store,
                gas_multiplier=self.config.gas_multiplier,
                chain_id=self.config.chain_id
            )

            handle = await factory.deploy(*self.config.constructor_args)

            await handle.wait_for_deployment(
                timeout=self.config.confirmation_timeout,
                poll_latency=self.config.poll_latency
            )

            address = handle.get_address()

        except DeploymentError as e:
            logger.error(f"Deployment of {name} failed ({e.step}): {e}")
            return self._failure(e, signer, handle)
        except Exception as e:
            logger.exception(f"Unexpected error deploying {name}")
            error = InternalInvariantError(f"Unexpected error deploying {name}: {e}", cause=e)
            return self._failure(error, signer, handle)

        self._report(f"{name} deployed to: {address}")
        logger.success(f"✅ {name} deployed to {address} (tx: {handle.tx_hash_hex})")

        return DeploymentResult.success(name, address, signer.address, handle.tx_hash_hex)

    def _failure(self, error, signer, handle) -> DeploymentResult:
        if handle is not None:
            logger.warning(f"Deployment transaction was submitted: {handle.tx_hash_hex}")

        return DeploymentResult.failure(
            self.config.contract_name,
            error,
            signer=signer.address if signer else None,
            tx_hash=handle.tx_hash_hex if handle else None
        )


async def deploy(config: DeployConfig, **kwargs) -> DeploymentResult:
    """Run a single deployment with the given configuration"""
    return await Deployer(config, **kwargs).run()
