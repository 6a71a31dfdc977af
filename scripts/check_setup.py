"""
Setup Check Script
Verifies artifact, RPC connection and signer balance before deploying
"""

import asyncio
import sys
from typing import Optional
from web3 import AsyncWeb3, Web3
from loguru import logger

from blockchain.artifacts import ArtifactStore
from blockchain.errors import DeploymentError
from blockchain.network import connect_network
from blockchain.signer import get_active_signer
from deployer.settings import DeployConfig, load_config
from utils.logging_config import configure_logging


def check_artifact(config: DeployConfig) -> bool:
    """Check that the contract artifact exists and has bytecode"""
    logger.info(f"Checking artifact for {config.contract_name}...")

    try:
        artifact = ArtifactStore(config.artifact_path).load(config.contract_name)
    except DeploymentError as e:
        logger.error(f"  ✗ {e}")
        return False

    logger.success(f"  ✓ {artifact.contract_name}: {artifact.path}")
    return True


async def check_signer(config: DeployConfig, w3: Optional[AsyncWeb3] = None) -> bool:
    """Check RPC connection, signer selection and signer balance"""
    logger.info(f"Checking {config.network} connection and signer...")

    try:
        if w3 is None:
            w3 = await connect_network(config.rpc_url, config.chain_id)
        signer = await get_active_signer(w3, account=config.account, private_key=config.private_key)
    except DeploymentError as e:
        logger.error(f"  ✗ {e}")
        return False

    try:
        balance = await w3.eth.get_balance(signer.address)
    except Exception as e:
        logger.error(f"  ✗ Error checking balance of {signer.address}: {e}")
        return False

    logger.info(f"  Signer: {signer.address}")
    logger.info(f"  Balance: {Web3.from_wei(balance, 'ether')}")

    if balance == 0:
        logger.warning("  ⚠ Signer has no funds, deployment will be rejected")
        return False

    logger.success("  ✓ Signer ready")
    return True


async def run_checks(config: DeployConfig, w3: Optional[AsyncWeb3] = None) -> bool:
    """Run all checks, artifact first"""
    artifact_ok = check_artifact(config)
    signer_ok = await check_signer(config, w3)
    return artifact_ok and signer_ok


def main() -> int:
    configure_logging()

    try:
        config = load_config()
    except DeploymentError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if asyncio.run(run_checks(config)):
        logger.success("✓ Ready to deploy")
        return 0

    logger.error("Setup check failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
