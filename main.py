"""
Contract Deployer - Main Entry Point
Deploys the configured contract and exits 0 on success, 1 on any failure
"""

import asyncio
import sys
from typing import Optional
from loguru import logger

from blockchain.errors import ConfigurationError
from deployer import Deployer, DeploymentResult, DeployConfig, load_config
from utils.logging_config import configure_logging


async def main(config: DeployConfig) -> DeploymentResult:
    """Run one deployment"""
    deployer = Deployer(config)
    return await deployer.run()


def run(config: Optional[DeployConfig] = None) -> int:
    """
    Console entry point

    Returns:
        Process exit code
    """
    configure_logging()

    if config is None:
        try:
            config = load_config()
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            print(f"Error: {e}", file=sys.stderr)
            return 1

    logger.info(f"Deploying {config.contract_name} to {config.network} ({config.rpc_url})")

    try:
        result = asyncio.run(main(config))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("Error: deployment interrupted", file=sys.stderr)
        return 1

    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)

    return result.exit_code


if __name__ == "__main__":
    sys.exit(run())
