"""
Deployment Handle
Tracks a submitted deployment from pending to confirmed
"""

import asyncio
from typing import Any, Optional
from web3 import AsyncWeb3, Web3
from web3.exceptions import TimeExhausted, TransactionNotFound
from loguru import logger

from .errors import ConfirmationError, InternalInvariantError


class DeploymentHandle:
    """
    In-flight or completed contract deployment

    The handle is pending until wait_for_deployment() sees a successful
    receipt; only then can the contract address be resolved.
    """

    def __init__(self, w3: AsyncWeb3, tx_hash: bytes, contract_name: str):
        """
        Initialize Deployment Handle

        Args:
            w3: AsyncWeb3 instance
            tx_hash: Hash of the deployment transaction
            contract_name: Name of the contract being deployed
        """
        self.w3 = w3
        self.tx_hash = tx_hash
        self.contract_name = contract_name
        self.receipt = None

    @property
    def tx_hash_hex(self) -> str:
        return Web3.to_hex(self.tx_hash)

    @property
    def is_confirmed(self) -> bool:
        return self.receipt is not None

    async def wait_for_deployment(
        self,
        timeout: Optional[float] = None,
        poll_latency: float = 1.0
    ) -> Any:
        """
        Wait until the deployment transaction is mined

        Args:
            timeout: Seconds to wait (None = no limit)
            poll_latency: Seconds between receipt polls

        Returns:
            Transaction receipt
        """
        logger.info(f"Waiting for confirmation of {self.tx_hash_hex}...")

        try:
            if timeout is None:
                receipt = await self._poll_for_receipt(poll_latency)
            else:
                receipt = await self.w3.eth.wait_for_transaction_receipt(
                    self.tx_hash,
                    timeout=timeout,
                    poll_latency=poll_latency
                )
        except TimeExhausted as e:
            raise ConfirmationError(
                f"Deployment transaction {self.tx_hash_hex} not confirmed within {timeout}s",
                cause=e
            ) from e
        except Exception as e:
            raise ConfirmationError(
                f"Error waiting for deployment transaction {self.tx_hash_hex}: {e}",
                cause=e
            ) from e

        if receipt['status'] != 1:
            raise ConfirmationError(
                f"Deployment transaction {self.tx_hash_hex} reverted "
                f"(block {receipt.get('blockNumber')})"
            )

        self.receipt = receipt
        logger.success(
            f"Deployment confirmed in block {receipt.get('blockNumber')} "
            f"(gas used: {receipt.get('gasUsed')})"
        )
        return receipt

    async def _poll_for_receipt(self, poll_latency: float) -> Any:
        """Poll for the receipt without a deadline"""
        while True:
            try:
                return await self.w3.eth.get_transaction_receipt(self.tx_hash)
            except TransactionNotFound:
                await asyncio.sleep(poll_latency)

    def get_address(self) -> str:
        """
        Resolve the deployed contract address

        Returns:
            Checksummed contract address
        """
        if self.receipt is None:
            raise InternalInvariantError(
                f"Address of {self.contract_name} requested before confirmation"
            )

        address = self.receipt.get('contractAddress')

        if not address or not Web3.is_address(address):
            raise InternalInvariantError(
                f"Confirmed deployment {self.tx_hash_hex} has no valid contract address: {address!r}"
            )

        return Web3.to_checksum_address(address)
