"""
Signer
Resolves the account that pays for and signs the deployment
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from web3 import AsyncWeb3, Web3
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from .errors import ConfigurationError


@dataclass(frozen=True)
class Signer:
    """
    Account authorized to submit transactions

    Local signers hold the private key and sign raw transactions
    themselves. Node signers are unlocked accounts managed by the RPC
    node (e.g. a Hardhat node) and sign on the node side.
    """

    address: str
    account: Optional[LocalAccount] = field(default=None, repr=False, compare=False)

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def sign_transaction(self, transaction: Dict[str, Any]):
        """
        Sign a transaction with the local key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        if self.account is None:
            raise ValueError(f"Signer {self.address} is node-managed and cannot sign locally")

        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise


def signer_from_private_key(private_key: str, account: Optional[str] = None) -> Signer:
    """Build a local signer, checking it against an explicit account selection"""
    try:
        local_account = Account.from_key(private_key)
    except Exception as e:
        raise ConfigurationError(f"Invalid deployer private key: {e}", cause=e) from e

    if account and Web3.is_address(account):
        if Web3.to_checksum_address(account) != local_account.address:
            raise ConfigurationError(
                f"DEPLOY_ACCOUNT {account} does not match the private key address {local_account.address}"
            )

    return Signer(address=local_account.address, account=local_account)


async def get_active_signer(
    w3: AsyncWeb3,
    account: Optional[str] = None,
    private_key: Optional[str] = None,
) -> Signer:
    """
    Get the signer for this run

    Args:
        w3: Connected AsyncWeb3 instance
        account: Node account index ("0", "1", ...) or address
        private_key: Hex private key of a local signer (takes precedence)

    Returns:
        Signer
    """
    if private_key:
        signer = signer_from_private_key(private_key, account)
        logger.debug(f"Using local signer {signer.address}")
        return signer

    try:
        node_accounts = list(await w3.eth.accounts)
    except Exception as e:
        raise ConfigurationError(f"Failed to list node accounts: {e}", cause=e) from e

    if not node_accounts:
        raise ConfigurationError(
            "No accounts configured: set DEPLOYER_PRIVATE_KEY or use a node with unlocked accounts"
        )

    if account is None or account == "":
        return Signer(address=Web3.to_checksum_address(node_accounts[0]))

    if account.isdigit():
        index = int(account)
        if index >= len(node_accounts):
            raise ConfigurationError(
                f"Account index {index} out of range ({len(node_accounts)} node accounts)"
            )
        return Signer(address=Web3.to_checksum_address(node_accounts[index]))

    if not Web3.is_address(account):
        raise ConfigurationError(f"Invalid account selection: {account}")

    wanted = Web3.to_checksum_address(account)
    for node_account in node_accounts:
        if Web3.to_checksum_address(node_account) == wanted:
            return Signer(address=wanted)

    raise ConfigurationError(f"Account {wanted} is not managed by the node")
