"""
Contract Factory
Binds a compiled artifact to a signer and submits its deployment
"""

from typing import Any, Dict, Optional
from web3 import AsyncWeb3, Web3
from loguru import logger

from .artifacts import ArtifactStore, ContractArtifact
from .deployment import DeploymentHandle
from .errors import SubmissionError
from .signer import Signer


class ContractFactory:
    """
    Deploy-capable handle for one contract artifact
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        artifact: ContractArtifact,
        signer: Signer,
        gas_multiplier: float = 1.2,
        chain_id: Optional[int] = None
    ):
        """
        Initialize Contract Factory

        Args:
            w3: AsyncWeb3 instance
            artifact: Compiled contract
            signer: Account submitting the deployment
            gas_multiplier: Buffer applied to the gas estimate
            chain_id: Chain ID for locally signed transactions (None = ask node)
        """
        self.w3 = w3
        self.artifact = artifact
        self.signer = signer
        self.gas_multiplier = gas_multiplier
        self.chain_id = chain_id
        self.contract = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    @property
    def contract_name(self) -> str:
        return self.artifact.contract_name

    async def deploy(self, *args) -> DeploymentHandle:
        """
        Submit the deployment transaction

        Args:
            *args: Constructor arguments

        Returns:
            Pending DeploymentHandle
        """
        logger.info(f"Submitting deployment of {self.contract_name} from {self.signer.address}...")

        try:
            constructor = self.contract.constructor(*args)

            if self.signer.is_local:
                transaction = await self._build_transaction(constructor)
                signed_tx = self.signer.sign_transaction(transaction)
                tx_hash = await self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
            else:
                tx_hash = await constructor.transact({'from': self.signer.address})

        except Exception as e:
            raise SubmissionError(
                f"Failed to submit deployment of {self.contract_name}: {e}",
                cause=e
            ) from e

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
        return DeploymentHandle(self.w3, tx_hash, self.contract_name)

    async def _build_transaction(self, constructor) -> Dict[str, Any]:
        """Build a signed-locally deployment transaction after estimating gas"""
        sender = self.signer.address

        gas_estimate = await constructor.estimate_gas({'from': sender})
        gas_limit = int(gas_estimate * self.gas_multiplier)

        chain_id = self.chain_id if self.chain_id is not None else await self.w3.eth.chain_id
        nonce = await self.w3.eth.get_transaction_count(sender, 'pending')
        gas_price = await self.w3.eth.gas_price

        logger.info(f"Gas limit: {gas_limit}")
        logger.info(f"Gas price: {Web3.from_wei(gas_price, 'gwei')} gwei")

        return await constructor.build_transaction({
            'from': sender,
            'nonce': nonce,
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': chain_id
        })


def get_deployable_contract(
    w3: AsyncWeb3,
    contract_name: str,
    signer: Signer,
    artifact_store: Optional[ArtifactStore] = None,
    **factory_options
) -> ContractFactory:
    """
    Get a deploy-capable handle for a named contract

    Args:
        w3: AsyncWeb3 instance
        contract_name: Contract name or fully qualified name
        signer: Account that will deploy the contract
        artifact_store: Where to look up artifacts (default: ./artifacts)
        **factory_options: gas_multiplier, chain_id

    Returns:
        ContractFactory
    """
    store = artifact_store or ArtifactStore()
    artifact = store.load(contract_name)
    return ContractFactory(w3, artifact, signer, **factory_options)
