"""
Deployment Result
Outcome of one deployment run, translated into an exit code by main
"""

from dataclasses import dataclass
from typing import Optional

from blockchain.errors import DeploymentError


@dataclass(frozen=True)
class DeploymentResult:
    """Either a deployed address or the error that stopped the run"""

    contract_name: str
    address: Optional[str] = None
    error: Optional[DeploymentError] = None
    signer: Optional[str] = None
    tx_hash: Optional[str] = None

    @classmethod
    def success(cls, contract_name: str, address: str, signer: str, tx_hash: str) -> "DeploymentResult":
        return cls(contract_name=contract_name, address=address, signer=signer, tx_hash=tx_hash)

    @classmethod
    def failure(
        cls,
        contract_name: str,
        error: DeploymentError,
        signer: Optional[str] = None,
        tx_hash: Optional[str] = None
    ) -> "DeploymentResult":
        return cls(contract_name=contract_name, error=error, signer=signer, tx_hash=tx_hash)

    @property
    def ok(self) -> bool:
        return self.error is None and self.address is not None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
