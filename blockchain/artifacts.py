"""
Artifact Store
Loads compiled contract artifacts (ABI + bytecode) from the build output
"""

import os
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from loguru import logger

from .errors import ArtifactNotFoundError


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled representation of a named contract"""

    contract_name: str
    abi: List[Dict[str, Any]] = field(repr=False)
    bytecode: str = field(repr=False)
    source_name: Optional[str] = None
    path: Optional[str] = None


class ArtifactStore:
    """
    Resolves contract names against a Hardhat-style artifacts directory

    Layout: <artifact_path>/<source path>/<Contract>.json, next to
    <Contract>.dbg.json files and a build-info/ directory which are ignored.
    Fully qualified names ("contracts/Token.sol:Token") select one source
    when several sources declare the same contract name.
    """

    IGNORED_DIRS = {"build-info"}

    def __init__(self, artifact_path: str = "artifacts"):
        """
        Initialize Artifact Store

        Args:
            artifact_path: Root of the build output
        """
        self.artifact_path = artifact_path

    def find(self, contract_name: str) -> str:
        """
        Locate the artifact file for a contract

        Args:
            contract_name: Contract name or fully qualified name

        Returns:
            Path to the artifact JSON file
        """
        if not os.path.isdir(self.artifact_path):
            raise ArtifactNotFoundError(
                f"Artifacts directory not found: {self.artifact_path} (compile the contracts first)"
            )

        if ":" in contract_name:
            source_name, name = contract_name.rsplit(":", 1)
            path = os.path.join(self.artifact_path, source_name, f"{name}.json")
            if not os.path.isfile(path):
                raise ArtifactNotFoundError(f"Artifact for {contract_name} not found at {path}")
            return path

        matches = []
        for root, dirs, files in os.walk(self.artifact_path):
            dirs[:] = sorted(d for d in dirs if d not in self.IGNORED_DIRS)
            if f"{contract_name}.json" in files:
                matches.append(os.path.join(root, f"{contract_name}.json"))

        if not matches:
            raise ArtifactNotFoundError(
                f"Artifact for contract {contract_name} not found in {self.artifact_path}"
            )

        if len(matches) > 1:
            raise ArtifactNotFoundError(
                f"Multiple artifacts for {contract_name}: {', '.join(matches)}. "
                "Use a fully qualified name (path/Source.sol:Contract)"
            )

        return matches[0]

    def load(self, contract_name: str) -> ContractArtifact:
        """
        Load and validate a contract artifact

        Args:
            contract_name: Contract name or fully qualified name

        Returns:
            ContractArtifact
        """
        path = self.find(contract_name)

        try:
            with open(path, 'r') as f:
                contract_json = json.load(f)
        except (OSError, ValueError) as e:
            raise ArtifactNotFoundError(f"Unreadable artifact {path}: {e}", cause=e) from e

        abi = contract_json.get('abi')
        bytecode = contract_json.get('bytecode')

        if not isinstance(abi, list) or not isinstance(bytecode, str):
            raise ArtifactNotFoundError(f"Artifact {path} has no abi/bytecode")

        if bytecode in ("", "0x"):
            raise ArtifactNotFoundError(
                f"Contract {contract_name} has no bytecode (abstract contract or interface?)"
            )

        logger.debug(f"Loaded artifact {path}")

        return ContractArtifact(
            contract_name=contract_json.get('contractName', contract_name.rsplit(":", 1)[-1]),
            abi=abi,
            bytecode=bytecode,
            source_name=contract_json.get('sourceName'),
            path=path,
        )
