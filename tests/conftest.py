"""
Shared test fixtures
Mock AsyncWeb3 collaborators and a Hardhat-style artifacts directory
"""

import json
import pytest
from unittest.mock import Mock, AsyncMock
from web3 import Web3
from web3.datastructures import AttributeDict

from deployer.settings import DeployConfig


SIGNER_ADDRESS = Web3.to_checksum_address('0xabcd000000000000000000000000000000001234')
CONTRACT_ADDRESS = Web3.to_checksum_address('0x9876000000000000000000000000000000000000')
TX_HASH = bytes.fromhex('11' * 32)
GAS_PRICE = 2_000_000_000

# Hardhat account #0
HARDHAT_PRIVATE_KEY = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'
HARDHAT_ADDRESS = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'

EXCEPTION_EXAMPLE_ABI = [
    {
        "inputs": [],
        "name": "triggerRequire",
        "outputs": [],
        "stateMutability": "pure",
        "type": "function"
    }
]


class Resolved:
    """Awaitable that yields the same value every time it is awaited"""

    def __init__(self, value):
        self.value = value

    def __await__(self):
        yield from ()
        return self.value


def make_receipt(contract_address=CONTRACT_ADDRESS, status=1):
    return AttributeDict({
        'status': status,
        'contractAddress': contract_address,
        'blockNumber': 7,
        'gasUsed': 120000,
    })


def make_w3(accounts=None, chain_id=31337, receipt=None):
    """Mock AsyncWeb3 with a deployable contract"""
    w3 = Mock()
    w3.eth.accounts = Resolved([SIGNER_ADDRESS] if accounts is None else accounts)
    w3.eth.chain_id = Resolved(chain_id)
    w3.eth.gas_price = Resolved(GAS_PRICE)
    w3.eth.get_transaction_count = AsyncMock(return_value=3)
    w3.eth.get_balance = AsyncMock(return_value=10 ** 18)
    w3.eth.send_raw_transaction = AsyncMock(return_value=TX_HASH)
    w3.eth.wait_for_transaction_receipt = AsyncMock(return_value=receipt or make_receipt())
    w3.eth.get_transaction_receipt = AsyncMock(return_value=receipt or make_receipt())

    constructor = Mock()
    constructor.transact = AsyncMock(return_value=TX_HASH)
    constructor.estimate_gas = AsyncMock(return_value=100000)
    constructor.build_transaction = AsyncMock(
        side_effect=lambda params: {**params, 'data': '0x6080', 'value': 0}
    )

    contract_cls = Mock()
    contract_cls.constructor = Mock(return_value=constructor)
    w3.eth.contract = Mock(return_value=contract_cls)

    # Direct handle for assertions
    w3.constructor = constructor
    return w3


def write_artifact(root, source_name, contract_name, bytecode='0x6080604052348015600f57600080fd5b50'):
    """Write a Hardhat artifact (+ debug file) under root"""
    directory = root.joinpath(*source_name.split('/'))
    directory.mkdir(parents=True, exist_ok=True)

    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": contract_name,
        "sourceName": source_name,
        "abi": EXCEPTION_EXAMPLE_ABI,
        "bytecode": bytecode,
        "deployedBytecode": bytecode,
    }
    (directory / f"{contract_name}.json").write_text(json.dumps(artifact))
    (directory / f"{contract_name}.dbg.json").write_text(json.dumps({"buildInfo": "../build-info/x.json"}))
    return directory / f"{contract_name}.json"


@pytest.fixture
def artifacts_dir(tmp_path):
    """Build output containing ExceptionExample"""
    root = tmp_path / 'artifacts'
    write_artifact(root, 'contracts/ExceptionExample.sol', 'ExceptionExample')
    (root / 'build-info').mkdir()
    (root / 'build-info' / 'x.json').write_text('{}')
    return root


@pytest.fixture
def w3():
    return make_w3()


@pytest.fixture
def config(artifacts_dir):
    return DeployConfig(
        network='hardhat',
        rpc_url='http://127.0.0.1:8545',
        artifact_path=str(artifacts_dir),
        confirmation_timeout=30,
        poll_latency=0.01,
    )
