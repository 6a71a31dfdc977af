"""
Deployment Handle Tests
"""

import pytest
from unittest.mock import AsyncMock
from hypothesis import given, strategies as st
from web3 import Web3
from web3.exceptions import TimeExhausted, TransactionNotFound

from blockchain.deployment import DeploymentHandle
from blockchain.errors import ConfirmationError, InternalInvariantError
from conftest import CONTRACT_ADDRESS, TX_HASH, make_receipt, make_w3


class TestWaitForDeployment:
    """Pending -> confirmed transition"""

    @pytest.mark.asyncio
    async def test_confirmed(self):
        w3 = make_w3()
        handle = DeploymentHandle(w3, TX_HASH, 'ExceptionExample')

        receipt = await handle.wait_for_deployment(timeout=30, poll_latency=0.5)

        assert handle.is_confirmed
        assert receipt['status'] == 1
        w3.eth.wait_for_transaction_receipt.assert_awaited_once_with(
            TX_HASH, timeout=30, poll_latency=0.5
        )

    @pytest.mark.asyncio
    async def test_reverted(self):
        w3 = make_w3(receipt=make_receipt(contract_address=None, status=0))
        handle = DeploymentHandle(w3, TX_HASH, 'ExceptionExample')

        with pytest.raises(ConfirmationError, match='reverted'):
            await handle.wait_for_deployment(timeout=30)

        assert not handle.is_confirmed

    @pytest.mark.asyncio
    async def test_timeout(self):
        w3 = make_w3()
        w3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted('not in chain after 5 seconds')
        handle = DeploymentHandle(w3, TX_HASH, 'ExceptionExample')

        with pytest.raises(ConfirmationError, match='within 5s') as exc_info:
            await handle.wait_for_deployment(timeout=5)

        assert isinstance(exc_info.value.cause, TimeExhausted)

    @pytest.mark.asyncio
    async def test_rpc_error_while_waiting(self):
        w3 = make_w3()
        w3.eth.wait_for_transaction_receipt.side_effect = ConnectionError('connection reset')
        handle = DeploymentHandle(w3, TX_HASH, 'ExceptionExample')

        with pytest.raises(ConfirmationError, match='connection reset'):
            await handle.wait_for_deployment(timeout=5)

    @pytest.mark.asyncio
    async def test_no_timeout_polls_until_mined(self):
        w3 = make_w3()
        w3.eth.get_transaction_receipt = AsyncMock(side_effect=[
            TransactionNotFound('pending'),
            TransactionNotFound('pending'),
            make_receipt(),
        ])
        handle = DeploymentHandle(w3, TX_HASH, 'ExceptionExample')

        await handle.wait_for_deployment(timeout=None, poll_latency=0)

        assert handle.is_confirmed
        assert w3.eth.get_transaction_receipt.await_count == 3
        w3.eth.wait_for_transaction_receipt.assert_not_called()


class TestGetAddress:
    """Address resolution after confirmation"""

    @pytest.mark.asyncio
    async def test_address(self):
        handle = DeploymentHandle(make_w3(), TX_HASH, 'ExceptionExample')
        await handle.wait_for_deployment(timeout=30)

        assert handle.get_address() == CONTRACT_ADDRESS

    def test_before_confirmation(self):
        handle = DeploymentHandle(make_w3(), TX_HASH, 'ExceptionExample')

        with pytest.raises(InternalInvariantError, match='before confirmation'):
            handle.get_address()

    @pytest.mark.asyncio
    @pytest.mark.parametrize('address', [None, '', '0x1234'])
    async def test_confirmed_without_address(self, address):
        handle = DeploymentHandle(make_w3(receipt=make_receipt(contract_address=address)), TX_HASH, 'ExceptionExample')
        await handle.wait_for_deployment(timeout=30)

        with pytest.raises(InternalInvariantError):
            handle.get_address()

    @given(raw=st.binary(min_size=20, max_size=20))
    def test_address_is_checksummed(self, raw):
        handle = DeploymentHandle(make_w3(), TX_HASH, 'ExceptionExample')
        handle.receipt = make_receipt(contract_address='0x' + raw.hex())

        address = handle.get_address()

        assert len(address) == 42
        assert address.startswith('0x')
        assert Web3.is_checksum_address(address)

    def test_tx_hash_hex(self):
        handle = DeploymentHandle(make_w3(), TX_HASH, 'ExceptionExample')

        assert handle.tx_hash_hex == '0x' + '11' * 32
