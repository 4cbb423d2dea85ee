"""Ethereum chain handler.

Native ETH transfers signed locally with eth_account and broadcast through
web3.py. Gas price and nonce come from the node at send time.
"""

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from eth_account.signers.local import LocalAccount
from web3 import Web3

from chaintx.chains import ChainConfig, ChainFamily
from chaintx.config import Settings
from chaintx.errors import BroadcastError, InvalidParamsError
from chaintx.handlers.base import ChainHandler
from chaintx.models import TransactionParams, TransactionResult, TransactionType
from chaintx.signer import EVMSigner

logger = logging.getLogger(__name__)


def ether_to_wei(amount) -> int:
    """Convert an ether amount to wei.

    Raises:
        InvalidParamsError: If the amount is not positive or finer than one wei
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise InvalidParamsError(f"amount must be a decimal ETH value, got {amount!r}")

    if not value.is_finite() or value <= 0:
        raise InvalidParamsError("amount must be greater than zero")

    wei = value * Decimal(10**18)
    if wei != wei.to_integral_value():
        raise InvalidParamsError(f"amount {amount} is finer than one wei")
    return Web3.to_wei(value, "ether")


def _default_web3(rpc_url: str) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url))


class EthereumHandler(ChainHandler):
    """Handler for Ethereum mainnet. Only native transfers are offered."""

    family = ChainFamily.ETHEREUM
    REQUIRED_PARAMS = {
        TransactionType.SEND: ("recipient", "amount"),
    }

    def __init__(
        self,
        chain: ChainConfig,
        settings: Optional[Settings] = None,
        web3_factory: Callable[[str], Web3] = _default_web3,
    ):
        super().__init__(chain, settings)
        self._web3_factory = web3_factory

    def validate_params(self, tx_type: TransactionType, params: TransactionParams) -> None:
        super().validate_params(tx_type, params)
        ether_to_wei(params.amount)
        if not Web3.is_address(params.recipient):
            raise InvalidParamsError(f"recipient is not a valid Ethereum address: {params.recipient}")

    async def _execute(
        self,
        tx_type: TransactionType,
        mnemonic: str,
        params: TransactionParams,
    ) -> TransactionResult:
        account = EVMSigner(mnemonic).get_account()

        # web3.HTTPProvider is synchronous
        loop = asyncio.get_running_loop()
        tx_hash, block_number = await loop.run_in_executor(
            None, lambda: self._sign_and_send(account, params)
        )

        logger.info(f"Sent {params.amount} ETH to {params.recipient}: {tx_hash}")
        return self._result(tx_type, tx_hash, account.address, block_number)

    def _sign_and_send(
        self, account: LocalAccount, params: TransactionParams
    ) -> tuple[str, Optional[int]]:
        """Build, sign and broadcast a native transfer.

        Returns:
            (tx_hash, block number or None when not waiting for the receipt)

        Raises:
            BroadcastError: If the transaction is reverted
        """
        w3 = self._web3_factory(self.chain.rpc_endpoint)

        tx = {
            "to": Web3.to_checksum_address(params.recipient),
            "value": ether_to_wei(params.amount),
            "gas": self.settings.eth_gas_limit,
            "gasPrice": w3.eth.gas_price,
            "nonce": w3.eth.get_transaction_count(account.address, "pending"),
            "chainId": self.chain.chain_id,
        }

        signed_tx = account.sign_transaction(tx)
        # eth-account >= 0.13 uses raw_transaction, older versions use rawTransaction
        raw_tx = getattr(signed_tx, "raw_transaction", None) or signed_tx.rawTransaction
        tx_hash = w3.eth.send_raw_transaction(raw_tx)
        tx_hash_hex = Web3.to_hex(tx_hash)

        if not self.settings.eth_wait_for_receipt:
            return tx_hash_hex, None

        receipt = w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self.settings.tx_timeout_seconds
        )
        if receipt["status"] == 0:
            raise BroadcastError(self.chain.name, f"transaction {tx_hash_hex} reverted", code=0)

        return tx_hash_hex, receipt["blockNumber"]
