"""Solana chain handler.

Native SOL transfers built with solders and submitted through solana-py's
async RPC client. Amounts are given in SOL and converted to lamports.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from solana.constants import LAMPORTS_PER_SOL
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from chaintx.chains import ChainConfig, ChainFamily
from chaintx.config import Settings
from chaintx.errors import BroadcastError, InvalidParamsError
from chaintx.handlers.base import ChainHandler
from chaintx.models import TransactionParams, TransactionResult, TransactionType
from chaintx.signer import SolanaSigner

logger = logging.getLogger(__name__)


def sol_to_lamports(amount) -> int:
    """Convert a SOL amount to lamports.

    Raises:
        InvalidParamsError: If the amount is not positive or has sub-lamport precision
    """
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise InvalidParamsError(f"amount must be a decimal SOL value, got {amount!r}")

    if not value.is_finite() or value <= 0:
        raise InvalidParamsError("amount must be greater than zero")

    lamports = value * LAMPORTS_PER_SOL
    if lamports != lamports.to_integral_value():
        raise InvalidParamsError(f"amount {amount} is finer than one lamport")
    return int(lamports)


def parse_pubkey(address: str, field: str = "recipient") -> Pubkey:
    """Parse a base58 Solana address."""
    try:
        return Pubkey.from_string(address)
    except ValueError as e:
        raise InvalidParamsError(f"{field} is not a valid Solana address: {e}")


class SolanaHandler(ChainHandler):
    """Handler for Solana. Only native transfers are offered."""

    family = ChainFamily.SOLANA
    REQUIRED_PARAMS = {
        TransactionType.SEND: ("recipient", "amount"),
    }

    def __init__(
        self,
        chain: ChainConfig,
        settings: Optional[Settings] = None,
        client_factory: Callable[..., AsyncClient] = AsyncClient,
    ):
        super().__init__(chain, settings)
        self._client_factory = client_factory

    def validate_params(self, tx_type: TransactionType, params: TransactionParams) -> None:
        super().validate_params(tx_type, params)
        sol_to_lamports(params.amount)
        parse_pubkey(params.recipient)

    async def _execute(
        self,
        tx_type: TransactionType,
        mnemonic: str,
        params: TransactionParams,
    ) -> TransactionResult:
        keypair = SolanaSigner(mnemonic, derivation=self.settings.solana_derivation).get_keypair()
        sender = keypair.pubkey()
        lamports = sol_to_lamports(params.amount)

        async with self._client_factory(self.chain.rpc_endpoint, commitment=Confirmed) as client:
            blockhash_resp = await client.get_latest_blockhash()
            blockhash = blockhash_resp.value.blockhash

            ix = transfer(
                TransferParams(
                    from_pubkey=sender,
                    to_pubkey=parse_pubkey(params.recipient),
                    lamports=lamports,
                )
            )
            message = Message.new_with_blockhash([ix], sender, blockhash)
            tx = Transaction([keypair], message, blockhash)

            send_resp = await client.send_transaction(tx)
            signature = send_resp.value
            if signature is None:
                raise BroadcastError(self.chain.name, "send_transaction returned no signature")

            confirm_resp = await client.confirm_transaction(signature, commitment=Confirmed)
            statuses = confirm_resp.value or []
            status = statuses[0] if statuses else None
            if status is not None and status.err is not None:
                raise BroadcastError(self.chain.name, "transaction failed", raw_log=str(status.err))

        tx_hash = str(signature)
        slot = status.slot if status is not None else None
        logger.info(f"Sent {params.amount} SOL ({lamports} lamports) to {params.recipient}: {tx_hash}")
        return self._result(tx_type, tx_hash, str(sender), slot)
