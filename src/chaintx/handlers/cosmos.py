"""Cosmos SDK chain handler.

Uses cosmpy for message encoding, signing and broadcast. Every operation
pays the same fixed fee (COSMOS_FEE_AMOUNT of the native denom, with
COSMOS_GAS_LIMIT gas) and carries a short default memo.

Supported operations:
- send: bank MsgSend
- ibcTransfer: ibc transfer MsgTransfer
- delegate / undelegate / redelegate: staking messages
- submitProposal: gov v1beta1 MsgSubmitProposal with a TextProposal
- vote: gov v1beta1 MsgVote
"""

import asyncio
import logging
from datetime import timedelta
from typing import Callable, Optional

from cosmpy.aerial.client import LedgerClient, NetworkConfig
from cosmpy.aerial.exceptions import BroadcastError as CosmpyBroadcastError
from cosmpy.aerial.tx import SigningCfg, Transaction
from cosmpy.aerial.wallet import LocalWallet
from cosmpy.protos.cosmos.bank.v1beta1.tx_pb2 import MsgSend
from cosmpy.protos.cosmos.base.v1beta1.coin_pb2 import Coin
from cosmpy.protos.cosmos.gov.v1beta1.gov_pb2 import TextProposal
from cosmpy.protos.cosmos.gov.v1beta1.tx_pb2 import MsgSubmitProposal, MsgVote
from cosmpy.protos.cosmos.staking.v1beta1.tx_pb2 import (
    MsgBeginRedelegate,
    MsgDelegate,
    MsgUndelegate,
)
from cosmpy.protos.ibc.applications.transfer.v1.tx_pb2 import MsgTransfer
from cosmpy.protos.ibc.core.client.v1.client_pb2 import Height
from google.protobuf.any_pb2 import Any as ProtoAny
from google.protobuf.message import Message

from chaintx.chains import ChainConfig, ChainFamily
from chaintx.config import Settings
from chaintx.errors import BroadcastError, InvalidParamsError
from chaintx.handlers.base import ChainHandler
from chaintx.models import TransactionParams, TransactionResult, TransactionType, VoteOption
from chaintx.signer import CosmosSigner

logger = logging.getLogger(__name__)

TEXT_PROPOSAL_TYPE_URL = "/cosmos.gov.v1beta1.TextProposal"

DEFAULT_MEMOS = {
    TransactionType.SEND: "Sending tokens",
    TransactionType.IBC_TRANSFER: "IBC transfer",
    TransactionType.DELEGATE: "Delegating tokens",
    TransactionType.UNDELEGATE: "Undelegating tokens",
    TransactionType.REDELEGATE: "Redelegating tokens",
    TransactionType.SUBMIT_PROPOSAL: "Submitting proposal",
    TransactionType.VOTE: "Voting on proposal",
}


def parse_base_units(value, field: str) -> int:
    """Parse an integer amount in the chain's base denom (e.g. uatom).

    Raises:
        InvalidParamsError: If the value is not a positive integer
    """
    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidParamsError(f"{field} must be a positive integer in base units, got {value!r}")
    amount = int(text)
    if amount <= 0:
        raise InvalidParamsError(f"{field} must be greater than zero")
    return amount


class CosmosHandler(ChainHandler):
    """Handler for Cosmos SDK chains (cosmoshub, osmosis, akash)."""

    family = ChainFamily.COSMOS
    REQUIRED_PARAMS = {
        TransactionType.SEND: ("recipient", "amount"),
        TransactionType.IBC_TRANSFER: ("recipient", "amount"),
        TransactionType.DELEGATE: ("validator_address", "amount"),
        TransactionType.UNDELEGATE: ("validator_address", "amount"),
        TransactionType.REDELEGATE: ("src_validator_address", "dst_validator_address", "amount"),
        TransactionType.SUBMIT_PROPOSAL: ("title", "description", "deposit"),
        TransactionType.VOTE: ("proposal_id", "option"),
    }

    def __init__(
        self,
        chain: ChainConfig,
        settings: Optional[Settings] = None,
        client_factory: Callable[[NetworkConfig], LedgerClient] = LedgerClient,
    ):
        super().__init__(chain, settings)
        self._client_factory = client_factory
        self._builders = {
            TransactionType.SEND: self._build_send,
            TransactionType.IBC_TRANSFER: self._build_ibc_transfer,
            TransactionType.DELEGATE: self._build_delegate,
            TransactionType.UNDELEGATE: self._build_undelegate,
            TransactionType.REDELEGATE: self._build_redelegate,
            TransactionType.SUBMIT_PROPOSAL: self._build_submit_proposal,
            TransactionType.VOTE: self._build_vote,
        }

    @property
    def fee(self) -> str:
        """Fixed fee as a cosmpy coin string, e.g. '5000uatom'."""
        return f"{self.settings.cosmos_fee_amount}{self.chain.native_denom}"

    def network_config(self) -> NetworkConfig:
        """cosmpy network configuration for this chain."""
        return NetworkConfig(
            chain_id=self.chain.chain_id,
            url=self.chain.rpc_endpoint,
            fee_minimum_gas_price=0,
            fee_denomination=self.chain.native_denom,
            staking_denomination=self.chain.native_denom,
        )

    def validate_params(self, tx_type: TransactionType, params: TransactionParams) -> None:
        super().validate_params(tx_type, params)

        if tx_type == TransactionType.SUBMIT_PROPOSAL:
            parse_base_units(params.deposit, "deposit")
        elif tx_type == TransactionType.VOTE:
            parse_base_units(params.proposal_id, "proposal_id")
            VoteOption.parse(params.option)
        else:
            parse_base_units(params.amount, "amount")

    def _coin(self, amount) -> Coin:
        return Coin(denom=self.chain.native_denom, amount=str(int(amount)))

    # ======================
    # Message builders
    # ======================

    def build_message(
        self, tx_type: TransactionType, params: TransactionParams, sender: str
    ) -> Message:
        """Build the single message for an operation."""
        return self._builders[tx_type](params, sender)

    def _build_send(self, params: TransactionParams, sender: str) -> MsgSend:
        return MsgSend(
            from_address=sender,
            to_address=params.recipient,
            amount=[self._coin(parse_base_units(params.amount, "amount"))],
        )

    def _build_ibc_transfer(self, params: TransactionParams, sender: str) -> MsgTransfer:
        return MsgTransfer(
            source_port=self.settings.ibc_source_port,
            source_channel=params.source_channel or self.settings.ibc_source_channel,
            token=self._coin(parse_base_units(params.amount, "amount")),
            sender=sender,
            receiver=params.recipient,
            timeout_height=Height(
                revision_number=self.settings.ibc_timeout_revision_number,
                revision_height=self.settings.ibc_timeout_revision_height,
            ),
        )

    def _build_delegate(self, params: TransactionParams, sender: str) -> MsgDelegate:
        return MsgDelegate(
            delegator_address=sender,
            validator_address=params.validator_address,
            amount=self._coin(parse_base_units(params.amount, "amount")),
        )

    def _build_undelegate(self, params: TransactionParams, sender: str) -> MsgUndelegate:
        return MsgUndelegate(
            delegator_address=sender,
            validator_address=params.validator_address,
            amount=self._coin(parse_base_units(params.amount, "amount")),
        )

    def _build_redelegate(self, params: TransactionParams, sender: str) -> MsgBeginRedelegate:
        return MsgBeginRedelegate(
            delegator_address=sender,
            validator_src_address=params.src_validator_address,
            validator_dst_address=params.dst_validator_address,
            amount=self._coin(parse_base_units(params.amount, "amount")),
        )

    def _build_submit_proposal(self, params: TransactionParams, sender: str) -> MsgSubmitProposal:
        proposal = TextProposal(title=params.title, description=params.description)
        content = ProtoAny(
            type_url=TEXT_PROPOSAL_TYPE_URL,
            value=proposal.SerializeToString(),
        )
        return MsgSubmitProposal(
            content=content,
            initial_deposit=[self._coin(parse_base_units(params.deposit, "deposit"))],
            proposer=sender,
        )

    def _build_vote(self, params: TransactionParams, sender: str) -> MsgVote:
        return MsgVote(
            proposal_id=parse_base_units(params.proposal_id, "proposal_id"),
            voter=sender,
            option=int(VoteOption.parse(params.option)),
        )

    # ======================
    # Sign and broadcast
    # ======================

    async def _execute(
        self,
        tx_type: TransactionType,
        mnemonic: str,
        params: TransactionParams,
    ) -> TransactionResult:
        signer = CosmosSigner(mnemonic, prefix=self.chain.address_prefix)
        wallet = signer.get_wallet()
        sender = str(wallet.address())

        msg = self.build_message(tx_type, params, sender)
        memo = params.memo or DEFAULT_MEMOS[tx_type]

        # cosmpy is synchronous; keep the event loop free while it blocks
        loop = asyncio.get_running_loop()
        tx_hash, height = await loop.run_in_executor(
            None, lambda: self._sign_and_broadcast(wallet, msg, memo)
        )

        logger.info(f"{self.chain.name} {tx_type.value} included at height {height}: {tx_hash}")
        return self._result(tx_type, tx_hash, sender, height)

    def _sign_and_broadcast(
        self, wallet: LocalWallet, msg: Message, memo: str
    ) -> tuple[str, Optional[int]]:
        """Seal, sign, broadcast and wait for inclusion.

        Returns:
            (tx_hash, block height)

        Raises:
            BroadcastError: If the chain rejects or fails the transaction
        """
        client = self._client_factory(self.network_config())
        account = client.query_account(wallet.address())

        tx = Transaction()
        tx.add_message(msg)
        tx.seal(
            SigningCfg.direct(wallet.public_key(), account.sequence),
            fee=self.fee,
            gas_limit=self.settings.cosmos_gas_limit,
            memo=memo,
        )
        tx.sign(wallet.signer(), self.chain.chain_id, account.number)
        tx.complete()

        try:
            submitted = client.broadcast_tx(tx)
            submitted.wait_to_complete(
                timeout=timedelta(seconds=self.settings.tx_timeout_seconds)
            )
        except CosmpyBroadcastError as e:
            raise BroadcastError(self.chain.name, "broadcast rejected", raw_log=str(e)) from e

        response = submitted.response
        if response is None:
            raise BroadcastError(self.chain.name, "no response for broadcast transaction")
        if response.code != 0:
            raise BroadcastError(
                self.chain.name,
                "transaction failed",
                code=response.code,
                raw_log=response.raw_log,
            )
        if not submitted.tx_hash:
            raise BroadcastError(self.chain.name, "broadcast returned no transaction hash")

        return submitted.tx_hash, response.height
