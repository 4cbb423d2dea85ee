"""Base interface for chain handlers.

Execution flow:
1. Resolve the transaction type (unknown or unsupported types fail here)
2. Validate operation parameters
3. Derive the signing key from the seed phrase
4. Build exactly one message/transaction
5. Sign and broadcast
6. Wait for the broadcast result and report it

Steps 1-2 never derive keys or touch the network.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from chaintx.chains import ChainConfig, ChainFamily
from chaintx.config import Settings, get_settings
from chaintx.errors import UnsupportedTransactionTypeError
from chaintx.models import TransactionParams, TransactionResult, TransactionType

logger = logging.getLogger(__name__)


class ChainHandler(ABC):
    """Abstract base class for chain handlers.

    Each SDK family has its own implementation. Subclasses list the
    operations they offer in REQUIRED_PARAMS, mapping each type to the
    parameter fields its builder needs.
    """

    family: ChainFamily
    REQUIRED_PARAMS: dict[TransactionType, tuple[str, ...]] = {}

    def __init__(self, chain: ChainConfig, settings: Optional[Settings] = None):
        """Initialize handler.

        Args:
            chain: Chain configuration (endpoint overrides already applied)
            settings: Settings for fees and timeouts (defaults to get_settings())
        """
        if chain.family != self.family:
            raise ValueError(
                f"{self.__class__.__name__} cannot handle {chain.family.value} chain {chain.name}"
            )
        self.chain = chain
        self.settings = settings or get_settings()

    @property
    def supported_types(self) -> frozenset[TransactionType]:
        """Transaction types this handler can build."""
        return frozenset(self.REQUIRED_PARAMS)

    def resolve_type(self, transaction_type: Union[str, TransactionType]) -> TransactionType:
        """Parse a type label and check this handler supports it.

        Raises:
            UnsupportedTransactionTypeError: If the type is unknown or unsupported
        """
        tx_type = TransactionType.parse(transaction_type)
        if tx_type not in self.supported_types:
            raise UnsupportedTransactionTypeError(tx_type.value, self.chain.name)
        return tx_type

    def validate_params(self, tx_type: TransactionType, params: TransactionParams) -> None:
        """Check parameters for an operation before any signing.

        Subclasses extend this with format checks (amount parsing, etc).
        """
        params.require(*self.REQUIRED_PARAMS[tx_type])

    async def execute(
        self,
        transaction_type: Union[str, TransactionType],
        mnemonic: str,
        params: Optional[TransactionParams] = None,
    ) -> TransactionResult:
        """Build, sign and broadcast one transaction.

        Args:
            transaction_type: Operation tag (send, ibcTransfer, delegate, ...)
            mnemonic: BIP39 seed phrase to derive the signing key from
            params: Operation parameters

        Returns:
            TransactionResult with a non-empty hash

        Raises:
            UnsupportedTransactionTypeError: Unknown or unsupported type
            InvalidParamsError: Missing or malformed parameters
            InvalidMnemonicError: Seed phrase fails validation
            BroadcastError: Network rejected the transaction
        """
        tx_type = self.resolve_type(transaction_type)
        params = params or TransactionParams()
        self.validate_params(tx_type, params)

        logger.info(f"Executing {tx_type.value} on {self.chain.name}")
        return await self._execute(tx_type, mnemonic, params)

    @abstractmethod
    async def _execute(
        self,
        tx_type: TransactionType,
        mnemonic: str,
        params: TransactionParams,
    ) -> TransactionResult:
        """Derive keys, build, sign, broadcast and confirm."""
        pass

    def _result(
        self,
        tx_type: TransactionType,
        tx_hash: str,
        sender: str,
        height: Optional[int] = None,
    ) -> TransactionResult:
        return TransactionResult(
            chain=self.chain.name,
            transaction_type=tx_type,
            tx_hash=tx_hash,
            success=True,
            sender=sender,
            height=height,
            explorer_url=self.chain.tx_explorer_url(tx_hash),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(chain={self.chain.name})"
