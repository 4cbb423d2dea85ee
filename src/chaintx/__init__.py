"""Multi-chain transaction dispatcher.

Maps a chain name and an operation tag to a signed, broadcast transaction
on a Cosmos SDK chain (cosmpy), Solana (solana-py/solders) or Ethereum
(web3.py).
"""

from chaintx.chains import CHAINS, ChainConfig, ChainFamily, get_chain_config, supported_chains
from chaintx.dispatcher import execute_request, execute_transaction
from chaintx.errors import (
    BroadcastError,
    InvalidMnemonicError,
    InvalidParamsError,
    TransactionError,
    UnsupportedChainError,
    UnsupportedTransactionTypeError,
)
from chaintx.models import (
    TransactionParams,
    TransactionRequest,
    TransactionResult,
    TransactionType,
    VoteOption,
)

__version__ = "0.1.0"

__all__ = [
    # Dispatcher
    "execute_transaction",
    "execute_request",
    # Chains
    "CHAINS",
    "ChainConfig",
    "ChainFamily",
    "get_chain_config",
    "supported_chains",
    # Models
    "TransactionParams",
    "TransactionRequest",
    "TransactionResult",
    "TransactionType",
    "VoteOption",
    # Errors
    "TransactionError",
    "UnsupportedChainError",
    "UnsupportedTransactionTypeError",
    "InvalidParamsError",
    "InvalidMnemonicError",
    "BroadcastError",
]
