"""Chain handlers: one per SDK family.

Each handler builds, signs and broadcasts a single transaction.
"""

from chaintx.handlers.base import ChainHandler
from chaintx.handlers.cosmos import CosmosHandler
from chaintx.handlers.ethereum import EthereumHandler
from chaintx.handlers.factory import get_chain_handler
from chaintx.handlers.solana import SolanaHandler

__all__ = [
    "ChainHandler",
    "CosmosHandler",
    "EthereumHandler",
    "SolanaHandler",
    "get_chain_handler",
]
