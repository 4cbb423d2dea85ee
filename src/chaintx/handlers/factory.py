"""Factory for creating chain handlers."""

from typing import Optional

from chaintx.chains import ChainFamily, get_chain_config
from chaintx.config import Settings, get_settings
from chaintx.handlers.base import ChainHandler
from chaintx.handlers.cosmos import CosmosHandler
from chaintx.handlers.ethereum import EthereumHandler
from chaintx.handlers.solana import SolanaHandler

HANDLERS: dict[ChainFamily, type[ChainHandler]] = {
    ChainFamily.COSMOS: CosmosHandler,
    ChainFamily.SOLANA: SolanaHandler,
    ChainFamily.ETHEREUM: EthereumHandler,
}


def get_chain_handler(chain_name: str, settings: Optional[Settings] = None) -> ChainHandler:
    """Get a handler for a chain.

    Handlers are built per call; no client is created until a
    transaction is executed.

    Args:
        chain_name: Chain name (cosmoshub, osmosis, akash, solana, ethereum)
        settings: Settings override (defaults to get_settings())

    Raises:
        UnsupportedChainError: If the chain is not in the chain table
    """
    settings = settings or get_settings()
    chain = get_chain_config(chain_name, settings)
    handler_cls = HANDLERS[chain.family]
    return handler_cls(chain, settings)
