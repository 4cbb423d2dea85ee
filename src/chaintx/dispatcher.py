"""Transaction dispatcher.

Selects the handler for a chain and runs one operation on it. Errors are
not caught here: unsupported chains, unsupported operation types and SDK
failures all propagate to the caller.
"""

import logging
from typing import Any, Mapping, Optional, Union

from chaintx.config import Settings
from chaintx.handlers.factory import get_chain_handler
from chaintx.models import TransactionParams, TransactionRequest, TransactionResult, TransactionType

logger = logging.getLogger(__name__)


async def execute_transaction(
    chain_name: str,
    transaction_type: Union[str, TransactionType],
    mnemonic: str,
    params: Union[TransactionParams, Mapping[str, Any], None] = None,
    settings: Optional[Settings] = None,
) -> TransactionResult:
    """Execute one transaction on a chain.

    Args:
        chain_name: Chain name from the chain table
        transaction_type: send, ibcTransfer, delegate, undelegate,
            redelegate, submitProposal or vote
        mnemonic: BIP39 seed phrase
        params: TransactionParams or a mapping with camelCase/snake_case keys
        settings: Settings override

    Returns:
        TransactionResult for the accepted broadcast
    """
    # Chain and type errors take precedence over parameter errors
    handler = get_chain_handler(chain_name, settings)
    tx_type = handler.resolve_type(transaction_type)

    if params is None:
        params = TransactionParams()
    elif not isinstance(params, TransactionParams):
        params = TransactionParams.from_dict(params)

    result = await handler.execute(tx_type, mnemonic, params)

    logger.info(f"Transaction successful with hash: {result.tx_hash}")
    return result


async def execute_request(
    request: TransactionRequest, settings: Optional[Settings] = None
) -> TransactionResult:
    """Execute a TransactionRequest."""
    return await execute_transaction(
        request.chain,
        request.transaction_type,
        request.mnemonic,
        request.params,
        settings=settings,
    )
