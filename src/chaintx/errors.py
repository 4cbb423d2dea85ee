"""Exceptions raised while dispatching a transaction."""

from typing import Optional


class TransactionError(Exception):
    """Base exception for dispatcher failures."""
    pass


class UnsupportedChainError(TransactionError):
    """Raised when a chain name is not in the chain table."""

    def __init__(self, chain: str):
        self.chain = chain
        super().__init__(f"Unsupported chain: {chain}")


class UnsupportedTransactionTypeError(TransactionError):
    """Raised when a transaction type is unknown or not offered by a chain family."""

    def __init__(self, transaction_type: str, chain: Optional[str] = None):
        self.transaction_type = transaction_type
        self.chain = chain
        message = f"Unsupported transaction type: {transaction_type}"
        if chain:
            message += f" (chain: {chain})"
        super().__init__(message)


class InvalidParamsError(TransactionError, ValueError):
    """Raised when operation parameters are missing or malformed."""
    pass


class InvalidMnemonicError(TransactionError, ValueError):
    """Raised when a seed phrase fails BIP39 validation."""
    pass


class BroadcastError(TransactionError):
    """Raised when the network rejects a broadcast transaction."""

    def __init__(
        self,
        chain: str,
        message: str,
        code: Optional[int] = None,
        raw_log: Optional[str] = None,
    ):
        self.chain = chain
        self.code = code
        self.raw_log = raw_log
        detail = f"{chain}: {message}"
        if code is not None:
            detail += f" (code {code})"
        if raw_log:
            detail += f": {raw_log}"
        super().__init__(detail)
