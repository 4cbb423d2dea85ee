"""Request and result types passed through the dispatcher.

None of these are persisted: a request is built per invocation and the
result is printed and discarded.
"""

from dataclasses import dataclass, field, fields
from enum import Enum, IntEnum
from typing import Any, Mapping, Optional, Union

from chaintx.errors import InvalidParamsError, UnsupportedTransactionTypeError


def _normalize_label(label: str) -> str:
    return label.strip().replace("_", "").replace("-", "").lower()


class TransactionType(str, Enum):
    """Operation tags accepted by the dispatcher."""

    SEND = "send"
    IBC_TRANSFER = "ibcTransfer"
    DELEGATE = "delegate"
    UNDELEGATE = "undelegate"
    REDELEGATE = "redelegate"
    SUBMIT_PROPOSAL = "submitProposal"
    VOTE = "vote"

    @classmethod
    def parse(cls, label: Union[str, "TransactionType"]) -> "TransactionType":
        """Resolve a label such as 'ibcTransfer' or 'ibc_transfer'.

        Raises:
            UnsupportedTransactionTypeError: If the label matches no operation
        """
        if isinstance(label, cls):
            return label
        if isinstance(label, str):
            wanted = _normalize_label(label)
            for member in cls:
                if _normalize_label(member.value) == wanted:
                    return member
        raise UnsupportedTransactionTypeError(str(label))


class VoteOption(IntEnum):
    """Governance vote options (cosmos.gov.v1beta1.VoteOption numbering)."""

    YES = 1
    ABSTAIN = 2
    NO = 3
    NO_WITH_VETO = 4

    @classmethod
    def parse(cls, value: Union[int, str, "VoteOption"]) -> "VoteOption":
        """Accept 1-4, '1'-'4', or a name like 'yes' / 'no_with_veto'."""
        if isinstance(value, bool):
            raise InvalidParamsError(f"Invalid vote option: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidParamsError(f"Invalid vote option: {value!r}")
        if isinstance(value, str):
            text = value.strip()
            if text.isascii() and text.isdigit():
                return cls.parse(int(text))
            name = text.upper().replace("-", "_").replace(" ", "_")
            if name.startswith("VOTE_OPTION_"):
                name = name[len("VOTE_OPTION_"):]
            if name in cls.__members__:
                return cls[name]
        raise InvalidParamsError(f"Invalid vote option: {value!r}")


# camelCase keys accepted from JSON-style callers
_PARAM_ALIASES = {
    "validatorAddress": "validator_address",
    "srcValidatorAddress": "src_validator_address",
    "dstValidatorAddress": "dst_validator_address",
    "proposalId": "proposal_id",
    "sourceChannel": "source_channel",
}


@dataclass
class TransactionParams:
    """Operation-specific parameters.

    Which fields are required depends on the operation:
        send / ibcTransfer: recipient, amount
        delegate / undelegate: validator_address, amount
        redelegate: src_validator_address, dst_validator_address, amount
        submitProposal: title, description, deposit
        vote: proposal_id, option
    """

    recipient: Optional[str] = None
    amount: Optional[str] = None
    validator_address: Optional[str] = None
    src_validator_address: Optional[str] = None
    dst_validator_address: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    deposit: Optional[str] = None
    proposal_id: Optional[Union[int, str]] = None
    option: Optional[Union[int, str]] = None
    memo: Optional[str] = None
    source_channel: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TransactionParams":
        """Build params from a mapping with camelCase or snake_case keys.

        Raises:
            InvalidParamsError: On keys that match no parameter
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        unknown = []

        for key, value in data.items():
            name = _PARAM_ALIASES.get(key, key)
            if name not in known:
                unknown.append(key)
                continue
            if name in ("amount", "deposit") and value is not None:
                value = str(value)
            values[name] = value

        if unknown:
            raise InvalidParamsError(f"Unknown parameters: {', '.join(sorted(unknown))}")

        return cls(**values)

    def require(self, *names: str) -> None:
        """Ensure the named fields are set.

        Raises:
            InvalidParamsError: Listing every missing field
        """
        missing = [
            name for name in names
            if getattr(self, name) is None or getattr(self, name) == ""
        ]
        if missing:
            raise InvalidParamsError(f"Missing required parameters: {', '.join(missing)}")


@dataclass
class TransactionRequest:
    """One dispatcher invocation."""

    chain: str
    transaction_type: str
    mnemonic: str = field(repr=False)
    params: TransactionParams = field(default_factory=TransactionParams)


@dataclass
class TransactionResult:
    """Outcome of a broadcast that was accepted by the network."""

    chain: str
    transaction_type: TransactionType
    tx_hash: str
    success: bool = True
    sender: Optional[str] = None
    height: Optional[int] = None
    explorer_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.tx_hash:
            raise ValueError("TransactionResult requires a transaction hash")
