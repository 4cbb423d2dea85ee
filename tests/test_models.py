"""Tests for request/result models."""

import pytest

from chaintx.errors import InvalidParamsError, UnsupportedTransactionTypeError
from chaintx.models import (
    TransactionParams,
    TransactionRequest,
    TransactionResult,
    TransactionType,
    VoteOption,
)


class TestTransactionType:
    """Tests for operation tag parsing."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("send", TransactionType.SEND),
            ("ibcTransfer", TransactionType.IBC_TRANSFER),
            ("ibc_transfer", TransactionType.IBC_TRANSFER),
            ("delegate", TransactionType.DELEGATE),
            ("undelegate", TransactionType.UNDELEGATE),
            ("redelegate", TransactionType.REDELEGATE),
            ("submitProposal", TransactionType.SUBMIT_PROPOSAL),
            ("submit_proposal", TransactionType.SUBMIT_PROPOSAL),
            ("vote", TransactionType.VOTE),
        ],
    )
    def test_parse(self, label, expected):
        assert TransactionType.parse(label) is expected

    @pytest.mark.parametrize("label", ["swap", "", "stake", "transfer", None])
    def test_parse_unknown(self, label):
        with pytest.raises(UnsupportedTransactionTypeError, match="Unsupported transaction type"):
            TransactionType.parse(label)


class TestVoteOption:
    """Tests for vote option parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (1, VoteOption.YES),
            ("2", VoteOption.ABSTAIN),
            ("no", VoteOption.NO),
            ("no_with_veto", VoteOption.NO_WITH_VETO),
            ("No-With-Veto", VoteOption.NO_WITH_VETO),
            ("VOTE_OPTION_YES", VoteOption.YES),
        ],
    )
    def test_parse(self, value, expected):
        assert VoteOption.parse(value) is expected

    @pytest.mark.parametrize("value", [0, 5, "maybe", "²", True, None])
    def test_parse_invalid(self, value):
        with pytest.raises(InvalidParamsError):
            VoteOption.parse(value)


class TestTransactionParams:
    """Tests for operation parameters."""

    def test_from_dict_camel_case(self):
        params = TransactionParams.from_dict({
            "recipient": "cosmos1recipient",
            "amount": 1000000,
            "validatorAddress": "cosmosvaloper1a",
            "srcValidatorAddress": "cosmosvaloper1src",
            "dstValidatorAddress": "cosmosvaloper1dst",
            "proposalId": "1",
            "option": 1,
        })

        assert params.amount == "1000000"
        assert params.validator_address == "cosmosvaloper1a"
        assert params.src_validator_address == "cosmosvaloper1src"
        assert params.dst_validator_address == "cosmosvaloper1dst"
        assert params.proposal_id == "1"
        assert params.option == 1

    def test_from_dict_snake_case(self):
        params = TransactionParams.from_dict({"validator_address": "v", "source_channel": "channel-141"})
        assert params.validator_address == "v"
        assert params.source_channel == "channel-141"

    def test_from_dict_unknown_key(self):
        with pytest.raises(InvalidParamsError, match="recipeint"):
            TransactionParams.from_dict({"recipeint": "typo"})

    def test_require_lists_all_missing(self):
        params = TransactionParams(amount="10")

        with pytest.raises(InvalidParamsError) as exc:
            params.require("recipient", "amount", "memo")

        assert "recipient" in str(exc.value)
        assert "memo" in str(exc.value)
        assert "amount" not in str(exc.value)

    def test_require_treats_empty_string_as_missing(self):
        with pytest.raises(InvalidParamsError):
            TransactionParams(recipient="").require("recipient")


class TestRequestAndResult:
    """Tests for request/result records."""

    def test_request_repr_hides_mnemonic(self, mnemonic):
        request = TransactionRequest(chain="cosmoshub", transaction_type="send", mnemonic=mnemonic)
        assert "abandon" not in repr(request)

    def test_result_requires_hash(self):
        with pytest.raises(ValueError):
            TransactionResult(chain="cosmoshub", transaction_type=TransactionType.SEND, tx_hash="")

    def test_result_success(self):
        result = TransactionResult(
            chain="cosmoshub", transaction_type=TransactionType.SEND, tx_hash="ABCDEF"
        )
        assert result.success is True
        assert result.tx_hash == "ABCDEF"
