"""Tests for the dispatcher, handler factory and CLI."""

from unittest.mock import AsyncMock, patch

import pytest

from chaintx.cli import main
from chaintx.dispatcher import execute_request, execute_transaction
from chaintx.errors import (
    InvalidParamsError,
    UnsupportedChainError,
    UnsupportedTransactionTypeError,
)
from chaintx.handlers import CosmosHandler, EthereumHandler, SolanaHandler, get_chain_handler
from chaintx.models import TransactionRequest, TransactionResult, TransactionType


class TestHandlerFactory:
    """Tests for handler selection by chain name."""

    @pytest.mark.parametrize(
        "chain,handler_cls",
        [
            ("cosmoshub", CosmosHandler),
            ("osmosis", CosmosHandler),
            ("akash", CosmosHandler),
            ("solana", SolanaHandler),
            ("ethereum", EthereumHandler),
        ],
    )
    def test_family_selection(self, settings, chain, handler_cls):
        handler = get_chain_handler(chain, settings)

        assert isinstance(handler, handler_cls)
        assert handler.chain.name == chain

    def test_osmosis_uses_osmo_prefix(self, settings):
        handler = get_chain_handler("osmosis", settings)
        assert handler.fee == "5000uosmo"
        assert handler.chain.address_prefix == "osmo"


class TestExecuteTransaction:
    """Tests for the dispatcher entry point."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("chain", ["bitcoin", "polygon", "", "cosmos-hub"])
    async def test_unsupported_chain_before_network(self, settings, mnemonic, chain):
        with patch.object(CosmosHandler, "_execute", new_callable=AsyncMock) as cosmos, \
                patch.object(SolanaHandler, "_execute", new_callable=AsyncMock) as solana, \
                patch.object(EthereumHandler, "_execute", new_callable=AsyncMock) as ethereum:
            with pytest.raises(UnsupportedChainError, match="Unsupported chain"):
                await execute_transaction(chain, "send", mnemonic, {"amount": "1"}, settings=settings)

        cosmos.assert_not_called()
        solana.assert_not_called()
        ethereum.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsupported_type(self, settings, mnemonic):
        with patch.object(CosmosHandler, "_execute", new_callable=AsyncMock) as execute:
            with pytest.raises(UnsupportedTransactionTypeError):
                await execute_transaction("cosmoshub", "mint", mnemonic, {}, settings=settings)

        execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsupported_chain_wins_over_unknown_params(self, settings, mnemonic):
        with pytest.raises(UnsupportedChainError):
            await execute_transaction(
                "bitcoin", "send", mnemonic, {"amount": "1", "to": "x"}, settings=settings
            )

    @pytest.mark.asyncio
    async def test_unsupported_type_wins_over_unknown_params(self, settings, mnemonic):
        with pytest.raises(UnsupportedTransactionTypeError):
            await execute_transaction(
                "cosmoshub", "mint", mnemonic, {"token": "x"}, settings=settings
            )

    @pytest.mark.asyncio
    async def test_unknown_params_on_supported_operation(self, settings, mnemonic):
        with patch.object(CosmosHandler, "_execute", new_callable=AsyncMock) as execute:
            with pytest.raises(InvalidParamsError, match="to"):
                await execute_transaction(
                    "cosmoshub", "send", mnemonic, {"amount": "1", "to": "x"}, settings=settings
                )

        execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_cosmos_send_through_dispatcher(self, settings, mnemonic, caplog):
        params = {"recipient": "cosmos1recipient", "amount": "1000000"}

        with patch.object(
            CosmosHandler, "_sign_and_broadcast", return_value=("DEADBEEF", 42)
        ) as broadcast:
            with caplog.at_level("INFO"):
                result = await execute_transaction(
                    "cosmoshub", "send", mnemonic, params, settings=settings
                )

        assert result.tx_hash == "DEADBEEF"
        assert result.chain == "cosmoshub"
        assert result.transaction_type == TransactionType.SEND
        assert result.sender.startswith("cosmos1")
        broadcast.assert_called_once()
        assert "Transaction successful with hash: DEADBEEF" in caplog.text
        assert "abandon" not in caplog.text

    @pytest.mark.asyncio
    async def test_key_derivation_is_fresh_and_deterministic(self, settings, mnemonic):
        params = {"validatorAddress": "cosmosvaloper1v", "amount": "10"}

        with patch.object(CosmosHandler, "_sign_and_broadcast", return_value=("H", 1)):
            first = await execute_transaction("cosmoshub", "delegate", mnemonic, params, settings=settings)
            second = await execute_transaction("cosmoshub", "delegate", mnemonic, params, settings=settings)

        assert first.sender == second.sender

    @pytest.mark.asyncio
    async def test_sdk_error_propagates(self, settings, mnemonic):
        params = {"recipient": "cosmos1r", "amount": "1"}

        with patch.object(
            CosmosHandler, "_sign_and_broadcast", side_effect=TimeoutError("no block")
        ):
            with pytest.raises(TimeoutError):
                await execute_transaction("akash", "send", mnemonic, params, settings=settings)

    @pytest.mark.asyncio
    async def test_execute_request(self, settings, mnemonic):
        request = TransactionRequest(chain="osmosis", transaction_type="vote", mnemonic=mnemonic)
        request.params.proposal_id = "7"
        request.params.option = "yes"

        with patch.object(CosmosHandler, "_sign_and_broadcast", return_value=("ABC", 5)):
            result = await execute_request(request, settings=settings)

        assert result.tx_hash == "ABC"
        assert result.sender.startswith("osmo1")


class TestCli:
    """Tests for the command line interface."""

    def test_list_chains(self, capsys):
        assert main(["--list-chains"]) == 0

        out = capsys.readouterr().out
        for name in ("cosmoshub", "osmosis", "akash", "solana", "ethereum"):
            assert name in out

    def test_show_config_redacts_seed(self, capsys, monkeypatch, mnemonic):
        monkeypatch.setenv("WALLET_SEED_PHRASE", mnemonic)

        assert main(["--show-config"]) == 0
        assert "abandon" not in capsys.readouterr().out

    def test_requires_chain_and_type(self):
        with pytest.raises(SystemExit):
            main(["cosmoshub"])

    def test_unsupported_chain_exit_code(self, mnemonic):
        assert main(["bitcoin", "send", "--mnemonic", mnemonic, "--amount", "1"]) == 1

    def test_unsupported_type_exit_code(self, mnemonic):
        assert main(["solana", "delegate", "--mnemonic", mnemonic]) == 1

    @pytest.mark.parametrize("argv", [["bitcoin", "send"], ["solana", "vote"]])
    def test_no_seed_prompt_for_bad_chain_or_type(self, argv):
        with patch("chaintx.cli.getpass") as prompt, \
                patch("chaintx.cli.execute_transaction", new_callable=AsyncMock) as execute:
            assert main(argv) == 1

        prompt.assert_not_called()
        execute.assert_not_called()

    def test_success_prints_hash(self, capsys, monkeypatch, mnemonic):
        monkeypatch.setenv("WALLET_SEED_PHRASE", mnemonic)
        result = TransactionResult(
            chain="cosmoshub",
            transaction_type=TransactionType.SEND,
            tx_hash="FEEDFACE",
            explorer_url="https://www.mintscan.io/cosmos/tx/FEEDFACE",
        )

        with patch("chaintx.cli.execute_transaction", new_callable=AsyncMock) as execute:
            execute.return_value = result
            code = main(["cosmoshub", "send", "--recipient", "cosmos1r", "--amount", "5"])

        assert code == 0
        assert "Transaction successful with hash: FEEDFACE" in capsys.readouterr().out

        args = execute.call_args[0]
        assert args[0] == "cosmoshub"
        assert args[1] == "send"
        assert args[2] == mnemonic
        assert args[3].recipient == "cosmos1r"
        assert args[3].amount == "5"
