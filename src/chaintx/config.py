"""Application configuration using pydantic-settings.

Every value has a working default, so nothing needs to be set to send a
transaction. Environment variables (or a .env file) override endpoints and
the fixed fee used for Cosmos chains.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Runtime
    # ======================
    debug: bool = Field(default=False, description="Enable debug logging")

    # ======================
    # Wallet
    # ======================
    wallet_seed_phrase: Optional[str] = Field(
        default=None, description="12/24 word BIP39 seed phrase used when --mnemonic is not given"
    )
    solana_derivation: Literal["legacy", "bip44"] = Field(
        default="legacy",
        description="Solana key scheme: 'legacy' (first 32 seed bytes) or 'bip44' (m/44'/501'/0'/0')",
    )

    # ======================
    # Chain RPC Endpoint Overrides
    # ======================
    # Empty means "use the endpoint from the chain table"
    cosmoshub_rpc_url: str = Field(default="", description="Cosmos Hub REST/gRPC URL (cosmpy scheme)")
    osmosis_rpc_url: str = Field(default="", description="Osmosis REST/gRPC URL (cosmpy scheme)")
    akash_rpc_url: str = Field(default="", description="Akash REST/gRPC URL (cosmpy scheme)")
    solana_rpc_url: str = Field(default="", description="Solana JSON-RPC URL")
    eth_rpc_url: str = Field(default="", description="Ethereum JSON-RPC URL")

    # ======================
    # Cosmos Fees / IBC
    # ======================
    cosmos_fee_amount: int = Field(default=5000, description="Fixed fee in the chain's base denom")
    cosmos_gas_limit: int = Field(default=200000, description="Gas limit for Cosmos transactions")
    ibc_source_port: str = Field(default="transfer", description="IBC source port")
    ibc_source_channel: str = Field(default="channel-0", description="Default IBC source channel")
    ibc_timeout_revision_number: int = Field(default=1, description="IBC timeout height revision")
    ibc_timeout_revision_height: int = Field(default=12345678, description="IBC timeout block height")

    # ======================
    # Ethereum
    # ======================
    eth_gas_limit: int = Field(default=21000, description="Gas limit for native ETH transfers")
    eth_wait_for_receipt: bool = Field(
        default=True, description="Wait for the transaction receipt before reporting success"
    )
    eth_chain_id: Optional[int] = Field(
        default=None, description="EIP-155 chain id to sign for when ETH_RPC_URL points at another network"
    )

    # ======================
    # Timeouts
    # ======================
    tx_timeout_seconds: int = Field(
        default=120, description="Seconds to wait for a broadcast transaction to be included"
    )

    @property
    def has_wallet(self) -> bool:
        """Check if wallet seed phrase is configured."""
        return bool(self.wallet_seed_phrase and len(self.wallet_seed_phrase.split()) >= 12)

    def get_rpc_url(self, chain: str) -> str:
        """Get the RPC URL override for a chain, or "" if none is set."""
        rpc_map = {
            "cosmoshub": self.cosmoshub_rpc_url,
            "osmosis": self.osmosis_rpc_url,
            "akash": self.akash_rpc_url,
            "solana": self.solana_rpc_url,
            "ethereum": self.eth_rpc_url,
        }
        return rpc_map.get(chain.lower(), "")

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "debug": self.debug,
            "wallet_configured": self.has_wallet,
            "wallet_seed_phrase": "***" if self.wallet_seed_phrase else "(not set)",
            "solana_derivation": self.solana_derivation,
            "rpc_overrides": {
                "cosmoshub": self.cosmoshub_rpc_url or "(default)",
                "osmosis": self.osmosis_rpc_url or "(default)",
                "akash": self.akash_rpc_url or "(default)",
                "solana": self.solana_rpc_url or "(default)",
                "ethereum": self.eth_rpc_url or "(default)",
            },
            "cosmos": {
                "fee_amount": self.cosmos_fee_amount,
                "gas_limit": self.cosmos_gas_limit,
                "ibc_port": self.ibc_source_port,
                "ibc_channel": self.ibc_source_channel,
            },
            "ethereum": {
                "gas_limit": self.eth_gas_limit,
                "wait_for_receipt": self.eth_wait_for_receipt,
                "chain_id": self.eth_chain_id or "(default)",
            },
            "tx_timeout_seconds": self.tx_timeout_seconds,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
