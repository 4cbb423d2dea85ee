"""Static chain configuration table.

Supports three SDK families:
- Cosmos SDK chains (cosmoshub, osmosis, akash) via cosmpy
- Solana via solana-py / solders
- Ethereum via web3.py

Cosmos endpoints use cosmpy's URL scheme ("rest+https://..." or
"grpc+https://...") because cosmpy does not speak Tendermint RPC.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from chaintx.config import Settings, get_settings
from chaintx.errors import UnsupportedChainError

logger = logging.getLogger(__name__)


class ChainFamily(str, Enum):
    """SDK family that handles a chain."""
    COSMOS = "cosmos"
    SOLANA = "solana"
    ETHEREUM = "ethereum"


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a blockchain."""

    name: str
    family: ChainFamily
    rpc_endpoint: str
    native_denom: str
    chain_id: Union[str, int]
    decimals: int

    address_prefix: Optional[str] = None  # Cosmos bech32 prefix
    explorer_tx_url: Optional[str] = None  # format string with {tx_hash}

    def tx_explorer_url(self, tx_hash: str) -> Optional[str]:
        """Get the block explorer URL for a transaction hash."""
        if not self.explorer_tx_url:
            return None
        return self.explorer_tx_url.format(tx_hash=tx_hash)


# ======================
# Chain Configurations
# ======================

CHAINS: Mapping[str, ChainConfig] = MappingProxyType({
    "cosmoshub": ChainConfig(
        name="cosmoshub",
        family=ChainFamily.COSMOS,
        rpc_endpoint="rest+https://rest.cosmos.directory/cosmoshub",
        native_denom="uatom",
        chain_id="cosmoshub-4",
        decimals=6,
        address_prefix="cosmos",
        explorer_tx_url="https://www.mintscan.io/cosmos/tx/{tx_hash}",
    ),
    "osmosis": ChainConfig(
        name="osmosis",
        family=ChainFamily.COSMOS,
        rpc_endpoint="rest+https://lcd.osmosis.zone",
        native_denom="uosmo",
        chain_id="osmosis-1",
        decimals=6,
        address_prefix="osmo",
        explorer_tx_url="https://www.mintscan.io/osmosis/tx/{tx_hash}",
    ),
    "akash": ChainConfig(
        name="akash",
        family=ChainFamily.COSMOS,
        rpc_endpoint="rest+https://rest.cosmos.directory/akash",
        native_denom="uakt",
        chain_id="akashnet-2",
        decimals=6,
        address_prefix="akash",
        explorer_tx_url="https://www.mintscan.io/akash/tx/{tx_hash}",
    ),
    "solana": ChainConfig(
        name="solana",
        family=ChainFamily.SOLANA,
        rpc_endpoint="https://api.mainnet-beta.solana.com",
        native_denom="sol",
        chain_id="mainnet-beta",
        decimals=9,
        explorer_tx_url="https://solscan.io/tx/{tx_hash}",
    ),
    "ethereum": ChainConfig(
        name="ethereum",
        family=ChainFamily.ETHEREUM,
        rpc_endpoint="https://eth.llamarpc.com",
        native_denom="eth",
        chain_id=1,
        decimals=18,
        explorer_tx_url="https://etherscan.io/tx/{tx_hash}",
    ),
})


def supported_chains() -> list[str]:
    """Get sorted list of supported chain names."""
    return sorted(CHAINS)


def get_chain_config(chain_name: str, settings: Optional[Settings] = None) -> ChainConfig:
    """Look up a chain, applying endpoint and chain id overrides from settings.

    Args:
        chain_name: Chain name (case-insensitive)
        settings: Settings to read overrides from (defaults to get_settings())

    Returns:
        ChainConfig for the chain

    Raises:
        UnsupportedChainError: If the chain is not in the table
    """
    key = chain_name.strip().lower() if isinstance(chain_name, str) else chain_name
    config = CHAINS.get(key)
    if config is None:
        raise UnsupportedChainError(chain_name)

    settings = settings or get_settings()
    override = settings.get_rpc_url(config.name)
    if override:
        logger.debug(f"Using RPC override for {config.name}: {override}")
        config = replace(config, rpc_endpoint=override)

    if config.family == ChainFamily.ETHEREUM and settings.eth_chain_id:
        logger.debug(f"Using chain id override for {config.name}: {settings.eth_chain_id}")
        config = replace(config, chain_id=settings.eth_chain_id)

    return config
