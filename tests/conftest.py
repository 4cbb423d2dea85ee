"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment
os.environ["DEBUG"] = "false"
os.environ.pop("WALLET_SEED_PHRASE", None)

from chaintx.chains import get_chain_config
from chaintx.config import Settings, get_settings

# BIP39 test vector; never holds funds
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)

# Fails the BIP39 checksum
BAD_MNEMONIC = " ".join(["abandon"] * 12)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop cached settings so env changes in a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mnemonic() -> str:
    return TEST_MNEMONIC


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def cosmoshub(settings):
    return get_chain_config("cosmoshub", settings)


@pytest.fixture
def solana_chain(settings):
    return get_chain_config("solana", settings)


@pytest.fixture
def ethereum_chain(settings):
    return get_chain_config("ethereum", settings)


@pytest.fixture
def bad_mnemonic() -> str:
    return BAD_MNEMONIC
