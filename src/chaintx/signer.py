"""Key derivation from a BIP39 seed phrase.

Derives signing keys for each supported SDK family:
- Cosmos: m/44'/118'/0'/0/0 (secp256k1), wrapped in a cosmpy LocalWallet
- Ethereum: m/44'/60'/0'/0/0 (secp256k1), wrapped in an eth_account LocalAccount
- Solana: first 32 bytes of the BIP39 seed ("legacy"), or m/44'/501'/0'/0' ("bip44")

Keys are derived fresh on every call and never cached.
"""

import logging

from bip_utils import (
    Bip39MnemonicValidator,
    Bip39SeedGenerator,
    Bip44,
    Bip44Changes,
    Bip44Coins,
)
from cosmpy.aerial.wallet import LocalWallet
from cosmpy.crypto.keypairs import PrivateKey
from eth_account import Account
from eth_account.signers.local import LocalAccount
from solders.keypair import Keypair

from chaintx.errors import InvalidMnemonicError

logger = logging.getLogger(__name__)


def normalize_mnemonic(mnemonic: str) -> str:
    """Collapse whitespace and validate a BIP39 phrase.

    Raises:
        InvalidMnemonicError: If the phrase is empty or fails the BIP39 checksum
    """
    if not mnemonic or not mnemonic.strip():
        raise InvalidMnemonicError("Seed phrase is empty")

    words = mnemonic.strip().split()
    phrase = " ".join(words)

    if not Bip39MnemonicValidator().IsValid(phrase):
        # Never echo the phrase itself
        raise InvalidMnemonicError(f"Invalid seed phrase ({len(words)} words)")

    return phrase


class ChainSigner:
    """Base class for chain-specific key derivation."""

    def __init__(self, seed_phrase: str):
        self.seed_phrase = normalize_mnemonic(seed_phrase)

    def _seed(self) -> bytes:
        return Bip39SeedGenerator(self.seed_phrase).Generate()

    def get_address(self, index: int = 0) -> str:
        """Get address at derivation index."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(seed_phrase=***)"


class CosmosSigner(ChainSigner):
    """Signer for Cosmos SDK chains."""

    def __init__(self, seed_phrase: str, prefix: str = "cosmos"):
        super().__init__(seed_phrase)
        self.prefix = prefix

    def get_private_key(self, index: int = 0) -> bytes:
        """Get raw secp256k1 private key bytes."""
        bip44 = Bip44.FromSeed(self._seed(), Bip44Coins.COSMOS)
        account = bip44.Purpose().Coin().Account(0).Change(Bip44Changes.CHAIN_EXT)
        return account.AddressIndex(index).PrivateKey().Raw().ToBytes()

    def get_wallet(self, index: int = 0) -> LocalWallet:
        """Get a cosmpy wallet using this chain's bech32 prefix."""
        return LocalWallet(PrivateKey(self.get_private_key(index)), prefix=self.prefix)

    def get_address(self, index: int = 0) -> str:
        """Get bech32 address at index."""
        return str(self.get_wallet(index).address())


class EVMSigner(ChainSigner):
    """Signer for Ethereum."""

    def get_private_key(self, index: int = 0) -> bytes:
        """Derive EVM private key from seed phrase."""
        bip44 = Bip44.FromSeed(self._seed(), Bip44Coins.ETHEREUM)
        account = bip44.Purpose().Coin().Account(0).Change(Bip44Changes.CHAIN_EXT)
        return account.AddressIndex(index).PrivateKey().Raw().ToBytes()

    def get_account(self, index: int = 0) -> LocalAccount:
        """Get eth_account account object."""
        return Account.from_key(self.get_private_key(index))

    def get_address(self, index: int = 0) -> str:
        """Get checksummed EVM address at index."""
        return self.get_account(index).address


class SolanaSigner(ChainSigner):
    """Signer for Solana.

    The "legacy" scheme takes the first 32 bytes of the BIP39 seed as the
    ed25519 seed. The "bip44" scheme uses m/44'/index'/0' under coin 501,
    matching Phantom and Trust Wallet.
    """

    SCHEMES = ("legacy", "bip44")

    def __init__(self, seed_phrase: str, derivation: str = "legacy"):
        super().__init__(seed_phrase)
        if derivation not in self.SCHEMES:
            raise ValueError(f"Unknown Solana derivation scheme: {derivation}")
        self.derivation = derivation

    def get_keypair(self, index: int = 0) -> Keypair:
        """Derive Solana keypair from seed phrase."""
        seed = self._seed()

        if self.derivation == "legacy":
            if index != 0:
                raise ValueError("Legacy Solana derivation has a single account")
            return Keypair.from_seed(seed[:32])

        bip44 = Bip44.FromSeed(seed, Bip44Coins.SOLANA)
        account = bip44.Purpose().Coin().Account(index).Change(Bip44Changes.CHAIN_EXT)
        private_key = account.PrivateKey().Raw().ToBytes()
        return Keypair.from_seed(private_key[:32])

    def get_address(self, index: int = 0) -> str:
        """Get base58 Solana address at index."""
        return str(self.get_keypair(index).pubkey())
