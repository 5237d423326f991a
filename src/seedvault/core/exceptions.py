"""
Exceptions for SeedVault
Everything raised on purpose derives from SeedVaultError so callers have a
single thing to catch
"""


class SeedVaultError(Exception):
    # general container for errors
    pass


class EncryptionError(SeedVaultError):
    # raised when randomness or the cipher is unavailable during encryption
    pass


class DigestError(SeedVaultError):
    # raised when the hash engine cannot digest the input
    pass


class EnvelopeFormatError(SeedVaultError):
    # raised when an envelope string is structurally invalid
    pass


class DecryptionFailedError(SeedVaultError):
    # raised on tag mismatch (wrong passphrase or tampered ciphertext)
    pass


class KeystoreError(SeedVaultError):
    # raised when the OS keyring is missing or refuses an operation
    pass


class ClipboardError(SeedVaultError):
    # raised when the system clipboard cannot be written
    pass
