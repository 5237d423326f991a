"""
Unit tests for SecretVault.
"""

import pytest
from unittest.mock import patch
from keyring.errors import PasswordDeleteError

from seedvault.core.exceptions import KeystoreError
from seedvault.security.encryption import SecretCodec
from seedvault.security.vault import SecretVault


class MemoryKeyring:
    """Stand-in for the keyring module backed by a dict."""

    def __init__(self):
        self.store = {}

    def set_password(self, service, user, secret):
        self.store[(service, user)] = secret

    def get_password(self, service, user):
        return self.store.get((service, user))

    def delete_password(self, service, user):
        if (service, user) not in self.store:
            raise PasswordDeleteError("not found")
        del self.store[(service, user)]


# ==============================================================================
# Fixtures
# ==============================================================================

@pytest.fixture
def memory_keyring():
    fake = MemoryKeyring()
    with patch("seedvault.security.keystore.keyring", fake):
        yield fake


@pytest.fixture
def secure_backend():
    with patch("seedvault.security.vault.assess_keyring_backend") as mock:
        mock.return_value = (True, "backend looks acceptable: TestKeyring")
        yield mock


@pytest.fixture
def vault(memory_keyring, secure_backend):
    return SecretVault(service="seedvault-test")


# ==============================================================================
# Tests: store / reveal
# ==============================================================================

def test_store_and_reveal(vault, memory_keyring):
    envelope = vault.store_secret("alice", "hunter2", "seed phrase here")

    assert memory_keyring.store[("seedvault-test", "alice")] == envelope
    assert vault.reveal_secret("alice", "hunter2") == "seed phrase here"


def test_store_keeps_only_envelope(vault, memory_keyring):
    vault.store_secret("alice", "hunter2", "seed phrase here")
    stored = memory_keyring.store[("seedvault-test", "alice")]

    assert "hunter2" not in stored
    assert "seed phrase" not in stored
    assert len(stored.split("-")) == 3


def test_store_replaces_previous(vault):
    vault.store_secret("alice", "old-pass", "old seed")
    vault.store_secret("alice", "new-pass", "new seed")

    assert vault.reveal_secret("alice", "old-pass") == ""
    assert vault.reveal_secret("alice", "new-pass") == "new seed"


def test_users_are_isolated(vault):
    vault.store_secret("alice", "pw", "alice seed")
    vault.store_secret("bob", "pw", "bob seed")

    assert vault.reveal_secret("alice", "pw") == "alice seed"
    assert vault.reveal_secret("bob", "pw") == "bob seed"


def test_reveal_wrong_password_returns_empty(vault, caplog):
    vault.store_secret("alice", "hunter2", "seed phrase here")

    assert vault.reveal_secret("alice", "hunter3") == ""
    assert "could not be decrypted" in caplog.text
    assert "hunter3" not in caplog.text


def test_reveal_missing_returns_empty(vault, caplog):
    assert vault.reveal_secret("nobody", "pw") == ""
    assert "no secret stored" in caplog.text


def test_reveal_corrupted_entry_returns_empty(vault, memory_keyring):
    memory_keyring.store[("seedvault-test", "alice")] = "garbage"
    assert vault.reveal_secret("alice", "pw") == ""


# ==============================================================================
# Tests: verify / forget
# ==============================================================================

def test_verify_password(vault):
    vault.store_secret("alice", "hunter2", "seed phrase here")

    assert vault.verify_password("alice", "hunter2") is True
    assert vault.verify_password("alice", "hunter3") is False
    assert vault.verify_password("bob", "hunter2") is False


def test_forget(vault, memory_keyring):
    vault.store_secret("alice", "hunter2", "seed")
    vault.forget("alice")

    assert memory_keyring.store == {}
    assert vault.reveal_secret("alice", "hunter2") == ""
    # forgetting twice is fine
    vault.forget("alice")


# ==============================================================================
# Tests: Backend checks
# ==============================================================================

def test_insecure_backend_refused(memory_keyring):
    with patch("seedvault.security.vault.assess_keyring_backend") as mock:
        mock.return_value = (False, "insecure backend detected: PlaintextKeyring")
        v = SecretVault()

        with pytest.raises(KeystoreError, match="refusing to store secret"):
            v.store_secret("alice", "pw", "seed")
    assert memory_keyring.store == {}


def test_insecure_backend_allowed_when_check_disabled(memory_keyring):
    with patch("seedvault.security.vault.assess_keyring_backend") as mock:
        v = SecretVault(require_secure_backend=False)
        v.store_secret("alice", "pw", "seed")

        mock.assert_not_called()
    assert v.reveal_secret("alice", "pw") == "seed"


def test_custom_codec_is_used(memory_keyring, secure_backend):
    codec = SecretCodec(random_source=lambda n: bytes(n))
    v = SecretVault(codec=codec)

    envelope = v.store_secret("alice", "pw", "seed")
    assert envelope.split("-")[1] == "00" * 12
