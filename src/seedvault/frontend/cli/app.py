"""Command-line frontend for SeedVault.

Start here with `python -m seedvault.frontend.cli.app` or the `seedvault`
console script, e.g.:

    seedvault hash "some text"
    seedvault encrypt
    seedvault decrypt --copy -- <envelope>
    seedvault encrypt | seedvault decrypt
    seedvault store alice
    seedvault info

Envelopes start with "-" (the salt is empty), so pass them after "--" or on
stdin.
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from typing import List, Optional

from seedvault.core.exceptions import SeedVaultError
from seedvault.core.hashing import hash_text
from seedvault.frontend.cli.clipboard import copy_to_clipboard
from seedvault.frontend.cli.context import CliContext, build_context
from seedvault.frontend.cli.logging_config import configure_logging
from seedvault.security.encryption import decrypt, encrypt
from seedvault.security.envelope import NONCE_SIZE, SEPARATOR, TAG_SIZE
from seedvault.security.kdf import kdf_params_to_dict

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _prompt_secret(label: str, confirm: bool = False) -> str:
    # getpass keeps secrets out of the terminal scrollback.
    value = getpass.getpass(f"{label}: ")
    if confirm and getpass.getpass(f"Repeat {label.lower()}: ") != value:
        raise SeedVaultError(f"{label.lower()} entries do not match")
    return value


def _emit(value: str, copy: bool) -> None:
    if copy:
        copy_to_clipboard(value)
        print("copied to clipboard", file=sys.stderr)
    else:
        print(value)


# === Commands ===


def cmd_hash(ctx: CliContext, args: argparse.Namespace) -> int:
    print(hash_text(args.text))
    return EXIT_OK


def cmd_encrypt(ctx: CliContext, args: argparse.Namespace) -> int:
    passphrase = _prompt_secret("Passphrase", confirm=True)
    plaintext = args.plaintext if args.plaintext is not None else _prompt_secret("Plaintext")
    print(encrypt(passphrase, plaintext))
    return EXIT_OK


def cmd_decrypt(ctx: CliContext, args: argparse.Namespace) -> int:
    envelope = args.envelope
    if envelope is None:
        envelope = sys.stdin.readline().strip()
    passphrase = _prompt_secret("Passphrase")
    plaintext = decrypt(passphrase, envelope)
    if not plaintext:
        print("error: wrong passphrase or corrupted envelope", file=sys.stderr)
        return EXIT_FAILURE
    _emit(plaintext, args.copy)
    return EXIT_OK


def cmd_info(ctx: CliContext, args: argparse.Namespace) -> int:
    params = {
        "cipher": "aes-256-gcm",
        "kdf": kdf_params_to_dict(),
        "envelope": {
            "layout": SEPARATOR.join(("salt", "nonce", "ciphertext")),
            "nonce_size": NONCE_SIZE,
            "tag_size": TAG_SIZE,
        },
    }
    print(json.dumps(params, indent=2))
    return EXIT_OK


def cmd_store(ctx: CliContext, args: argparse.Namespace) -> int:
    password = _prompt_secret("Password", confirm=True)
    secret = _prompt_secret("Secret")
    ctx.vault().store_secret(args.user, password, secret)
    print(f"secret stored for {args.user}", file=sys.stderr)
    return EXIT_OK


def cmd_reveal(ctx: CliContext, args: argparse.Namespace) -> int:
    password = _prompt_secret("Password")
    secret = ctx.vault().reveal_secret(args.user, password)
    if not secret:
        print("error: no secret stored or wrong password", file=sys.stderr)
        return EXIT_FAILURE
    _emit(secret, args.copy)
    return EXIT_OK


def cmd_verify(ctx: CliContext, args: argparse.Namespace) -> int:
    password = _prompt_secret("Password")
    if ctx.vault().verify_password(args.user, password):
        print("ok")
        return EXIT_OK
    print("error: password does not match", file=sys.stderr)
    return EXIT_FAILURE


def cmd_forget(ctx: CliContext, args: argparse.Namespace) -> int:
    ctx.vault().forget(args.user)
    print(f"secret removed for {args.user}", file=sys.stderr)
    return EXIT_OK


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seedvault",
        description="Encrypt, store and verify wallet recovery secrets.",
    )
    parser.add_argument(
        "--service",
        default=None,
        help="Keyring service name (env SEEDVAULT_KEYRING_SERVICE, default: seedvault)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (env SEEDVAULT_LOG_LEVEL, default: WARNING)",
    )
    parser.add_argument(
        "--allow-insecure-keyring",
        action="store_true",
        default=None,
        help="Store secrets even if the keyring backend looks insecure",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("hash", help="Print the SHA-256 hex digest of TEXT")
    p.add_argument("text")
    p.set_defaults(func=cmd_hash)

    p = sub.add_parser("encrypt", help="Encrypt a plaintext into an envelope")
    p.add_argument("--plaintext", default=None, help="Plaintext (prompted if omitted)")
    p.set_defaults(func=cmd_encrypt)

    p = sub.add_parser("decrypt", help="Decrypt an envelope (give it after -- or on stdin)")
    p.add_argument("envelope", nargs="?", default=None)
    p.add_argument("--copy", action="store_true", help="Copy result to the clipboard")
    p.set_defaults(func=cmd_decrypt)

    p = sub.add_parser("info", help="Print the KDF and envelope parameters")
    p.set_defaults(func=cmd_info)

    p = sub.add_parser("store", help="Encrypt a secret and keep it in the OS keyring")
    p.add_argument("user")
    p.set_defaults(func=cmd_store)

    p = sub.add_parser("reveal", help="Decrypt the stored secret of USER")
    p.add_argument("user")
    p.add_argument("--copy", action="store_true", help="Copy result to the clipboard")
    p.set_defaults(func=cmd_reveal)

    p = sub.add_parser("verify", help="Check a password against the stored secret")
    p.add_argument("user")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("forget", help="Delete the stored secret of USER")
    p.add_argument("user")
    p.set_defaults(func=cmd_forget)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    ctx = build_context(
        service=args.service,
        log_level=args.log_level,
        allow_insecure_keyring=args.allow_insecure_keyring,
    )
    configure_logging(ctx.log_level)

    try:
        return args.func(ctx, args)
    except SeedVaultError as e:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
