#!/usr/bin/env python3
"""
Encrypt (or decrypt) a configuration value for config/catalog_config.yml.

  python scripts/encrypt_secret.py "my-db-password"          -> ENC(...)
  python scripts/encrypt_secret.py --decrypt "ENC(...)"      -> plaintext

The passphrase is read from the env var named by secrets.passphrase_env
(CATALOG_SECRET_PASSPHRASE by default) unless --passphrase is given.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.security.secret_provider import SecretDecryptionError, SecretProvider, is_encrypted, unwrap, wrap
from catalog.utils.config_loader import SecretsConfig


def main() -> int:
    parser = argparse.ArgumentParser(description="Encrypt/decrypt catalog configuration secrets")
    parser.add_argument("value", help="Plaintext to encrypt, or ENC(...)/ciphertext with --decrypt")
    parser.add_argument("--decrypt", action="store_true", help="Decrypt instead of encrypt")
    parser.add_argument("--passphrase", default=None, help="Override the passphrase env var")
    parser.add_argument("--iterations", type=int, default=None, help="PBKDF2 iterations (must match config)")
    args = parser.parse_args()

    secrets_cfg = SecretsConfig()
    if args.iterations:
        secrets_cfg.key_obtention_iterations = args.iterations

    passphrase = args.passphrase or os.getenv(secrets_cfg.passphrase_env)
    if not passphrase:
        print(f"{secrets_cfg.passphrase_env} is not set", file=sys.stderr)
        return 1

    provider = SecretProvider.from_config(secrets_cfg, passphrase)

    if args.decrypt:
        ciphertext = unwrap(args.value) if is_encrypted(args.value) else args.value
        try:
            print(provider.decrypt(ciphertext))
        except SecretDecryptionError as e:
            print(f"Decryption failed: {e}", file=sys.stderr)
            return 1
        return 0

    print(wrap(provider.encrypt(args.value)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
