"""
Passphrase-based encryption of configuration secrets.

Values such as the database password are stored in the config file as
``ENC(<ciphertext>)`` and decrypted once while the configuration is loaded.
The ciphertext is base64 of ``salt || fernet_token``: the key is derived from
the passphrase with PBKDF2-HMAC-SHA256 over a random per-value salt, and
Fernet (AES-128-CBC + HMAC-SHA256, random IV) does the rest.
"""

from __future__ import annotations

import base64
import binascii
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

ALGORITHM = "PBKDF2WithHmacSHA256AndFernet"
ENC_PREFIX = "ENC("
ENC_SUFFIX = ")"


class SecretDecryptionError(ValueError):
    """Ciphertext is malformed, tampered with, or was made with another passphrase."""


def is_encrypted(value: object) -> bool:
    return isinstance(value, str) and value.startswith(ENC_PREFIX) and value.endswith(ENC_SUFFIX)


def unwrap(value: str) -> str:
    if not is_encrypted(value):
        raise ValueError("value is not wrapped in ENC(...)")
    return value[len(ENC_PREFIX):-len(ENC_SUFFIX)].strip()


def wrap(ciphertext: str) -> str:
    return f"{ENC_PREFIX}{ciphertext}{ENC_SUFFIX}"


class SecretProvider:
    """
    Encrypts / decrypts configuration values with a fixed passphrase.

    Built once at startup and read-only afterwards; assigning attributes on
    a constructed provider raises AttributeError.
    """

    def __init__(
        self,
        passphrase: str,
        *,
        algorithm: str = ALGORITHM,
        key_obtention_iterations: int = 100_000,
        salt_size: int = 16,
        pool_size: int = 1,
    ) -> None:
        if not passphrase:
            raise ValueError("passphrase must not be empty")
        if algorithm != ALGORITHM:
            raise ValueError(f"Unsupported algorithm {algorithm!r}; expected {ALGORITHM!r}")
        if key_obtention_iterations < 1 or salt_size < 8 or pool_size < 1:
            raise ValueError("iterations and pool_size must be >= 1, salt_size >= 8")

        self._passphrase = passphrase.encode("utf-8")
        self._algorithm = algorithm
        self._iterations = key_obtention_iterations
        self._salt_size = salt_size
        self._pool_size = pool_size
        self._frozen = True

    @classmethod
    def from_config(cls, cfg, passphrase: str) -> "SecretProvider":
        return cls(
            passphrase,
            algorithm=cfg.algorithm,
            key_obtention_iterations=cfg.key_obtention_iterations,
            salt_size=cfg.salt_size,
            pool_size=cfg.pool_size,
        )

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} is immutable after construction")
        super().__setattr__(name, value)

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def pool_size(self) -> int:
        return self._pool_size

    def _fernet(self, salt: bytes) -> Fernet:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=self._iterations,
        )
        return Fernet(base64.urlsafe_b64encode(kdf.derive(self._passphrase)))

    def encrypt(self, plaintext: str) -> str:
        salt = os.urandom(self._salt_size)
        token = self._fernet(salt).encrypt(plaintext.encode("utf-8"))
        return base64.b64encode(salt + base64.urlsafe_b64decode(token)).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        try:
            raw = base64.b64decode(ciphertext.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise SecretDecryptionError("ciphertext is not valid base64") from e
        if len(raw) <= self._salt_size:
            raise SecretDecryptionError("ciphertext is too short")

        salt, body = raw[:self._salt_size], raw[self._salt_size:]
        try:
            plaintext = self._fernet(salt).decrypt(base64.urlsafe_b64encode(body))
        except InvalidToken as e:
            raise SecretDecryptionError("ciphertext could not be decrypted with this passphrase") from e
        return plaintext.decode("utf-8")

    def decrypt_many(self, ciphertexts: Iterable[str]) -> List[str]:
        """Decrypt a batch, spreading key derivation over `pool_size` workers."""
        ciphertexts = list(ciphertexts)
        if self._pool_size == 1 or len(ciphertexts) < 2:
            return [self.decrypt(c) for c in ciphertexts]
        with ThreadPoolExecutor(max_workers=self._pool_size) as pool:
            return list(pool.map(self.decrypt, ciphertexts))
