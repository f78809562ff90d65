"""
Configuration secret handling.
"""
from .secret_provider import SecretDecryptionError, SecretProvider, is_encrypted, unwrap, wrap

__all__ = [
    'SecretDecryptionError',
    'SecretProvider',
    'is_encrypted',
    'unwrap',
    'wrap',
]
