"""
Configuration loader for the catalog service
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.engine import make_url

from catalog.errors import ConfigError
from catalog.security.secret_provider import ALGORITHM, SecretDecryptionError, SecretProvider, is_encrypted, unwrap

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "catalog_config.yml"


class AppConfig(BaseModel):
    """Application-level settings"""

    title: str = "Product Catalog API"
    version: str = "1.0.0"
    log_level: str = "INFO"


class DatabaseConfig(BaseModel):
    """Relational store settings; no url means the in-memory store"""

    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=10, ge=0, le=100)

    def connection_url(self) -> Optional[str]:
        """SQLAlchemy URL with credentials applied, or None."""
        if not self.url:
            return None
        url = make_url(self.url)
        if self.username:
            url = url.set(username=self.username)
        if self.password:
            url = url.set(password=self.password)
        return url.render_as_string(hide_password=False)


class PaginationConfig(BaseModel):
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1, le=10_000)


class SecretsConfig(BaseModel):
    """Cipher settings for ENC(...) values"""

    passphrase_env: str = "CATALOG_SECRET_PASSPHRASE"
    algorithm: str = ALGORITHM
    key_obtention_iterations: int = Field(default=100_000, ge=1)
    salt_size: int = Field(default=16, ge=8, le=64)
    pool_size: int = Field(default=1, ge=1, le=32)


class CatalogConfig(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    secrets: SecretsConfig = Field(default_factory=SecretsConfig)


_ENV_OVERRIDES = {
    "DATABASE_URL": ("database", "url"),
    "DATABASE_PASSWORD": ("database", "password"),
    "LOG_LEVEL": ("app", "log_level"),
}


def _apply_env_overrides(data: Dict[str, Any]) -> None:
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            data.setdefault(section, {})
            if data[section] is None:
                data[section] = {}
            data[section][key] = value


def _decrypt_database_secrets(cfg: CatalogConfig, passphrase: Optional[str]) -> None:
    db = cfg.database
    fields: List[str] = [name for name in ("url", "username", "password") if is_encrypted(getattr(db, name))]
    if not fields:
        return

    passphrase = passphrase or os.getenv(cfg.secrets.passphrase_env)
    if not passphrase:
        raise ConfigError(
            f"Configuration holds encrypted values but {cfg.secrets.passphrase_env} is not set"
        )

    provider = SecretProvider.from_config(cfg.secrets, passphrase)
    try:
        plain = provider.decrypt_many(unwrap(getattr(db, name)) for name in fields)
    except SecretDecryptionError as e:
        raise ConfigError(f"Could not decrypt database settings: {e}") from e

    for name, value in zip(fields, plain):
        setattr(db, name, value)
    logger.info("Decrypted %d database setting(s)", len(fields))


def load_catalog_config(config_path: Optional[Path] = None, passphrase: Optional[str] = None) -> CatalogConfig:
    """
    Load and validate catalog configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to $CATALOG_CONFIG_PATH,
            then config/catalog_config.yml
        passphrase: Secret passphrase; defaults to the env var named by
            secrets.passphrase_env

    Returns:
        Validated CatalogConfig object with ENC(...) values decrypted

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
        ConfigError: If encrypted values cannot be decrypted
    """
    if config_path is None:
        env_path = os.getenv("CATALOG_CONFIG_PATH")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Catalog config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    _apply_env_overrides(data)

    try:
        cfg = CatalogConfig(**data)
    except ValidationError as e:
        logger.error("Catalog config validation failed: %s", e)
        raise

    _decrypt_database_secrets(cfg, passphrase)
    logger.info("Successfully loaded catalog config from %s", config_path)
    return cfg
