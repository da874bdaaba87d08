"""
Configuration loader for the chatbot service
"""

import os
import yaml
from pathlib import Path
from typing import Literal, Optional
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = REPO_ROOT / "config" / "app_config.yml"


class CatalogConfig(BaseModel):
    """Product catalog source"""

    path: str = "data/products.json"


class DelegateConfig(BaseModel):
    """External answer service used when no local match applies"""

    backend: Literal["gemini"] = "gemini"
    model: str = "gemini-2.5-flash"
    api_key_env: str = "GEMINI_API_KEY"
    timeout_seconds: float = Field(default=30.0, gt=0.0, le=600.0)


class ServerConfig(BaseModel):
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    """Complete service configuration"""

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    delegate: DelegateConfig = Field(default_factory=DelegateConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def load_app_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load and validate service configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to config/app_config.yml;
            when that default file is absent the built-in defaults are used

    Returns:
        Validated AppConfig object

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            logger.warning(f"Config file not found at {config_path}, using defaults")
            return AppConfig()

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    try:
        config = AppConfig(**config_data)
        logger.info(f"Successfully loaded config from {config_path}")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise


def resolve_catalog_path(config: AppConfig) -> Path:
    """PRODUCTS_FILE overrides the configured path; relative paths are taken from the repo root."""
    path = Path(os.getenv("PRODUCTS_FILE") or config.catalog.path)
    if not path.is_absolute():
        path = REPO_ROOT / path
    return path


def resolve_port(config: AppConfig) -> int:
    """PORT from the environment wins over the configured port."""
    raw = os.getenv("PORT", "").strip()
    if not raw:
        return config.server.port
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid PORT=%r, using %d", raw, config.server.port)
        return config.server.port
