"""
Configuration loader for the eyewear catalog
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)


class ClientConfig(BaseModel):
    """Catalog client (backend resolution) configuration"""

    products_api_url: Optional[str] = None
    default_port: int = Field(default=5004, ge=1, le=65535)
    api_path: str = "/api"


class BackupConfig(BaseModel):
    """Local backup configuration"""

    key: str = "eyewear_products_backup"
    path: Optional[str] = None
    redis_url: Optional[str] = None


class ServerConfig(BaseModel):
    """Products API configuration"""

    database_url: Optional[str] = None
    port: int = Field(default=5004, ge=1, le=65535)


class CatalogConfig(BaseModel):
    """Complete catalog configuration"""

    client: ClientConfig = Field(default_factory=ClientConfig)
    backup: BackupConfig = Field(default_factory=BackupConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


# environment variable -> (section, field)
ENV_OVERRIDES = {
    "PRODUCTS_API_URL": ("client", "products_api_url"),
    "BACKUP_PATH": ("backup", "path"),
    "REDIS_URL": ("backup", "redis_url"),
    "DATABASE_URL": ("server", "database_url"),
    "PORT": ("server", "port"),
}


def normalize_connection_string(s: str) -> str:
    """Strip common mistakes: 'psql \'...\'', extra quotes, whitespace."""
    s = s.strip()
    if re.match(r"^psql\s+", s, re.IGNORECASE):
        s = re.sub(r"^psql\s+", "", s, flags=re.IGNORECASE).strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        s = s[1:-1].strip()
    return s


def load_catalog_config(config_path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None) -> CatalogConfig:
    """
    Load and validate catalog configuration

    Values come from the YAML file first, then environment variables
    override them.

    Args:
        config_path: Path to config file. Defaults to config/catalog_config.yml
        environ: Environment mapping. Defaults to os.environ

    Returns:
        Validated CatalogConfig object

    Raises:
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config" / "catalog_config.yml"
    env = os.environ if environ is None else environ

    data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.info("Config file %s not found, using defaults", config_path)

    for var, (section, field_name) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value

    server = data.get("server") or {}
    if server.get("database_url"):
        server["database_url"] = normalize_connection_string(server["database_url"])

    try:
        config = CatalogConfig(**data)
        logger.info("Successfully loaded catalog config from %s", config_path)
        return config
    except ValidationError as e:
        logger.error("Catalog config validation failed: %s", e)
        raise
