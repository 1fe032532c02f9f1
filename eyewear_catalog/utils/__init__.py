"""
Utility modules for the eyewear catalog
"""
from .config_loader import CatalogConfig, load_catalog_config, normalize_connection_string

__all__ = [
    'CatalogConfig',
    'load_catalog_config',
    'normalize_connection_string',
]
