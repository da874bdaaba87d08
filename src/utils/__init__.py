"""
Utility modules for the chatbot service
"""
from .config_loader import AppConfig, load_app_config, resolve_catalog_path, resolve_port

__all__ = [
    'AppConfig',
    'load_app_config',
    'resolve_catalog_path',
    'resolve_port',
]
