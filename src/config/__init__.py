"""Configuration module for the form graph engine."""

from .settings import EngineSettings, get_settings
from .tax_config_loader import ConfigMetadata, TaxConfigLoader, get_config_loader

__all__ = [
    "EngineSettings",
    "get_settings",
    "ConfigMetadata",
    "TaxConfigLoader",
    "get_config_loader",
]
