"""
Tax Configuration Loader.

Loads per-year tax parameters from YAML configuration files, enabling:
- Annual updates without touching form line code
- Environment-specific overrides
- Metadata about where each year's figures came from
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

# Default config directory
CONFIG_DIR = Path(__file__).parent / "tax_parameters"


@dataclass
class ConfigMetadata:
    """Metadata about a configuration file."""
    version: str
    tax_year: int
    effective_date: str
    source: str  # "IRS", "projected", "custom"
    irs_references: List[str] = field(default_factory=list)
    last_updated: str = ""
    notes: str = ""


class TaxConfigLoader:
    """
    Loads and manages tax configuration from YAML files.

    Features:
    - Automatic file discovery by tax year
    - Environment variable overrides
    - Configuration validation
    """

    REQUIRED_PARAMETERS = (
        "ordinary_income_brackets",
        "standard_deduction",
        "ss_wage_base",
        "child_tax_credit_amount",
    )

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the config loader.

        Args:
            config_dir: Directory containing YAML config files.
                       Defaults to src/config/tax_parameters/
        """
        self.config_dir = config_dir or CONFIG_DIR
        self._configs: Dict[int, Dict[str, Any]] = {}
        self._metadata: Dict[int, ConfigMetadata] = {}

    def available_years(self) -> List[int]:
        """Tax years that have a YAML file in the config directory."""
        years = []
        for path in self.config_dir.glob("tax_year_*.yaml"):
            suffix = path.stem[len("tax_year_"):]
            if suffix.isdigit():
                years.append(int(suffix))
        return sorted(years)

    def load_config(self, tax_year: int) -> Dict[str, Any]:
        """
        Load configuration for a specific tax year.

        Args:
            tax_year: The tax year to load (e.g., 2024)

        Returns:
            Dictionary of tax parameters
        """
        if tax_year in self._configs:
            return self._configs[tax_year]

        config = self._load_from_files(tax_year)
        config = self._apply_env_overrides(config, tax_year)
        self._validate_config(config, tax_year)

        self._configs[tax_year] = config
        return config

    def _load_from_files(self, tax_year: int) -> Dict[str, Any]:
        """Load configuration from YAML files."""
        config: Dict[str, Any] = {}

        year_file = self.config_dir / f"tax_year_{tax_year}.yaml"
        if not year_file.exists():
            raise FileNotFoundError(
                f"Tax configuration file not found: {year_file}. "
                f"Please ensure tax_year_{tax_year}.yaml exists."
            )

        logger.info(f"Loading tax config from {year_file}")
        with open(year_file, "r") as f:
            year_config = yaml.safe_load(f)
        if year_config:
            if "_metadata" in year_config:
                self._metadata[tax_year] = ConfigMetadata(**year_config.pop("_metadata"))
            config.update(year_config)

        return config

    def _apply_env_overrides(self, config: Dict[str, Any], tax_year: int) -> Dict[str, Any]:
        """Apply environment variable overrides to scalar parameters."""
        # Environment variables like TAX_2024_SS_WAGE_BASE=168600
        prefix = f"TAX_{tax_year}_"

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            param_name = key[len(prefix):].lower()
            try:
                if "." in value:
                    config[param_name] = float(value)
                elif value.isdigit():
                    config[param_name] = int(value)
                else:
                    config[param_name] = value
                logger.info(f"Applied env override: {param_name}={value}")
            except ValueError:
                logger.warning(f"Could not parse env override: {key}={value}")

        return config

    def _validate_config(self, config: Dict[str, Any], tax_year: int) -> None:
        """Validate configuration for completeness."""
        missing = [p for p in self.REQUIRED_PARAMETERS if p not in config]
        if missing:
            logger.warning(f"Missing required parameters for {tax_year}: {missing}")

    def get_parameter(
        self,
        param_name: str,
        tax_year: int,
        filing_status: Optional[str] = None,
        default: Any = None
    ) -> Any:
        """
        Get a specific parameter value.

        If the value is keyed by filing status and filing_status is given,
        the status-specific value is returned.
        """
        config = self.load_config(tax_year)
        value = config.get(param_name, default)

        if isinstance(value, dict) and filing_status:
            return value.get(filing_status, value.get("single", default))

        return value

    def get_metadata(self, tax_year: int) -> Optional[ConfigMetadata]:
        """Get metadata for a tax year's configuration."""
        self.load_config(tax_year)
        return self._metadata.get(tax_year)


# Global singleton
_config_loader: Optional[TaxConfigLoader] = None


def get_config_loader() -> TaxConfigLoader:
    """Get the global config loader instance."""
    global _config_loader
    if _config_loader is None:
        _config_loader = TaxConfigLoader()
    return _config_loader


def clear_config_cache() -> None:
    """Drop the global loader (useful for testing env overrides)."""
    global _config_loader
    _config_loader = None
