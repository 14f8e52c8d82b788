"""Configuration management for rpcfailover."""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from rpcfailover.models.config import FailoverConfig
from rpcfailover.utils.constants import ENV_MAPPINGS
from rpcfailover.utils.exceptions import ConfigError


class ConfigManager:
    """Builds failover configuration from a YAML file, environment variables and .env files."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None, load_env: bool = True):
        """Initialize configuration manager.

        Args:
            config_path: Optional YAML configuration file
            load_env: Whether to automatically load .env file
        """
        self.config_path = Path(config_path) if config_path else None

        if load_env:
            self._load_env_file()

    def _load_env_file(self) -> None:
        """Load .env file from current working directory."""
        env_file = Path.cwd() / ".env"
        if env_file.exists():
            load_dotenv(env_file, override=False)

    def load_file(self) -> Dict[str, Any]:
        """Read the YAML configuration file.

        Returns:
            Configuration dictionary, empty when no file is configured

        Raises:
            ConfigError: If the file is missing or not a YAML mapping
        """
        if self.config_path is None:
            return {}

        if not self.config_path.exists():
            raise ConfigError(
                f"Configuration file not found: {self.config_path}",
                details={"path": str(self.config_path)}
            )

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML in {self.config_path}: {e}",
                details={"path": str(self.config_path)}
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration file must contain a mapping: {self.config_path}",
                details={"path": str(self.config_path)}
            )
        return data

    def load_config(
        self,
        cli_overrides: Optional[Dict[str, Any]] = None
    ) -> FailoverConfig:
        """Load configuration with overrides applied.

        Priority: CLI args > Environment variables > Config file > Defaults

        Args:
            cli_overrides: Command line argument overrides

        Returns:
            Validated configuration

        Raises:
            ConfigError: If the merged configuration is invalid
        """
        config_dict = self.load_file()
        self._apply_overrides(config_dict, self.get_env_overrides())
        if cli_overrides:
            self._apply_overrides(config_dict, cli_overrides)

        try:
            return FailoverConfig(**config_dict)
        except ValidationError as e:
            raise ConfigError(
                f"Invalid configuration: {e}",
                suggestion="Check RPCFAILOVER_* variables and the configuration file"
            ) from e

    def _apply_overrides(self, config_dict: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """Apply overrides to configuration dictionary.

        Args:
            config_dict: Configuration dictionary to modify
            overrides: Override values to apply
        """
        for key, value in overrides.items():
            if value is None:
                continue
            # Empty CLI tuples mean "not given"
            if isinstance(value, (list, tuple)) and not value:
                continue
            config_dict[key] = list(value) if isinstance(value, tuple) else value

    def get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables.

        Environment variables are prefixed with RPCFAILOVER_
        Examples:
            RPCFAILOVER_ENDPOINTS=https://a.example.com,https://b.example.com -> endpoints
            RPCFAILOVER_TIMEOUT=2.5 -> timeout

        Returns:
            Dictionary of environment overrides
        """
        overrides = {}

        for env_key, config_key in ENV_MAPPINGS.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            if config_key == "endpoints":
                value = [part.strip() for part in value.split(",") if part.strip()]
            elif value.isdigit():
                value = int(value)
            elif "." in value and value.replace(".", "", 1).isdigit():
                value = float(value)

            overrides[config_key] = value

        return overrides
