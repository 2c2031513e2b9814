"""Configuration loader for gigroute"""

import logging
from pathlib import Path
from typing import Union
import yaml

from gigroute.models.config import AppConfig


DEFAULT_CONFIG_FILE = "config.yaml"


class ConfigLoader:
    """
    Reads config.yaml into an AppConfig

    Raises on a missing file, invalid YAML or invalid values; use
    load_or_default() where the file is optional.
    """

    def __init__(self, config_path: Union[str, Path] = DEFAULT_CONFIG_FILE):
        self.logger = logging.getLogger("gigroute.config")
        self.config_path = Path(config_path)

    def exists(self) -> bool:
        return self.config_path.is_file()

    def read(self) -> dict:
        """
        Parse the YAML file

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is empty or not a mapping
            yaml.YAMLError: If the YAML is malformed
        """
        if not self.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                self.logger.error(f"Invalid YAML in {self.config_path}: {e}")
                raise

        if data is None:
            raise ValueError(f"Configuration file is empty: {self.config_path}")
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {self.config_path}")

        return data

    def load(self) -> AppConfig:
        """Load and validate the configuration"""
        try:
            config = AppConfig.from_dict(self.read())
        except ValueError as e:
            self.logger.error(f"Invalid configuration in {self.config_path}: {e}")
            raise

        self.logger.info(
            f"Loaded {self.config_path}: {len(config.workers)} workers, "
            f"{len(config.get_enabled_workers())} enabled"
        )
        return config

    def load_or_default(self) -> AppConfig:
        """Load the configuration, or the defaults when the file doesn't exist"""
        if not self.exists():
            self.logger.debug(f"No configuration file at {self.config_path}, using defaults")
            return AppConfig()
        return self.load()

    @staticmethod
    def load_from_path(path: Union[str, Path]) -> AppConfig:
        return ConfigLoader(path).load()
