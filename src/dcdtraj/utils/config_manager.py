"""
Configuration management module for dcdtraj.

This module provides functionality for loading, validating, and managing
configuration settings for the command-line tools.
"""
import copy
import yaml
from pathlib import Path
import logging
from typing import Dict, Any, Optional, Union
import json

from .helpers import update_dict_recursively
from ..visualization.styles import COLOR_SCHEMES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'trajectory': {'file': None},
    'export': {'directory': 'dcd_output', 'format': 'npy', 'atoms': None},
    'plot': {'atom': None, 'output': None, 'color_scheme': 'default'},
}

EXPORT_FORMATS = ('npy', 'npz')

class ConfigManager:
    """Class for managing dcdtraj configuration settings."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_file: Path to the configuration file (optional)
        """
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        if config_file is not None:
            self.load_config(config_file)

    def load_config(self, config_file: Union[str, Path]) -> None:
        """
        Load configuration from a YAML file on top of the defaults.

        Args:
            config_file: Path to the configuration file
        """
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        logger.info(f"Loading configuration from {config_path}")
        with open(config_path, 'r') as f:
            user_cfg = yaml.safe_load(f)

        if user_cfg is None:
            user_cfg = {}
        if not isinstance(user_cfg, dict):
            raise ValueError(f"Configuration file must contain a mapping, got {type(user_cfg).__name__}")
        self.config = update_dict_recursively(copy.deepcopy(DEFAULT_CONFIG), user_cfg)
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate the loaded configuration."""
        for key in DEFAULT_CONFIG:
            if not isinstance(self.config.get(key), dict):
                raise ValueError(f"Missing required configuration section: {key}")

        export_cfg = self.config['export']
        if export_cfg['format'] not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {export_cfg['format']}. Must be one of: {list(EXPORT_FORMATS)}")
        atoms = export_cfg['atoms']
        if atoms is not None and not (isinstance(atoms, (int, str)) or
                                      (isinstance(atoms, list) and all(isinstance(a, int) for a in atoms))):
            raise ValueError("export.atoms must be null, an int, a list of ints or a range string")

        plot_cfg = self.config['plot']
        if plot_cfg['atom'] is not None and (not isinstance(plot_cfg['atom'], int) or plot_cfg['atom'] < 0):
            raise ValueError(f"plot.atom must be a non-negative integer, got {plot_cfg['atom']!r}")
        if plot_cfg['color_scheme'] not in COLOR_SCHEMES:
            raise ValueError(f"Unknown color scheme: {plot_cfg['color_scheme']}. Must be one of: {list(COLOR_SCHEMES.keys())}")

    def get_trajectory_config(self) -> Dict[str, Any]:
        return self.config.get('trajectory', {})

    def get_export_config(self) -> Dict[str, Any]:
        return self.config.get('export', {})

    def get_plot_config(self) -> Dict[str, Any]:
        return self.config.get('plot', {})

    def update_config(self, updates: Dict[str, Any]) -> None:
        """
        Update configuration settings.

        Args:
            updates: Dictionary of configuration updates
        """
        update_dict_recursively(self.config, updates)
        self._validate_config()

    def save_config(self, output_file: Union[str, Path]) -> None:
        """
        Save current configuration to a file.

        Args:
            output_file: Path to save the configuration to
        """
        output_path = Path(output_file)
        logger.info(f"Saving configuration to {output_path}")

        with open(output_path, 'w') as f:
            yaml.dump(self.config, f, default_flow_style=False)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self.config)

    def to_json(self) -> str:
        return json.dumps(self.config, indent=4)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ConfigManager':
        """
        Create a ConfigManager instance from a dictionary.

        Args:
            config_dict: Dictionary of configuration settings, merged over the defaults

        Returns:
            ConfigManager instance
        """
        instance = cls()
        instance.config = update_dict_recursively(copy.deepcopy(DEFAULT_CONFIG), copy.deepcopy(config_dict))
        instance._validate_config()
        return instance
