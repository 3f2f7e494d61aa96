"""
Utilities module for dcdtraj.

This module provides helper functions and configuration management.
"""

from .config_manager import ConfigManager
from .helpers import (
    update_dict_recursively,
    ensure_directory,
    parse_atom_indices
)

__all__ = [
    'ConfigManager',
    'update_dict_recursively',
    'ensure_directory',
    'parse_atom_indices'
]
