"""
scgOpt configuration module.

This module provides:
- Configuration dataclasses for scgOpt commands
- Logging setup
- Decorators for CLI integration and resource tracking
"""

from .base import ConfigMixin, config_logger, ensure_path_exists
from .decorators import dataclass_typer, show_banner, track_resource_usage
from .partition_config import PartitionConfig

__all__ = [
    'ConfigMixin',
    'config_logger',
    'ensure_path_exists',
    'dataclass_typer',
    'track_resource_usage',
    'show_banner',
    'PartitionConfig',
]
