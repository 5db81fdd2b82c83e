"""
Utilities Package
Configuration, logging and error types
"""

from .config_loader import HarnessConfig, NetworkConfig, DeploymentSettings, load_config
from .errors import DeploymentError, ConfigurationError
from .logging_setup import configure_logging

__all__ = [
    'HarnessConfig',
    'NetworkConfig',
    'DeploymentSettings',
    'load_config',
    'DeploymentError',
    'ConfigurationError',
    'configure_logging'
]
