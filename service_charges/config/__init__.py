"""
Configuration module for the service charges engine.
"""
from .settings import (
    ServiceChargesConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'ServiceChargesConfig',
    'get_config',
    'load_config',
    'reload_config'
]
