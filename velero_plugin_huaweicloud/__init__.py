"""
Huawei Cloud OBS object store plugin for the backup orchestrator.
"""

from .object_store import ObjectStore, new_object_store
from .core.logging_config import setup_logging
from .infrastructure.credentials import Credentials, load_credentials
from .infrastructure.exceptions import (
    BackendError,
    ClientError,
    ConfigError,
    InfrastructureError,
    StorageError,
)

__all__ = [
    'ObjectStore',
    'new_object_store',
    'setup_logging',
    'Credentials',
    'load_credentials',
    'BackendError',
    'ClientError',
    'ConfigError',
    'InfrastructureError',
    'StorageError'
]
