"""
Object Storage Infrastructure Module

Provides the storage client abstraction and its provider implementations.
"""

from .base import ObjectStorageClient, StorageConfig, ListPage
from .obs_adapter import OBSClientAdapter
from .minio_adapter import MinIOClientAdapter
from .factory import StorageFactory

__all__ = [
    'ObjectStorageClient',
    'StorageConfig',
    'ListPage',
    'OBSClientAdapter',
    'MinIOClientAdapter',
    'StorageFactory'
]
