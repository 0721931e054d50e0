"""
Object Storage Factory

Creates appropriate storage clients based on configuration.
"""

from typing import Optional

from velero_plugin_huaweicloud.core.config import settings
from .base import ObjectStorageClient, StorageConfig
from .minio_adapter import MinIOClientAdapter
from .obs_adapter import OBSClientAdapter


class StorageFactory:
    """Factory for creating object storage clients"""

    @staticmethod
    def create_client(
        config: StorageConfig,
        storage_type: Optional[str] = None
    ) -> ObjectStorageClient:
        """
        Create object storage client based on type

        Args:
            config: Endpoint and credentials for the client
            storage_type: Type of storage ("obs", "minio"), defaults to
                settings.OBJECT_STORE_BACKEND

        Returns:
            ObjectStorageClient implementation
        """
        storage_type = (storage_type or settings.OBJECT_STORE_BACKEND).lower()

        if storage_type == "obs":
            return OBSClientAdapter(config)
        elif storage_type == "minio":
            return MinIOClientAdapter(config)
        else:
            raise ValueError(f"Unsupported storage type: {storage_type}")
