"""
Object Storage Abstract Base Classes

Defines the primitives a storage SDK must offer to back the object store
plugin, so the plugin can be retargeted to a different provider (Huawei OBS,
MinIO, etc.) by supplying another client implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional, Union

from velero_plugin_huaweicloud.infrastructure.exceptions import BackendError


@dataclass
class StorageConfig:
    """Configuration for object storage clients"""
    endpoint: str
    access_key: str
    secret_key: str
    secure: bool = True
    max_keys: int = 1000


@dataclass
class ListPage:
    """One page of a list objects call"""
    keys: List[str] = field(default_factory=list)
    common_prefixes: List[str] = field(default_factory=list)
    is_truncated: bool = False
    next_marker: Optional[str] = None


class ObjectStorageClient(ABC):
    """
    Abstract interface for object storage SDK clients

    Implementations translate each primitive into exactly one SDK call and
    report failures as BackendError. They must be safe for concurrent use,
    since the plugin shares one client across all callers.
    """

    def __init__(self, config: StorageConfig):
        self.config = config

    @abstractmethod
    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        data: Union[bytes, BinaryIO]
    ) -> None:
        """
        Upload an object

        Args:
            bucket_name: Target bucket name
            object_name: Object name in storage
            data: Object content as bytes or binary stream

        Raises:
            BackendError: If the backend rejects the upload
        """
        pass

    @abstractmethod
    def head_object(self, bucket_name: str, object_name: str) -> None:
        """
        Fetch object metadata without the body

        Args:
            bucket_name: Source bucket name
            object_name: Object name in storage

        Raises:
            BackendError: If the metadata cannot be retrieved
        """
        pass

    @abstractmethod
    def get_object_stream(self, bucket_name: str, object_name: str) -> BinaryIO:
        """
        Open the object body as a stream

        Args:
            bucket_name: Source bucket name
            object_name: Object name in storage

        Returns:
            Readable stream positioned at the start of the body; the caller
            must close it

        Raises:
            BackendError: If the object cannot be opened
        """
        pass

    @abstractmethod
    def list_objects_page(
        self,
        bucket_name: str,
        prefix: Optional[str] = None,
        marker: Optional[str] = None,
        delimiter: Optional[str] = None
    ) -> ListPage:
        """
        List a single page of objects

        Args:
            bucket_name: Source bucket name
            prefix: Only keys starting with this prefix are listed
            marker: Continuation marker from the previous page
            delimiter: Groups keys into common prefixes when set

        Returns:
            The page, including the truncation flag and next marker

        Raises:
            BackendError: If the listing fails
        """
        pass

    @abstractmethod
    def delete_object(self, bucket_name: str, object_name: str) -> None:
        """
        Delete an object

        Args:
            bucket_name: Source bucket name
            object_name: Object name in storage

        Raises:
            BackendError: If the backend reports a failure
        """
        pass

    @abstractmethod
    def create_signed_url(self, bucket_name: str, object_name: str, expires: int) -> str:
        """
        Generate a presigned GET URL

        Args:
            bucket_name: Source bucket name
            object_name: Object name in storage
            expires: Expiration time in whole seconds

        Returns:
            Presigned URL

        Raises:
            BackendError: If signing fails
        """
        pass

    def is_not_found(self, error: Exception) -> bool:
        """Whether the error means the object (or bucket) does not exist"""
        return isinstance(error, BackendError) and error.status == 404
