"""
Object store plugin backed by Huawei Cloud OBS.

ObjectStore exposes the object-store capability surface expected by the
backup orchestrator and forwards each call to an ObjectStorageClient. It
performs no locking and assumes the wrapped client is safe for concurrent use.
"""

import logging
from datetime import timedelta
from typing import BinaryIO, Callable, Iterable, List, Mapping, Optional, Union

from velero_plugin_huaweicloud.core.config import settings
from velero_plugin_huaweicloud.infrastructure.credentials import Credentials, load_credentials
from velero_plugin_huaweicloud.infrastructure.exceptions import (
    BackendError,
    ClientError,
    ConfigError,
    StorageError,
)
from velero_plugin_huaweicloud.infrastructure.object_storage import (
    ListPage,
    ObjectStorageClient,
    StorageConfig,
    StorageFactory,
)

ENDPOINT_KEY = "endpoint"

ClientFactory = Callable[[StorageConfig], ObjectStorageClient]


def validate_config_keys(config: Mapping[str, str], *valid_keys: str) -> None:
    """Reject configuration keys the plugin does not understand."""
    invalid = sorted(k for k in config if k not in valid_keys)
    if invalid:
        raise ConfigError(
            f"config has invalid keys {invalid}; valid keys are {sorted(valid_keys)}"
        )


def validate(endpoint: str, credentials: Credentials) -> None:
    if not endpoint:
        raise ConfigError("no obs endpoint in config file")

    access_key, secret_key = credentials.access_key, credentials.secret_key
    if not access_key and secret_key:
        raise ConfigError("no obs access_key specified")
    if access_key and not secret_key:
        raise ConfigError("no obs secret_key specified")
    if not access_key and not secret_key:
        raise ConfigError("no obs secret_key and access_key specified")


def _ttl_seconds(ttl: Union[timedelta, int, float]) -> int:
    if isinstance(ttl, timedelta):
        return int(ttl.total_seconds())
    return int(ttl)


class ObjectStore:
    """
    Object store plugin

    Usage:
        store = ObjectStore(logger)
        store.init({"endpoint": "https://obs.ap-southeast-1.myhuaweicloud.com"})
        store.put_object("backups", "2024-01-01/backup.tar.gz", stream)
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        client_factory: Optional[ClientFactory] = None
    ):
        self.log = logger or logging.getLogger(__name__)
        self._client_factory = client_factory or StorageFactory.create_client
        self._client: Optional[ObjectStorageClient] = None

    @property
    def client(self) -> ObjectStorageClient:
        if self._client is None:
            raise ClientError("object store is not initialized")
        return self._client

    def init(self, config: Mapping[str, str]) -> None:
        """
        Validate the configuration, load credentials and build the storage client.

        Args:
            config: Plugin configuration, only ``endpoint`` is recognized

        Raises:
            ConfigError: Invalid configuration or credentials
            ClientError: The storage client could not be constructed
        """
        if self._client is not None:
            raise ConfigError("object store is already initialized")

        validate_config_keys(config, ENDPOINT_KEY)
        endpoint = config.get(ENDPOINT_KEY, "")

        credentials = load_credentials()
        validate(endpoint, credentials)

        storage_config = StorageConfig(
            endpoint=endpoint,
            access_key=credentials.access_key,
            secret_key=credentials.secret_key,
            secure=settings.MINIO_SECURE,
            max_keys=settings.LIST_MAX_KEYS
        )
        try:
            self._client = self._client_factory(storage_config)
        except Exception as e:
            raise ClientError(f"failed to create storage client for {endpoint}: {e}") from e

        self.log.info(f"Object store initialized, endpoint: {endpoint}")

    def put_object(self, bucket: str, key: str, body: Union[bytes, BinaryIO]) -> None:
        try:
            self.client.put_object(bucket, key, body)
        except BackendError as e:
            raise StorageError(
                f"failed to put object {key}: {e}",
                operation="put_object", bucket=bucket, key=key
            ) from e

    def object_exists(self, bucket: str, key: str) -> bool:
        """
        Check whether an object exists.

        A not-found response from the backend is a normal negative result,
        every other failure is raised.
        """
        log = logging.LoggerAdapter(self.log, {"bucket": bucket, "key": key})
        log.debug(f"Checking if object exists: {bucket}/{key}")
        try:
            self.client.head_object(bucket, key)
        except BackendError as e:
            log.debug(f"obs err contents (code={e.code}, message={e.message}, status={e.status})")
            if self.client.is_not_found(e):
                log.debug("Object doesn't exist - got not found")
                return False
            raise StorageError(
                f"failed to get object metadata: {e}",
                operation="object_exists", bucket=bucket, key=key
            ) from e

        log.debug("Object exists")
        return True

    def get_object(self, bucket: str, key: str) -> BinaryIO:
        """Open the object body. The caller owns the stream and must close it."""
        try:
            return self.client.get_object_stream(bucket, key)
        except BackendError as e:
            raise StorageError(
                f"failed to get object {key}: {e}",
                operation="get_object", bucket=bucket, key=key
            ) from e

    def _list_pages(
        self,
        operation: str,
        bucket: str,
        prefix: str,
        delimiter: Optional[str] = None
    ) -> Iterable[ListPage]:
        marker = None
        while True:
            try:
                page = self.client.list_objects_page(
                    bucket, prefix=prefix, marker=marker, delimiter=delimiter
                )
            except BackendError as e:
                raise StorageError(
                    f"failed to list objects: {e}",
                    operation=operation, bucket=bucket, key=prefix
                ) from e
            yield page
            if not page.is_truncated:
                break
            marker = page.next_marker

    def list_common_prefixes(self, bucket: str, prefix: str, delimiter: str) -> List[str]:
        """Common prefixes of all pages, in the order the backend returned them."""
        prefixes = []
        for page in self._list_pages("list_common_prefixes", bucket, prefix, delimiter):
            prefixes.extend(page.common_prefixes)
        return prefixes

    def list_objects(self, bucket: str, prefix: str) -> List[str]:
        """All keys under prefix, sorted in reverse lexicographic order."""
        keys = []
        for page in self._list_pages("list_objects", bucket, prefix):
            keys.extend(page.keys)
        keys.sort(reverse=True)
        return keys

    def delete_object(self, bucket: str, key: str) -> None:
        try:
            self.client.delete_object(bucket, key)
        except BackendError as e:
            raise StorageError(
                f"failed to delete object {key}: {e}",
                operation="delete_object", bucket=bucket, key=key
            ) from e

    def create_signed_url(
        self,
        bucket: str,
        key: str,
        ttl: Union[timedelta, int, float]
    ) -> str:
        """Presigned GET URL valid for ttl, truncated to whole seconds."""
        try:
            return self.client.create_signed_url(bucket, key, _ttl_seconds(ttl))
        except BackendError as e:
            raise StorageError(
                f"failed to create signed URL: {e}",
                operation="create_signed_url", bucket=bucket, key=key
            ) from e


def new_object_store(logger: Optional[logging.Logger] = None) -> ObjectStore:
    return ObjectStore(logger)
