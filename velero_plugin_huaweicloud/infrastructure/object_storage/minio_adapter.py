"""
MinIO Object Storage Adapter

Implements ObjectStorageClient for S3 compatible storage through the MinIO
client. The MinIO SDK paginates internally, so every listing is returned as a
single, non-truncated page.
"""

import io
import logging
from datetime import timedelta
from typing import BinaryIO, Optional, Tuple, Union

from minio import Minio
from minio.error import S3Error

from .base import ListPage, ObjectStorageClient, StorageConfig
from ..exceptions import BackendError

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"NoSuchKey", "NoSuchObject", "ResourceNotFound"}
PART_SIZE = 10 * 1024 * 1024


def split_endpoint(endpoint: str, default_secure: bool) -> Tuple[str, bool]:
    """Strip a URL scheme from the endpoint, the MinIO client wants host[:port]"""
    if endpoint.startswith("https://"):
        return endpoint[len("https://"):].rstrip("/"), True
    if endpoint.startswith("http://"):
        return endpoint[len("http://"):].rstrip("/"), False
    return endpoint.rstrip("/"), default_secure


def _to_backend_error(e: Exception) -> BackendError:
    if not isinstance(e, S3Error):
        # transport failures and SDK argument checks
        return BackendError(f"minio request failed: {e}")
    response = getattr(e, "response", None)
    status = getattr(response, "status", None)
    return BackendError(
        e.message or str(e),
        status=status,
        code=e.code,
        request_id=getattr(e, "request_id", None)
    )


class MinIOClientAdapter(ObjectStorageClient):
    """
    MinIO implementation of ObjectStorageClient

    The Minio client is safe to share between threads.
    """

    def __init__(self, config: StorageConfig):
        super().__init__(config)
        endpoint, secure = split_endpoint(config.endpoint, config.secure)
        self.client = Minio(
            endpoint=endpoint,
            access_key=config.access_key,
            secret_key=config.secret_key,
            secure=secure
        )

    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        data: Union[bytes, BinaryIO]
    ) -> None:
        if isinstance(data, (bytes, bytearray)):
            data_stream = io.BytesIO(data)
            file_size = len(data)
        else:
            data_stream = data
            try:
                current_pos = data_stream.tell()
                data_stream.seek(0, 2)
                file_size = data_stream.tell() - current_pos
                data_stream.seek(current_pos)
            except (AttributeError, OSError, io.UnsupportedOperation):
                # 无法确定大小时使用分片上传
                file_size = -1

        logger.debug(f"正在上传对象: {bucket_name}/{object_name} (大小: {file_size}字节)")
        try:
            self.client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=data_stream,
                length=file_size,
                part_size=PART_SIZE
            )
        except Exception as e:
            raise _to_backend_error(e) from e

    def head_object(self, bucket_name: str, object_name: str) -> None:
        try:
            self.client.stat_object(bucket_name, object_name)
        except Exception as e:
            raise _to_backend_error(e) from e

    def get_object_stream(self, bucket_name: str, object_name: str) -> BinaryIO:
        try:
            return self.client.get_object(bucket_name=bucket_name, object_name=object_name)
        except Exception as e:
            raise _to_backend_error(e) from e

    def list_objects_page(
        self,
        bucket_name: str,
        prefix: Optional[str] = None,
        marker: Optional[str] = None,
        delimiter: Optional[str] = None
    ) -> ListPage:
        if delimiter not in (None, "/"):
            raise BackendError(f"unsupported delimiter {delimiter!r}, MinIO only groups by '/'")

        page = ListPage()
        try:
            objects = self.client.list_objects(
                bucket_name,
                prefix=prefix,
                recursive=delimiter is None,
                start_after=marker or None
            )
            for obj in objects:
                if obj.is_dir:
                    page.common_prefixes.append(obj.object_name)
                else:
                    page.keys.append(obj.object_name)
        except Exception as e:
            raise _to_backend_error(e) from e

        logger.debug(f"列出对象成功: {bucket_name}/{prefix or ''} (共{len(page.keys)}个对象)")
        return page

    def delete_object(self, bucket_name: str, object_name: str) -> None:
        logger.debug(f"正在删除对象: {bucket_name}/{object_name}")
        try:
            self.client.remove_object(bucket_name=bucket_name, object_name=object_name)
        except Exception as e:
            raise _to_backend_error(e) from e

    def create_signed_url(self, bucket_name: str, object_name: str, expires: int) -> str:
        try:
            return self.client.presigned_get_object(
                bucket_name=bucket_name,
                object_name=object_name,
                expires=timedelta(seconds=expires)
            )
        except Exception as e:
            raise BackendError(f"presigned_get_object failed: {e}") from e

    def is_not_found(self, error: Exception) -> bool:
        if super().is_not_found(error):
            return True
        return isinstance(error, BackendError) and error.code in NOT_FOUND_CODES
