"""
Huawei Cloud OBS Object Storage Adapter

Implements ObjectStorageClient on top of esdk-obs-python. The OBS SDK does not
raise on HTTP failures; it returns a response whose ``status`` is >= 300 and
whose ``errorCode``/``errorMessage`` describe the problem. This adapter turns
those responses into BackendError.
"""

import io
import logging
from typing import BinaryIO, Optional, Union

from obs import ObsClient

from .base import ListPage, ObjectStorageClient, StorageConfig
from ..exceptions import BackendError

logger = logging.getLogger(__name__)

HTTP_METHOD_GET = "GET"


class OBSClientAdapter(ObjectStorageClient):
    """
    OBS implementation of ObjectStorageClient

    ObsClient is safe to share between threads.
    """

    def __init__(self, config: StorageConfig):
        super().__init__(config)
        self.client = ObsClient(
            access_key_id=config.access_key,
            secret_access_key=config.secret_key,
            server=config.endpoint
        )
        logger.debug(f"OBS client configured for {config.endpoint}")

    @staticmethod
    def _check(resp, action: str):
        """Raise BackendError unless the OBS response reports success"""
        if resp.status < 300:
            return resp
        message = resp.errorMessage or resp.reason or f"{action} failed"
        raise BackendError(
            message,
            status=resp.status,
            code=resp.errorCode,
            request_id=resp.requestId
        )

    def _call(self, action: str, func, *args, **kwargs):
        try:
            resp = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"❌ OBS {action} 调用失败: {e}")
            raise BackendError(f"{action} failed: {e}") from e
        return self._check(resp, action)

    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        data: Union[bytes, BinaryIO]
    ) -> None:
        if isinstance(data, (bytes, bytearray)):
            data = io.BytesIO(data)
        logger.debug(f"正在上传对象: {bucket_name}/{object_name}")
        self._call(
            "putContent",
            self.client.putContent,
            bucket_name,
            object_name,
            content=data,
            autoClose=False
        )

    def head_object(self, bucket_name: str, object_name: str) -> None:
        self._call("getObjectMetadata", self.client.getObjectMetadata, bucket_name, object_name)

    def get_object_stream(self, bucket_name: str, object_name: str) -> BinaryIO:
        resp = self._call(
            "getObject",
            self.client.getObject,
            bucket_name,
            object_name,
            loadStreamInMemory=False
        )
        return resp.body.response

    def list_objects_page(
        self,
        bucket_name: str,
        prefix: Optional[str] = None,
        marker: Optional[str] = None,
        delimiter: Optional[str] = None
    ) -> ListPage:
        resp = self._call(
            "listObjects",
            self.client.listObjects,
            bucket_name,
            prefix=prefix,
            marker=marker or None,
            max_keys=self.config.max_keys,
            delimiter=delimiter
        )
        body = resp.body
        return ListPage(
            keys=[content.key for content in (body.contents or [])],
            common_prefixes=[cp.prefix for cp in (body.commonPrefixs or [])],
            is_truncated=bool(body.is_truncated),
            next_marker=body.next_marker
        )

    def delete_object(self, bucket_name: str, object_name: str) -> None:
        logger.debug(f"正在删除对象: {bucket_name}/{object_name}")
        self._call("deleteObject", self.client.deleteObject, bucket_name, object_name)

    def create_signed_url(self, bucket_name: str, object_name: str, expires: int) -> str:
        try:
            resp = self.client.createSignedUrl(
                HTTP_METHOD_GET,
                bucketName=bucket_name,
                objectKey=object_name,
                expires=expires
            )
        except Exception as e:
            raise BackendError(f"createSignedUrl failed: {e}") from e
        logger.debug(f"生成临时URL: {bucket_name}/{object_name} (过期时间: {expires}s)")
        return resp.signedUrl
