import io
from typing import Dict, List, Optional

import pytest

from velero_plugin_huaweicloud.infrastructure.exceptions import BackendError
from velero_plugin_huaweicloud.infrastructure.object_storage import (
    ListPage,
    ObjectStorageClient,
    StorageConfig,
)


class InMemoryStorageClient(ObjectStorageClient):
    """Storage client keeping objects in a dict, paging listings by page_size."""

    def __init__(self, config: StorageConfig, page_size: int = 2):
        super().__init__(config)
        self.page_size = page_size
        self.buckets: Dict[str, Dict[str, bytes]] = {}
        self.list_calls: List[Optional[str]] = []

    def _bucket(self, bucket_name):
        if bucket_name not in self.buckets:
            raise BackendError("The specified bucket does not exist", status=404, code="NoSuchBucket")
        return self.buckets[bucket_name]

    def put_object(self, bucket_name, object_name, data):
        if not isinstance(data, (bytes, bytearray)):
            data = data.read()
        self.buckets.setdefault(bucket_name, {})[object_name] = bytes(data)

    def head_object(self, bucket_name, object_name):
        if object_name not in self._bucket(bucket_name):
            raise BackendError("Not Found", status=404)

    def get_object_stream(self, bucket_name, object_name):
        objects = self._bucket(bucket_name)
        if object_name not in objects:
            raise BackendError("The specified key does not exist.", status=404, code="NoSuchKey")
        return io.BytesIO(objects[object_name])

    def list_objects_page(self, bucket_name, prefix=None, marker=None, delimiter=None):
        self.list_calls.append(marker)
        keys = sorted(k for k in self._bucket(bucket_name) if k.startswith(prefix or ""))
        if marker:
            keys = [k for k in keys if k > marker]
        chunk = keys[:self.page_size]
        truncated = len(keys) > self.page_size
        page = ListPage(is_truncated=truncated, next_marker=chunk[-1] if truncated else None)
        for key in chunk:
            rest = key[len(prefix or ""):]
            if delimiter and delimiter in rest:
                common = (prefix or "") + rest.split(delimiter, 1)[0] + delimiter
                if common not in page.common_prefixes:
                    page.common_prefixes.append(common)
            else:
                page.keys.append(key)
        return page

    def delete_object(self, bucket_name, object_name):
        self._bucket(bucket_name).pop(object_name, None)

    def create_signed_url(self, bucket_name, object_name, expires):
        return f"https://{self.config.endpoint}/{bucket_name}/{object_name}?Expires={expires}"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove credential variables inherited from the developer's shell."""
    for name in ("HUAWEI_CLOUD_CREDENTIALS_FILE", "OBS_ACCESS_KEY", "OBS_SECRET_KEY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def write_credentials(tmp_path, clean_env):
    """Write a credentials file and publish its path in the environment."""

    def _write(content: str) -> str:
        path = tmp_path / "credentials"
        path.write_text(content)
        clean_env.setenv("HUAWEI_CLOUD_CREDENTIALS_FILE", str(path))
        return str(path)

    return _write


@pytest.fixture
def credentials_file(write_credentials):
    return write_credentials("OBS_ACCESS_KEY=test-ak\nOBS_SECRET_KEY=test-sk\n")


@pytest.fixture
def memory_client():
    return InMemoryStorageClient(StorageConfig(endpoint="obs.example.com", access_key="ak", secret_key="sk"))
