from unittest.mock import patch

import pytest

from velero_plugin_huaweicloud.infrastructure.object_storage import StorageConfig, StorageFactory

PACKAGE = "velero_plugin_huaweicloud.infrastructure.object_storage.factory"
CONFIG = StorageConfig(endpoint="obs.example.com", access_key="ak", secret_key="sk")


def test_default_backend_is_obs():
    with patch(f"{PACKAGE}.OBSClientAdapter") as obs_cls:
        client = StorageFactory.create_client(CONFIG)
    obs_cls.assert_called_once_with(CONFIG)
    assert client is obs_cls.return_value


def test_backend_from_settings(monkeypatch):
    monkeypatch.setattr(f"{PACKAGE}.settings.OBJECT_STORE_BACKEND", "minio")
    with patch(f"{PACKAGE}.MinIOClientAdapter") as minio_cls:
        client = StorageFactory.create_client(CONFIG)
    assert client is minio_cls.return_value


def test_explicit_type_is_case_insensitive():
    with patch(f"{PACKAGE}.MinIOClientAdapter") as minio_cls:
        StorageFactory.create_client(CONFIG, storage_type="MinIO")
    minio_cls.assert_called_once_with(CONFIG)


def test_unsupported_type():
    with pytest.raises(ValueError, match="Unsupported storage type: s3"):
        StorageFactory.create_client(CONFIG, storage_type="s3")
