import pytest

from velero_plugin_huaweicloud.infrastructure.credentials import (
    Credentials,
    get_credentials_file,
    load_credentials,
)
from velero_plugin_huaweicloud.infrastructure.exceptions import ConfigError


def test_loads_both_keys(credentials_file):
    assert load_credentials() == Credentials(access_key="test-ak", secret_key="test-sk")


def test_explicit_path(tmp_path, clean_env):
    path = tmp_path / "creds.env"
    path.write_text('# huawei cloud\nOBS_ACCESS_KEY="quoted-ak"\nexport OBS_SECRET_KEY=sk\n')
    assert load_credentials(str(path)) == Credentials(access_key="quoted-ak", secret_key="sk")


def test_file_overrides_process_environment(write_credentials, clean_env):
    clean_env.setenv("OBS_ACCESS_KEY", "from-env")
    write_credentials("OBS_ACCESS_KEY=from-file\nOBS_SECRET_KEY=sk\n")
    assert load_credentials().access_key == "from-file"


def test_falls_back_to_process_environment(write_credentials, clean_env):
    clean_env.setenv("OBS_SECRET_KEY", "env-sk")
    write_credentials("OBS_ACCESS_KEY=ak\n")
    assert load_credentials() == Credentials(access_key="ak", secret_key="env-sk")


def test_empty_value_in_file_wins(write_credentials, clean_env):
    clean_env.setenv("OBS_SECRET_KEY", "env-sk")
    write_credentials("OBS_ACCESS_KEY=ak\nOBS_SECRET_KEY=\n")
    assert load_credentials().secret_key == ""


def test_env_var_unset(clean_env):
    with pytest.raises(ConfigError, match="credentials file not found"):
        get_credentials_file()


def test_missing_file(tmp_path, clean_env):
    missing = tmp_path / "nope"
    clean_env.setenv("HUAWEI_CLOUD_CREDENTIALS_FILE", str(missing))
    with pytest.raises(ConfigError, match="HUAWEI_CLOUD_CREDENTIALS_FILE"):
        load_credentials()


def test_repr_hides_secret():
    text = repr(Credentials(access_key="ak", secret_key="s3cr3t-value"))
    assert "s3cr3t-value" not in text
    assert "ak" in text
