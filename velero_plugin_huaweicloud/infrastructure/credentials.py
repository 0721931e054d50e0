"""
Credential loading for the object store plugin.

Credentials are read from a dotenv style file whose path is published in an
environment variable. The process environment is never modified.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import dotenv_values

from velero_plugin_huaweicloud.core.config import settings
from velero_plugin_huaweicloud.infrastructure.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """Access key / secret key pair"""
    access_key: str = ""
    secret_key: str = ""

    def __repr__(self) -> str:
        return f"Credentials(access_key={self.access_key!r}, secret_key='***')"


def get_credentials_file() -> str:
    """
    Resolve the credentials file path from the environment.

    Returns:
        Path of the credentials file

    Raises:
        ConfigError: If the environment variable is unset or empty
    """
    env_file = os.getenv(settings.CREDENTIALS_FILE_ENV, "")
    if not env_file:
        raise ConfigError("credentials file not found")
    return env_file


def _resolve(values: Dict[str, Optional[str]], name: str) -> str:
    # a variable defined in the file takes precedence over the process environment
    value = values.get(name)
    if value is not None:
        return value
    return os.getenv(name, "")


def load_credentials(path: Optional[str] = None) -> Credentials:
    """
    Load the access key and secret key from a credentials file.

    Args:
        path: Credentials file path, resolved from the environment if omitted

    Returns:
        Credentials read from the file, falling back to the process
        environment for variables the file does not define

    Raises:
        ConfigError: If the file cannot be located or read
    """
    if path is None:
        path = get_credentials_file()

    error_message = f"error loading environment from {settings.CREDENTIALS_FILE_ENV} ({path})"
    if not os.path.isfile(path):
        raise ConfigError(f"{error_message}: no such file")

    try:
        values = dotenv_values(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"{error_message}: {e}") from e

    logger.debug(f"Loaded {len(values)} variables from credentials file {path}")
    return Credentials(
        access_key=_resolve(values, settings.ACCESS_KEY_ENV),
        secret_key=_resolve(values, settings.SECRET_KEY_ENV)
    )
