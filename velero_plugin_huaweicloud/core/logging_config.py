import logging
import sys
from typing import Optional

from velero_plugin_huaweicloud.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger for a process hosting the plugin.

    Args:
        level: Log level name, defaults to ``settings.LOG_LEVEL``

    Returns:
        The configured root logger
    """
    level = (level or settings.LOG_LEVEL).upper()

    logger = logging.getLogger()
    logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # 清除可能已存在的处理器，然后添加新的处理器
    logger.handlers = []
    logger.addHandler(console_handler)

    # SDK 的调试输出过多
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    return logger
