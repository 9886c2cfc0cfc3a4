"""
日志配置

为 dyno_estimate 命名空间下的所有模块提供统一的日志格式。
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "dyno_estimate"
LOG_FORMAT = "%(asctime)s - %(name)s - [%(levelname)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    配置项目日志

    重复调用会替换已有的处理器。日志写到标准错误，避免污染命令输出。

    Args:
        level: 日志级别，默认取全局设置
        log_file: 额外写入的日志文件
    """
    if level is None or log_file is None:
        from ..config import get_settings
        settings = get_settings()
        level = level or settings.log_level
        log_file = log_file or settings.log_file

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
