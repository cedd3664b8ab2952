"""日志配置

所有模块通过 get_logger 获取 floorsync 命名空间下的 logger
"""

import logging

ROOT_LOGGER = "floorsync"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """返回 floorsync.<name> logger"""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: str = "INFO") -> None:
    """为 floorsync 根 logger 安装控制台输出（重复调用只更新级别）"""
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level.upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
