import logging

import pytest


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("hostsctl.tests")


@pytest.fixture(autouse=True)
def reset_hostsctl_logger():
    """每个测试结束后移除 hostsctl 日志处理器，避免引用已关闭的输出流"""
    yield
    logger = logging.getLogger("hostsctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def hosts_path(tmp_path):
    return tmp_path / "hosts"
