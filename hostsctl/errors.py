"""
hosts 文件操作的异常类型
"""

from typing import Optional


class HostsError(Exception):
    """所有 hosts 文件操作异常的基类"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class HostsReadError(HostsError):
    """hosts 文件存在但无法读取（权限、I/O 错误），不重试"""


class HostsWriteError(HostsError):
    """
    写入 hosts 文件失败，重试次数已用尽

    属性:
        attempts: 已尝试的写入次数
    """

    def __init__(self, message: str, path: Optional[str] = None, attempts: int = 0):
        super().__init__(message, path)
        self.attempts = attempts


class HostsEncodingError(HostsWriteError):
    """内容包含写入编码无法表示的字符，不重试"""
