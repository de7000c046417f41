"""
配置管理模块，支持环境变量
"""

import codecs
import os
from dataclasses import dataclass, field


def default_hosts_path() -> str:
    """返回当前平台的系统 hosts 文件路径"""
    if os.name == "nt":
        system_root = os.getenv("SystemRoot", r"C:\Windows")
        return os.path.join(system_root, "System32", "drivers", "etc", "hosts")
    return "/etc/hosts"


def is_single_byte_encoding(encoding: str) -> bool:
    """
    检查编码是否每个字符只占一个字节

    ASCII 字符必须原样编码（排除带 BOM 的 utf-16/utf-32），
    U+0000..U+00FF 中可表示的字符也只能编码为一个字节（排除 utf-8 等多字节编码）。

    参数:
        encoding: 已确认存在的编码名

    返回:
        是单字节编码返回 True
    """
    try:
        if "a".encode(encoding, errors="ignore") != b"a":
            return False
    except LookupError:
        # rot13、hex 等非文本编码
        return False
    return all(
        len(chr(code).encode(encoding, errors="ignore")) <= 1
        for code in range(256)
    )


@dataclass
class Config:
    """应用配置类，从环境变量加载配置"""

    hosts_file_path: str = field(default_factory=default_hosts_path)
    write_attempts: int = 5
    retry_delay: float = 2.0
    read_encoding: str = "utf-8"
    write_encoding: str = "ascii"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """
        从环境变量加载配置

        环境变量说明:
            HOSTS_FILE: hosts 文件路径 (默认: 系统 hosts 文件)
            HOSTS_WRITE_ATTEMPTS: 写入最多尝试次数 (默认: 5)
            HOSTS_RETRY_DELAY: 两次写入尝试之间的等待秒数 (默认: 2)
            HOSTS_READ_ENCODING: 读取编码 (默认: utf-8)
            HOSTS_WRITE_ENCODING: 写入编码，须为单字节编码 (默认: ascii)
            LOG_LEVEL: 日志级别 (默认: INFO)

        异常:
            ValueError: 数值类环境变量无法解析
        """
        try:
            write_attempts = int(os.getenv("HOSTS_WRITE_ATTEMPTS", "5"))
            retry_delay = float(os.getenv("HOSTS_RETRY_DELAY", "2"))
        except ValueError as e:
            raise ValueError(f"无效的重试配置: {e}") from e

        return cls(
            hosts_file_path=os.getenv("HOSTS_FILE") or default_hosts_path(),
            write_attempts=write_attempts,
            retry_delay=retry_delay,
            read_encoding=os.getenv("HOSTS_READ_ENCODING", "utf-8"),
            write_encoding=os.getenv("HOSTS_WRITE_ENCODING", "ascii"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper()
        )

    def validate(self) -> None:
        """验证配置是否有效"""
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_log_levels:
            raise ValueError(
                f"无效的 LOG_LEVEL: {self.log_level}. "
                f"必须是以下之一: {', '.join(sorted(valid_log_levels))}"
            )
        if self.write_attempts < 1:
            raise ValueError(f"HOSTS_WRITE_ATTEMPTS 必须至少为 1: {self.write_attempts}")
        if self.retry_delay < 0:
            raise ValueError(f"HOSTS_RETRY_DELAY 不能为负数: {self.retry_delay}")
        for encoding in (self.read_encoding, self.write_encoding):
            try:
                codecs.lookup(encoding)
            except LookupError:
                raise ValueError(f"未知的编码: {encoding}") from None
        if not is_single_byte_encoding(self.write_encoding):
            raise ValueError(f"HOSTS_WRITE_ENCODING 必须是单字节编码: {self.write_encoding}")
