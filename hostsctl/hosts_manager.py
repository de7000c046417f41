"""
Hosts 文件管理模块，支持带重试的原子性更新
"""

import contextlib
import enum
import logging
import os
import stat
import tempfile
import threading
import time
import weakref
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from hostsctl.errors import HostsEncodingError, HostsReadError, HostsWriteError
from hostsctl.models import HostEntry
from hostsctl.mutations import add_entry, remove_hostnames
from hostsctl.parser import parse_lines, serialize


class AttemptStatus(enum.Enum):
    """单次写入尝试的状态：成功，或可重试的暂时性失败"""

    OK = "ok"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class WriteAttempt:
    """单次写入尝试的结果"""

    number: int
    status: AttemptStatus
    error: Optional[OSError] = None


@dataclass(frozen=True)
class WriteResult:
    """写入成功时返回，attempts 为实际尝试次数"""

    attempts: int


class PathLock:
    """
    按路径共享的进程内锁

    threading.Lock 不支持弱引用，包一层后才能放进 WeakValueDictionary，
    最后一个持有者释放后对应条目会自动消失。
    """

    def __init__(self):
        self._lock = threading.Lock()

    def __enter__(self) -> "PathLock":
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self._lock.release()


class HostsFileManager:
    """
    管理 hosts 文件的读取和原子性更新

    每次操作都重新读取文件、在内存中修改、再整体写回，不缓存任何状态。
    同一进程内指向同一路径的所有实例共享一把锁；
    跨进程的写入冲突只通过有限次重试来吸收（后写者覆盖先写者）。
    """

    _path_locks: "weakref.WeakValueDictionary[str, PathLock]" = weakref.WeakValueDictionary()
    _path_locks_guard = threading.Lock()

    def __init__(
        self,
        hosts_path: str,
        logger: logging.Logger,
        write_attempts: int = 5,
        retry_delay: float = 2.0,
        read_encoding: str = "utf-8",
        write_encoding: str = "ascii",
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        初始化 hosts 文件管理器

        参数:
            hosts_path: hosts 文件路径
            logger: 日志记录器实例
            write_attempts: 写入最多尝试次数
            retry_delay: 两次尝试之间等待的秒数
            read_encoding: 读取编码
            write_encoding: 写入编码（单字节编码）
            sleep: 等待函数，测试时可替换
        """
        self.hosts_path = Path(hosts_path)
        self.logger = logger
        self.write_attempts = write_attempts
        self.retry_delay = retry_delay
        self.read_encoding = read_encoding
        self.write_encoding = write_encoding
        self._sleep = sleep
        self.lock = self._lock_for(self.hosts_path)

    @classmethod
    def _lock_for(cls, path: Path) -> PathLock:
        """
        获取指向同一真实文件的所有实例共享的锁

        参数:
            path: hosts 文件路径（符号链接会被解析）

        返回:
            该路径对应的 PathLock
        """
        key = str(path.resolve())
        with cls._path_locks_guard:
            lock = cls._path_locks.get(key)
            if lock is None:
                lock = PathLock()
                cls._path_locks[key] = lock
            return lock

    def read_entries(self) -> List[HostEntry]:
        """
        读取并解析整个 hosts 文件

        返回:
            按文件顺序排列的条目列表，文件不存在时返回空列表

        异常:
            HostsReadError: 文件存在但无法读取
        """
        try:
            with open(self.hosts_path, "r", encoding=self.read_encoding) as f:
                lines = f.read().splitlines()
        except FileNotFoundError:
            self.logger.debug(f"Hosts 文件不存在，视为空: {self.hosts_path}")
            return []
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"读取 hosts 文件时出错: {self.hosts_path}: {e}")
            raise HostsReadError(
                f"无法读取 hosts 文件 {self.hosts_path}: {e}",
                str(self.hosts_path)
            ) from e

        self.logger.debug(f"从 {self.hosts_path} 读取了 {len(lines)} 行")
        return parse_lines(lines)

    @staticmethod
    def _target_mode(target: Path) -> int:
        """
        获取替换文件应使用的权限位

        参数:
            target: 真实的 hosts 文件路径

        返回:
            现有文件的权限位，文件不存在时为 0o644
        """
        try:
            return stat.S_IMODE(os.stat(target).st_mode)
        except FileNotFoundError:
            return 0o644

    def _attempt_write(self, text: str, number: int) -> WriteAttempt:
        """
        执行一次整体写入

        符号链接会先被解析，写入的是链接指向的真实文件，链接本身保持不变。

        参数:
            text: 完整的文件内容
            number: 本次尝试的序号（从 1 开始）

        返回:
            WriteAttempt，失败时带上 OSError
        """
        temp_path = None
        try:
            target = self.hosts_path.resolve()

            # 写入同一目录下的临时文件，再原子性替换
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target.parent,
                prefix='.hosts.tmp.',
                text=True
            )
            with os.fdopen(temp_fd, 'w', encoding=self.write_encoding) as f:
                f.write(text)

            os.chmod(temp_path, self._target_mode(target))
            os.replace(temp_path, target)

        except OSError as e:
            if temp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(temp_path)
            return WriteAttempt(number, AttemptStatus.TRANSIENT, e)

        return WriteAttempt(number, AttemptStatus.OK)

    def write_with_retry(self, content: str) -> WriteResult:
        """
        用给定内容整体替换 hosts 文件，失败时有限次重试

        参数:
            content: 序列化后的文件内容（不含结尾换行符）

        返回:
            WriteResult，包含实际尝试次数

        异常:
            HostsEncodingError: 内容无法用写入编码表示（不重试）
            HostsWriteError: 所有尝试均失败
        """
        text = content + "\n" if content else ""
        try:
            text.encode(self.write_encoding)
        except UnicodeEncodeError as e:
            self.logger.error(f"内容无法使用 {self.write_encoding} 编码: {e}")
            raise HostsEncodingError(
                f"内容包含 {self.write_encoding} 无法表示的字符: {e}",
                str(self.hosts_path)
            ) from e

        attempt = None
        for number in range(1, self.write_attempts + 1):
            self.logger.debug(f"写入 {self.hosts_path}（第 {number}/{self.write_attempts} 次尝试）")
            attempt = self._attempt_write(text, number)
            if attempt.status is AttemptStatus.OK:
                return WriteResult(attempts=number)

            remaining = self.write_attempts - attempt.number
            if remaining:
                self.logger.warning(
                    f"第 {attempt.number} 次写入 hosts 文件失败: {attempt.error}，"
                    f"{self.retry_delay} 秒后重试（剩余 {remaining} 次）"
                )
                self._sleep(self.retry_delay)

        self.logger.error(
            f"写入 hosts 文件失败，已尝试 {self.write_attempts} 次: {attempt.error}"
        )
        raise HostsWriteError(
            f"无法写入 hosts 文件 {self.hosts_path}: {attempt.error}",
            str(self.hosts_path),
            attempts=self.write_attempts
        ) from attempt.error

    def add_host_entry(self, address: str, hostnames: Sequence[str]) -> HostEntry:
        """
        在文件末尾追加一个条目

        参数:
            address: IP 地址
            hostnames: 主机名列表

        返回:
            新追加的条目

        异常:
            ValueError: 地址或主机名无效
            HostsReadError: 无法读取文件
            HostsWriteError: 重试后仍无法写入
        """
        with self.lock:
            entries, entry = add_entry(self.read_entries(), address, hostnames)
            self.write_with_retry(serialize(entries))
        return entry

    def remove_hostnames(self, hostnames: Sequence[str]) -> int:
        """
        从所有条目中移除主机名，没有任何变化时不写文件

        参数:
            hostnames: 要移除的主机名（大小写不敏感）

        返回:
            移除的主机名个数，0 表示文件未被修改

        异常:
            HostsReadError: 无法读取文件
            HostsWriteError: 重试后仍无法写入
        """
        with self.lock:
            entries, removed = remove_hostnames(self.read_entries(), hostnames)
            if removed:
                self.write_with_retry(serialize(entries))
        return removed

    def list_host_entries(self) -> List[HostEntry]:
        """只读地返回所有条目"""
        with self.lock:
            return self.read_entries()
