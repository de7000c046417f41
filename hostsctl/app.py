"""
hostsctl 主应用模块
"""

import logging
import sys
from typing import Callable, List, Optional, Sequence

from hostsctl.config import Config
from hostsctl.errors import HostsError
from hostsctl.hosts_manager import HostsFileManager
from hostsctl.models import HostEntry


class HostsEditor:
    """
    主应用控制器，对外提供 hosts 文件的增、删、查操作

    每个操作都是一次独立的 读取 -> 修改 -> 写回 流程：
    - 添加: 在文件末尾追加一个条目
    - 移除: 大小写不敏感地移除主机名，没有变化时跳过写入
    - 列出: 只读
    """

    def __init__(self, config: Config, sleep: Optional[Callable[[float], None]] = None):
        """
        初始化应用

        参数:
            config: 应用配置
            sleep: 重试等待函数，None 时使用 time.sleep

        异常:
            ValueError: 如果配置无效
        """
        self.config = config
        self.config.validate()

        self.logger = self._setup_logging()

        kwargs = {} if sleep is None else {"sleep": sleep}
        self.hosts_manager = HostsFileManager(
            config.hosts_file_path,
            self.logger,
            write_attempts=config.write_attempts,
            retry_delay=config.retry_delay,
            read_encoding=config.read_encoding,
            write_encoding=config.write_encoding,
            **kwargs
        )

    def _setup_logging(self) -> logging.Logger:
        """
        配置日志系统

        返回:
            配置好的日志记录器实例
        """
        logger = logging.getLogger('hostsctl')
        logger.setLevel(self.config.log_level)

        # 避免重复的处理器
        if logger.handlers:
            return logger

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self.config.log_level)

        # 格式: 时间戳 - 名称 - 级别 - 消息
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        return logger

    def add_host_entry(self, address: str, hostnames: Sequence[str]) -> HostEntry:
        """
        添加一条 hosts 记录

        不检查主机名是否已在其他条目中存在。

        参数:
            address: IP 地址
            hostnames: 主机名列表

        返回:
            新追加的条目
        """
        try:
            entry = self.hosts_manager.add_host_entry(address, hostnames)
        except HostsError as e:
            self.logger.error(f"添加主机记录失败: {e}")
            raise

        self.logger.info(f"已添加主机记录: {entry}")
        return entry

    def remove_hostnames(self, hostnames: Sequence[str]) -> int:
        """
        移除主机名

        参数:
            hostnames: 要移除的主机名

        返回:
            移除的主机名个数，0 表示没有任何变化（未写文件）
        """
        try:
            removed = self.hosts_manager.remove_hostnames(hostnames)
        except HostsError as e:
            self.logger.error(f"移除主机名失败: {e}")
            raise

        if removed:
            self.logger.info(f"已移除 {removed} 个主机名: {', '.join(hostnames)}")
        else:
            self.logger.info(f"没有要移除的主机名: {', '.join(hostnames)}")
        return removed

    def list_host_entries(self) -> List[HostEntry]:
        """返回 hosts 文件中的所有条目，包括空行和注释行"""
        return self.hosts_manager.list_host_entries()

    def find_entries(self, hostname: str) -> List[HostEntry]:
        """返回包含指定主机名的条目（大小写不敏感）"""
        return [entry for entry in self.list_host_entries() if entry.has_hostname(hostname)]
