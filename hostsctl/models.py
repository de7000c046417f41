"""
hosts 文件数据模型
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class HostEntry:
    """
    代表 hosts 文件中的一行

    属性:
        address: IP 地址，空行或纯注释行为 None
        hostnames: 主机名列表，保留原始大小写和顺序
        comment: 注释内容（不含 #），None 表示没有注释，"" 表示只有一个 #
    """

    address: Optional[str] = None
    hostnames: List[str] = field(default_factory=list)
    comment: Optional[str] = None

    def has_hostname(self, hostname: str) -> bool:
        """大小写不敏感地检查是否包含主机名"""
        key = hostname.lower()
        return any(name.lower() == key for name in self.hostnames)

    def to_hosts_line(self) -> str:
        """
        转换为 hosts 文件行格式（不含换行符）

        格式: <IP>\t<主机名 主机名 ...> #<注释>

        只有地址和主机名都为空时，# 前面才不加空格。

        返回:
            格式化的 hosts 文件行
        """
        line = ""
        if self.address:
            line += f"{self.address}\t"
        line += " ".join(self.hostnames)
        if self.comment is not None:
            if self.address or self.hostnames:
                line += " "
            line += f"#{self.comment}"
        return line

    def __str__(self) -> str:
        if not self.hostnames:
            return self.to_hosts_line()
        return f"{', '.join(self.hostnames)} -> {self.address}"
