"""
hosts 文件行解析与序列化
"""

from typing import Iterable, List

from hostsctl.models import HostEntry


def parse_line(raw: str) -> HostEntry:
    """
    将一行原始文本解析为 HostEntry

    第一个 # 之后的内容全部作为注释；# 之前的部分按空白拆分，
    第一个字段为地址，其余为主机名。不校验 IP 格式，
    格式错误的行也不会抛出异常。

    参数:
        raw: 原始行文本（可以带行尾换行符）

    返回:
        解析得到的 HostEntry
    """
    data, sep, comment = raw.rstrip("\r\n").partition("#")

    entry = HostEntry(comment=comment if sep else None)

    tokens = data.split()
    if tokens:
        entry.address = tokens[0]
        entry.hostnames = tokens[1:]

    return entry


def parse_lines(lines: Iterable[str]) -> List[HostEntry]:
    """按顺序解析多行，空行解析为空条目"""
    return [parse_line(line) for line in lines]


def serialize(entries: Iterable[HostEntry]) -> str:
    """
    将条目集合渲染回 hosts 文件文本

    每个条目一行，整体去除首尾空白。结果不以换行符结尾。

    参数:
        entries: HostEntry 序列

    返回:
        序列化后的文本
    """
    return "\n".join(entry.to_hosts_line() for entry in entries).strip()
