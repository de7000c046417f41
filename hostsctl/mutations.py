"""
条目集合的增删操作

所有函数都不修改传入的列表，而是返回新的列表。
"""

from typing import List, Sequence, Tuple

from hostsctl.models import HostEntry


def _is_token(value: str) -> bool:
    return bool(value) and "#" not in value and value.split() == [value]


def add_entry(
    entries: Sequence[HostEntry],
    address: str,
    hostnames: Sequence[str]
) -> Tuple[List[HostEntry], HostEntry]:
    """
    在末尾追加一个新条目

    不检查其他条目中是否已存在相同主机名。

    参数:
        entries: 现有条目
        address: IP 地址
        hostnames: 主机名列表

    返回:
        (新的条目列表, 新追加的条目)

    异常:
        ValueError: 地址或主机名不是单个合法字段
    """
    if not _is_token(address):
        raise ValueError(f"无效的地址: {address!r}")
    if not hostnames:
        raise ValueError("至少需要一个主机名")
    for hostname in hostnames:
        if not _is_token(hostname):
            raise ValueError(f"无效的主机名: {hostname!r}")

    entry = HostEntry(address=address, hostnames=list(hostnames))
    return list(entries) + [entry], entry


def remove_hostnames(
    entries: Sequence[HostEntry],
    hostnames: Sequence[str]
) -> Tuple[List[HostEntry], int]:
    """
    从所有条目中移除指定主机名（大小写不敏感）

    移除后主机名列表变为空的条目会被整体丢弃，包括其地址和注释。
    原本就没有主机名的条目（空行、纯注释行）原样保留。

    参数:
        entries: 现有条目
        hostnames: 要移除的主机名

    返回:
        (新的条目列表, 移除的主机名个数)
    """
    keys = {name.lower() for name in hostnames}
    removed = 0
    result: List[HostEntry] = []

    for entry in entries:
        if not entry.hostnames:
            result.append(entry)
            continue

        kept = [name for name in entry.hostnames if name.lower() not in keys]
        count = len(entry.hostnames) - len(kept)
        if not count:
            result.append(entry)
            continue

        removed += count
        if kept:
            result.append(HostEntry(address=entry.address, hostnames=kept, comment=entry.comment))

    return result, removed
