#!/usr/bin/env python3
"""
hostsctl - 主入口点

添加、移除、列出系统 hosts 文件中的条目。
"""

import argparse
import sys
from typing import List, Optional

from hostsctl import Config, HostsEditor, HostsError


def build_parser() -> argparse.ArgumentParser:
    """构建命令行参数解析器"""
    parser = argparse.ArgumentParser(prog="hostsctl", description="管理 hosts 文件条目")
    parser.add_argument("--hosts-file", help="hosts 文件路径 (默认: HOSTS_FILE 或系统 hosts 文件)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="追加一个条目")
    add_parser.add_argument("address", help="IP 地址")
    add_parser.add_argument("hostnames", nargs="+", help="主机名")

    remove_parser = subparsers.add_parser("remove", help="移除主机名")
    remove_parser.add_argument("hostnames", nargs="+", help="主机名（大小写不敏感）")

    list_parser = subparsers.add_parser("list", help="列出条目")
    list_parser.add_argument("--host", help="只列出包含该主机名的条目")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """主入口点，返回进程退出码"""
    args = build_parser().parse_args(argv)

    # 从环境变量加载配置
    config = Config.from_env()
    if args.hosts_file:
        config.hosts_file_path = args.hosts_file

    try:
        editor = HostsEditor(config)
    except ValueError as e:
        print(f"初始化 hostsctl 失败: {e}", file=sys.stderr)
        return 1

    try:
        if args.command == "add":
            editor.add_host_entry(args.address, args.hostnames)
        elif args.command == "remove":
            editor.remove_hostnames(args.hostnames)
        else:
            if args.host:
                entries = editor.find_entries(args.host)
            else:
                entries = [e for e in editor.list_host_entries() if e.hostnames]
            for entry in entries:
                print(entry.to_hosts_line())
    except KeyboardInterrupt:
        editor.logger.info("被用户中断")
        return 130
    except (HostsError, ValueError) as e:
        editor.logger.error(f"致命错误: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
