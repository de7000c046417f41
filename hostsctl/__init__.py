"""
hostsctl - 管理系统 hosts 文件中的主机名映射
"""

__version__ = "1.0.0"
__author__ = "hostsctl Project"

from hostsctl.app import HostsEditor
from hostsctl.config import Config
from hostsctl.errors import HostsEncodingError, HostsError, HostsReadError, HostsWriteError
from hostsctl.models import HostEntry

__all__ = [
    "HostsEditor",
    "Config",
    "HostEntry",
    "HostsError",
    "HostsReadError",
    "HostsWriteError",
    "HostsEncodingError",
]
