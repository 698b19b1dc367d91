"""Module de logging."""

from dhcp_scope_sync.logging.base import Logger
from dhcp_scope_sync.logging.file_logger import FileLogger

__all__ = [
    "Logger",
    "FileLogger",
]
