"""Utility modules for Spanmark.

Provides:
- text: UTF-16 offset helpers for platform interop
- logger: get_logger for logging
"""

from spanmark.utils.logger import get_logger
from spanmark.utils.text import utf16_len, utf16_offsets, utf16_width

__all__ = [
    "get_logger",
    "utf16_len",
    "utf16_offsets",
    "utf16_width",
]
