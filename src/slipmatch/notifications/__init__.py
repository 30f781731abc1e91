"""
Bank Transfer Notification Package

Parsing and loading of the semicolon-delimited notification export.

Key Components:
- NotificationRecord: one parsed notification line
- find_field / split_fields: raw key=value token access
- load_notification_lines: read a local file or URL, newest record first
"""

from .loader import fetch_source, is_remote_source, load_notification_lines
from .models import RECORD_KEYS, NotificationRecord, find_field, split_fields

__all__ = [
    "RECORD_KEYS",
    "NotificationRecord",
    "fetch_source",
    "find_field",
    "is_remote_source",
    "load_notification_lines",
    "split_fields",
]
