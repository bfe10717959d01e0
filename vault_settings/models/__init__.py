"""Database models"""

from .connection import Connection
from .example_record import ExampleRecord
from .setting import SettingRecord

__all__ = ["SettingRecord", "Connection", "ExampleRecord"]
