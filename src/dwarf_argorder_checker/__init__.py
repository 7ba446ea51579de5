"""DWARF argument-order checker - compare debug-info parameter order with Go source declarations."""

from .application import ArgOrderChecker
from .core import BinaryInfo
from .infrastructure.config import Config
from .main import main

__all__ = ["ArgOrderChecker", "BinaryInfo", "Config", "main"]
