"""Core module: debug-info access through pyelftools."""

from .binary_info import BinaryInfo, LineTable
from .location_evaluator import LocationEvaluator

__all__ = [
    "BinaryInfo",
    "LineTable",
    "LocationEvaluator",
]
