"""Application layer: run orchestration and reporting."""

from .checker import ArgOrderChecker
from .report import save_summary, write_summary

__all__ = ["ArgOrderChecker", "save_summary", "write_summary"]
