#!/usr/bin/env python3

"""Function record model for debug-info enumeration."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FunctionRecord:
    """A subprogram discovered in the debug info."""

    name: str
    entry: int  # DW_AT_low_pc, 0 for abstract/inlined entries
    end: int  # DW_AT_high_pc resolved to an absolute address
    die_offset: int
    cu_offset: int = 0
    file: str = ""
    line: int = -1
    die: Any = field(default=None, repr=False, compare=False)
