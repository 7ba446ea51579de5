#!/usr/bin/env python3
"""
Run the DWARF argument-order checker from a source checkout.

    python main.py <binary> [-v | -e] [-o summary.csv]

An installed package provides the same CLI as ``dwarf-argorder-check``.
"""

import sys
from pathlib import Path

# Not installed: import the package straight from src/
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from dwarf_argorder_checker.main import main

if __name__ == "__main__":
    main()
