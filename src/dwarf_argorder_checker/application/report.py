#!/usr/bin/env python3

"""CSV summary of a checker run."""

import csv
from pathlib import Path
from typing import TextIO

from ..domain.models import CSV_HEADER, AggregateCounters


def write_summary(counters: AggregateCounters, stream: TextIO) -> None:
    """Write the header line and the single data line."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerow(counters.csv_row())


def save_summary(counters: AggregateCounters, path: Path) -> None:
    """Write the summary to a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        write_summary(counters, f)
