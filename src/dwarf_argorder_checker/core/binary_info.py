#!/usr/bin/env python3

"""Binary loading, function enumeration and PC-to-line mapping.

Wraps pyelftools' ELFFile/DWARFInfo behind a context manager. Every
DW_TAG_subprogram of every compilation unit becomes a FunctionRecord;
file and line come from the unit's line program at the function entry.
"""

import posixpath
from bisect import bisect_left, bisect_right
from pathlib import Path
from typing import Any

from elftools.dwarf.dwarfinfo import DWARFInfo
from elftools.elf.elffile import ELFFile

from ..domain.models import FunctionRecord
from ..domain.models.tag_constants import (
    ABSOLUTE_ADDRESS_FORMS,
    AT_HIGH_PC,
    AT_LOW_PC,
    AT_NAME,
    TAG_SUBPROGRAM,
)
from ..infrastructure.logging import ProgressTracker, get_logger, log_timing
from .location_evaluator import LocationEvaluator

logger = get_logger(__name__)


def _decode(value: Any) -> str:
    return value.decode("utf-8", errors="replace") if isinstance(value, bytes) else str(value)


class LineTable:
    """Address-sorted view of one compilation unit's line program."""

    def __init__(self, line_program: Any):
        """
        Args:
            line_program: pyelftools LineProgram, or None for units without one
        """
        self.line_program = line_program
        self._starts: list[int] = []
        self._rows: list[tuple[int, int, str, int]] = []  # (start, end, file, line)
        self._prologue_ends: list[int] = []
        if line_program is not None:
            self._build()

    def _build(self) -> None:
        rows = []
        prologue_ends = []
        sequence: list[Any] = []

        for entry in self.line_program.get_entries():
            state = entry.state
            if state is None:
                continue
            if state.prologue_end:
                prologue_ends.append(state.address)
            sequence.append(state)
            if state.end_sequence:
                # each row covers up to the next row of its sequence
                for current, following in zip(sequence, sequence[1:]):
                    if following.address > current.address:
                        rows.append(
                            (
                                current.address,
                                following.address,
                                self.file_name(current.file),
                                current.line,
                            )
                        )
                sequence = []

        rows.sort(key=lambda r: r[0])
        self._rows = rows
        self._starts = [r[0] for r in rows]
        self._prologue_ends = sorted(prologue_ends)

    def file_name(self, file_index: int) -> str:
        """Resolve a line-program file index to a path.

        DWARF 5 indexes files and directories from zero; earlier versions
        index from one and use directory 0 for the compilation directory.
        """
        header = self.line_program.header
        version = header["version"]
        entries = header["file_entry"]
        index = file_index if version >= 5 else file_index - 1
        if index < 0 or index >= len(entries):
            return ""

        entry = entries[index]
        name = _decode(entry.name)
        directories = header["include_directory"]
        dir_index = entry.dir_index

        directory = ""
        if version >= 5 and dir_index < len(directories):
            directory = _decode(directories[dir_index])
        elif version < 5 and 0 < dir_index <= len(directories):
            directory = _decode(directories[dir_index - 1])

        if directory and not posixpath.isabs(name):
            return posixpath.join(directory, name)
        return name

    def lookup(self, pc: int) -> tuple[str, int] | None:
        """Return (file, line) of the row covering ``pc``."""
        i = bisect_right(self._starts, pc) - 1
        if i < 0:
            return None
        start, end, file, line = self._rows[i]
        if start <= pc < end:
            return file, line
        return None

    def prologue_end(self, entry: int, end: int) -> int | None:
        """First prologue-end address in ``[entry, end)``."""
        i = bisect_left(self._prologue_ends, entry)
        if i < len(self._prologue_ends) and self._prologue_ends[i] < end:
            return self._prologue_ends[i]
        return None


class BinaryInfo:
    """Debug information of one executable.

    Usage:
        with BinaryInfo(Path("prog")) as binary:
            for fn in binary.functions:
                ...
    """

    def __init__(self, binary_path: Path):
        """
        Args:
            binary_path: Path to an ELF executable with DWARF info
        """
        self.binary_path = binary_path
        self.elf_file: ELFFile | None = None
        self.dwarf_info: DWARFInfo | None = None
        self.location_evaluator: LocationEvaluator | None = None
        self._functions: list[FunctionRecord] | None = None
        self._units: dict[int, Any] = {}
        self._line_tables: dict[int, LineTable] = {}

    def __enter__(self) -> "BinaryInfo":
        """Open the ELF file and load its DWARF info.

        Raises:
            ValueError: If the binary carries no DWARF information
        """
        logger.debug(f"Opening binary: {self.binary_path}")
        self.file_handle = open(self.binary_path, "rb")
        try:
            self.elf_file = ELFFile(self.file_handle)  # type: ignore[no-untyped-call]

            if not self.elf_file.has_dwarf_info():  # type: ignore[no-untyped-call]
                raise ValueError(f"No DWARF info found in {self.binary_path}")

            self.dwarf_info = self.elf_file.get_dwarf_info()  # type: ignore[no-untyped-call]
        except Exception:
            self.file_handle.close()
            raise

        self.location_evaluator = LocationEvaluator(self.dwarf_info)
        logger.debug(
            f"DWARF info loaded from {self.binary_path} "
            f"({self.elf_file.get_machine_arch()})"  # type: ignore[no-untyped-call]
        )
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: Exception | None, exc_tb: object | None
    ) -> None:
        """Close the ELF file handle."""
        if hasattr(self, "file_handle"):
            self.file_handle.close()
            logger.debug("Binary closed")

    @property
    def functions(self) -> list[FunctionRecord]:
        """All subprograms of the binary, sorted by entry address."""
        if self._functions is None:
            self._functions = self.load_functions()
        return self._functions

    @log_timing
    def load_functions(self) -> list[FunctionRecord]:
        """Walk every compilation unit and collect its subprograms."""
        assert self.dwarf_info is not None, "BinaryInfo must be entered first"
        tracker = ProgressTracker(logger)
        functions = []

        with tracker.track_operation("enumerate functions"):
            for cu in self.dwarf_info.iter_CUs():
                tracker.count_cu(cu)
                self._units[cu.cu_offset] = cu
                for die in cu.iter_DIEs():
                    if die.tag != TAG_SUBPROGRAM:
                        continue
                    record = self._make_record(cu, die)
                    functions.append(record)
                    tracker.count_function(record.entry)

        tracker.report_summary()
        functions.sort(key=lambda fn: fn.entry)
        return functions

    def _make_record(self, cu: Any, die: Any) -> FunctionRecord:
        attrs = die.attributes
        name = _decode(attrs[AT_NAME].value) if AT_NAME in attrs else ""
        entry = attrs[AT_LOW_PC].value if AT_LOW_PC in attrs else 0

        end = entry
        high_pc = attrs.get(AT_HIGH_PC)
        if high_pc is not None:
            end = high_pc.value if high_pc.form in ABSOLUTE_ADDRESS_FORMS else entry + high_pc.value

        file, line = "", -1
        if entry != 0:
            # rows for the entry can live in another unit's line program
            location = self.line_table(cu).lookup(entry)
            file, line = location if location is not None else self.pc_to_line(entry)

        return FunctionRecord(
            name=name,
            entry=entry,
            end=end,
            die_offset=die.offset,
            cu_offset=cu.cu_offset,
            file=file,
            line=line,
            die=die,
        )

    def line_table(self, cu: Any) -> LineTable:
        """Get (building on first use) the line table of a compilation unit."""
        table = self._line_tables.get(cu.cu_offset)
        if table is None:
            assert self.dwarf_info is not None
            table = LineTable(self.dwarf_info.line_program_for_CU(cu))
            self._line_tables[cu.cu_offset] = table
        return table

    def pc_to_line(self, pc: int) -> tuple[str, int]:
        """Map a program counter to (file, line); ("", -1) when unknown."""
        assert self.dwarf_info is not None, "BinaryInfo must be entered first"

        aranges = self.dwarf_info.get_aranges()
        if aranges is not None:
            cu_offset = aranges.cu_offset_at_addr(pc)
            if cu_offset is not None:
                cu = self.dwarf_info.get_CU_at(cu_offset)
                location = self.line_table(cu).lookup(pc)
                if location is not None:
                    return location

        for cu in self.dwarf_info.iter_CUs():
            location = self.line_table(cu).lookup(pc)
            if location is not None:
                return location

        return "", -1

    def prologue_end_pc(self, fn: FunctionRecord) -> int:
        """PC at which the function's parameters reach their final storage.

        Falls back to the entry address when the line table has no
        prologue-end marker inside the function.
        """
        cu = self._units.get(fn.cu_offset)
        if cu is None:
            assert self.dwarf_info is not None
            cu = self.dwarf_info.get_CU_at(fn.cu_offset)
            self._units[fn.cu_offset] = cu

        pc = self.line_table(cu).prologue_end(fn.entry, fn.end)
        return pc if pc is not None else fn.entry
