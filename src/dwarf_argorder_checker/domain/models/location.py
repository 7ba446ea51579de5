#!/usr/bin/env python3

"""Location models produced by evaluating DWARF location expressions.

A parameter's storage is either a single linear address or a list of
fragments (DW_OP_piece). Register fragments have no address: their start is
0 and the DWARF register number is kept apart, since register numbers say
nothing about argument order.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LocationFragment:
    """A contiguous piece of storage backing part of a value."""

    start: int
    size: int
    is_register: bool = False
    register: int | None = None

    @classmethod
    def in_register(cls, register: int, size: int) -> "LocationFragment":
        """Fragment held in a register; it sorts at address 0."""
        return cls(0, size, is_register=True, register=register)

    def sort_key(self) -> tuple[int, int, bool, int]:
        register = -1 if self.register is None else self.register
        return (self.start, self.size, self.is_register, register)

    def __str__(self) -> str:
        if self.is_register:
            return f"reg{self.register}[+{self.size}]"
        return f"mem[{self.start:#x}+{self.size}]"


@dataclass
class LocationResult:
    """Result of evaluating a location at a program counter."""

    address: int | None = None
    pieces: list[LocationFragment] = field(default_factory=list)

    @property
    def is_fragmented(self) -> bool:
        return len(self.pieces) > 0


@dataclass
class DwarfRegisters:
    """Synthetic register context used when evaluating locations.

    No live process is involved: CFA and frame base are fixed values and
    registers are only known if explicitly supplied.
    """

    cfa: int
    frame_base: int
    registers: dict[int, int] = field(default_factory=dict)

    @classmethod
    def synthetic(cls, base: int) -> "DwarfRegisters":
        """Build a context where CFA and frame base share one fixed value."""
        return cls(cfa=base, frame_base=base)


@dataclass
class DebugParameter:
    """A formal parameter with its resolved address."""

    name: str
    address: int
