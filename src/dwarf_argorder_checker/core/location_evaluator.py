#!/usr/bin/env python3

"""DWARF location evaluation at a fixed program counter.

Resolves a DIE's DW_AT_location either to a linear address or to a list of
fragments (DW_OP_piece). Location lists are narrowed to the entry covering
the requested PC; the selected expression is decoded with pyelftools'
DWARFExprParser and executed on a small stack machine.

No live process is involved. CFA and frame base come from a synthetic
register context, so addresses are only meaningful relative to each other:

    DW_OP_call_frame_cfa                -> cfa
    DW_OP_fbreg(8)                      -> frame_base + 8
    DW_OP_reg0 DW_OP_piece(8)
    DW_OP_reg3 DW_OP_piece(8)           -> [reg0[+8], reg3[+8]]

Register storage carries no address, so register fragments start at 0.
"""

from typing import Any

from elftools.dwarf.dwarf_expr import DWARFExprParser
from elftools.dwarf.dwarfinfo import DWARFInfo
from elftools.dwarf.locationlists import (
    BaseAddressEntry,
    LocationEntry,
    LocationExpr,
    LocationParser,
)

from ..domain.exceptions import LocationEvaluationError
from ..domain.models import DwarfRegisters, LocationFragment, LocationResult
from ..domain.models.tag_constants import AT_LOCATION, AT_LOW_PC
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)

CONSTANT_OPS = frozenset(
    {
        "DW_OP_addr",
        "DW_OP_const1u",
        "DW_OP_const1s",
        "DW_OP_const2u",
        "DW_OP_const2s",
        "DW_OP_const4u",
        "DW_OP_const4s",
        "DW_OP_const8u",
        "DW_OP_const8s",
        "DW_OP_constu",
        "DW_OP_consts",
    }
)

BINARY_OPS = {
    "DW_OP_plus": lambda a, b: a + b,
    "DW_OP_minus": lambda a, b: a - b,
}


def _op_suffix(op_name: str, prefix: str) -> int | None:
    """Return N for DW_OP_<prefix>N opcodes (lit0, reg5, breg12...)."""
    suffix = op_name[len(prefix):]
    if op_name.startswith(prefix) and suffix.isdigit():
        return int(suffix)
    return None


class _StackMachine:
    """Executes decoded DWARF expression operations."""

    def __init__(self, registers: DwarfRegisters):
        self.registers = registers
        self.stack: list[int] = []
        self.pieces: list[LocationFragment] = []
        self.pending_register: int | None = None

    def pop(self, op_name: str) -> int:
        if not self.stack:
            raise LocationEvaluationError(f"stack underflow at {op_name}")
        return self.stack.pop()

    def register_value(self, regnum: int) -> int:
        value = self.registers.registers.get(regnum)
        if value is None:
            raise LocationEvaluationError(f"register {regnum} unavailable")
        return value

    def step(self, op_name: str, args: list[Any]) -> None:
        if op_name in CONSTANT_OPS:
            self.stack.append(args[0])
        elif (n := _op_suffix(op_name, "DW_OP_lit")) is not None:
            self.stack.append(n)
        elif op_name == "DW_OP_call_frame_cfa":
            self.stack.append(self.registers.cfa)
        elif op_name == "DW_OP_fbreg":
            self.stack.append(self.registers.frame_base + args[0])
        elif op_name == "DW_OP_plus_uconst":
            self.stack.append(self.pop(op_name) + args[0])
        elif op_name in BINARY_OPS:
            rhs = self.pop(op_name)
            lhs = self.pop(op_name)
            self.stack.append(BINARY_OPS[op_name](lhs, rhs))
        elif op_name == "DW_OP_dup":
            value = self.pop(op_name)
            self.stack.extend((value, value))
        elif op_name == "DW_OP_drop":
            self.pop(op_name)
        elif op_name == "DW_OP_swap":
            top = self.pop(op_name)
            below = self.pop(op_name)
            self.stack.extend((top, below))
        elif op_name == "DW_OP_over":
            if len(self.stack) < 2:
                raise LocationEvaluationError(f"stack underflow at {op_name}")
            self.stack.append(self.stack[-2])
        elif op_name == "DW_OP_regx":
            self.pending_register = args[0]
        elif (n := _op_suffix(op_name, "DW_OP_reg")) is not None:
            self.pending_register = n
        elif op_name == "DW_OP_bregx":
            self.stack.append(self.register_value(args[0]) + args[1])
        elif (n := _op_suffix(op_name, "DW_OP_breg")) is not None:
            self.stack.append(self.register_value(n) + args[0])
        elif op_name == "DW_OP_piece":
            self.piece(args[0])
        else:
            raise LocationEvaluationError(f"unsupported operation {op_name}")

    def piece(self, size: int) -> None:
        if self.pending_register is not None:
            self.pieces.append(LocationFragment.in_register(self.pending_register, size))
            self.pending_register = None
        elif self.stack:
            self.pieces.append(LocationFragment(self.stack.pop(), size))
        else:
            # no location for this part of the value (optimized out)
            logger.debug(f"Skipping empty piece of size {size}")

    def result(self) -> LocationResult:
        if self.pending_register is not None:
            self.pieces.append(LocationFragment.in_register(self.pending_register, 0))
            self.pending_register = None
        if self.pieces:
            return LocationResult(pieces=self.pieces)
        if not self.stack:
            raise LocationEvaluationError("expression left an empty stack")
        return LocationResult(address=self.stack[-1])


class LocationEvaluator:
    """Evaluates DW_AT_location of parameter DIEs at a given PC."""

    def __init__(self, dwarf_info: DWARFInfo):
        """
        Args:
            dwarf_info: Loaded DWARF info of the binary
        """
        self.dwarf_info = dwarf_info
        self._location_parser = LocationParser(dwarf_info.location_lists())
        self._expr_parsers: dict[int, DWARFExprParser] = {}

    def evaluate(self, die: Any, pc: int, registers: DwarfRegisters) -> LocationResult:
        """Resolve a DIE's location.

        Args:
            die: DIE carrying DW_AT_location
            pc: Program counter selecting the location list entry
            registers: Synthetic register context

        Returns:
            Address or fragment list

        Raises:
            LocationEvaluationError: If the location is missing, no entry
                covers ``pc`` or the expression cannot be executed
        """
        attr = die.attributes.get(AT_LOCATION)
        if attr is None:
            raise LocationEvaluationError("no location attribute")

        expression = self.select_expression(die, attr, pc)
        return self.execute(expression, die.cu, registers)

    def select_expression(self, die: Any, attr: Any, pc: int) -> list[int]:
        """Pick the location expression valid at ``pc``."""
        version = die.cu["version"]
        if not LocationParser.attribute_has_location(attr, version):
            raise LocationEvaluationError(f"unsupported location form {attr.form}")

        location = self._location_parser.parse_from_attribute(attr, version, die=die)
        if isinstance(location, LocationExpr):
            return location.loc_expr

        base = self._cu_base_address(die.cu)
        for entry in location:
            if isinstance(entry, BaseAddressEntry):
                base = entry.base_address
                continue
            if not isinstance(entry, LocationEntry):
                continue

            if entry.is_absolute:
                begin, end = entry.begin_offset, entry.end_offset
            else:
                begin, end = base + entry.begin_offset, base + entry.end_offset
            if begin <= pc < end:
                return entry.loc_expr

        raise LocationEvaluationError(f"could not find loclist entry at {pc:#x}")

    def execute(self, expression: list[int], cu: Any, registers: DwarfRegisters) -> LocationResult:
        """Run a location expression on the stack machine."""
        machine = _StackMachine(registers)
        for op in self._expr_parser(cu).parse_expr(expression):
            machine.step(op.op_name, op.args)
        return machine.result()

    def _expr_parser(self, cu: Any) -> DWARFExprParser:
        parser = self._expr_parsers.get(cu.cu_offset)
        if parser is None:
            parser = DWARFExprParser(cu.structs)
            self._expr_parsers[cu.cu_offset] = parser
        return parser

    @staticmethod
    def _cu_base_address(cu: Any) -> int:
        low_pc = cu.get_top_DIE().attributes.get(AT_LOW_PC)
        return low_pc.value if low_pc is not None else 0
