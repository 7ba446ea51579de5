#!/usr/bin/env python3

"""Order a function's debug-info parameters by resolved address.

Traversal order of the formal-parameter DIEs is only used to enumerate
them; the resulting order comes entirely from the addresses their
locations resolve to after the prologue.
"""

from typing import TYPE_CHECKING, Any

from ...infrastructure.logging import get_logger
from ..exceptions import LocationEvaluationError
from ..models import DebugParameter, DwarfRegisters
from ..models.tag_constants import (
    AT_NAME,
    AT_VARIABLE_PARAMETER,
    TAG_FORMAL_PARAMETER,
)
from .piece_reconciler import reconcile_pieces

if TYPE_CHECKING:
    from ...core.location_evaluator import LocationEvaluator

logger = get_logger(__name__)


def _attr_str(die: Any, name: str) -> str | None:
    attr = die.attributes.get(name)
    if attr is None:
        return None
    value = attr.value
    return value.decode("utf-8", errors="replace") if isinstance(value, bytes) else str(value)


def is_return_parameter(die: Any) -> bool:
    """Check whether a formal parameter describes an output value.

    Go marks result parameters with DW_AT_variable_parameter; synthetic
    unnamed results (``~r0``) carry the same flag.
    """
    attr = die.attributes.get(AT_VARIABLE_PARAMETER)
    return bool(attr.value) if attr is not None else False


class DebugArgumentOrderer:
    """Produces the address-ordered parameter names of one function."""

    def __init__(self, evaluator: "LocationEvaluator", registers: DwarfRegisters):
        """
        Args:
            evaluator: Resolves a parameter DIE's location at a PC
            registers: Synthetic register context passed to every evaluation
        """
        self.evaluator = evaluator
        self.registers = registers

    def collect_parameters(self, function_die: Any, pc: int) -> list[DebugParameter]:
        """Resolve every named input parameter of a subprogram DIE.

        Args:
            function_die: DW_TAG_subprogram DIE
            pc: Program counter at which locations are evaluated

        Returns:
            Parameters with addresses, in DIE traversal order

        Raises:
            ParameterResolutionError: On the first parameter that cannot be
                reduced to a single address; no partial list is returned
        """
        parameters: list[DebugParameter] = []

        for child in function_die.iter_children():
            if child.tag != TAG_FORMAL_PARAMETER:
                continue

            name = _attr_str(child, AT_NAME)
            if name is None:
                continue

            # result parameters, named or synthetic
            if is_return_parameter(child):
                continue

            try:
                location = self.evaluator.evaluate(child, pc, self.registers)
            except LocationEvaluationError as e:
                raise LocationEvaluationError(
                    f"argument error for {name}: {e}", parameter=name
                ) from e

            if location.is_fragmented:
                address = reconcile_pieces(location.pieces, parameter=name)
            elif location.address is not None:
                address = location.address
            else:
                raise LocationEvaluationError(
                    f"argument error for {name}: empty location", parameter=name
                )

            parameters.append(DebugParameter(name=name, address=address))

        return parameters

    def order(self, function_die: Any, pc: int) -> list[str]:
        """Return parameter names sorted by ascending address.

        Equal addresses keep DIE traversal order (the sort is stable).
        """
        parameters = self.collect_parameters(function_die, pc)
        parameters.sort(key=lambda p: p.address)

        for param in parameters:
            logger.debug(f"\t{param.name} @ {param.address:#x}")

        return [p.name for p in parameters]
