"""Mock DIEs and fakes shared by the unit tests."""

from unittest.mock import Mock

from dwarf_argorder_checker.domain.exceptions import LocationEvaluationError
from dwarf_argorder_checker.domain.models import LocationResult


def make_param_die(name: str | None, is_return: bool = False, tag: str = "DW_TAG_formal_parameter") -> Mock:
    """Build a mock formal-parameter DIE."""
    die = Mock()
    die.tag = tag
    die.attributes = {"DW_AT_variable_parameter": Mock(value=is_return)}
    if name is not None:
        die.attributes["DW_AT_name"] = Mock(value=name.encode("utf-8"))
    return die


def make_function_die(*children: Mock) -> Mock:
    """Build a mock subprogram DIE with the given children."""
    die = Mock()
    die.tag = "DW_TAG_subprogram"
    die.iter_children.return_value = list(children)
    return die


class FakeEvaluator:
    """Location evaluator answering from a name -> result table.

    A value may be an int (address), a list of fragments, or an exception
    instance to raise.
    """

    def __init__(self, locations: dict):
        self.locations = locations
        self.calls: list[tuple[str, int]] = []

    def evaluate(self, die, pc, registers):
        name = die.attributes["DW_AT_name"].value.decode("utf-8")
        self.calls.append((name, pc))
        value = self.locations.get(name)
        if value is None:
            raise LocationEvaluationError("no location attribute")
        if isinstance(value, Exception):
            raise value
        if isinstance(value, list):
            return LocationResult(pieces=value)
        return LocationResult(address=value)
