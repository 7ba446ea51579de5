#!/usr/bin/env python3

"""Reduce a parameter's location fragments to one orderable address.

Ordering parameters by address needs exactly one comparable key each.
Fragments that merely split one slot are merged back together; anything
else (duplicated or genuinely disjoint storage) is reported as a failure
rather than guessed at.
"""

from ...infrastructure.logging import get_logger
from ..exceptions import DuplicatedPiecesError, TooManyPiecesError
from ..models import LocationFragment

logger = get_logger(__name__)


def remove_duplicates(
    fragments: list[LocationFragment],
) -> tuple[list[LocationFragment], bool]:
    """Sort fragments by start address and drop exact repeats.

    Ties on start are broken by size and storage kind, so every copy of a
    fragment ends up adjacent to the others.

    Args:
        fragments: Fragments in any order

    Returns:
        Tuple of (deduplicated fragments sorted by start, duplicates_seen)
    """
    ordered = sorted(fragments, key=LocationFragment.sort_key)
    if not ordered:
        return [], False

    unique = [ordered[0]]
    duplicates_seen = False
    for fragment in ordered[1:]:
        if fragment == unique[-1]:
            duplicates_seen = True
            continue
        unique.append(fragment)
    return unique, duplicates_seen


def merge_contiguous(fragments: list[LocationFragment]) -> list[LocationFragment]:
    """Merge byte-contiguous neighbours of a start-sorted fragment list.

    Only memory fragments merge; registers have no byte address.
    """
    if not fragments:
        return []

    merged = [fragments[0]]
    for fragment in fragments[1:]:
        last = merged[-1]
        if (
            not last.is_register
            and not fragment.is_register
            and last.start + last.size == fragment.start
        ):
            merged[-1] = LocationFragment(last.start, last.size + fragment.size)
        else:
            merged.append(fragment)
    return merged


def reconcile_pieces(fragments: list[LocationFragment], parameter: str | None = None) -> int:
    """Resolve a fragment list to a single start address.

    Args:
        fragments: Fragments reported for one parameter
        parameter: Parameter name, used in error messages

    Returns:
        Start address of the single merged fragment

    Raises:
        DuplicatedPiecesError: If the list contains exact duplicates
        TooManyPiecesError: If disjoint fragments remain after merging

    Examples:
        >>> reconcile_pieces([LocationFragment(0, 4), LocationFragment(4, 4)])
        0
    """
    unique, duplicates_seen = remove_duplicates(fragments)
    if duplicates_seen:
        raise DuplicatedPiecesError(
            f"duplicates seen {parameter}, {_format(unique)}", parameter=parameter
        )

    merged = merge_contiguous(unique)
    if len(merged) != 1:
        raise TooManyPiecesError(
            f"too many pieces {parameter}, {_format(unique)}", parameter=parameter
        )

    logger.debug(f"Reconciled {len(fragments)} piece(s) of {parameter} to {merged[0].start:#x}")
    return merged[0].start


def _format(fragments: list[LocationFragment]) -> str:
    return "[" + " ".join(str(f) for f in fragments) + "]"
