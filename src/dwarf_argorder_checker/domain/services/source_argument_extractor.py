#!/usr/bin/env python3

"""Extract declared parameter order from a single Go declaration line.

The line captured from the source file is wrapped into a one-declaration
compilation unit and parsed with tree-sitter's Go grammar. Receiver names
come first, then parameters; results are never included. The blank
identifier is dropped but still advances the ~rN placeholder numbering.

Example:
    >>> extract_source_arguments("func (s *Server) Serve(l net.Listener, _ int) error {")
    ['s', 'l']
    >>> extract_source_arguments("func (s *Server) handle(int, string) {")
    ['s', '~r1', '~r2']
"""

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser

from ...infrastructure.logging import get_logger
from ..exceptions import UnparsableDeclarationError
from ..models.tag_constants import SYNTHETIC_NAME_PREFIX

logger = get_logger(__name__)

GO_LANGUAGE = Language(tsgo.language())
_parser = Parser(GO_LANGUAGE)

FUNCTION_DECLARATION_TYPES = frozenset({"function_declaration", "method_declaration"})
PARAMETER_DECLARATION_TYPES = frozenset(
    {"parameter_declaration", "variadic_parameter_declaration"}
)
BLANK_IDENTIFIER = "_"


def wrap_declaration(line: str) -> bytes:
    """Turn a declaration line into a parseable single-declaration file.

    A closing brace is appended when the line does not already end with
    one (declarations whose body continues on the next lines).
    """
    if not line.endswith("}"):
        line = line + "\n}"
    return f"package F; {line}".encode("utf-8")


def _placeholder(position: int) -> str:
    return f"{SYNTHETIC_NAME_PREFIX}r{position}"


def _find_declaration(root: Node) -> Node | None:
    for child in root.named_children:
        if child.type in FUNCTION_DECLARATION_TYPES:
            return child
    return None


def _field_names(param_list: Node | None, position: int) -> tuple[list[str], int]:
    """Collect names from one parameter list.

    Args:
        param_list: parameter_list node, or None when absent
        position: Position counter carried over from earlier lists

    Returns:
        Tuple of (names, updated position counter)
    """
    names: list[str] = []
    if param_list is None:
        return names, position

    for decl in param_list.named_children:
        if decl.type not in PARAMETER_DECLARATION_TYPES:
            continue

        identifiers = decl.children_by_field_name("name")
        if not identifiers:
            names.append(_placeholder(position))
            position += 1
            continue

        for ident in identifiers:
            text = ident.text.decode("utf-8")
            # the blank identifier takes a slot but has no name
            if text != BLANK_IDENTIFIER:
                names.append(text)
            position += 1

    return names, position


def extract_source_arguments(line: str) -> list[str]:
    """Parse a declaration line into ordered receiver and parameter names.

    Args:
        line: Source line containing a ``func`` declaration, already stripped

    Returns:
        Receiver names followed by parameter names, in declaration order

    Raises:
        UnparsableDeclarationError: If the wrapped line has syntax errors or
            no function declaration
    """
    source = wrap_declaration(line)
    tree = _parser.parse(source)
    root = tree.root_node

    if root.has_error:
        raise UnparsableDeclarationError(f"syntax error in declaration: {line!r}")

    decl = _find_declaration(root)
    if decl is None:
        raise UnparsableDeclarationError(f"no function declaration in: {line!r}")

    names, position = _field_names(decl.child_by_field_name("receiver"), 0)
    params, _ = _field_names(decl.child_by_field_name("parameters"), position)
    names.extend(params)

    logger.debug(f"Source arguments for {line!r}: {names}")
    return names
