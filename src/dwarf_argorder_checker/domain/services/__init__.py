#!/usr/bin/env python3

"""Argument-order checking services."""

from .argument_classifier import ArgumentClassifier, classify_arguments
from .debug_argument_orderer import DebugArgumentOrderer, is_return_parameter
from .piece_reconciler import merge_contiguous, reconcile_pieces, remove_duplicates
from .source_argument_extractor import extract_source_arguments, wrap_declaration

__all__ = [
    "ArgumentClassifier",
    "DebugArgumentOrderer",
    "classify_arguments",
    "extract_source_arguments",
    "is_return_parameter",
    "merge_contiguous",
    "reconcile_pieces",
    "remove_duplicates",
    "wrap_declaration",
]
