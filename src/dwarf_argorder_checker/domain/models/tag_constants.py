#!/usr/bin/env python3

"""DWARF tag and attribute names used when walking subprograms.

pyelftools reports tags and attributes by their symbolic names, so these
are plain strings rather than numeric codes.
"""

TAG_SUBPROGRAM = "DW_TAG_subprogram"
TAG_FORMAL_PARAMETER = "DW_TAG_formal_parameter"

AT_NAME = "DW_AT_name"
AT_LOW_PC = "DW_AT_low_pc"
AT_HIGH_PC = "DW_AT_high_pc"
AT_LOCATION = "DW_AT_location"
AT_VARIABLE_PARAMETER = "DW_AT_variable_parameter"

# Prefix the Go compiler gives synthetic parameter names (~r0, ~b1, ...)
SYNTHETIC_NAME_PREFIX = "~"

# High PC forms that hold an absolute address; any other form is an
# offset from DW_AT_low_pc (DWARF 4+)
ABSOLUTE_ADDRESS_FORMS = frozenset(
    {
        "DW_FORM_addr",
        "DW_FORM_addrx",
        "DW_FORM_addrx1",
        "DW_FORM_addrx2",
        "DW_FORM_addrx3",
        "DW_FORM_addrx4",
    }
)
