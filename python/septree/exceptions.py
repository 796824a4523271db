#!/usr/bin/env python3
# =============================================================================
#     File: exceptions.py
#  Created: 2026-10-19 09:12
#   Author: Bernie Roesler
#
"""
Exceptions raised by the separator tree functions.
"""
# =============================================================================


class InvalidInput(ValueError):
    """The separator tree or the membership array is malformed.

    Raised for out-of-range parents or members, self-parents, cycles, more
    components than nodes, and invalid thresholds.
    """


class OutOfMemory(MemoryError):
    """A workspace array could not be allocated."""


# =============================================================================
# =============================================================================
