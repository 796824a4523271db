#!/usr/bin/env python3
# =============================================================================
#     File: __init__.py
#  Created: 2026-10-19 08:55
#   Author: Bernie Roesler
#
"""
septree: Collapse the separator tree of a nested dissection ordering.

Example usage:
    import septree
    parent = [-1, 0, 0, 2]
    member = [3] * 10 + [2, 1, 0, 0]
    parent_new, member_new, nc_new = septree.collapse_septree(
        parent, member, oksep=1.0, small=12
    )
    print(parent_new, member_new, nc_new)

Author: Bernie Roesler
Date: 2026-10-19
Version: 0.1
"""
# =============================================================================

from .exceptions import InvalidInput, OutOfMemory
from ._forest import (
    EMPTY,
    DEFAULT_OKSEP,
    DEFAULT_SMALL,
    absorbing_anchors,
    as_member_array,
    as_parent_array,
    children,
    collapse_flags,
    component_sizes,
    postorder,
    preorder,
    roots,
    subtree_sizes,
    tree_depth,
)
from ._septree import CollapseResult, SeparatorTree, collapse_septree
from .utils import septree, septree_example


__all__ = [
    'EMPTY',
    'DEFAULT_OKSEP',
    'DEFAULT_SMALL',
    'InvalidInput',
    'OutOfMemory',
    'CollapseResult',
    'SeparatorTree',
    'absorbing_anchors',
    'as_member_array',
    'as_parent_array',
    'children',
    'collapse_flags',
    'collapse_septree',
    'component_sizes',
    'postorder',
    'preorder',
    'roots',
    'septree',
    'septree_example',
    'subtree_sizes',
    'tree_depth',
]

# =============================================================================
# =============================================================================
