#!/usr/bin/env python3
# =============================================================================
#     File: _septree.py
#  Created: 2026-10-19 10:02
#   Author: Bernie Roesler
#
"""
Collapse a separator tree, as computed by a nested dissection ordering.

Each component of the tree is one separator, and each node of the graph
belongs to exactly one component. Subtrees that are too small, or whose root
separator is too large compared to the whole subtree, are collapsed into
their root component. This controls the granularity of the tree used by
a subsequent factorization.

See: CHOLMOD, `cholmod_collapse_septree`.
"""
# =============================================================================

import warnings

from collections import namedtuple

import numpy as np

from .exceptions import OutOfMemory
from ._forest import (
    EMPTY,
    DEFAULT_OKSEP,
    DEFAULT_SMALL,
    as_member_array,
    as_parent_array,
    check_thresholds,
    _absorbing_anchors,
    _children,
    _collapse_flags,
    _component_sizes,
    _preorder,
    _subtree_sizes,
)


CollapseResult = namedtuple('CollapseResult', ['parent', 'member', 'nc'])
CollapseResult.__doc__ = """\
The collapsed separator tree.

Attributes
----------
parent : (nc,) ndarray of int
    The parent of each surviving component, or `EMPTY` for a root.
member : (n,) ndarray of int
    The surviving component of each node.
nc : int
    The number of surviving components.
"""


def collapse_septree(parent, member, oksep=DEFAULT_OKSEP, small=DEFAULT_SMALL):
    r"""Collapse the subtrees of a separator tree.

    A subtree rooted at component `c` is collapsed into `c` if

    .. math::
        \text{size}(c) > \text{oksep} \cdot \text{total}(c)
        \quad \text{or} \quad
        \text{total}(c) < \text{small},

    where :math:`\text{size}(c)` is the number of nodes in `c` and
    :math:`\text{total}(c)` is the number of nodes in the subtree rooted at
    `c`. Subtree sizes are always those of the original tree. A component
    survives if and only if none of its proper ancestors is collapsed.

    Surviving components are renumbered in ascending order of their original
    index, so a tree numbered with children before parents (or parents before
    children) keeps that property.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent of each component, or `EMPTY` (or `None`) for a root.
    member : (n,) array_like of int
        The component of each node, in ``[0, nc)``. Requires ``nc <= n``.
    oksep : float, optional
        Largest acceptable fraction of a subtree held by its separator.
        Values >= 1 never collapse a subtree on this criterion.
    small : int, optional
        Subtrees with fewer than `small` nodes are collapsed.

    Returns
    -------
    result : CollapseResult
        The named tuple ``(parent, member, nc)`` of the collapsed tree. The
        inputs are not modified.

    Raises
    ------
    InvalidInput
        If `parent` is not a forest, any `member` is out of range, ``nc > n``,
        or either threshold is invalid.
    OutOfMemory
        If a workspace array cannot be allocated.

    Examples
    --------
    >>> parent_new, member_new, nc_new = collapse_septree(
    ...     [-1, 0, 0, 2], [3] * 10 + [2, 1, 0, 0], oksep=1.0, small=12)
    >>> nc_new
    3
    >>> parent_new.tolist()
    [-1, 0, 0]
    """
    try:
        parent = as_parent_array(parent)
        member = as_member_array(member, parent.size)
        oksep, small = check_thresholds(oksep, small)

        result = _collapse(parent, member, oksep, small)

    except MemoryError as e:
        raise OutOfMemory(
            "Not enough memory to collapse the separator tree."
        ) from e

    n = member.size

    if n > 0 and small > n:
        warnings.warn(
            f"small = {small} exceeds the number of nodes n = {n}; "
            "every tree in the forest collapses to its root.",
            UserWarning,
            stacklevel=2
        )

    return result


def _collapse(parent, member, oksep, small):
    """Collapse a validated separator tree."""
    keep, component_map = _component_map(parent, member, oksep, small)
    return _compact(parent, member, keep, component_map)


def _component_map(parent, member, oksep, small):
    """Find the surviving components of a validated separator tree.

    Returns
    -------
    keep : (nc,) ndarray of bool
        True where component `c` survives.
    component_map : (nc,) ndarray of int
        The index in the collapsed tree of the survivor that holds `c`.
    """
    nc = parent.size

    # Parents before children; reversed, children before parents
    pre = _preorder(parent)

    size = _component_sizes(member, nc)
    total = _subtree_sizes(parent, size, pre[::-1])
    flags = _collapse_flags(size, total, oksep, small)
    anchor = _absorbing_anchors(parent, flags, pre)

    # Renumber the surviving components
    keep = anchor == EMPTY
    new_id = np.full(nc, EMPTY, dtype=np.intp)
    new_id[keep] = np.arange(np.count_nonzero(keep))

    # Map every component to the survivor that holds it
    owner = np.where(keep, np.arange(nc), anchor)

    return keep, new_id[owner]


def _compact(parent, member, keep, component_map):
    """Build the collapsed tree from the output of `_component_map`."""
    nc_new = int(np.count_nonzero(keep))

    # The parent of a survivor always survives
    parent_new = parent[keep]
    has_parent = parent_new != EMPTY
    parent_new[has_parent] = component_map[parent_new[has_parent]]

    member_new = component_map[member]

    return CollapseResult(parent_new, member_new, nc_new)


class SeparatorTree:
    """A separator tree and the assignment of graph nodes to its components.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent of each component, or `EMPTY` (or `None`) for a root.
    member : (n,) array_like of int
        The component of each node, in ``[0, nc)``.

    Raises
    ------
    InvalidInput
        If `parent` is not a forest, or `member` is invalid.
    """

    def __init__(self, parent, member):
        parent = as_parent_array(parent)
        member = as_member_array(member, parent.size)

        _preorder(parent)  # check for cycles

        parent.flags.writeable = False
        member.flags.writeable = False

        self._parent = parent
        self._member = member

        self._indptr, self._indices = _children(parent)
        self._indptr.flags.writeable = False
        self._indices.flags.writeable = False

    @property
    def parent(self):
        """The read-only parent array, with `EMPTY` marking roots."""
        return self._parent

    @property
    def member(self):
        """The read-only component of each node."""
        return self._member

    @property
    def nc(self):
        """The number of components."""
        return self._parent.size

    @property
    def n(self):
        """The number of nodes."""
        return self._member.size

    @property
    def roots(self):
        """The roots of the forest, in ascending order."""
        return np.flatnonzero(self._parent == EMPTY)

    def parent_of(self, c):
        """Return the parent of component `c`, or None if `c` is a root."""
        if not 0 <= c < self.nc:
            raise IndexError(f"Component {c} is out of range [0, {self.nc}).")
        p = self._parent[c]
        return None if p == EMPTY else int(p)

    def children_of(self, c):
        """Return the children of component `c`, in ascending order."""
        if not 0 <= c < self.nc:
            raise IndexError(f"Component {c} is out of range [0, {self.nc}).")
        return self._indices[self._indptr[c]:self._indptr[c+1]]

    def component_sizes(self):
        """The number of nodes in each component."""
        return _component_sizes(self._member, self.nc)

    def subtree_sizes(self):
        """The number of nodes in the subtree rooted at each component."""
        pre = _preorder(self._parent)
        return _subtree_sizes(self._parent, self.component_sizes(), pre[::-1])

    def collapse(self, oksep=DEFAULT_OKSEP, small=DEFAULT_SMALL):
        """Collapse the tree.

        See `collapse_septree` for a description of the parameters.

        Returns
        -------
        tree : SeparatorTree
            A new, collapsed tree.
        """
        result = collapse_septree(self._parent, self._member, oksep, small)
        return SeparatorTree(result.parent, result.member)

    def __eq__(self, other):
        if not isinstance(other, SeparatorTree):
            return NotImplemented
        return (np.array_equal(self._parent, other._parent)
                and np.array_equal(self._member, other._member))

    __hash__ = None

    def __repr__(self):
        return (f"SeparatorTree(nc={self.nc}, n={self.n}, "
                f"roots={self.roots.size})")


# =============================================================================
# =============================================================================
