#!/usr/bin/env python3
# =============================================================================
#     File: _forest.py
#  Created: 2026-10-19 09:20
#   Author: Bernie Roesler
#
"""
Traversals and size computations on a forest given by its parent array.

A forest of `nc` components is stored as an integer array `parent`, where
`parent[c]` is the parent of component `c`, or `EMPTY` if `c` is a root. The
children of each component are found by storing the parent relation as
a sparse matrix and reading off its columns, in the same way that Davis builds
the children lists of an elimination tree.
"""
# =============================================================================

import numpy as np
from scipy import sparse

from .exceptions import InvalidInput

EMPTY = -1  # parent of a root

# Defaults of CHOLMOD's `Common->method[].nd_oksep` and `nd_small`
DEFAULT_OKSEP = 1.0
DEFAULT_SMALL = 200


# -----------------------------------------------------------------------------
#         Input Checking
# -----------------------------------------------------------------------------
def _as_index_array(x, name, allow_none=False):
    """Convert `x` to a new 1D array of integers of dtype `np.intp`.

    Integral floating point values are accepted. If `allow_none` is True,
    entries of `x` that are `None` are converted to `EMPTY`.
    """
    try:
        if allow_none and (not isinstance(x, np.ndarray) or x.dtype == object):
            x = [EMPTY if v is None else v for v in x]
        a = np.asarray(x)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"{name} must be an array of integers: {e}") from e

    if a.ndim != 1:
        raise InvalidInput(f"{name} must be 1-dimensional, got shape {a.shape}.")

    if a.size == 0:
        return np.empty(0, dtype=np.intp)

    if np.issubdtype(a.dtype, np.floating):
        if not np.all(np.isfinite(a)) or np.any(a != np.trunc(a)):
            raise InvalidInput(f"{name} must contain only integer values.")
    elif not np.issubdtype(a.dtype, np.integer):
        raise InvalidInput(f"{name} must contain integers, got dtype {a.dtype}.")

    # values that do not fit in np.intp would wrap around when cast
    lo, hi = np.iinfo(np.intp).min, np.iinfo(np.intp).max
    if int(a.max()) > hi or int(a.min()) < lo:
        raise InvalidInput(f"{name} contains values outside the index range.")

    return a.astype(np.intp)


def as_parent_array(parent):
    """Validate a forest and return its parent array.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent of each component, or `EMPTY` (or `None`) for a root.

    Returns
    -------
    parent : (nc,) ndarray of int
        A new array with roots marked by `EMPTY`.

    Raises
    ------
    InvalidInput
        If any parent is out of range, or a component is its own parent.
        Cycles are only detected by the traversals.
    """
    parent = _as_index_array(parent, 'parent', allow_none=True)
    nc = parent.size

    bad = (parent < EMPTY) | (parent >= nc) | (parent == np.arange(nc))

    if np.any(bad):
        c = np.flatnonzero(bad)[0]
        raise InvalidInput(
            f"parent[{c}] = {parent[c]} is not a valid parent of component "
            f"{c} in a forest of {nc} components."
        )

    return parent


def as_member_array(member, nc):
    """Validate a membership array and return it.

    Parameters
    ----------
    member : (n,) array_like of int
        The component of each node, in the range ``[0, nc)``.
    nc : int
        The number of components.

    Returns
    -------
    member : (n,) ndarray of int
        A new array of component indices.

    Raises
    ------
    InvalidInput
        If ``nc > n``, or any member is out of range.
    """
    member = _as_index_array(member, 'member')
    n = member.size

    if nc > n:
        raise InvalidInput(
            f"Number of components ({nc}) exceeds the number of nodes ({n})."
        )

    bad = (member < 0) | (member >= nc)

    if np.any(bad):
        j = np.flatnonzero(bad)[0]
        raise InvalidInput(
            f"member[{j}] = {member[j]} is not a component in [0, {nc})."
        )

    return member


def check_thresholds(oksep, small):
    """Validate the collapsing thresholds.

    Returns
    -------
    oksep : float
        A finite, non-negative fraction.
    small : int
        A non-negative subtree size.
    """
    if isinstance(oksep, (bool, np.bool_)):
        raise InvalidInput(f"oksep must be a real number, got {oksep!r}.")

    try:
        oksep = float(oksep)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"oksep must be a real number, got {oksep!r}.") from e

    if not np.isfinite(oksep) or oksep < 0:
        raise InvalidInput(f"oksep must be finite and >= 0, got {oksep}.")

    if isinstance(small, (float, np.floating)) and float(small).is_integer():
        small = int(small)

    if isinstance(small, (bool, np.bool_)) \
            or not isinstance(small, (int, np.integer)):
        raise InvalidInput(f"small must be an integer, got {small!r}.")

    if small < 0:
        raise InvalidInput(f"small must be >= 0, got {small}.")

    return oksep, int(small)


# -----------------------------------------------------------------------------
#         Tree Structure
# -----------------------------------------------------------------------------
def _children(parent):
    nc = parent.size

    if nc == 0:
        return np.zeros(1, dtype=np.intp), np.empty(0, dtype=np.intp)

    kids = np.flatnonzero(parent != EMPTY)

    # Column c of C holds the children of c
    C = sparse.csc_array(
        (np.ones(kids.size, dtype=bool), (kids, parent[kids])),
        shape=(nc, nc)
    )
    C.sort_indices()

    return C.indptr.astype(np.intp), C.indices.astype(np.intp)


def children(parent):
    """Compute the children of each component of a forest.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent array of the forest.

    Returns
    -------
    indptr : (nc + 1,) ndarray of int
        Column pointers, as for a CSC matrix.
    indices : (nc - nroots,) ndarray of int
        The children of component `c` are
        ``indices[indptr[c]:indptr[c+1]]``, in ascending order.
    """
    return _children(as_parent_array(parent))


def roots(parent):
    """Return the roots of a forest, in ascending order."""
    return np.flatnonzero(as_parent_array(parent) == EMPTY)


def _check_reached(visited):
    """Raise if any component was not reached from a root."""
    if not np.all(visited):
        c = np.flatnonzero(~visited)[0]
        raise InvalidInput(
            f"Component {c} is not reachable from a root; "
            "the parent array contains a cycle."
        )


def _preorder(parent):
    nc = parent.size
    indptr, indices = _children(parent)

    pre = np.empty(nc, dtype=np.intp)
    visited = np.zeros(nc, dtype=bool)
    k = 0

    stack = list(np.flatnonzero(parent == EMPTY)[::-1])

    while stack:
        c = stack.pop()

        if visited[c]:
            raise InvalidInput(
                f"Component {c} is reached twice; the parent array is not "
                "a forest."
            )

        visited[c] = True
        pre[k] = c
        k += 1

        # push in reverse so that children are visited in ascending order
        stack.extend(indices[indptr[c]:indptr[c+1]][::-1])

    _check_reached(visited)

    return pre


def preorder(parent):
    """Compute a preorder of a forest, visiting parents before children.

    Roots are visited in ascending order, and the children of each component
    are visited in ascending order.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent array of the forest.

    Returns
    -------
    pre : (nc,) ndarray of int
        The components in preorder.

    Raises
    ------
    InvalidInput
        If `parent` is not a valid forest.
    """
    return _preorder(as_parent_array(parent))


def _postorder(parent):
    nc = parent.size
    indptr, indices = _children(parent)

    post = np.empty(nc, dtype=np.intp)
    visited = np.zeros(nc, dtype=bool)
    head = indptr[:-1].copy()  # next child to visit
    k = 0

    for r in np.flatnonzero(parent == EMPTY):
        stack = [r]
        while stack:
            c = stack[-1]
            if head[c] < indptr[c+1]:
                stack.append(indices[head[c]])
                head[c] += 1
            else:
                stack.pop()
                visited[c] = True
                post[k] = c
                k += 1

    _check_reached(visited)

    return post


def postorder(parent):
    """Compute a postorder of a forest, visiting children before parents.

    See: Davis, §4.3, `cs_post`.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent array of the forest.

    Returns
    -------
    post : (nc,) ndarray of int
        The components in postorder.

    Raises
    ------
    InvalidInput
        If `parent` is not a valid forest.
    """
    return _postorder(as_parent_array(parent))


def _tree_depth(parent, pre):
    depth = np.zeros(parent.size, dtype=np.intp)
    for c in pre:
        if parent[c] != EMPTY:
            depth[c] = depth[parent[c]] + 1
    return depth


def tree_depth(parent):
    """Compute the depth of each component. Roots have depth 0."""
    parent = as_parent_array(parent)
    return _tree_depth(parent, _preorder(parent))


# -----------------------------------------------------------------------------
#         Sizes and Collapsing
# -----------------------------------------------------------------------------
def _component_sizes(member, nc):
    size = np.bincount(member, minlength=nc).astype(np.intp)
    size.flags.writeable = False
    return size


def component_sizes(member, nc):
    """Count the number of nodes in each component.

    Parameters
    ----------
    member : (n,) array_like of int
        The component of each node.
    nc : int
        The number of components.

    Returns
    -------
    size : (nc,) ndarray of int
        A read-only array where `size[c]` is the number of nodes `j` with
        ``member[j] == c``.
    """
    return _component_sizes(as_member_array(member, nc), nc)


def _subtree_sizes(parent, size, post):
    total = size.copy()
    for c in post:
        p = parent[c]
        if p != EMPTY:
            total[p] += total[c]
    total.flags.writeable = False
    return total


def subtree_sizes(parent, member):
    """Count the number of nodes in the subtree rooted at each component.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent array of the forest.
    member : (n,) array_like of int
        The component of each node.

    Returns
    -------
    total : (nc,) ndarray of int
        A read-only array with the size of each component plus the sizes of
        all of its descendants.
    """
    parent = as_parent_array(parent)
    member = as_member_array(member, parent.size)
    size = _component_sizes(member, parent.size)
    return _subtree_sizes(parent, size, _postorder(parent))


def _collapse_flags(size, total, oksep, small):
    flags = (size > oksep * total) | (total < small)
    flags.flags.writeable = False
    return flags


def collapse_flags(parent, member, oksep=DEFAULT_OKSEP, small=DEFAULT_SMALL):
    r"""Decide which subtrees of a separator tree should be collapsed.

    A subtree rooted at `c` is collapsed if its separator is too large,

    .. math::
        \text{size}(c) > \text{oksep} \cdot \text{total}(c),

    or if the subtree is too small, :math:`\text{total}(c) < \text{small}`.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent array of the forest.
    member : (n,) array_like of int
        The component of each node.
    oksep : float, optional
        Largest acceptable fraction of a subtree held by its separator.
    small : int, optional
        Smallest acceptable number of nodes in a subtree.

    Returns
    -------
    flags : (nc,) ndarray of bool
        A read-only array, True where the subtree rooted at `c` collapses.
    """
    oksep, small = check_thresholds(oksep, small)
    parent = as_parent_array(parent)
    member = as_member_array(member, parent.size)
    size = _component_sizes(member, parent.size)
    total = _subtree_sizes(parent, size, _postorder(parent))
    return _collapse_flags(size, total, oksep, small)


def _absorbing_anchors(parent, flags, pre):
    anchor = np.full(parent.size, EMPTY, dtype=np.intp)
    for c in pre:
        p = parent[c]
        if p == EMPTY:
            continue
        if anchor[p] != EMPTY:
            anchor[c] = anchor[p]  # p was absorbed, and so is c
        elif flags[p]:
            anchor[c] = p          # p survives and claims its subtree
    return anchor


def absorbing_anchors(parent, flags):
    """Find the component that absorbs each component of a forest.

    Walking down from the roots, the first component with a True flag
    absorbs its entire subtree, regardless of the flags below it.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent array of the forest.
    flags : (nc,) array_like of bool
        True where the subtree rooted at `c` collapses.

    Returns
    -------
    anchor : (nc,) ndarray of int
        The highest proper ancestor of `c` with a True flag, or `EMPTY` if
        there is none, in which case `c` survives.
    """
    parent = as_parent_array(parent)
    flags = np.asarray(flags, dtype=bool)

    if flags.shape != parent.shape:
        raise InvalidInput(
            f"flags must have shape {parent.shape}, got {flags.shape}."
        )

    return _absorbing_anchors(parent, flags, _preorder(parent))


# =============================================================================
# =============================================================================
