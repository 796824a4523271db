#!/usr/bin/env python3
# =============================================================================
#     File: utils.py
#  Created: 2026-10-19 10:41
#   Author: Bernie Roesler
#
"""
Utility functions for the septree module.
"""
# =============================================================================

import warnings

import numpy as np

from .exceptions import InvalidInput
from ._forest import DEFAULT_OKSEP, DEFAULT_SMALL, _as_index_array
from ._septree import SeparatorTree, collapse_septree


def septree_example():
    r"""Create a small separator tree with 4 components and 14 nodes.

    .. code-block:: text
               0        size  2
              / \
             1   2      size  1, 1
                 |
                 3      size 10

    Component 3 holds the first ten nodes, components 2 and 1 hold one node
    each, and the root holds the last two, as in a nested dissection ordering
    where separators are numbered last.

    Returns
    -------
    tree : SeparatorTree
        The example tree, with subtree sizes ``[14, 1, 11, 10]``.
    """
    parent = [None, 0, 0, 2]
    member = np.r_[np.full(10, 3), 2, 1, 0, 0]
    return SeparatorTree(parent, member)


def septree(cp, cmember, nd_oksep=DEFAULT_OKSEP, nd_small=DEFAULT_SMALL):
    """Prune a separator tree, using 1-based indices.

    This function mirrors the CHOLMOD MATLAB interface::

        [cp_new, cmember_new] = septree (cp, cmember, nd_oksep, nd_small)

    A subtree is collapsed into a single node if the number of nodes in the
    separator is > `nd_oksep` times the total size of the subtree, or if the
    subtree has fewer than `nd_small` nodes.

    Parameters
    ----------
    cp : (nc,) array_like of int
        The separator tree. ``cp[c]`` is the 1-based parent of component
        ``c + 1``, or 0 if it is a root.
    cmember : (n,) array_like of int
        ``cmember[i] = c`` means that node `i` is in component `c`, where `c`
        is in the range 1 to `nc`.
    nd_oksep : float, optional
        Largest acceptable fraction of a subtree held by its separator.
    nd_small : int, optional
        Subtrees with fewer than `nd_small` nodes are collapsed. Non-integer
        values are truncated toward zero.

    Returns
    -------
    cp_new : (nc_new,) ndarray of int
        The collapsed separator tree, 1-based with 0 marking a root.
    cmember_new : (n,) ndarray of int
        The 1-based component of each node in the collapsed tree.

    Raises
    ------
    InvalidInput
        If the inputs do not describe a valid separator tree.

    See Also
    --------
    collapse_septree : The 0-based version of this function.
    """
    cp = _as_index_array(cp, 'cp')
    cmember = _as_index_array(cmember, 'cmember')

    nc = cp.size
    n = cmember.size

    if n < nc:
        raise InvalidInput(
            f"invalid inputs: {nc} components but only {n} nodes."
        )

    if np.any((cp < 0) | (cp > nc)):
        raise InvalidInput(f"cp invalid: entries must be in [0, {nc}].")

    if np.any((cmember < 1) | (cmember > nc)):
        raise InvalidInput(f"cmember invalid: entries must be in [1, {nc}].")

    try:
        small = float(nd_small)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"nd_small must be a number, got {nd_small!r}.") from e

    if not np.isfinite(small):
        raise InvalidInput(f"nd_small must be finite, got {nd_small}.")

    if not small.is_integer():
        warnings.warn(
            f"nd_small = {nd_small} is not an integer; truncating to "
            f"{int(small)}.",
            UserWarning,
            stacklevel=2
        )

    # 0 marks a root, which becomes EMPTY == -1
    parent_new, member_new, _ = collapse_septree(
        cp - 1, cmember - 1, nd_oksep, int(small)
    )

    return parent_new + 1, member_new + 1


# =============================================================================
# =============================================================================
