#!/usr/bin/env python3
# =============================================================================
#     File: test_forest.py
#  Created: 2026-10-19 12:37
#   Author: Bernie Roesler
#
"""
Test forest traversals and size computations.
"""
# =============================================================================

import pytest

import numpy as np

from numpy.testing import assert_array_equal

from .helpers import (
    ancestors,
    brute_force_sizes,
    generate_random_forests,
    is_valid_permutation,
)

import septree
from septree import EMPTY, InvalidInput


PARENT = [EMPTY, 0, 0, 2]


# -----------------------------------------------------------------------------
#         Input Checking
# -----------------------------------------------------------------------------
def test_as_parent_array():
    """Test conversion of parent arrays."""
    parent = septree.as_parent_array([None, 0, 0.0, 2])

    assert parent.dtype == np.intp
    assert_array_equal(parent, PARENT)

    x = np.array(PARENT)
    parent = septree.as_parent_array(x)
    parent[0] = 1
    assert x[0] == EMPTY  # always a copy


@pytest.mark.parametrize(
    "parent",
    [
        pytest.param([True, False], id='bool'),
        pytest.param(['a', 'b'], id='string'),
        pytest.param(5, id='scalar'),
        pytest.param([[EMPTY, 0], [0, 1]], id='2d'),
        pytest.param([EMPTY, np.nan], id='nan'),
        pytest.param([EMPTY, 0.5], id='fraction'),
        pytest.param(np.array([2**64 - 1, 0], dtype=np.uint64),
                     id='uint64_wraps'),
        pytest.param([EMPTY, 2**70], id='too_large'),
    ]
)
def test_as_parent_array_invalid(parent):
    """Test that non-integer parent arrays are rejected."""
    with pytest.raises(InvalidInput):
        septree.as_parent_array(parent)


def test_as_member_array():
    """Test range checking of membership arrays."""
    assert_array_equal(septree.as_member_array([0, 1, 1], 2), [0, 1, 1])

    with pytest.raises(InvalidInput, match="exceeds the number of nodes"):
        septree.as_member_array([0, 1], 3)

    with pytest.raises(InvalidInput, match=r"member\[2\]"):
        septree.as_member_array([0, 1, 2], 2)


# -----------------------------------------------------------------------------
#         Tree Structure
# -----------------------------------------------------------------------------
def test_children():
    """Test the children of the example tree."""
    indptr, indices = septree.children(PARENT)
    assert_array_equal(indptr, [0, 2, 2, 3, 3])
    assert_array_equal(indices, [1, 2, 3])


def test_children_empty():
    """Test the children of an empty forest."""
    indptr, indices = septree.children([])
    assert_array_equal(indptr, [0])
    assert indices.size == 0


def test_roots():
    """Test finding the roots of a forest."""
    assert_array_equal(septree.roots(PARENT), [0])
    assert_array_equal(septree.roots([1, EMPTY, EMPTY, 2]), [1, 2])


def test_traversals():
    """Test the traversals of the example tree."""
    assert_array_equal(septree.preorder(PARENT), [0, 1, 2, 3])
    assert_array_equal(septree.postorder(PARENT), [1, 3, 2, 0])
    assert_array_equal(septree.tree_depth(PARENT), [0, 1, 1, 2])


@pytest.mark.parametrize("parent, member", generate_random_forests())
def test_random_traversals(parent, member):
    """Test that traversals respect the forest structure."""
    nc = len(parent)
    pre = septree.preorder(parent)
    post = septree.postorder(parent)

    assert is_valid_permutation(pre)
    assert is_valid_permutation(post)

    pre_pos = np.empty(nc, dtype=int)
    pre_pos[pre] = np.arange(nc)
    post_pos = np.empty(nc, dtype=int)
    post_pos[post] = np.arange(nc)

    kids = np.flatnonzero(parent != EMPTY)
    assert np.all(pre_pos[parent[kids]] < pre_pos[kids])
    assert np.all(post_pos[parent[kids]] > post_pos[kids])

    depth = septree.tree_depth(parent)
    for c in range(nc):
        assert depth[c] == len(ancestors(parent, c))


@pytest.mark.parametrize(
    "parent",
    [
        pytest.param([1, 0], id='two_cycle'),
        pytest.param([EMPTY, 2, 3, 1], id='three_cycle'),
        pytest.param([2, EMPTY, 3, 0], id='cycle_beside_root'),
    ]
)
@pytest.mark.parametrize("traversal", [septree.preorder, septree.postorder])
def test_cycles(parent, traversal):
    """Test that cycles are detected by the traversals."""
    with pytest.raises(InvalidInput, match="cycle"):
        traversal(parent)


def test_self_parent():
    """Test that a component cannot be its own parent."""
    with pytest.raises(InvalidInput, match=r"parent\[1\]"):
        septree.preorder([EMPTY, 1])


# -----------------------------------------------------------------------------
#         Sizes and Collapsing
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("parent, member", generate_random_forests())
def test_sizes(parent, member):
    """Test component and subtree sizes against a direct count."""
    nc = len(parent)
    size, total = brute_force_sizes(parent, member)

    assert_array_equal(septree.component_sizes(member, nc), size)
    assert_array_equal(septree.subtree_sizes(parent, member), total)

    roots = septree.roots(parent)
    assert np.sum(total[roots]) == len(member)


def test_sizes_read_only():
    """Test that computed sizes and flags are write-once."""
    member = [0, 0, 1, 2, 3]
    arrays = [
        septree.component_sizes(member, 4),
        septree.subtree_sizes(PARENT, member),
        septree.collapse_flags(PARENT, member),
    ]

    for x in arrays:
        assert not x.flags.writeable
        with pytest.raises(ValueError):
            x[0] = 0


def test_collapse_flags():
    """Test the two collapsing criteria separately."""
    member = np.r_[np.full(10, 3), 2, 1, 0, 0]

    # totals [14, 1, 11, 10], sizes [2, 1, 1, 10]
    assert_array_equal(
        septree.collapse_flags(PARENT, member, oksep=1.0, small=11),
        [False, True, False, True]
    )
    assert_array_equal(
        septree.collapse_flags(PARENT, member, oksep=0.15, small=0),
        [False, True, False, True]
    )
    assert_array_equal(
        septree.collapse_flags(PARENT, member, oksep=0.05, small=0),
        [True, True, True, True]
    )


def test_absorbing_anchors():
    """Test that the highest collapsing ancestor absorbs its subtree."""
    # chain 0 <- 1 <- 2 <- 3
    chain = [EMPTY, 0, 1, 2]

    anchor = septree.absorbing_anchors(chain, [False, True, True, False])
    assert_array_equal(anchor, [EMPTY, EMPTY, 1, 1])

    anchor = septree.absorbing_anchors(chain, [True, True, True, True])
    assert_array_equal(anchor, [EMPTY, 0, 0, 0])

    anchor = septree.absorbing_anchors(chain, [False, False, False, True])
    assert_array_equal(anchor, [EMPTY, EMPTY, EMPTY, EMPTY])

    anchor = septree.absorbing_anchors(PARENT, [False, True, True, False])
    assert_array_equal(anchor, [EMPTY, EMPTY, EMPTY, 2])

    with pytest.raises(InvalidInput):
        septree.absorbing_anchors(chain, [True, False])


# =============================================================================
# =============================================================================
