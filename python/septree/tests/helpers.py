#!/usr/bin/env python3
# =============================================================================
#     File: helpers.py
#  Created: 2026-10-19 11:30
#   Author: Bernie Roesler
#
"""Helper functions for the septree python tests."""
# =============================================================================

import pytest

import numpy as np

from septree import EMPTY


# -----------------------------------------------------------------------------
#         Tree Generators
# -----------------------------------------------------------------------------
def random_forest(rng, nc, root_prob=0.1, shuffle=True):
    """Create a random forest of `nc` components.

    Each component picks its parent among the components created before it,
    so that the result is always a forest. If `shuffle` is False, parents
    have lower indices than their children.
    """
    parent = np.full(nc, EMPTY, dtype=int)

    for c in range(1, nc):
        if rng.random() > root_prob:
            parent[c] = rng.integers(0, c)

    if not shuffle:
        return parent

    # Relabel component c as q[c]
    q = rng.permutation(nc)
    shuffled = np.full(nc, EMPTY, dtype=int)
    has_parent = parent != EMPTY
    shuffled[q[has_parent]] = q[parent[has_parent]]

    return shuffled


def random_member(rng, nc, n, nonempty=False):
    """Assign `n` nodes to `nc` components at random."""
    member = rng.integers(0, nc, size=n) if nc > 0 else np.zeros(0, dtype=int)

    if nonempty:
        member[:nc] = np.arange(nc)
        member = rng.permutation(member)

    return member


def generate_random_forests(
    seed=565656,
    N_trials=100,
    nc_max=40,
    shuffle=True,
    nonempty=False
):
    """Generate a list of random separator trees and memberships."""
    rng = np.random.default_rng(seed)
    for trial in range(N_trials):
        nc = rng.integers(1, nc_max, endpoint=True)
        n = nc + rng.integers(0, 5 * nc, endpoint=True)

        parent = random_forest(rng, nc, root_prob=0.2 * rng.random(),
                               shuffle=shuffle)
        member = random_member(rng, nc, n, nonempty=nonempty)

        yield pytest.param(
            parent, member,
            id=f"random_{trial:02d}::nc={nc}::n={n}",
            marks=pytest.mark.random
        )


# -----------------------------------------------------------------------------
#         Reference Implementation
# -----------------------------------------------------------------------------
def ancestors(parent, c):
    """Return the proper ancestors of `c`, nearest first."""
    result = []
    p = parent[c]
    while p != EMPTY:
        result.append(p)
        p = parent[p]
    return result


def brute_force_sizes(parent, member):
    """Compute component and subtree sizes by walking each node to its root."""
    nc = len(parent)
    size = np.zeros(nc, dtype=int)
    total = np.zeros(nc, dtype=int)

    for c in member:
        size[c] += 1
        total[c] += 1
        for a in ancestors(parent, c):
            total[a] += 1

    return size, total


def brute_force_collapse(parent, member, oksep, small):
    """Collapse a separator tree directly from the definition.

    Each component is owned by its highest collapsing proper ancestor, if it
    has one, and survives otherwise.
    """
    nc = len(parent)
    size, total = brute_force_sizes(parent, member)
    flags = (size > oksep * total) | (total < small)

    owner = np.arange(nc)
    for c in range(nc):
        for a in ancestors(parent, c):
            if flags[a]:
                owner[c] = a  # keep going to find the highest one

    survivors = np.flatnonzero(owner == np.arange(nc))
    new_id = {c: k for k, c in enumerate(survivors)}

    parent_new = np.array(
        [EMPTY if parent[c] == EMPTY else new_id[parent[c]] for c in survivors],
        dtype=int
    )
    member_new = np.array([new_id[owner[c]] for c in member], dtype=int)

    return parent_new, member_new, len(survivors)


# -----------------------------------------------------------------------------
#         Tree Checking
# -----------------------------------------------------------------------------
def is_valid_forest(parent):
    """Check that a parent array describes an acyclic forest."""
    nc = len(parent)
    for c in range(nc):
        p = parent[c]
        if p != EMPTY and not 0 <= p < nc:
            return False
        if len(ancestors_bounded(parent, c, nc)) > nc:
            return False
    return True


def ancestors_bounded(parent, c, limit):
    """Return up to `limit + 1` proper ancestors of `c`."""
    result = []
    p = parent[c]
    while p != EMPTY and len(result) <= limit:
        result.append(p)
        p = parent[p]
    return result


def is_valid_permutation(p):
    """Check if a vector is a valid permutation."""
    return np.array_equal(np.sort(p), np.arange(len(p)))

# =============================================================================
# =============================================================================
