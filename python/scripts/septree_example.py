#!/usr/bin/env python3
# =============================================================================
#     File: septree_example.py
#  Created: 2026-10-19 14:02
#   Author: Bernie Roesler
#
"""Collapse the example separator tree with increasing `small`."""
# =============================================================================

import matplotlib.pyplot as plt
import numpy as np

import septree
from septree.plot import collapseplot


SAVE_FIG = False

tree = septree.septree_example()

print("parent:", tree.parent)
print("member:", tree.member)
print("component sizes:", tree.component_sizes())
print("subtree sizes:  ", tree.subtree_sizes())

oksep = 1.0
smalls = [0, 5, 12, 15]

fig, axs = plt.subplots(num=1, nrows=len(smalls), ncols=2, clear=True)
fig.set_size_inches(6.4, 3 * len(smalls), forward=True)

for small, ax_row in zip(smalls, axs):
    print(f"---------- oksep = {oksep}, small = {small} ----------")

    flags = septree.collapse_flags(tree.parent, tree.member, oksep, small)
    parent_new, member_new, nc_new = \
        septree.collapse_septree(tree.parent, tree.member, oksep, small)

    print(f"      collapse: {flags}")
    print(f"        nc_new: {nc_new}")
    print(f"    parent_new: {parent_new}")
    print(f"    member_new: {member_new}")

    # The 1-based interface gives the same tree
    cp_new, cmember_new = septree.septree(
        tree.parent + 1, tree.member + 1, oksep, small
    )
    np.testing.assert_array_equal(cp_new, parent_new + 1)
    np.testing.assert_array_equal(cmember_new, member_new + 1)

    collapseplot(tree.parent, tree.member, oksep, small, axs=ax_row)
    ax_row[0].set_ylabel(f"small = {small}")

fig.tight_layout()

if SAVE_FIG:
    fig.savefig('septree_example.pdf')

plt.show()

# =============================================================================
# =============================================================================
