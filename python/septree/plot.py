#!/usr/bin/env python3
# =============================================================================
#     File: plot.py
#  Created: 2026-10-19 11:05
#   Author: Bernie Roesler
#
"""
Functions for plotting separator trees.
"""
# =============================================================================

import matplotlib.pyplot as plt
import numpy as np

from matplotlib.collections import LineCollection

from ._forest import (
    EMPTY,
    DEFAULT_OKSEP,
    DEFAULT_SMALL,
    as_member_array,
    as_parent_array,
    check_thresholds,
    _children,
    _postorder,
    _preorder,
    _tree_depth,
)
from ._septree import _compact, _component_map


def treelayout(parent):
    """Compute the coordinates of each node of a forest for plotting.

    Leaves are spaced evenly along the x-axis in postorder, and each parent
    is centered over its children. Roots are at the top of the plot.

    See: MATLAB `treelayout`.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent array of the forest.

    Returns
    -------
    x, y : (nc,) ndarray of float
        The coordinates of each component, in the range ``(0, 1]``.
    """
    parent = as_parent_array(parent)
    nc = parent.size

    if nc == 0:
        return np.empty(0), np.empty(0)

    indptr, indices = _children(parent)
    depth = _tree_depth(parent, _preorder(parent))
    is_leaf = np.diff(indptr) == 0

    x = np.zeros(nc)
    k = 0
    for c in _postorder(parent):
        if is_leaf[c]:
            k += 1
            x[c] = k
        else:
            x[c] = np.mean(x[indices[indptr[c]:indptr[c+1]]])

    x /= k + 1
    y = 1.0 - depth / (depth.max() + 1)

    return x, y


def treeplot(parent, node_color=None, ax=None, **kwargs):
    """Plot a forest.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent array of the forest.
    node_color : (nc,) array_like, optional
        Values used to color the nodes. If None, all nodes are the same color.
    ax : matplotlib.axes.Axes, optional
        Axes object to plot on. If `None`, the current axes are used.
    **kwargs
        Additional keyword arguments passed to `matplotlib.pyplot.scatter`.

    Returns
    -------
    ax : matplotlib.axes.Axes
        The Axes object used for plotting.
    """
    if ax is None:
        ax = plt.gca()

    parent = as_parent_array(parent)
    x, y = treelayout(parent)

    kids = np.flatnonzero(parent != EMPTY)
    segments = np.stack([
        np.c_[x[kids], y[kids]],
        np.c_[x[parent[kids]], y[parent[kids]]]
    ], axis=1)

    ax.add_collection(LineCollection(segments, colors='k', lw=1, zorder=1))

    opts = dict(s=30, zorder=2)
    opts.update(kwargs)

    if node_color is not None:
        opts['c'] = node_color
    elif 'c' not in opts:
        opts.setdefault('color', 'C0')

    ax.scatter(x, y, **opts)

    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1.05)
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_xlabel(f"nc = {parent.size}, roots = {parent.size - kids.size}")

    return ax


def collapseplot(parent, member, oksep=DEFAULT_OKSEP, small=DEFAULT_SMALL,
                 axs=None, cmap='tab20'):
    """Plot a separator tree before and after collapsing.

    In the original tree, each component is colored by the surviving
    component that absorbs it, so that the colors match those of the
    collapsed tree.

    Parameters
    ----------
    parent : (nc,) array_like of int
        The parent array of the forest.
    member : (n,) array_like of int
        The component of each node.
    oksep : float, optional
        Largest acceptable fraction of a subtree held by its separator.
    small : int, optional
        Subtrees with fewer than `small` nodes are collapsed.
    axs : (2,) array_like of matplotlib.axes.Axes, optional
        The axes for the original and collapsed trees. If None, a new figure
        is created.
    cmap : str or matplotlib.colors.Colormap, optional
        The colormap used for the components.

    Returns
    -------
    axs : (2,) array_like of matplotlib.axes.Axes
        The Axes objects used for plotting.
    """
    if axs is None:
        _, axs = plt.subplots(ncols=2)

    parent = as_parent_array(parent)
    member = as_member_array(member, parent.size)
    oksep, small = check_thresholds(oksep, small)
    nc = parent.size

    keep, component_map = _component_map(parent, member, oksep, small)
    parent_new, _, nc_new = _compact(parent, member, keep, component_map)

    opts = dict(cmap=cmap, vmin=0, vmax=max(nc_new - 1, 1))

    treeplot(parent, node_color=component_map, ax=axs[0], **opts)
    treeplot(parent_new, node_color=np.arange(nc_new), ax=axs[1], **opts)

    axs[0].set_title(f"Original, nc = {nc}")
    axs[1].set_title(f"Collapsed, nc = {nc_new}")

    return axs


# =============================================================================
# =============================================================================
