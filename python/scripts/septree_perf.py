#!/usr/bin/env python3
# =============================================================================
#     File: septree_perf.py
#  Created: 2026-10-19 14:20
#   Author: Bernie Roesler
#
"""
Plot the time to collapse random separator trees vs. the number of components.
"""
# =============================================================================

import matplotlib.pyplot as plt
import numpy as np
import timeit

from collections import defaultdict
from functools import partial

import septree


SAVE_FIG = True

SEED = 565656

filestem = 'septree_perf_py'

# -----------------------------------------------------------------------------
#         Create the data
# -----------------------------------------------------------------------------
rng = np.random.default_rng(SEED)

ncs = np.r_[10, 30, 100, 300, 1000, 3000, 10000]
nodes_per_component = 20

thresholds = {
    'none': (1.0, 0),
    'default': (septree.DEFAULT_OKSEP, septree.DEFAULT_SMALL),
    'aggressive': (0.1, 1000),
}

N_repeats = 7   # number of "runs" in %timeit (7 is default)
N_samples = 10  # number of samples in each run

times = defaultdict(list)
nc_out = defaultdict(list)

for nc in ncs:
    print(f"---------- nc = {nc:6d} ----------")

    # Random tree with parents numbered before children
    parent = np.r_[septree.EMPTY, rng.integers(0, np.arange(1, nc))]
    n = nodes_per_component * nc
    member = np.r_[np.arange(nc), rng.integers(0, nc, size=n - nc)]

    for key, (oksep, small) in thresholds.items():
        func = partial(septree.collapse_septree, parent, member, oksep, small)

        ts = timeit.repeat(func, repeat=N_repeats, number=N_samples)
        ts = np.array(ts) / N_samples  # time per loop
        ts_min = np.min(ts)

        times[key].append(ts_min)
        nc_out[key].append(func().nc)

        print(f"{key:>10s}: {ts_min:.4g} s per loop, "
              f"nc_new = {nc_out[key][-1]}")


# -----------------------------------------------------------------------------
#         Plot the data
# -----------------------------------------------------------------------------
fig, axs = plt.subplots(num=1, nrows=2, sharex=True, clear=True)
fig.set_size_inches(6.4, 8, forward=True)
fig.suptitle(f"{filestem.split('_')[0]}, n = {nodes_per_component} nc")

ax = axs[0]
for key, val in times.items():
    ax.plot(ncs, val, marker='.', label=key)

ax.set_xscale('log')
ax.set_yscale('log')
ax.grid(which='both')
ax.legend()
ax.set_ylabel('Time (s)')

ax = axs[1]
for key, val in nc_out.items():
    ax.plot(ncs, val, marker='.', label=key)

ax.set_xscale('log')
ax.set_yscale('log')
ax.grid(which='both')
ax.set_xlabel('Number of components')
ax.set_ylabel('Number of collapsed components')

plt.show()

if SAVE_FIG:
    fig.savefig(f"{filestem}.pdf")

# =============================================================================
# =============================================================================
