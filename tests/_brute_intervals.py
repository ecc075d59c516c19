"""Brute-force references for the interval sweeps (O(L^4)).

An arc ``(s, k)`` covers ``k`` bins from bin ``s`` and is stored at cell
``[s, (s + k - 1) % L]``. Arc ``(s, k)`` contains arc ``(s2, k2)`` when
``k2 <= k`` and ``(s2 - s) % L <= k - k2``.
"""

import numpy as np


def all_arcs(L, circular):
    out = []
    for s in range(L):
        for k in range(1, L + 1):
            if circular or s + k <= L:
                out.append((s, k))
    return out


def cell(L, arc):
    s, k = arc
    return s, (s + k - 1) % L


def contains(L, outer, inner):
    (s, k), (s2, k2) = outer, inner
    return k2 <= k and (s2 - s) % L <= k - k2


def brute_max_inf(H, L, circular):
    out = np.zeros((L, L))
    arcs = all_arcs(L, circular)
    for a in arcs:
        out[cell(L, a)] = max(H[cell(L, b)] for b in arcs if contains(L, a, b))
    return out


def brute_max_sup(H, L, circular):
    out = np.zeros((L, L))
    arcs = all_arcs(L, circular)
    for a in arcs:
        out[cell(L, a)] = max(H[cell(L, b)] for b in arcs if contains(L, b, a))
    return out


def brute_if_gap_or_mode(H1, H2, L, thresh, circular):
    out = np.zeros((L, L))
    arcs = all_arcs(L, circular)
    for a in arcs:
        hit = any(H2[cell(L, b)] >= thresh for b in arcs if contains(L, a, b))
        out[cell(L, a)] = 0.0 if hit else H1[cell(L, a)]
    return out
