"""Chain selection – flags the best non-overlapping chain on each sequence.

The chain on a sequence is a length*identity weighted longest increasing
subsequence of its segments along that sequence's own axis.
"""

from __future__ import annotations

from typing import List

import numpy as np

from deltadiff.graph import DeltaGraph, Segment, SequenceNode
from deltadiff.log import get_logger

logger = get_logger("chain")


def best_chain(
    los: np.ndarray,
    his: np.ndarray,
    weights: np.ndarray,
    max_olap: float = 100.0,
) -> List[int]:
    """Return the indices of the highest scoring chain.

    *los* must be sorted ascending.  Segment ``j`` may precede ``i`` when it
    starts and ends strictly before ``i`` and their overlap is at most
    *max_olap* percent of either segment.  Extending by ``i`` scores
    ``(len_i - overlap) * weight_i``.
    """
    n = len(los)
    if n == 0:
        return []

    lens = his - los + 1
    score = lens * weights
    parent = np.full(n, -1, dtype=np.int64)

    for i in range(1, n):
        olap = np.maximum(his[:i] - los[i] + 1, 0)
        ok = (los[:i] < los[i]) & (his[:i] < his[i])
        if max_olap < 100.0:
            limit = max_olap / 100.0
            ok &= (olap <= limit * lens[:i]) & (olap <= limit * lens[i])
        if not ok.any():
            continue
        cand = np.where(ok, score[:i] + (lens[i] - olap) * weights[i], -np.inf)
        j = int(np.argmax(cand))
        if cand[j] > score[i]:
            score[i] = cand[j]
            parent[i] = j

    # Traceback from the first best-scoring end
    chain: List[int] = []
    cur = int(np.argmax(score))
    while cur != -1:
        chain.append(cur)
        cur = int(parent[cur])
    chain.reverse()
    return chain


def _flag_node(
    node: SequenceNode,
    on_ref: bool,
    min_idy: float,
    min_len: int,
    max_olap: float,
) -> int:
    segs: List[Segment] = []
    for seg in node.segments():
        if on_ref:
            seg.is_rlis = False
        else:
            seg.is_qlis = False
        length = seg.len_r if on_ref else seg.len_q
        if seg.idy >= min_idy and length >= min_len:
            segs.append(seg)

    if on_ref:
        segs.sort(key=lambda s: (s.lo_r, s.hi_r))
        los = np.array([s.lo_r for s in segs], dtype=np.int64)
        his = np.array([s.hi_r for s in segs], dtype=np.int64)
    else:
        segs.sort(key=lambda s: (s.lo_q, s.hi_q))
        los = np.array([s.lo_q for s in segs], dtype=np.int64)
        his = np.array([s.hi_q for s in segs], dtype=np.int64)
    weights = np.array([s.idy for s in segs], dtype=float)

    members = best_chain(los, his, weights, max_olap=max_olap)
    for k in members:
        if on_ref:
            segs[k].is_rlis = True
        else:
            segs[k].is_qlis = True
    return len(members)


def flag_rlis(
    graph: DeltaGraph,
    min_idy: float = 0.0,
    min_len: int = 0,
    max_olap: float = 100.0,
) -> int:
    """Flag the reference-space chain of every reference sequence."""
    total = 0
    for name in sorted(graph.refnodes):
        total += _flag_node(graph.refnodes[name], True, min_idy, min_len, max_olap)
    logger.debug("Reference chains hold %d segments", total)
    return total


def flag_qlis(
    graph: DeltaGraph,
    min_idy: float = 0.0,
    min_len: int = 0,
    max_olap: float = 100.0,
) -> int:
    """Flag the query-space chain of every query sequence."""
    total = 0
    for name in sorted(graph.qrynodes):
        total += _flag_node(graph.qrynodes[name], False, min_idy, min_len, max_olap)
    logger.debug("Query chains hold %d segments", total)
    return total


def flag_wga(
    graph: DeltaGraph,
    min_idy: float = 0.0,
    min_len: int = 0,
    max_olap: float = 100.0,
) -> None:
    """Flag both chains; a segment survives cleaning if it is in either one."""
    flag_qlis(graph, min_idy, min_len, max_olap)
    flag_rlis(graph, min_idy, min_len, max_olap)
